"""Body composition assessment (height/weight screen and tape test).

Weight is checked first. Only a Marine over the weight standard is taped,
and then the body fat result alone decides pass/fail.
"""

import math
from dataclasses import dataclass

from core.exceptions import HeightOutOfRangeError, ValidationError
from core.logging import get_logger
from core.schemas.body_composition import BodyCompositionInput
from engine.scoring.body_standards import (
    BODY_FAT_COEFFICIENTS,
    BODY_FAT_LIMITS,
    MAX_TABULATED_HEIGHT,
    MEASUREMENT_INSTRUCTIONS,
    MIN_TABULATED_HEIGHT,
    WEIGHT_STANDARDS,
)
from engine.scoring.calculator import round_half_away
from engine.scoring.tables import Gender, WeightAgeBracket, weight_age_to_bracket

logger = get_logger(__name__)


def round_up_half(value: float) -> float:
    """Round up to the nearest 0.5 inch."""
    return math.ceil(value * 2) / 2


def round_down_half(value: float) -> float:
    """Round down to the nearest 0.5 inch."""
    return math.floor(value * 2) / 2


@dataclass(frozen=True)
class WeightCheck:
    """Result of the height/weight screen."""

    height_inches: int  # rounded
    age_bracket: WeightAgeBracket
    max_allowed: float
    actual: float

    @property
    def over_by(self) -> float:
        return max(0, self.actual - self.max_allowed)

    @property
    def within_standard(self) -> bool:
        return self.actual <= self.max_allowed

    @property
    def requires_tape(self) -> bool:
        return not self.within_standard

    def to_dict(self) -> dict:
        return {
            "height_inches": self.height_inches,
            "age_bracket": self.age_bracket.value,
            "max_allowed": self.max_allowed,
            "actual": self.actual,
            "over_by": self.over_by,
            "within_standard": self.within_standard,
        }


@dataclass(frozen=True)
class BodyFatCheck:
    """Result of the circumference (tape) body fat estimate."""

    neck: float
    abdomen: float
    hips: float | None
    circumference_value: float
    body_fat_percent: int
    max_allowed: int

    @property
    def within_standard(self) -> bool:
        return self.body_fat_percent <= self.max_allowed

    @property
    def over_by(self) -> int:
        return max(0, self.body_fat_percent - self.max_allowed)

    def to_dict(self) -> dict:
        return {
            "measurements": {"neck": self.neck, "abdomen": self.abdomen, "hips": self.hips},
            "circumference_value": self.circumference_value,
            "body_fat_percent": self.body_fat_percent,
            "max_allowed": self.max_allowed,
            "over_by": self.over_by,
            "within_standard": self.within_standard,
        }


@dataclass(frozen=True)
class BodyCompositionAssessment:
    """Overall body composition result."""

    weight_check: WeightCheck
    body_fat_check: BodyFatCheck | None = None

    @property
    def requires_tape(self) -> bool:
        return self.weight_check.requires_tape

    @property
    def passed(self) -> bool:
        if self.body_fat_check is None:
            return self.weight_check.within_standard
        return self.body_fat_check.within_standard

    @property
    def status(self) -> str:
        return "PASS" if self.passed else "FAIL"

    @property
    def message(self) -> str:
        if not self.requires_tape:
            return "Within height/weight standards"
        bf = self.body_fat_check
        if bf is None:
            return "Over weight standard; tape test required"
        if bf.within_standard:
            return f"Over weight standard but within body fat limit ({bf.body_fat_percent}%)"
        return f"Exceeds body fat standard: {bf.body_fat_percent}% (max {bf.max_allowed}%)"

    def to_dict(self) -> dict:
        return {
            "weight_check": self.weight_check.to_dict(),
            "requires_tape": self.requires_tape,
            "body_fat_check": self.body_fat_check.to_dict() if self.body_fat_check else None,
            "status": self.status,
            "message": self.message,
        }


def check_weight_standard(
    gender: Gender | str,
    age: int,
    height_inches: float,
    weight: float,
) -> WeightCheck:
    """
    Check weight against the height/weight standard.

    Raises:
        InvalidGenderError: Unknown gender
        HeightOutOfRangeError: Rounded height is not tabulated
    """
    gender = Gender.parse(gender)
    height = round_half_away(height_inches)
    row = WEIGHT_STANDARDS[gender].get(height)
    if row is None:
        raise HeightOutOfRangeError(height, MIN_TABULATED_HEIGHT, MAX_TABULATED_HEIGHT)

    bracket = weight_age_to_bracket(age)
    return WeightCheck(
        height_inches=height,
        age_bracket=bracket,
        max_allowed=row[bracket],
        actual=weight,
    )


def calculate_body_fat(
    gender: Gender | str,
    height_inches: float,
    neck: float,
    abdomen: float,
    hips: float | None = None,
) -> BodyFatCheck:
    """
    Estimate body fat percent with the DoD circumference method.

    Neck is rounded up and abdomen/hips rounded down to the nearest half
    inch before the circumference value is taken.

    Raises:
        ValidationError: Hips missing for a female, or a non-positive
            circumference value
    """
    gender = Gender.parse(gender)
    neck_r = round_up_half(neck)
    abdomen_r = round_down_half(abdomen)

    if gender is Gender.MALE:
        hips_r = round_down_half(hips) if hips is not None else None
        circumference = abdomen_r - neck_r
    else:
        if hips is None:
            raise ValidationError("Hips measurement is required for females", field="hips")
        hips_r = round_down_half(hips)
        circumference = abdomen_r + hips_r - neck_r

    if circumference <= 0:
        raise ValidationError(
            f"Circumference value must be positive, got {circumference}",
            field="circumference_value",
        )

    a, b, c = BODY_FAT_COEFFICIENTS[gender]
    percent = a * math.log10(circumference) - b * math.log10(height_inches) + c

    return BodyFatCheck(
        neck=neck_r,
        abdomen=abdomen_r,
        hips=hips_r,
        circumference_value=circumference,
        body_fat_percent=max(0, round_half_away(percent)),
        max_allowed=BODY_FAT_LIMITS[gender],
    )


def assess_body_composition(
    gender: Gender | str,
    age: int,
    height_inches: float,
    weight: float,
    neck: float | None = None,
    abdomen: float | None = None,
    hips: float | None = None,
) -> BodyCompositionAssessment:
    """
    Run the weight screen, then the tape test only if over weight.

    Raises:
        ValidationError: Tape test needed but neck/abdomen not supplied
    """
    weight_check = check_weight_standard(gender, age, height_inches, weight)
    if weight_check.within_standard:
        assessment = BodyCompositionAssessment(weight_check=weight_check)
    else:
        if neck is None or abdomen is None:
            raise ValidationError(
                "Neck and abdomen measurements are required when over the weight standard",
                field="neck" if neck is None else "abdomen",
            )
        assessment = BodyCompositionAssessment(
            weight_check=weight_check,
            body_fat_check=calculate_body_fat(gender, height_inches, neck, abdomen, hips),
        )

    logger.debug(
        "body_composition_assessed",
        requires_tape=assessment.requires_tape,
        status=assessment.status,
    )
    return assessment


def assess_record(record: BodyCompositionInput) -> BodyCompositionAssessment:
    """Assess a validated body composition input record."""
    return assess_body_composition(
        gender=record.gender,
        age=record.age,
        height_inches=record.height_inches,
        weight=record.weight_lbs,
        neck=record.neck_inches,
        abdomen=record.abdomen_inches,
        hips=record.hips_inches,
    )


def get_measurement_instructions(gender: Gender | str) -> dict[str, str]:
    """Tape measurement instructions for a gender."""
    gender = Gender.parse(gender)
    sites = ("neck", "abdomen") if gender is Gender.MALE else ("neck", "abdomen", "hips")
    return {site: MEASUREMENT_INSTRUCTIONS[site] for site in sites}
