"""PFT/CFT score calculator with "Show the Math" breakdowns.

Maps raw performances to points through the bracketed tables, sums them,
and classifies the total. Every call is a pure function of its arguments.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from core.exceptions import ValidationError
from core.logging import get_logger
from core.schemas.fitness import CFTInput, PFTInput
from engine.scoring.tables import (
    CARDIO_EVENTS,
    PLANK_THRESHOLDS,
    UPPER_BODY_EVENTS,
    AgeBracket,
    ClassificationThresholds,
    Event,
    EventStandard,
    Gender,
    PlankThreshold,
    ScoreDirection,
    ScoringTables,
    age_to_bracket,
    get_tables,
)


class Classification(str, Enum):
    """Overall test classification."""

    FIRST = "First"
    SECOND = "Second"
    THIRD = "Third"
    FAIL = "Fail"

    @property
    def label(self) -> str:
        return CLASSIFICATION_LABELS[self]

    @property
    def grade(self) -> str:
        return CLASSIFICATION_GRADES[self]


CLASSIFICATION_LABELS = {
    Classification.FIRST: "1st Class",
    Classification.SECOND: "2nd Class",
    Classification.THIRD: "3rd Class",
    Classification.FAIL: "Fail",
}

CLASSIFICATION_GRADES = {
    Classification.FIRST: "A",
    Classification.SECOND: "B",
    Classification.THIRD: "C",
    Classification.FAIL: "Fail",
}


class FitnessTestType(str, Enum):
    """Which fitness test a result belongs to."""

    PFT = "PFT"
    CFT = "CFT"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def score_event(
    value: float,
    standard: EventStandard,
    direction: ScoreDirection | str,
) -> int:
    """
    Score a raw performance against an event standard.

    Failing the passing bound zeroes the event rather than awarding
    min_points: reps below min_value, or a time above max_value.

    Args:
        value: Reps, or time in seconds
        standard: Bounds and points for the gender/age bracket
        direction: REPS (higher is better) or TIME (lower is better)

    Returns:
        Points earned
    """
    direction = ScoreDirection(direction)
    span = standard.max_value - standard.min_value
    point_span = standard.max_points - standard.min_points

    if direction is ScoreDirection.REPS:
        if value >= standard.max_value:
            return standard.max_points
        if value < standard.min_value:
            return 0
        position = (value - standard.min_value) / span
        return round_half_away(standard.min_points + position * point_span)

    if value <= standard.min_value:
        return standard.max_points
    if value > standard.max_value:
        return 0
    position = (value - standard.min_value) / span
    return round_half_away(standard.max_points - position * point_span)


def score_plank(
    seconds: float,
    thresholds: tuple[PlankThreshold, ...] = PLANK_THRESHOLDS,
) -> int:
    """Score a plank hold by interpolating between descending breakpoints."""
    lowest_passing = min(t.seconds for t in thresholds if t.points > 0)
    if seconds < lowest_passing:
        return 0

    for upper, lower in zip(thresholds, thresholds[1:]):
        if seconds >= upper.seconds:
            return upper.points
        if seconds >= lower.seconds:
            position = (seconds - lower.seconds) / (upper.seconds - lower.seconds)
            return round_half_away(lower.points + position * (upper.points - lower.points))

    return 0


def classify(total_points: int, thresholds: ClassificationThresholds) -> Classification:
    """Classification for a combined score, ignoring event minimums."""
    if total_points >= thresholds.first_class:
        return Classification.FIRST
    if total_points >= thresholds.second_class:
        return Classification.SECOND
    if total_points >= thresholds.third_class:
        return Classification.THIRD
    return Classification.FAIL


def check_minimum_scores(scores: dict[str, int], min_event_score: int) -> list[str]:
    """Return the events scoring below the minimum event score."""
    return [name for name, points in scores.items() if points < min_event_score]


@dataclass(frozen=True)
class EventSelection:
    """A chosen event and its raw performance (reps or seconds)."""

    event: Event
    value: float


@dataclass(frozen=True)
class EventScore:
    """Points earned on a single event."""

    event: Event
    raw_value: float
    points: int
    max_points: int
    standard: EventStandard | None = None  # None for plank
    recorded: bool = True

    @property
    def event_name(self) -> str:
        return self.event.display_name

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "event": self.event.value,
            "event_name": self.event_name,
            "raw_value": self.raw_value,
            "points": self.points,
            "max_points": self.max_points,
            "recorded": self.recorded,
            "standard": self.standard.to_dict() if self.standard else None,
        }


@dataclass(frozen=True)
class FitnessTestResult:
    """Complete PFT or CFT result."""

    test_type: FitnessTestType
    gender: Gender
    age: int
    age_bracket: AgeBracket
    events: Mapping[str, EventScore] = field(hash=False)  # slot name -> score
    total_points: int
    classification: Classification
    minimum_events_met: bool
    failed_events: tuple[str, ...] = ()
    is_altitude: bool = False
    table_revision: str = ""
    pass_line: int = 150
    calculation_summary: tuple[str, ...] = field(default=(), compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "events", MappingProxyType(dict(self.events)))

    @property
    def upper_body(self) -> EventScore | None:
        return self.events.get("upper_body")

    @property
    def core(self) -> EventScore | None:
        return self.events.get("core")

    @property
    def cardio(self) -> EventScore | None:
        return self.events.get("cardio")

    @property
    def mtc(self) -> EventScore | None:
        return self.events.get("mtc")

    @property
    def ammo_lift(self) -> EventScore | None:
        return self.events.get("ammo_lift")

    @property
    def maneuver(self) -> EventScore | None:
        return self.events.get("maneuver")

    @property
    def passed_minimums(self) -> bool:
        return self.minimum_events_met

    @property
    def grade(self) -> str:
        return self.classification.grade

    @property
    def passed(self) -> bool:
        """Total reaches the pass line and every event met its minimum."""
        return self.minimum_events_met and self.total_points >= self.pass_line

    @property
    def pass_status(self) -> str:
        return "PASS" if self.passed else "FAIL"

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "test_type": self.test_type.value,
            "gender": self.gender.value,
            "age": self.age,
            "age_bracket": self.age_bracket.value,
            "events": {slot: score.to_dict() for slot, score in self.events.items()},
            "total_points": self.total_points,
            "classification": self.classification.value,
            "classification_label": self.classification.label,
            "grade": self.grade,
            "passed_minimums": self.minimum_events_met,
            "failed_events": list(self.failed_events),
            "pass_status": self.pass_status,
            "is_altitude": self.is_altitude,
            "table_revision": self.table_revision,
        }

    def show_the_math(self) -> str:
        """Generate human-readable calculation breakdown."""
        lines = [
            "=" * 50,
            f"{self.test_type.value} SCORE CALCULATION",
            "=" * 50,
            "",
            f"{self.gender.value.title()}, age {self.age} (bracket {self.age_bracket.value})",
            f"Tables: {self.table_revision}",
            f"Altitude adjustment: {'yes' if self.is_altitude else 'no'}",
            "",
            "-" * 50,
            "EVENTS",
            "-" * 50,
        ]

        for score in self.events.values():
            lines.append(f"  {score.event_name}: {score.points}/{score.max_points}")

        if self.calculation_summary:
            lines.extend(["", "-" * 50, "CALCULATION STEPS", "-" * 50])
            for i, step in enumerate(self.calculation_summary, 1):
                lines.append(f"{i}. {step}")

        lines.extend(
            [
                "",
                "-" * 50,
                f"Total: {self.total_points}",
                f"Classification: {self.classification.label} ({self.grade})",
            ]
        )
        if self.failed_events:
            lines.append(f"Below minimum: {', '.join(self.failed_events)}")
        lines.extend([f"Result: {self.pass_status}", "=" * 50])

        return "\n".join(lines)


class FitnessTestCalculator:
    """Calculates PFT and CFT results against a table set."""

    def __init__(self, tables: ScoringTables | None = None):
        self.tables = tables or get_tables()
        self.logger = get_logger(__name__, table_revision=self.tables.revision)

    def compute_full_test(
        self,
        gender: Gender | str,
        age: int,
        upper_body: EventSelection,
        plank_seconds: float,
        cardio: EventSelection,
        is_altitude: bool = False,
    ) -> FitnessTestResult:
        """
        Calculate a Physical Fitness Test.

        Args:
            gender: male or female
            age: Age in years
            upper_body: Pull-ups or push-ups, with reps
            plank_seconds: Plank hold time
            cardio: 3-mile run or 5k row, with time in seconds
            is_altitude: Apply the altitude adjustment to the cardio event

        Returns:
            FitnessTestResult with upper_body, core and cardio slots

        Raises:
            InvalidGenderError: Unknown gender
            MissingTableEntryError: No table for the event at this age
            ValidationError: Upper body or cardio event of the wrong kind
        """
        gender = Gender.parse(gender)
        if upper_body.event not in UPPER_BODY_EVENTS:
            raise ValidationError(
                f"{upper_body.event.display_name} is not an upper body event",
                field="upper_body",
            )
        if cardio.event not in CARDIO_EVENTS:
            raise ValidationError(
                f"{cardio.event.display_name} is not a cardio event",
                field="cardio",
            )

        bracket = age_to_bracket(age)
        events = {
            "upper_body": self._score(upper_body, gender, bracket, is_altitude),
            "core": EventScore(
                event=Event.PLANK,
                raw_value=plank_seconds,
                points=score_plank(plank_seconds, self.tables.plank_thresholds),
                max_points=self.tables.plank_thresholds[0].points,
            ),
            "cardio": self._score(cardio, gender, bracket, is_altitude),
        }
        result = self._build_result(
            FitnessTestType.PFT, gender, age, bracket, events, is_altitude
        )

        self.logger.debug(
            "pft_score_calculated",
            age_bracket=bracket.value,
            total_points=result.total_points,
            classification=result.classification.value,
            failed_events=list(result.failed_events),
        )
        return result

    def compute_combat_test(
        self,
        gender: Gender | str,
        age: int,
        mtc_seconds: float,
        ammo_lift_reps: int,
        maneuver_seconds: float,
        is_altitude: bool = False,
    ) -> FitnessTestResult:
        """Calculate a Combat Fitness Test (MTC, ammo lift, MANUF)."""
        gender = Gender.parse(gender)
        bracket = age_to_bracket(age)
        events = {
            "mtc": self._score(EventSelection(Event.MTC, mtc_seconds), gender, bracket, is_altitude),
            "ammo_lift": self._score(
                EventSelection(Event.AMMO_LIFT, ammo_lift_reps), gender, bracket, is_altitude
            ),
            "maneuver": self._score(
                EventSelection(Event.MANUF, maneuver_seconds), gender, bracket, is_altitude
            ),
        }
        result = self._build_result(
            FitnessTestType.CFT, gender, age, bracket, events, is_altitude
        )

        self.logger.debug(
            "cft_score_calculated",
            age_bracket=bracket.value,
            total_points=result.total_points,
            classification=result.classification.value,
            pass_status=result.pass_status,
        )
        return result

    def score_pft_record(self, record: PFTInput) -> FitnessTestResult:
        """Calculate a PFT from a validated input record."""
        upper_event, upper_value = record.upper_body_selection
        cardio_event, cardio_seconds = record.cardio_selection
        return self.compute_full_test(
            gender=record.gender,
            age=record.age,
            upper_body=EventSelection(Event(upper_event), upper_value),
            plank_seconds=record.plank_seconds,
            cardio=EventSelection(Event(cardio_event), cardio_seconds),
            is_altitude=record.is_altitude,
        )

    def score_cft_record(self, record: CFTInput) -> FitnessTestResult:
        """Calculate a CFT from a validated input record."""
        return self.compute_combat_test(
            gender=record.gender,
            age=record.age,
            mtc_seconds=record.mtc_seconds,
            ammo_lift_reps=record.ammo_lift_reps,
            maneuver_seconds=record.maneuver_seconds,
            is_altitude=record.is_altitude,
        )

    def _score(
        self,
        selection: EventSelection,
        gender: Gender,
        bracket: AgeBracket,
        is_altitude: bool,
    ) -> EventScore:
        """Score one tabulated event."""
        event = selection.event
        standard = self.tables.get_standard(event, gender, bracket, is_altitude=is_altitude)

        # An empty time field means the event was not run
        recorded = not (event.direction is ScoreDirection.TIME and selection.value <= 0)
        points = score_event(selection.value, standard, event.direction) if recorded else 0

        return EventScore(
            event=event,
            raw_value=selection.value,
            points=points,
            max_points=standard.max_points,
            standard=standard,
            recorded=recorded,
        )

    def _build_result(
        self,
        test_type: FitnessTestType,
        gender: Gender,
        age: int,
        bracket: AgeBracket,
        events: dict[str, EventScore],
        is_altitude: bool,
    ) -> FitnessTestResult:
        """Sum, classify and apply the minimum event score override."""
        thresholds = self.tables.classification
        total = sum(score.points for score in events.values())
        failed = check_minimum_scores(
            {score.event_name: score.points for score in events.values()},
            thresholds.min_event_score,
        )
        classification = Classification.FAIL if failed else classify(total, thresholds)

        steps = [
            f"{score.event_name}: {score.raw_value:g} -> {score.points} pts"
            for score in events.values()
        ]
        steps.append(
            " + ".join(str(score.points) for score in events.values()) + f" = {total}"
        )
        if failed:
            steps.append(
                f"Below {thresholds.min_event_score}-point minimum: {', '.join(failed)} "
                "-> Fail"
            )
        else:
            steps.append(f"{total} pts -> {classification.label}")

        return FitnessTestResult(
            test_type=test_type,
            gender=gender,
            age=age,
            age_bracket=bracket,
            events=events,
            total_points=total,
            classification=classification,
            minimum_events_met=not failed,
            failed_events=tuple(failed),
            is_altitude=is_altitude,
            table_revision=self.tables.revision,
            pass_line=thresholds.third_class,
            calculation_summary=tuple(steps),
        )


def compute_full_test(
    gender: Gender | str,
    age: int,
    upper_body: EventSelection,
    plank_seconds: float,
    cardio: EventSelection,
    is_altitude: bool = False,
    tables: ScoringTables | None = None,
) -> FitnessTestResult:
    """Convenience function to calculate a PFT."""
    calculator = FitnessTestCalculator(tables)
    return calculator.compute_full_test(
        gender, age, upper_body, plank_seconds, cardio, is_altitude=is_altitude
    )


def compute_combat_test(
    gender: Gender | str,
    age: int,
    mtc_seconds: float,
    ammo_lift_reps: int,
    maneuver_seconds: float,
    is_altitude: bool = False,
    tables: ScoringTables | None = None,
) -> FitnessTestResult:
    """Convenience function to calculate a CFT."""
    calculator = FitnessTestCalculator(tables)
    return calculator.compute_combat_test(
        gender, age, mtc_seconds, ammo_lift_reps, maneuver_seconds, is_altitude=is_altitude
    )
