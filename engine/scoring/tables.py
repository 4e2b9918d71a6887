"""PFT/CFT scoring tables.

Event standards, plank breakpoints and classification thresholds from
MCO 6100.13A w/CH-4 (March 23, 2022). Pure data plus the two age bracket
ladders; nothing here computes a score.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType

from core.config import DEFAULT_SCORING_TABLE_REVISION, get_settings
from core.exceptions import ConfigurationError, InvalidGenderError, MissingTableEntryError


class Gender(str, Enum):
    """Gender sub-table selector."""

    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value: "Gender | str") -> "Gender":
        """Parse a gender value, raising InvalidGenderError when unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidGenderError(value) from None


class AgeBracket(str, Enum):
    """Age brackets for fitness event tables."""

    AGE_17_20 = "17-20"
    AGE_21_25 = "21-25"
    AGE_26_30 = "26-30"
    AGE_31_35 = "31-35"
    AGE_36_40 = "36-40"
    AGE_41_45 = "41-45"
    AGE_46_50 = "46-50"
    AGE_51_PLUS = "51+"


class WeightAgeBracket(str, Enum):
    """Age brackets for height/weight standards (MCO 6110.3A)."""

    AGE_17_20 = "17-20"
    AGE_21_27 = "21-27"
    AGE_28_39 = "28-39"
    AGE_40_PLUS = "40+"


class ScoreDirection(str, Enum):
    """Which way performance improves."""

    REPS = "reps"  # higher is better
    TIME = "time"  # lower is better


class Event(str, Enum):
    """Scored fitness events."""

    PULLUPS = "pullups"
    PUSHUPS = "pushups"
    PLANK = "plank"
    RUN = "run"
    ROW = "row"
    MTC = "mtc"
    AMMO_LIFT = "ammo_lift"
    MANUF = "manuf"

    @property
    def display_name(self) -> str:
        return EVENT_DISPLAY_NAMES[self]

    @property
    def direction(self) -> ScoreDirection:
        if self in (Event.PULLUPS, Event.PUSHUPS, Event.AMMO_LIFT):
            return ScoreDirection.REPS
        return ScoreDirection.TIME


EVENT_DISPLAY_NAMES = {
    Event.PULLUPS: "Pull-ups",
    Event.PUSHUPS: "Push-ups",
    Event.PLANK: "Plank",
    Event.RUN: "3-Mile Run",
    Event.ROW: "5k Row",
    Event.MTC: "Movement to Contact",
    Event.AMMO_LIFT: "Ammunition Lift",
    Event.MANUF: "Maneuver Under Fire",
}

UPPER_BODY_EVENTS = (Event.PULLUPS, Event.PUSHUPS)
CARDIO_EVENTS = (Event.RUN, Event.ROW)
ALTITUDE_EVENTS = (Event.RUN, Event.ROW, Event.MTC, Event.MANUF)


def age_to_bracket(age: int) -> AgeBracket:
    """Map an age to its fitness event bracket."""
    if age <= 20:
        return AgeBracket.AGE_17_20
    if age <= 25:
        return AgeBracket.AGE_21_25
    if age <= 30:
        return AgeBracket.AGE_26_30
    if age <= 35:
        return AgeBracket.AGE_31_35
    if age <= 40:
        return AgeBracket.AGE_36_40
    if age <= 45:
        return AgeBracket.AGE_41_45
    if age <= 50:
        return AgeBracket.AGE_46_50
    return AgeBracket.AGE_51_PLUS


def weight_age_to_bracket(age: int) -> WeightAgeBracket:
    """Map an age to its height/weight bracket.

    Boundaries differ from age_to_bracket on purpose: the weight standards
    come from a different order.
    """
    if age <= 20:
        return WeightAgeBracket.AGE_17_20
    if age <= 27:
        return WeightAgeBracket.AGE_21_27
    if age <= 39:
        return WeightAgeBracket.AGE_28_39
    return WeightAgeBracket.AGE_40_PLUS


@dataclass(frozen=True)
class EventStandard:
    """Scoring bounds for one event, gender and age bracket.

    For rep events min_value is the fewest passing reps and max_value the
    reps that earn max_points. For timed events min_value is the fastest
    (max_points) time and max_value the slowest passing time, in seconds.
    """

    min_value: float
    max_value: float
    min_points: int
    max_points: int

    def __post_init__(self) -> None:
        if self.min_points > self.max_points:
            raise ValueError(f"min_points {self.min_points} > max_points {self.max_points}")
        if self.min_value > self.max_value:
            raise ValueError(f"min_value {self.min_value} > max_value {self.max_value}")

    def with_altitude_adjustment(self) -> "EventStandard":
        """Relax a timed standard for high-altitude testing."""
        return replace(
            self,
            min_value=self.min_value + ALTITUDE_BEST_TIME_OFFSET,
            max_value=self.max_value + ALTITUDE_WORST_TIME_OFFSET,
        )

    def to_dict(self) -> dict:
        return {
            "min_value": self.min_value,
            "max_value": self.max_value,
            "min_points": self.min_points,
            "max_points": self.max_points,
        }


@dataclass(frozen=True)
class PlankThreshold:
    """A plank breakpoint: holding at least `seconds` earns `points`."""

    seconds: int
    points: int


@dataclass(frozen=True)
class ClassificationThresholds:
    """Combined-score thresholds for each class."""

    first_class: int = 235
    second_class: int = 200
    third_class: int = 150
    min_event_score: int = 40


# Altitude adjustment (seconds)
ALTITUDE_BEST_TIME_OFFSET = 30
ALTITUDE_WORST_TIME_OFFSET = 60

_A = AgeBracket


def _reps(rows: dict[AgeBracket, tuple[int, int]], max_points: int) -> dict:
    """Build rep standards from {bracket: (min_reps, max_reps)}."""
    return {
        bracket: EventStandard(min_reps, max_reps, min_points=40, max_points=max_points)
        for bracket, (min_reps, max_reps) in rows.items()
    }


def _times(rows: dict[AgeBracket, tuple[int, int]]) -> dict:
    """Build timed standards from {bracket: (best_seconds, slowest_passing_seconds)}."""
    return {
        bracket: EventStandard(best, slowest, min_points=40, max_points=100)
        for bracket, (best, slowest) in rows.items()
    }


PULLUPS = {
    Gender.MALE: _reps(
        {
            _A.AGE_17_20: (4, 23),
            _A.AGE_21_25: (5, 23),
            _A.AGE_26_30: (5, 23),
            _A.AGE_31_35: (5, 23),
            _A.AGE_36_40: (5, 23),
            _A.AGE_41_45: (5, 23),
            _A.AGE_46_50: (4, 23),
            _A.AGE_51_PLUS: (3, 23),
        },
        max_points=100,
    ),
    Gender.FEMALE: _reps(
        {
            _A.AGE_17_20: (1, 12),
            _A.AGE_21_25: (1, 12),
            _A.AGE_26_30: (2, 12),
            _A.AGE_31_35: (2, 12),
            _A.AGE_36_40: (2, 12),
            _A.AGE_41_45: (1, 12),
            _A.AGE_46_50: (1, 12),
            _A.AGE_51_PLUS: (1, 12),
        },
        max_points=100,
    ),
}

# Push-ups cap at 70 points
PUSHUPS = {
    Gender.MALE: _reps(
        {
            _A.AGE_17_20: (42, 82),
            _A.AGE_21_25: (47, 87),
            _A.AGE_26_30: (44, 84),
            _A.AGE_31_35: (40, 80),
            _A.AGE_36_40: (36, 76),
            _A.AGE_41_45: (32, 72),
            _A.AGE_46_50: (28, 68),
            _A.AGE_51_PLUS: (24, 64),
        },
        max_points=70,
    ),
    Gender.FEMALE: _reps(
        {
            _A.AGE_17_20: (19, 42),
            _A.AGE_21_25: (25, 48),
            _A.AGE_26_30: (27, 50),
            _A.AGE_31_35: (23, 46),
            _A.AGE_36_40: (19, 42),
            _A.AGE_41_45: (15, 38),
            _A.AGE_46_50: (11, 34),
            _A.AGE_51_PLUS: (7, 30),
        },
        max_points=70,
    ),
}

RUN_3MILE = {
    Gender.MALE: _times(
        {
            _A.AGE_17_20: (1080, 1660),  # 18:00 - 27:40
            _A.AGE_21_25: (1080, 1660),  # 18:00 - 27:40
            _A.AGE_26_30: (1080, 1680),  # 18:00 - 28:00
            _A.AGE_31_35: (1080, 1700),  # 18:00 - 28:20
            _A.AGE_36_40: (1080, 1720),  # 18:00 - 28:40
            _A.AGE_41_45: (1110, 1760),  # 18:30 - 29:20
            _A.AGE_46_50: (1140, 1800),  # 19:00 - 30:00
            _A.AGE_51_PLUS: (1170, 1980),  # 19:30 - 33:00
        }
    ),
    Gender.FEMALE: _times(
        {
            _A.AGE_17_20: (1260, 1850),  # 21:00 - 30:50
            _A.AGE_21_25: (1260, 1850),  # 21:00 - 30:50
            _A.AGE_26_30: (1290, 1880),  # 21:30 - 31:20
            _A.AGE_31_35: (1320, 1920),  # 22:00 - 32:00
            _A.AGE_36_40: (1350, 1950),  # 22:30 - 32:30
            _A.AGE_41_45: (1380, 1980),  # 23:00 - 33:00
            _A.AGE_46_50: (1410, 2040),  # 23:30 - 34:00
            _A.AGE_51_PLUS: (1440, 2160),  # 24:00 - 36:00
        }
    ),
}

# 5k row is only tabulated from 46 up
ROW_5K = {
    Gender.MALE: _times(
        {
            _A.AGE_46_50: (1200, 1680),  # 20:00 - 28:00
            _A.AGE_51_PLUS: (1260, 1800),  # 21:00 - 30:00
        }
    ),
    Gender.FEMALE: _times(
        {
            _A.AGE_46_50: (1380, 1860),  # 23:00 - 31:00
            _A.AGE_51_PLUS: (1440, 1980),  # 24:00 - 33:00
        }
    ),
}

MTC = {
    Gender.MALE: _times(
        {
            _A.AGE_17_20: (158, 253),  # 2:38 - 4:13
            _A.AGE_21_25: (158, 253),  # 2:38 - 4:13
            _A.AGE_26_30: (159, 261),  # 2:39 - 4:21
            _A.AGE_31_35: (162, 273),  # 2:42 - 4:33
            _A.AGE_36_40: (168, 291),  # 2:48 - 4:51
            _A.AGE_41_45: (174, 303),  # 2:54 - 5:03
            _A.AGE_46_50: (180, 318),  # 3:00 - 5:18
            _A.AGE_51_PLUS: (192, 341),  # 3:12 - 5:41
        }
    ),
    Gender.FEMALE: _times(
        {
            _A.AGE_17_20: (188, 307),  # 3:08 - 5:07
            _A.AGE_21_25: (190, 311),  # 3:10 - 5:11
            _A.AGE_26_30: (195, 321),  # 3:15 - 5:21
            _A.AGE_31_35: (203, 337),  # 3:23 - 5:37
            _A.AGE_36_40: (212, 356),  # 3:32 - 5:56
            _A.AGE_41_45: (222, 374),  # 3:42 - 6:14
            _A.AGE_46_50: (230, 390),  # 3:50 - 6:30
            _A.AGE_51_PLUS: (242, 413),  # 4:02 - 6:53
        }
    ),
}

AMMO_LIFT = {
    Gender.MALE: _reps(
        {
            _A.AGE_17_20: (45, 106),
            _A.AGE_21_25: (45, 106),
            _A.AGE_26_30: (45, 103),
            _A.AGE_31_35: (41, 99),
            _A.AGE_36_40: (38, 93),
            _A.AGE_41_45: (34, 88),
            _A.AGE_46_50: (30, 80),
            _A.AGE_51_PLUS: (25, 72),
        },
        max_points=100,
    ),
    Gender.FEMALE: _reps(
        {
            _A.AGE_17_20: (25, 66),
            _A.AGE_21_25: (25, 66),
            _A.AGE_26_30: (25, 65),
            _A.AGE_31_35: (23, 63),
            _A.AGE_36_40: (22, 60),
            _A.AGE_41_45: (19, 57),
            _A.AGE_46_50: (16, 52),
            _A.AGE_51_PLUS: (12, 46),
        },
        max_points=100,
    ),
}

MANUF = {
    Gender.MALE: _times(
        {
            _A.AGE_17_20: (134, 245),  # 2:14 - 4:05
            _A.AGE_21_25: (134, 245),  # 2:14 - 4:05
            _A.AGE_26_30: (136, 254),  # 2:16 - 4:14
            _A.AGE_31_35: (141, 269),  # 2:21 - 4:29
            _A.AGE_36_40: (148, 289),  # 2:28 - 4:49
            _A.AGE_41_45: (156, 303),  # 2:36 - 5:03
            _A.AGE_46_50: (164, 323),  # 2:44 - 5:23
            _A.AGE_51_PLUS: (176, 350),  # 2:56 - 5:50
        }
    ),
    Gender.FEMALE: _times(
        {
            _A.AGE_17_20: (181, 330),  # 3:01 - 5:30
            _A.AGE_21_25: (182, 333),  # 3:02 - 5:33
            _A.AGE_26_30: (188, 347),  # 3:08 - 5:47
            _A.AGE_31_35: (198, 369),  # 3:18 - 6:09
            _A.AGE_36_40: (210, 396),  # 3:30 - 6:36
            _A.AGE_41_45: (222, 420),  # 3:42 - 7:00
            _A.AGE_46_50: (235, 446),  # 3:55 - 7:26
            _A.AGE_51_PLUS: (253, 480),  # 4:13 - 8:00
        }
    ),
}

# Same for all ages and genders; descending, ends at (0, 0)
PLANK_THRESHOLDS = (
    PlankThreshold(225, 100),  # 3:45
    PlankThreshold(210, 95),  # 3:30
    PlankThreshold(195, 90),  # 3:15
    PlankThreshold(180, 85),  # 3:00
    PlankThreshold(165, 80),  # 2:45
    PlankThreshold(150, 75),  # 2:30
    PlankThreshold(135, 70),  # 2:15
    PlankThreshold(120, 65),  # 2:00
    PlankThreshold(105, 60),  # 1:45
    PlankThreshold(90, 55),  # 1:30
    PlankThreshold(80, 50),  # 1:20
    PlankThreshold(75, 45),  # 1:15
    PlankThreshold(70, 40),  # 1:10
    PlankThreshold(0, 0),
)


def _freeze(tables: dict) -> Mapping:
    return MappingProxyType(
        {
            event: MappingProxyType(
                {gender: MappingProxyType(rows) for gender, rows in by_gender.items()}
            )
            for event, by_gender in tables.items()
        }
    )


@dataclass(frozen=True)
class ScoringTables:
    """A pinned, read-only set of event tables."""

    revision: str
    events: Mapping[Event, Mapping[Gender, Mapping[AgeBracket, EventStandard]]]
    plank_thresholds: tuple[PlankThreshold, ...] = PLANK_THRESHOLDS
    classification: ClassificationThresholds = field(default_factory=ClassificationThresholds)

    def get_standard(
        self,
        event: Event,
        gender: Gender | str,
        bracket: AgeBracket,
        is_altitude: bool = False,
    ) -> EventStandard:
        """Look up the standard for an event, raising MissingTableEntryError."""
        gender = Gender.parse(gender)
        if not self.has_standard(event, gender, bracket):
            raise MissingTableEntryError(event.value, gender.value, bracket.value)
        standard = self.events[event][gender][bracket]
        if is_altitude and event in ALTITUDE_EVENTS:
            return standard.with_altitude_adjustment()
        return standard

    def has_standard(self, event: Event, gender: Gender, bracket: AgeBracket) -> bool:
        """Whether the tables carry a standard for this event and bracket."""
        return bracket in self.events.get(event, {}).get(gender, {})

    def to_dict(self) -> dict:
        """Convert tables to dictionary."""
        return {
            "revision": self.revision,
            "events": {
                event.value: {
                    gender.value: {b.value: s.to_dict() for b, s in rows.items()}
                    for gender, rows in by_gender.items()
                }
                for event, by_gender in self.events.items()
            },
            "plank_thresholds": [
                {"seconds": t.seconds, "points": t.points} for t in self.plank_thresholds
            ],
            "classification": {
                "first_class": self.classification.first_class,
                "second_class": self.classification.second_class,
                "third_class": self.classification.third_class,
                "min_event_score": self.classification.min_event_score,
            },
        }


DEFAULT_TABLES = ScoringTables(
    revision=DEFAULT_SCORING_TABLE_REVISION,
    events=_freeze(
        {
            Event.PULLUPS: PULLUPS,
            Event.PUSHUPS: PUSHUPS,
            Event.RUN: RUN_3MILE,
            Event.ROW: ROW_5K,
            Event.MTC: MTC,
            Event.AMMO_LIFT: AMMO_LIFT,
            Event.MANUF: MANUF,
        }
    ),
)

TABLE_REVISIONS: Mapping[str, ScoringTables] = MappingProxyType(
    {DEFAULT_TABLES.revision: DEFAULT_TABLES}
)


def get_tables(revision: str | None = None) -> ScoringTables:
    """Get the scoring tables for a revision (default from settings)."""
    revision = revision or get_settings().scoring_table_revision
    try:
        return TABLE_REVISIONS[revision]
    except KeyError:
        raise ConfigurationError(
            f"Unknown scoring table revision '{revision}'",
            details={"revision": revision, "available": sorted(TABLE_REVISIONS)},
        ) from None
