"""Tests for scoring tables and age brackets."""

import pytest

from core.exceptions import ConfigurationError, InvalidGenderError, MissingTableEntryError
from engine.scoring.tables import (
    ALTITUDE_EVENTS,
    DEFAULT_TABLES,
    PLANK_THRESHOLDS,
    AgeBracket,
    ClassificationThresholds,
    Event,
    EventStandard,
    Gender,
    ScoreDirection,
    WeightAgeBracket,
    age_to_bracket,
    get_tables,
    weight_age_to_bracket,
)


class TestAgeBrackets:
    """Tests for the two age bracket ladders."""

    @pytest.mark.parametrize(
        ("age", "bracket"),
        [
            (17, AgeBracket.AGE_17_20),
            (20, AgeBracket.AGE_17_20),
            (21, AgeBracket.AGE_21_25),
            (25, AgeBracket.AGE_21_25),
            (26, AgeBracket.AGE_26_30),
            (35, AgeBracket.AGE_31_35),
            (40, AgeBracket.AGE_36_40),
            (45, AgeBracket.AGE_41_45),
            (50, AgeBracket.AGE_46_50),
            (51, AgeBracket.AGE_51_PLUS),
            (70, AgeBracket.AGE_51_PLUS),
        ],
    )
    def test_age_to_bracket(self, age: int, bracket: AgeBracket) -> None:
        assert age_to_bracket(age) == bracket

    def test_age_to_bracket_is_total(self) -> None:
        """Every non-negative age maps to a bracket."""
        for age in range(0, 120):
            assert isinstance(age_to_bracket(age), AgeBracket)

    def test_bracket_values(self) -> None:
        assert age_to_bracket(20).value == "17-20"
        assert age_to_bracket(51).value == "51+"

    @pytest.mark.parametrize(
        ("age", "bracket"),
        [
            (20, WeightAgeBracket.AGE_17_20),
            (21, WeightAgeBracket.AGE_21_27),
            (27, WeightAgeBracket.AGE_21_27),
            (28, WeightAgeBracket.AGE_28_39),
            (39, WeightAgeBracket.AGE_28_39),
            (40, WeightAgeBracket.AGE_40_PLUS),
        ],
    )
    def test_weight_age_to_bracket(self, age: int, bracket: WeightAgeBracket) -> None:
        assert weight_age_to_bracket(age) == bracket

    def test_weight_brackets_differ_from_event_brackets(self) -> None:
        """Age 27 shares a weight bracket with 21 but not an event bracket."""
        assert weight_age_to_bracket(27) == weight_age_to_bracket(21)
        assert age_to_bracket(27) != age_to_bracket(21)


class TestGender:
    """Tests for Gender parsing."""

    def test_parse(self) -> None:
        assert Gender.parse("male") is Gender.MALE
        assert Gender.parse(" Female ") is Gender.FEMALE
        assert Gender.parse(Gender.MALE) is Gender.MALE

    def test_parse_invalid(self) -> None:
        with pytest.raises(InvalidGenderError) as exc_info:
            Gender.parse("other")

        assert exc_info.value.code == "invalid_gender"
        assert exc_info.value.details["field"] == "gender"


class TestEventStandard:
    """Tests for EventStandard."""

    def test_invariants_enforced(self) -> None:
        with pytest.raises(ValueError):
            EventStandard(min_value=10, max_value=5, min_points=40, max_points=100)
        with pytest.raises(ValueError):
            EventStandard(min_value=5, max_value=10, min_points=100, max_points=40)

    def test_altitude_adjustment(self) -> None:
        standard = EventStandard(min_value=1080, max_value=1660, min_points=40, max_points=100)
        adjusted = standard.with_altitude_adjustment()

        assert adjusted.min_value == 1110
        assert adjusted.max_value == 1720
        assert adjusted.max_points == 100
        assert standard.min_value == 1080  # base standard untouched

    def test_all_table_invariants(self) -> None:
        for by_gender in DEFAULT_TABLES.events.values():
            for rows in by_gender.values():
                for standard in rows.values():
                    assert standard.min_points <= standard.max_points
                    assert standard.min_value <= standard.max_value


class TestEvent:
    """Tests for Event metadata."""

    def test_directions(self) -> None:
        assert Event.PULLUPS.direction == ScoreDirection.REPS
        assert Event.AMMO_LIFT.direction == ScoreDirection.REPS
        assert Event.RUN.direction == ScoreDirection.TIME
        assert Event.MANUF.direction == ScoreDirection.TIME

    def test_display_names(self) -> None:
        assert Event.RUN.display_name == "3-Mile Run"
        assert Event.MTC.display_name == "Movement to Contact"

    def test_altitude_events(self) -> None:
        assert set(ALTITUDE_EVENTS) == {Event.RUN, Event.ROW, Event.MTC, Event.MANUF}


class TestScoringTables:
    """Tests for ScoringTables lookups."""

    def test_get_standard(self) -> None:
        standard = DEFAULT_TABLES.get_standard(Event.PULLUPS, Gender.MALE, AgeBracket.AGE_21_25)

        assert standard.min_value == 5
        assert standard.max_value == 23
        assert standard.max_points == 100
        assert standard.min_points == 40

    def test_pushups_cap_at_70(self) -> None:
        for gender in Gender:
            for bracket in AgeBracket:
                standard = DEFAULT_TABLES.get_standard(Event.PUSHUPS, gender, bracket)
                assert standard.max_points == 70

    def test_get_standard_accepts_string_gender(self) -> None:
        standard = DEFAULT_TABLES.get_standard(Event.RUN, "female", AgeBracket.AGE_51_PLUS)
        assert standard.min_value == 1440
        assert standard.max_value == 2160

    def test_get_standard_altitude(self) -> None:
        standard = DEFAULT_TABLES.get_standard(
            Event.MTC, Gender.MALE, AgeBracket.AGE_17_20, is_altitude=True
        )
        assert standard.min_value == 158 + 30
        assert standard.max_value == 253 + 60

    def test_altitude_ignored_for_rep_events(self) -> None:
        plain = DEFAULT_TABLES.get_standard(Event.AMMO_LIFT, Gender.MALE, AgeBracket.AGE_17_20)
        adjusted = DEFAULT_TABLES.get_standard(
            Event.AMMO_LIFT, Gender.MALE, AgeBracket.AGE_17_20, is_altitude=True
        )
        assert plain == adjusted

    def test_row_only_for_46_plus(self) -> None:
        for gender in Gender:
            assert DEFAULT_TABLES.has_standard(Event.ROW, gender, AgeBracket.AGE_46_50)
            assert DEFAULT_TABLES.has_standard(Event.ROW, gender, AgeBracket.AGE_51_PLUS)
            assert not DEFAULT_TABLES.has_standard(Event.ROW, gender, AgeBracket.AGE_41_45)

    def test_missing_entry_raises(self) -> None:
        with pytest.raises(MissingTableEntryError) as exc_info:
            DEFAULT_TABLES.get_standard(Event.ROW, Gender.MALE, AgeBracket.AGE_21_25)

        error = exc_info.value
        assert error.code == "missing_table_entry"
        assert error.details == {"event": "row", "gender": "male", "bracket": "21-25"}

    def test_tables_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_TABLES.events[Event.RUN][Gender.MALE][AgeBracket.AGE_17_20] = None  # type: ignore[index]

    def test_plank_thresholds_descending(self) -> None:
        seconds = [t.seconds for t in PLANK_THRESHOLDS]
        assert seconds == sorted(seconds, reverse=True)
        assert PLANK_THRESHOLDS[-1].seconds == 0
        assert PLANK_THRESHOLDS[-1].points == 0

    def test_classification_defaults(self) -> None:
        thresholds = ClassificationThresholds()
        assert thresholds.first_class == 235
        assert thresholds.second_class == 200
        assert thresholds.third_class == 150
        assert thresholds.min_event_score == 40

    def test_to_dict(self) -> None:
        data = DEFAULT_TABLES.to_dict()

        assert data["revision"] == "MCO 6100.13A w/CH-4"
        assert data["events"]["pullups"]["male"]["21-25"]["min_value"] == 5
        assert data["plank_thresholds"][0] == {"seconds": 225, "points": 100}


class TestGetTables:
    """Tests for revision lookup."""

    def test_default_revision(self) -> None:
        assert get_tables() is DEFAULT_TABLES

    def test_explicit_revision(self) -> None:
        assert get_tables("MCO 6100.13A w/CH-4") is DEFAULT_TABLES

    def test_revision_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from core.config import get_settings

        monkeypatch.setenv("SCORING_TABLE_REVISION", "MCO 6100.13 (2008)")
        get_settings.cache_clear()

        with pytest.raises(ConfigurationError) as exc_info:
            get_tables()

        assert exc_info.value.details["revision"] == "MCO 6100.13 (2008)"
        assert exc_info.value.code == "configuration_error"
