"""Tests for custom exceptions."""

from core.exceptions import (
    ConfigurationError,
    HeightOutOfRangeError,
    InvalidGenderError,
    MissingTableEntryError,
    ProctorError,
    ValidationError,
)


def test_proctor_error_base() -> None:
    """Test base ProctorError."""
    error = ProctorError(message="Test error", code="test_error")
    assert error.message == "Test error"
    assert error.code == "test_error"
    assert error.details == {}
    assert str(error) == "Test error"


def test_configuration_error() -> None:
    error = ConfigurationError("Bad tables", details={"revision": "x"})
    assert error.code == "configuration_error"
    assert error.details == {"revision": "x"}


def test_missing_table_entry_error() -> None:
    error = MissingTableEntryError("row", "male", "21-25")
    assert isinstance(error, ConfigurationError)
    assert error.code == "missing_table_entry"
    assert error.message == "No row table entry for male 21-25"


def test_validation_error() -> None:
    error = ValidationError("Invalid time", field="time")
    assert error.code == "validation_error"
    assert error.details == {"field": "time"}


def test_invalid_gender_error() -> None:
    error = InvalidGenderError("x")
    assert isinstance(error, ValidationError)
    assert error.code == "invalid_gender"
    assert error.details == {"field": "gender", "value": "x"}


def test_height_out_of_range_error() -> None:
    error = HeightOutOfRangeError(82, 58, 80)
    assert error.code == "height_out_of_range"
    assert error.details["height"] == 82
    assert '82"' in error.message
