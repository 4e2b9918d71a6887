"""Custom exceptions for the scoring engine.

Sub-threshold performances (too few reps, too slow a time, no tape test
needed) are ordinary results and never raise.
"""

from typing import Any


class ProctorError(Exception):
    """Base exception for the PFT/CFT proctor."""

    def __init__(
        self,
        message: str,
        code: str = "error",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(ProctorError):
    """Scoring data is missing or inconsistent."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="configuration_error",
            details=details,
        )


class MissingTableEntryError(ConfigurationError):
    """No scoring table entry exists for an event/gender/bracket combination."""

    def __init__(self, event: str, gender: str, bracket: str):
        super().__init__(
            message=f"No {event} table entry for {gender} {bracket}",
            details={"event": event, "gender": gender, "bracket": bracket},
        )
        self.code = "missing_table_entry"


class ValidationError(ProctorError):
    """Validation error."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        merged = {"field": field} if field else {}
        merged.update(details or {})
        super().__init__(
            message=message,
            code="validation_error",
            details=merged,
        )


class InvalidGenderError(ValidationError):
    """Gender is not one of the tabulated values."""

    def __init__(self, value: object):
        super().__init__(
            f"Invalid gender '{value}'. Expected 'male' or 'female'",
            field="gender",
            details={"value": str(value)},
        )
        self.code = "invalid_gender"


class HeightOutOfRangeError(ValidationError):
    """Height falls outside the tabulated weight standards."""

    def __init__(self, height: int, min_height: int, max_height: int):
        super().__init__(
            f'No standard for height {height}" (tabulated range {min_height}"-{max_height}")',
            field="height_inches",
            details={
                "height": height,
                "min_height": min_height,
                "max_height": max_height,
            },
        )
        self.code = "height_out_of_range"
