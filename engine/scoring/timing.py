"""Time and age helpers for raw score entry."""

import re
from datetime import date

from core.exceptions import ValidationError

_TIME_PATTERN = re.compile(r"^\s*(\d+):([0-5]?\d)\s*$")


def to_seconds(minutes: int | None, seconds: int | None) -> int:
    """Combine separate minute and second entries."""
    return (minutes or 0) * 60 + (seconds or 0)


def parse_time(value: str | None) -> int:
    """
    Parse a MM:SS string into seconds.

    Args:
        value: Time such as "18:05". Empty input means not recorded.

    Returns:
        Total seconds, 0 for empty input

    Raises:
        ValidationError: If the string is not MM:SS
    """
    if value is None or not value.strip():
        return 0
    match = _TIME_PATTERN.match(value)
    if not match:
        raise ValidationError(f"Invalid time '{value}'. Expected MM:SS", field="time")
    minutes, seconds = match.groups()
    return to_seconds(int(minutes), int(seconds))


def format_time(total_seconds: float | None) -> str:
    """Format seconds as zero-padded MM:SS."""
    if not total_seconds or total_seconds < 0:
        return "00:00"
    minutes, seconds = divmod(int(total_seconds), 60)
    return f"{minutes:02d}:{seconds:02d}"


def age_on(birth_date: date, as_of: date) -> int:
    """Age in whole years on a given date."""
    age = as_of.year - birth_date.year
    if (as_of.month, as_of.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age
