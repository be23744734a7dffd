"""Date parsing and formatting utilities."""

from datetime import datetime, timedelta
from typing import Optional
from dateutil import parser as date_parser

DISPLAY_FORMAT = "%d/%m/%y %H:%M"
MILLIS_PER_HOUR = 3_600_000


def now() -> datetime:
    """Current local time as stored in the database (naive, whole seconds)."""
    return datetime.now().replace(microsecond=0)


def to_naive(value: datetime) -> datetime:
    """Drop timezone information, converting aware values to local time."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def parse_datetime(date_str: str) -> datetime:
    """Parse a date/time string into a naive datetime.

    Supports:
    - ISO-8601: "2024-01-15T10:00:00", "2024-01-15 10:00"
    - Display format: "15/01/24 10:00" (day first)
    - Relative: "now", "today" (midnight)

    Args:
        date_str: Date string in various formats

    Returns:
        Naive datetime object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip()
    lowered = date_str.lower()

    if lowered == "now":
        return now()
    if lowered == "today":
        return now().replace(hour=0, minute=0, second=0)

    try:
        if "/" in date_str:
            return to_naive(datetime.strptime(date_str, DISPLAY_FORMAT))
        return to_naive(date_parser.isoparse(date_str))
    except ValueError:
        pass

    try:
        return to_naive(date_parser.parse(date_str, dayfirst=True))
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """Format a datetime as ``dd/mm/yy HH:MM``."""
    if value is None:
        return None
    return value.strftime(DISPLAY_FORMAT)


def whole_hours(begin: datetime, end: datetime) -> int:
    """Return the whole hours between two datetimes.

    The difference is taken in milliseconds and truncated toward zero, so
    10:00 -> 10:59 is 0 hours and 10:00 -> 11:00 is 1 hour.
    """
    millis = (end - begin) // timedelta(milliseconds=1)
    hours = abs(millis) // MILLIS_PER_HOUR
    return hours if millis >= 0 else -hours
