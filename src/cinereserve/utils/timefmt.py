"""Date and time formatting for API payloads."""

import re
from datetime import date, datetime

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
TIME_FORMAT = "%H:%M:%S"

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def format_datetime(value: datetime) -> str:
    """Render a timestamp as ``YYYY-MM-DD HH:MM:SS``."""
    return value.strftime(DATETIME_FORMAT)


def format_time(value: datetime) -> str:
    """Render the wall-clock part of a timestamp as ``HH:MM:SS``."""
    return value.strftime(TIME_FORMAT)


def is_iso_date(text: str) -> bool:
    """True if *text* has the strict ``YYYY-MM-DD`` shape (not necessarily a real date)."""
    return bool(_ISO_DATE_RE.match(text))


def parse_date(text: str) -> date:
    """
    Parse a calendar date.

    Accepts ``YYYY-MM-DD`` or a full ISO timestamp, whose date part is used.

    Raises:
        ValueError: If *text* is not a valid date
    """
    text = text.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        return datetime.fromisoformat(text).date()


def parse_naive_datetime(text: str) -> datetime:
    """
    Parse an ISO timestamp into a naive wall-clock datetime.

    Screening times are stored as local times, so any UTC offset in the input
    is dropped rather than converted.

    Raises:
        ValueError: If *text* is not an ISO timestamp
    """
    return datetime.fromisoformat(text.strip()).replace(tzinfo=None)
