"""Date utilities for task dates.

User-entered dates are accepted in two formats, tried in order:

* ``M/d/yyyy HHmm`` (US month/day/year plus 24-hour time), e.g. ``12/2/2019 1800``
* ``yyyy-MM-dd`` (ISO calendar date), e.g. ``2019-12-02``

Only the calendar date is kept. The time of day in the first format has to
be valid for the text to parse, but it is not stored.
"""

import re
from datetime import date, datetime, timezone
from typing import Optional, Union


# Each accepted format with the exact shape its text must have; strptime on
# its own also takes single-digit fields and extra whitespace.
DATE_INPUT_FORMATS = (
    ("%m/%d/%Y %H%M", re.compile(r"[0-9]{1,2}/[0-9]{1,2}/[0-9]{4} [0-9]{4}")),
    ("%Y-%m-%d", re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")),
)

DEFAULT_DATE_DISPLAY_FORMAT = "%b %d %Y"

# A resolved calendar date, or the raw text kept when parsing failed.
TaskDate = Union[date, str]


def now_utc() -> datetime:
    """Return current datetime in UTC timezone."""
    return datetime.now(timezone.utc)


def parse_task_date(text: Optional[str]) -> Optional[date]:
    """Parse user-entered date text into a calendar date.
    
    Args:
        text: Date text as typed by the user
        
    Returns:
        The calendar date, or None if no accepted format matches
    """
    if not text:
        return None
    
    candidate = text.strip()
    for fmt, shape in DATE_INPUT_FORMATS:
        if not shape.fullmatch(candidate):
            continue
        try:
            return datetime.strptime(candidate, fmt).date()
        except ValueError:
            continue
    
    return None


def is_calendar_date(value: TaskDate) -> bool:
    """Return True if the value is a resolved calendar date rather than raw text."""
    return isinstance(value, date)


def format_task_date(value: TaskDate, display_format: str = DEFAULT_DATE_DISPLAY_FORMAT) -> str:
    """Render a task date for display.
    
    Calendar dates go through ``display_format``; raw text is returned verbatim.
    """
    if is_calendar_date(value):
        return value.strftime(display_format)
    return value


def to_iso_date(value: date) -> str:
    """Convert a calendar date to its ``YYYY-MM-DD`` storage form."""
    return value.isoformat()


def from_iso_date(text: str) -> date:
    """Parse a ``YYYY-MM-DD`` storage string.
    
    Raises:
        ValueError: If the text is not an ISO calendar date
    """
    return datetime.strptime(text.strip(), "%Y-%m-%d").date()


def to_iso_string(dt: Optional[datetime]) -> Optional[str]:
    """Convert datetime to ISO string with timezone info."""
    if dt is None:
        return None
    
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()
