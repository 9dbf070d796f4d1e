"""Pure calendar-day helpers - no I/O dependencies."""

import re
from datetime import date, datetime, timedelta, timezone

from cadence.errors import InvalidRange, ValidationError

MAX_RANGE_DAYS = 90

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def parse_iso_date(value: str | date) -> date:
    """
    Parse a YYYY-MM-DD string. Dates pass through unchanged.

    Raises ValidationError for anything else.
    """
    if isinstance(value, datetime):
        return to_utc_date(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise ValidationError(f"Dates must be in YYYY-MM-DD format: {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date {value!r}: {e}") from e


def to_utc_date(value: date | datetime) -> date:
    """
    Reduce a date or datetime to a calendar date.

    Aware datetimes are converted to UTC first so the calendar day never
    depends on the host's local zone. Naive datetimes are taken as-is.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def add_days(anchor: date, days: int) -> date:
    """Calendar-day arithmetic. Offsets may be negative."""
    return anchor + timedelta(days=days)


def iter_days(start: date, end: date):
    """Yield every calendar day in [start, end]."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def validate_range(start: str | date, end: str | date, max_days: int = MAX_RANGE_DAYS) -> tuple[date, date]:
    """
    Parse and check a generation range.

    Raises InvalidRange if end precedes start or the two are more than
    max_days apart.
    """
    try:
        start_date = parse_iso_date(start)
        end_date = parse_iso_date(end)
    except ValidationError as e:
        raise InvalidRange(str(e)) from e
    if end_date < start_date:
        raise InvalidRange("endDate must be greater than or equal to startDate")
    if (end_date - start_date).days > max_days:
        raise InvalidRange(f"Date range must not exceed {max_days} days")
    return start_date, end_date


def format_anchor_date(anchor: date) -> str:
    """Human-readable anchor, e.g. 'Mar 15'."""
    return f"{_MONTHS[anchor.month - 1]} {anchor.day}"


def cron_weekday(day: date) -> int:
    """Day of week in cron numbering (0=Sunday ... 6=Saturday)."""
    return (day.weekday() + 1) % 7
