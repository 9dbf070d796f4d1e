"""Pure cron expression matching - no I/O dependencies.

Only the calendar fields are evaluated. Minute and hour are accepted for
compatibility with standard crontab strings but the engine fires at most
once per calendar day.
"""

import re
from datetime import date, datetime

from cadence.errors import ValidationError

from .dates import cron_weekday, to_utc_date

FIELD_NAMES = ("minute", "hour", "day-of-month", "month", "day-of-week")
_INTEGER = re.compile(r"-?\d+", re.ASCII)


def _to_int(token: str) -> int | None:
    token = token.strip()
    if not _INTEGER.fullmatch(token):
        return None
    return int(token)


def match_field(field_expr: str, value: int) -> bool:
    """
    Check a single cron field against a value.

    Supports '*', a bare integer, a comma-separated list and '*/N'.
    Ranges (a-b) are not supported and never match.
    """
    if field_expr == "*":
        return True

    if field_expr.startswith("*/"):
        step = _to_int(field_expr[2:])
        if not step or step < 0:
            return False
        return value % step == 0

    if "," in field_expr:
        return any(_to_int(part) == value for part in field_expr.split(","))

    return _to_int(field_expr) == value


def cron_matches_date(expression: str, day: date | datetime) -> bool:
    """
    Check whether a 5-field cron expression fires on a calendar date.

    Returns False for any expression that does not have exactly 5 fields.
    Never raises.
    """
    if not isinstance(expression, str):
        return False
    fields = expression.split()
    if len(fields) != 5:
        return False

    _minute, _hour, day_of_month, month, day_of_week = fields
    day = to_utc_date(day)

    return (
        match_field(day_of_month, day.day)
        and match_field(month, day.month)
        and match_field(day_of_week, cron_weekday(day))
    )


def _valid_field(field_expr: str) -> bool:
    if field_expr == "*":
        return True
    if field_expr.startswith("*/"):
        step = _to_int(field_expr[2:])
        return step is not None and step > 0
    parts = field_expr.split(",")
    return all(_to_int(p) is not None and _to_int(p) >= 0 for p in parts)


def validate_cron_expression(expression: str) -> None:
    """Raise ValidationError if the expression falls outside the grammar."""
    fields = expression.split() if isinstance(expression, str) else []
    if len(fields) != 5:
        raise ValidationError(
            f"Cron expression must have exactly 5 fields, got {len(fields)}: {expression!r}"
        )
    for name, field_expr in zip(FIELD_NAMES, fields):
        if not _valid_field(field_expr):
            raise ValidationError(f"Invalid {name} field {field_expr!r} in {expression!r}")
