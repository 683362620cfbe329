"""Parsing utilities for the loosely-typed ``recurrence_rule`` mapping on tasks.

Single-field parsers return None for anything they cannot understand. Callers
treat None as "rule field missing" and fail closed instead of raising.

``parse_weekdays`` reads two fields, so it tells an absent weekday apart from an
unreadable one: absent gives None, unreadable raises ValueError.
"""

import re
from datetime import date, datetime, time
from typing import Any

from croniter import croniter
from dateutil import parser as dateutil_parser

from pawplan.core.config import Constants


_TIME_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*$")

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

_WEEKDAY_LOOKUP: dict[str, int] = {}
for _index, _name in enumerate(WEEKDAY_NAMES):
    _WEEKDAY_LOOKUP[_name.lower()] = _index
    _WEEKDAY_LOOKUP[_name.lower()[:3]] = _index


def parse_time(value: Any) -> time | None:
    """Parse an ``HH:MM`` (or ``HH:MM:SS``) rule time.

    Clients formatting with a 24-hour clock sometimes emit ``24:MM`` for times
    just after midnight; that is read as ``00:MM``.
    """
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        return None

    match = _TIME_RE.match(value)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2))
    second = int(match.group(3) or 0)
    if hour == 24:  # noqa: PLR2004
        hour = 0
    if hour > 23 or minute > 59 or second > 59:  # noqa: PLR2004
        return None
    return time(hour, minute, second)


def parse_date(value: Any) -> date | None:
    """Parse an absolute calendar date (``YYYY-MM-DD`` or an ISO timestamp)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        pass
    try:
        return dateutil_parser.isoparse(value.strip()).date()
    except (ValueError, OverflowError):
        return None


def parse_day_of_month(value: Any) -> int | None:
    """Parse a 1-31 day of month from an int or a numeric string."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            return None
        value = int(value)
    if not isinstance(value, int):
        return None
    if Constants.MIN_DAY_OF_MONTH <= value <= Constants.MAX_DAY_OF_MONTH:
        return value
    return None


def parse_weekday(value: Any) -> int | None:
    """Parse a weekday as 0=Monday..6=Sunday, or a (short) English day name."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 <= value <= 6 else None  # noqa: PLR2004
    if isinstance(value, str):
        key = value.strip().lower()
        if key.isdigit():
            return parse_weekday(int(key))
        return _WEEKDAY_LOOKUP.get(key)
    return None


def parse_weekdays(rule: dict[str, Any]) -> set[int] | None:
    """Collect the weekdays a weekly rule names, or None if it names none.

    Raises:
        ValueError: If ``weekday`` or ``days_of_week`` is present but unreadable;
            any bad entry makes the whole field unreadable
    """
    if Constants.RULE_WEEKDAY_KEY not in rule and Constants.RULE_DAYS_OF_WEEK_KEY not in rule:
        return None

    weekdays: set[int] = set()

    if Constants.RULE_WEEKDAY_KEY in rule:
        weekday = parse_weekday(rule[Constants.RULE_WEEKDAY_KEY])
        if weekday is None:
            raise ValueError(f"Invalid recurrence weekday: {rule[Constants.RULE_WEEKDAY_KEY]!r}")
        weekdays.add(weekday)

    if Constants.RULE_DAYS_OF_WEEK_KEY in rule:
        raw_days = rule[Constants.RULE_DAYS_OF_WEEK_KEY]
        if isinstance(raw_days, str):
            raw_days = [part for part in raw_days.split(",") if part.strip()]
        if not isinstance(raw_days, list | tuple | set) or not raw_days:
            raise ValueError(f"Invalid recurrence days_of_week: {rule[Constants.RULE_DAYS_OF_WEEK_KEY]!r}")
        for raw_day in raw_days:
            weekday = parse_weekday(raw_day)
            if weekday is None:
                raise ValueError(f"Invalid recurrence weekday in days_of_week: {raw_day!r}")
            weekdays.add(weekday)

    return weekdays


def parse_cron(value: Any) -> str | None:
    """Return the expression if it is a valid 5-field CRON string."""
    if not isinstance(value, str) or not value.strip():
        return None
    expression = value.strip()
    if len(expression.split()) != 5 or not croniter.is_valid(expression):  # noqa: PLR2004
        return None
    return expression


def format_time(value: time) -> str:
    """Format a time as ``8:00 AM``, ``midnight`` or ``noon``."""
    if value.hour == 0 and value.minute == 0:
        return "midnight"
    if value.hour == 12 and value.minute == 0:  # noqa: PLR2004
        return "noon"
    period = "AM" if value.hour < 12 else "PM"  # noqa: PLR2004
    display_hour = value.hour % 12 or 12
    return f"{display_hour}:{value.minute:02d} {period}"


def ordinal(day: int) -> str:
    """Return ``1st``, ``2nd``, ``23rd``, ``31st`` and so on."""
    suffix = "th"
    if day in (1, 21, 31):
        suffix = "st"
    elif day in (2, 22):
        suffix = "nd"
    elif day in (3, 23):
        suffix = "rd"
    return f"{day}{suffix}"


def cron_to_human(cron_expr: str) -> str:
    """Convert a CRON expression to human-readable text (e.g. "every Monday")."""
    parts = cron_expr.split()
    if len(parts) != 5:  # noqa: PLR2004
        return cron_expr

    _, _, day_of_month, month, day_of_week = parts
    cron_weekday_names = ["Sunday", *WEEKDAY_NAMES[:6]]

    if day_of_week == "*" and day_of_month == "*" and month == "*":
        return "daily"

    if day_of_month == "*" and month == "*" and day_of_week != "*":
        try:
            days = [cron_weekday_names[int(d) % 7] for d in day_of_week.split(",")]
            return f"every {', '.join(days)}"
        except (ValueError, IndexError):
            pass

    if day_of_week == "*" and month == "*" and day_of_month != "*":
        try:
            return f"monthly on the {ordinal(int(day_of_month))}"
        except ValueError:
            pass

    return f"custom ({cron_expr})"
