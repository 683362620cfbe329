"""Household-local day keys and Morning/Afternoon/Evening buckets.

Every "which day is this?" question in pawplan goes through here so that the
Today view, the calendar and streaks agree. Days are always calendar days in
the household's timezone, never UTC days: a 23:50 walk in Sydney belongs to
the Sydney date even though it is still the previous day in UTC.

Timestamps without tzinfo are treated as UTC, which is what the backend stores.
"""

import logging
from collections.abc import Iterable, Iterator
from datetime import UTC, date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pawplan.core.config import Constants, settings
from pawplan.core.errors import classify_error_with_response
from pawplan.core.recurrence_parser import WEEKDAY_NAMES, parse_time
from pawplan.domain.log import ActivityLog
from pawplan.domain.task import Task
from pawplan.models.service_models import ActivityGroup, PeriodBucket, TimeOfDay


logger = logging.getLogger(__name__)

_MONTH_ABBREVIATIONS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def resolve_timezone(name: str | None) -> tzinfo:
    """Resolve a household timezone name, falling back to the configured default.

    Unknown names are logged and never raised; the final fallback is UTC.
    """
    for candidate in (name, settings.default_timezone):
        if not candidate:
            continue
        try:
            return ZoneInfo(candidate)
        except (ZoneInfoNotFoundError, ValueError) as e:
            response = classify_error_with_response(e)
            logger.warning("Unknown timezone %r (%s), falling back", candidate, response.code)
    return UTC


def to_local(timestamp: datetime, tz: tzinfo) -> datetime:
    """Convert a timestamp to household-local time (naive means UTC)."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(tz)


def local_date(now: datetime, tz: tzinfo) -> date:
    """Household-local calendar date of ``now``."""
    return to_local(now, tz).date()


def day_key(timestamp: datetime, tz: tzinfo) -> str:
    """``YYYY-MM-DD`` of the household-local day containing ``timestamp``."""
    return local_date(timestamp, tz).isoformat()


def day_window(on_date: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """Half-open ``[start, end)`` bounds of a household-local day.

    Built from local midnights rather than ``start + 24h`` so DST days come out
    23 or 25 hours long.
    """
    start = datetime.combine(on_date, time.min, tzinfo=tz)
    end = datetime.combine(on_date + timedelta(days=1), time.min, tzinfo=tz)
    return start, end


def iter_days(start_date: date, end_date: date) -> Iterator[date]:
    """Yield every date from ``start_date`` through ``end_date`` inclusive."""
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def time_of_day_for_hour(hour: int) -> TimeOfDay:
    """Map a local hour to its bucket: [5,12) Morning, [12,17) Afternoon, else Evening."""
    if Constants.MORNING_START_HOUR <= hour < Constants.AFTERNOON_START_HOUR:
        return TimeOfDay.MORNING
    if Constants.AFTERNOON_START_HOUR <= hour < Constants.EVENING_START_HOUR:
        return TimeOfDay.AFTERNOON
    return TimeOfDay.EVENING


def bucket_of(timestamp: datetime, tz: tzinfo, *, scheduled_time: object = None) -> PeriodBucket:
    """Bucket a timestamp into its local day and time of day.

    Args:
        timestamp: Event time (typically ``ActivityLog.completed_at``)
        tz: Household timezone
        scheduled_time: The task's ``recurrence_rule.time``; when parsable it
            decides the time of day instead of the timestamp's hour

    Returns:
        PeriodBucket with ``day_key`` and ``time_of_day``
    """
    local = to_local(timestamp, tz)
    configured = parse_time(scheduled_time)
    hour = configured.hour if configured is not None else local.hour
    return PeriodBucket(day_key=local.date().isoformat(), time_of_day=time_of_day_for_hour(hour))


def task_time_of_day(task: Task) -> TimeOfDay:
    """Bucket for a task in day views; tasks without a configured time are Evening."""
    configured = parse_time(task.scheduled_time)
    if configured is None:
        return TimeOfDay.EVENING
    return time_of_day_for_hour(configured.hour)


def task_sort_key(task: Task) -> tuple[int, time, str]:
    """Order tasks by configured time, untimed tasks last, then by title."""
    configured = parse_time(task.scheduled_time)
    if configured is None:
        return (1, time.max, task.title.lower())
    return (0, configured, task.title.lower())


def feed_title(on_date: date, today: date) -> str:
    """Section title for the activity feed."""
    if on_date == today:
        return Constants.FEED_TODAY_TITLE
    if on_date == today - timedelta(days=1):
        return Constants.FEED_YESTERDAY_TITLE
    return f"{WEEKDAY_NAMES[on_date.weekday()]}, {_MONTH_ABBREVIATIONS[on_date.month - 1]} {on_date.day}"


def group_activity_feed(logs: Iterable[ActivityLog], *, now: datetime, tz: tzinfo) -> list[ActivityGroup]:
    """Group logs into newest-first day sections titled relative to ``now``."""
    today = local_date(now, tz)
    groups: dict[date, list[ActivityLog]] = {}

    for log in sorted(logs, key=lambda entry: to_local(entry.completed_at, UTC), reverse=True):
        groups.setdefault(local_date(log.completed_at, tz), []).append(log)

    return [
        ActivityGroup(title=feed_title(on_date, today), day_key=on_date.isoformat(), logs=entries)
        for on_date, entries in groups.items()
    ]
