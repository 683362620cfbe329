"""Decides whether a task is scheduled on a given calendar date.

Rules by frequency:
- daily: every date
- weekly: on the rule's ``weekday``/``days_of_week``, else the weekday the task was created
- monthly: on ``day_of_month``; in shorter months the task falls on the last day instead
- once: on the rule's ``date`` only
- custom: every date, or the days matched by a ``cron`` expression when one is given

Missing or unreadable rule fields make the task inactive for that frequency.
Nothing here raises for bad data.
"""

import calendar
import logging
from collections.abc import Iterable, Iterator
from datetime import date, datetime, time, timedelta, tzinfo

from croniter import croniter

from pawplan.core.config import Constants, settings
from pawplan.core.errors import classify_error_with_response
from pawplan.core.recurrence_parser import (
    WEEKDAY_NAMES,
    cron_to_human,
    format_time,
    ordinal,
    parse_cron,
    parse_date,
    parse_day_of_month,
    parse_time,
    parse_weekdays,
)
from pawplan.domain.task import Task, TaskFrequency
from pawplan.services.period_service import iter_days, local_date, resolve_timezone


logger = logging.getLogger(__name__)


def effective_day_of_month(day_of_month: int, year: int, month: int) -> int:
    """Clamp a configured day of month to the month's length (31 -> 30 in April)."""
    return min(day_of_month, calendar.monthrange(year, month)[1])


def _weekly_days(task: Task, tz: tzinfo | None) -> set[int] | None:
    try:
        weekdays = parse_weekdays(task.recurrence_rule)
    except ValueError as e:
        response = classify_error_with_response(e)
        logger.debug("Weekly task %s has an unreadable weekday (%s): %s", task.id, response.code, e)
        return None
    if weekdays is not None:
        return weekdays
    if task.created_at is None:
        return None
    return {local_date(task.created_at, tz or resolve_timezone(None)).weekday()}


def _cron_fires_on(expression: str, on_date: date) -> bool:
    day_start = datetime.combine(on_date, time.min)
    next_fire = croniter(expression, day_start - timedelta(seconds=1)).get_next(datetime)
    return next_fire < day_start + timedelta(days=1)


def is_task_active_on(  # noqa: PLR0911
    task: Task,
    on_date: date,
    *,
    tz: tzinfo | None = None,
    gate_recurrence: bool | None = None,
) -> bool:
    """Return True if the task has an occurrence on ``on_date``.

    Args:
        task: Task to evaluate
        on_date: Household-local calendar date
        tz: Household timezone, used to read the creation weekday of weekly tasks
        gate_recurrence: Restrict weekly/monthly tasks to their days. False shows
            them every day. Defaults to ``settings.gate_recurrence``

    Returns:
        Whether the task is scheduled on that date
    """
    if not task.is_active:
        return False

    gate = settings.gate_recurrence if gate_recurrence is None else gate_recurrence
    rule = task.recurrence_rule

    if task.frequency == TaskFrequency.DAILY:
        return True

    if task.frequency == TaskFrequency.WEEKLY:
        if not gate:
            return True
        weekdays = _weekly_days(task, tz)
        if weekdays is None:
            logger.debug("Weekly task %s has no weekday; treating as inactive", task.id)
            return False
        return on_date.weekday() in weekdays

    if task.frequency == TaskFrequency.MONTHLY:
        if not gate:
            return True
        day_of_month = parse_day_of_month(rule.get(Constants.RULE_DAY_OF_MONTH_KEY))
        if day_of_month is None:
            logger.debug("Monthly task %s has no valid day_of_month; treating as inactive", task.id)
            return False
        return on_date.day == effective_day_of_month(day_of_month, on_date.year, on_date.month)

    if task.frequency == TaskFrequency.ONCE:
        target = parse_date(rule.get(Constants.RULE_DATE_KEY))
        if target is None:
            logger.debug("One-time task %s has no valid date; treating as inactive", task.id)
            return False
        return on_date == target

    # Custom rules are free-form; only a cron expression narrows them
    if Constants.RULE_CRON_KEY not in rule:
        return True
    expression = parse_cron(rule[Constants.RULE_CRON_KEY])
    if expression is None:
        logger.debug("Custom task %s has an invalid cron expression; treating as inactive", task.id)
        return False
    return _cron_fires_on(expression, on_date)


def active_tasks_on(
    tasks: Iterable[Task],
    on_date: date,
    *,
    tz: tzinfo | None = None,
    gate_recurrence: bool | None = None,
) -> list[Task]:
    """Filter tasks down to those scheduled on ``on_date``, preserving order."""
    return [task for task in tasks if is_task_active_on(task, on_date, tz=tz, gate_recurrence=gate_recurrence)]


def scheduled_days(
    task: Task,
    start_date: date,
    end_date: date,
    *,
    tz: tzinfo | None = None,
    gate_recurrence: bool | None = None,
) -> Iterator[date]:
    """Yield the task's scheduled dates from ``start_date`` through ``end_date``."""
    for on_date in iter_days(start_date, end_date):
        if is_task_active_on(task, on_date, tz=tz, gate_recurrence=gate_recurrence):
            yield on_date


def describe_recurrence(task: Task, *, tz: tzinfo | None = None) -> str:
    """Human-readable schedule, e.g. "daily at 8:00 AM" or "monthly on the 31st"."""
    rule = task.recurrence_rule
    scheduled = parse_time(rule.get(Constants.RULE_TIME_KEY))
    time_suffix = f" at {format_time(scheduled)}" if scheduled is not None else ""

    if task.frequency == TaskFrequency.DAILY:
        return f"daily{time_suffix}"

    if task.frequency == TaskFrequency.WEEKLY:
        weekdays = _weekly_days(task, tz)
        if not weekdays:
            return f"weekly{time_suffix}"
        names = ", ".join(WEEKDAY_NAMES[day] for day in sorted(weekdays))
        return f"every {names}{time_suffix}"

    if task.frequency == TaskFrequency.MONTHLY:
        day_of_month = parse_day_of_month(rule.get(Constants.RULE_DAY_OF_MONTH_KEY))
        if day_of_month is None:
            return f"monthly{time_suffix}"
        return f"monthly on the {ordinal(day_of_month)}{time_suffix}"

    if task.frequency == TaskFrequency.ONCE:
        target = parse_date(rule.get(Constants.RULE_DATE_KEY))
        if target is None:
            return "once"
        return f"once on {target.isoformat()}{time_suffix}"

    expression = parse_cron(rule.get(Constants.RULE_CRON_KEY))
    if expression is not None:
        return f"{cron_to_human(expression)}{time_suffix}"
    return f"custom{time_suffix}"
