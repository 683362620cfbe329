"""Household views built from store records.

This is the only part of pawplan that performs I/O. It pulls tasks and
activity logs from a ``RecordStore``, runs them through the recurrence,
completion, streak and bucketing functions, and returns the structures the
Today, Calendar, Streak and Activity screens render.

Failure policy:
- failed reads are logged and produce an empty result (render the empty state)
- records that fail validation are skipped and logged
- failed writes propagate; a completion is never assumed to have been saved
"""

import logging
from collections.abc import Mapping
from datetime import date, datetime, timedelta, tzinfo
from typing import Any

from pydantic import ValidationError

from pawplan.core.config import settings
from pawplan.core.errors import classify_error_with_response
from pawplan.core.logging import log_with_household_context, span
from pawplan.core.message_templates import completion_progress, day_summary, pet_names_summary
from pawplan.core.record_store import RecordStore, RecordStoreError
from pawplan.domain.household import Household
from pawplan.domain.log import ActivityLog
from pawplan.domain.streak import Streak
from pawplan.domain.task import Task
from pawplan.models.service_models import (
    ActivityGroup,
    CalendarDay,
    DayOverview,
    TaskDayStatus,
    TimeOfDay,
)
from pawplan.services.completion_service import build_completion_logs, resolve_for_day
from pawplan.services.period_service import (
    day_window,
    group_activity_feed,
    iter_days,
    local_date,
    resolve_timezone,
    task_sort_key,
    task_time_of_day,
)
from pawplan.services.recurrence_service import active_tasks_on
from pawplan.services.streak_cache import StreakCache, streak_cache
from pawplan.services.streak_service import compute_household_streaks


logger = logging.getLogger(__name__)

_READ_ERRORS = (RecordStoreError, ConnectionError, TimeoutError)


def _parse_tasks(records: list[dict[str, Any]]) -> list[Task]:
    tasks: list[Task] = []
    for record in records:
        try:
            task = Task.model_validate(record)
        except ValidationError as e:
            response = classify_error_with_response(e)
            logger.error("Skipping invalid task record %s (%s): %s", record.get("id"), response.code, e)
            continue
        if task.is_active:
            tasks.append(task)
    return tasks


def _parse_logs(records: list[dict[str, Any]]) -> list[ActivityLog]:
    logs: list[ActivityLog] = []
    for record in records:
        try:
            logs.append(ActivityLog.model_validate(record))
        except ValidationError as e:
            response = classify_error_with_response(e)
            logger.error("Skipping invalid activity log record %s (%s): %s", record.get("id"), response.code, e)
    return logs


async def _fetch_tasks(store: RecordStore, household_id: str) -> list[Task] | None:
    """Fetch active tasks, or None if the store could not be read."""
    try:
        records = await store.list_tasks(household_id=household_id)
    except _READ_ERRORS as e:
        response = classify_error_with_response(e)
        log_with_household_context(
            logger, "warning", "Failed to fetch tasks", household_id=household_id, error_code=response.code
        )
        return None
    return _parse_tasks(records)


async def _fetch_logs(store: RecordStore, household_id: str, start: datetime, end: datetime) -> list[ActivityLog] | None:
    """Fetch activity logs in ``[start, end)``, or None if the store could not be read."""
    try:
        records = await store.list_activity_logs(household_id=household_id, start=start, end=end)
    except _READ_ERRORS as e:
        response = classify_error_with_response(e)
        log_with_household_context(
            logger, "warning", "Failed to fetch activity logs", household_id=household_id, error_code=response.code
        )
        return None
    return _parse_logs(records)


def _task_day_status(
    task: Task,
    logs: list[ActivityLog],
    on_date: date,
    tz: tzinfo,
    pet_names: Mapping[str, str],
) -> TaskDayStatus:
    state = resolve_for_day(task, logs, on_date, tz)
    assigned_done = [pet_id for pet_id in task.pet_ids if pet_id in state.completed_pet_ids]
    names = [pet_names[pet_id] for pet_id in task.pet_ids if pet_id in pet_names]
    if task.pet_ids and not names:
        pets_label = "Unknown"
    else:
        pets_label = pet_names_summary(names)

    return TaskDayStatus(
        task_id=task.id,
        title=task.title,
        task_type=task.task_type,
        frequency=task.frequency,
        time_of_day=task_time_of_day(task),
        pet_ids=list(task.pet_ids),
        completed_pet_ids=sorted(state.completed_pet_ids),
        completed_count=state.completed_count,
        total_pets=len(set(task.pet_ids)),
        is_fully_completed=state.is_fully_completed,
        progress_label=completion_progress(
            completed=len(set(assigned_done)),
            total=len(set(task.pet_ids)),
            is_fully_completed=state.is_fully_completed,
        ),
        pets_label=pets_label,
    )


async def get_day_overview(
    store: RecordStore,
    household: Household,
    *,
    now: datetime,
    on_date: date | None = None,
    pet_names: Mapping[str, str] | None = None,
    gate_recurrence: bool | None = None,
) -> DayOverview:
    """Tasks scheduled on a day with their completion, grouped by time of day.

    Args:
        store: Record store to read from
        household: Household whose timezone defines the day
        now: Current time (decides "today" when ``on_date`` is not given)
        on_date: Local date to show
        pet_names: Optional pet id -> name map for the pets label
        gate_recurrence: Override ``settings.gate_recurrence``

    Returns:
        DayOverview with every bucket present (possibly empty)
    """
    with span("tracker_service.get_day_overview"):
        tz = resolve_timezone(household.timezone)
        target = on_date or local_date(now, tz)
        groups: dict[TimeOfDay, list[TaskDayStatus]] = {bucket: [] for bucket in TimeOfDay}

        tasks = await _fetch_tasks(store, household.id)
        start, end = day_window(target, tz)
        logs = await _fetch_logs(store, household.id, start, end) if tasks else []

        if tasks and logs is not None:
            scheduled = active_tasks_on(tasks, target, tz=tz, gate_recurrence=gate_recurrence)
            for task in sorted(scheduled, key=task_sort_key):
                status = _task_day_status(task, logs, target, tz, pet_names or {})
                groups[status.time_of_day].append(status)

        statuses = [status for bucket in groups.values() for status in bucket]
        done = sum(1 for status in statuses if status.is_fully_completed)
        pending = len(statuses) - done

        logger.info("Day overview for household %s on %s: %d done, %d pending", household.id, target, done, pending)

        return DayOverview(
            day_key=target.isoformat(),
            groups=groups,
            done_count=done,
            pending_count=pending,
            summary=day_summary(done=done, pending=pending),
        )


async def get_calendar(
    store: RecordStore,
    household: Household,
    *,
    start_date: date,
    end_date: date,
    gate_recurrence: bool | None = None,
) -> list[CalendarDay]:
    """Per-day scheduled and fully completed task ids from ``start_date`` through ``end_date``."""
    with span("tracker_service.get_calendar"):
        if end_date < start_date:
            return []

        tz = resolve_timezone(household.timezone)
        tasks = await _fetch_tasks(store, household.id)
        range_start, _ = day_window(start_date, tz)
        _, range_end = day_window(end_date, tz)
        logs = await _fetch_logs(store, household.id, range_start, range_end) if tasks else []

        days: list[CalendarDay] = []
        for on_date in iter_days(start_date, end_date):
            scheduled_ids: list[str] = []
            completed_ids: list[str] = []
            if tasks and logs is not None:
                for task in active_tasks_on(tasks, on_date, tz=tz, gate_recurrence=gate_recurrence):
                    scheduled_ids.append(task.id)
                    if resolve_for_day(task, logs, on_date, tz).is_fully_completed:
                        completed_ids.append(task.id)
            days.append(
                CalendarDay(
                    day_key=on_date.isoformat(),
                    scheduled_task_ids=scheduled_ids,
                    completed_task_ids=completed_ids,
                )
            )
        return days


async def get_streaks(
    store: RecordStore,
    household: Household,
    *,
    now: datetime,
    pet_id: str | None = None,
    cache: StreakCache | None = None,
    gate_recurrence: bool | None = None,
) -> list[Streak]:
    """Streak rows for every (task, pet) pair of a household, read through the cache.

    Results computed from a failed read are not cached.
    """
    cache = cache or streak_cache
    tz = resolve_timezone(household.timezone)
    today = local_date(now, tz)

    cached = await cache.get(household.id, today, pet_id)
    if cached is not None:
        return cached

    with span("tracker_service.get_streaks"):
        tasks = await _fetch_tasks(store, household.id)
        if tasks is None:
            return []
        if not tasks:
            await cache.set(household.id, today, [], pet_id)
            return []

        history_start, _ = day_window(today - timedelta(days=settings.max_streak_history_days - 1), tz)
        _, history_end = day_window(today, tz)
        logs = await _fetch_logs(store, household.id, history_start, history_end)
        if logs is None:
            return []

        streaks = compute_household_streaks(tasks, logs, now=now, tz=tz, pet_id=pet_id, gate_recurrence=gate_recurrence)
        log_with_household_context(
            logger, "info", "Recomputed streaks", household_id=household.id, streaks=len(streaks), pet_id=pet_id
        )

        await cache.set(household.id, today, streaks, pet_id)
        return streaks


async def get_activity_feed(
    store: RecordStore,
    household: Household,
    *,
    now: datetime,
    days: int | None = None,
) -> list[ActivityGroup]:
    """Recent activity grouped into "Today", "Yesterday" and dated sections."""
    with span("tracker_service.get_activity_feed"):
        tz = resolve_timezone(household.timezone)
        today = local_date(now, tz)
        look_back = days or settings.activity_feed_days
        start, _ = day_window(today - timedelta(days=look_back - 1), tz)
        _, end = day_window(today, tz)

        logs = await _fetch_logs(store, household.id, start, end)
        if logs is None:
            return []
        return group_activity_feed(logs, now=now, tz=tz)


async def record_task_completion(
    store: RecordStore,
    household: Household,
    task: Task,
    *,
    completed_by: str | None,
    now: datetime,
    pet_ids: list[str] | None = None,
    note: str | None = None,
    cache: StreakCache | None = None,
) -> list[ActivityLog]:
    """Append one completed log per pet and invalidate the household's cached streaks.

    Raises:
        RecordStoreError: If the store rejects the write
    """
    with span("tracker_service.record_task_completion"):
        records = build_completion_logs(
            task,
            household_id=household.id,
            completed_by=completed_by,
            completed_at=now,
            pet_ids=pet_ids,
            note=note,
        )
        if not records:
            return []

        created = await store.create_activity_logs(records=records)
        await (cache or streak_cache).invalidate_household(household.id)

        log_with_household_context(
            logger,
            "info",
            "Recorded task completion",
            household_id=household.id,
            task_id=task.id,
            pets=len(records),
        )
        return _parse_logs(created)
