"""Per-pet and per-task completion for a window of activity logs.

A task is fully completed in a window when every assigned pet has at least one
completed log in it. Several logs for the same pet count once, so members
marking the same task at the same time cannot double count. Skipped and
missed logs never satisfy a task.
"""

import logging
from collections.abc import Iterable
from datetime import UTC, date, datetime, tzinfo
from typing import Any

from pawplan.domain.log import ActivityLog, ActivityStatus
from pawplan.domain.task import Task
from pawplan.models.service_models import CompletionState
from pawplan.services.period_service import day_window


logger = logging.getLogger(__name__)


def _as_aware(timestamp: datetime) -> datetime:
    return timestamp if timestamp.tzinfo is not None else timestamp.replace(tzinfo=UTC)


def logs_in_window(
    logs: Iterable[ActivityLog],
    *,
    task_id: str,
    start: datetime,
    end: datetime,
) -> list[ActivityLog]:
    """Select a task's logs with ``start <= completed_at < end``.

    Logs outside the window, or for other tasks, are dropped without complaint.
    """
    start = _as_aware(start)
    end = _as_aware(end)
    return [log for log in logs if log.task_id == task_id and start <= _as_aware(log.completed_at) < end]


def resolve(task: Task, logs_for_window: Iterable[ActivityLog]) -> CompletionState:
    """Compute completion of ``task`` from logs already narrowed to one window.

    Args:
        task: Task being evaluated
        logs_for_window: Logs for this task inside the evaluated window

    Returns:
        CompletionState. ``completed_count`` counts every distinct pet that
        logged, including pets no longer assigned; ``is_fully_completed`` only
        looks at assigned pets and is False when none are assigned.
    """
    completed_pet_ids = frozenset(log.pet_id for log in logs_for_window if log.status == ActivityStatus.COMPLETED)
    assigned = set(task.pet_ids)
    is_fully_completed = bool(assigned) and assigned <= completed_pet_ids

    return CompletionState(
        completed_pet_ids=completed_pet_ids,
        is_fully_completed=is_fully_completed,
        completed_count=len(completed_pet_ids),
    )


def resolve_for_day(task: Task, logs: Iterable[ActivityLog], on_date: date, tz: tzinfo) -> CompletionState:
    """Resolve completion for one household-local day."""
    start, end = day_window(on_date, tz)
    return resolve(task, logs_in_window(logs, task_id=task.id, start=start, end=end))


def build_completion_logs(
    task: Task,
    *,
    household_id: str,
    completed_by: str | None,
    completed_at: datetime,
    pet_ids: Iterable[str] | None = None,
    note: str | None = None,
) -> list[dict[str, Any]]:
    """Build new completed-log records for marking a task done.

    One record per pet; defaults to every assigned pet. Duplicate pet ids are
    collapsed. The records carry no id; the store assigns it.
    """
    targets = list(dict.fromkeys(task.pet_ids if pet_ids is None else pet_ids))
    if not targets:
        logger.info("Task %s has no pets to complete", task.id)

    return [
        {
            "household_id": household_id,
            "task_id": task.id,
            "pet_id": pet_id,
            "completed_by": completed_by,
            "status": ActivityStatus.COMPLETED.value,
            "completed_at": _as_aware(completed_at).isoformat(),
            "note": note,
        }
        for pet_id in targets
    ]
