"""Current and longest streaks derived from task schedules and activity logs.

Streaks are always recomputed from logs, never incremented in place, so
concurrent completions cannot lose updates and any stored copy can be thrown
away.

History rules:
- only scheduled days appear in a history; a day with no occurrence cannot break a run
- today appears only once it is complete, so a pending today never breaks yesterday's run
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import date, datetime, timedelta, tzinfo

from pawplan.core.config import settings
from pawplan.domain.log import ActivityLog
from pawplan.domain.streak import Streak
from pawplan.domain.task import Task
from pawplan.models.service_models import DayOutcome, StreakResult
from pawplan.services.completion_service import resolve
from pawplan.services.period_service import local_date, to_local
from pawplan.services.recurrence_service import scheduled_days


logger = logging.getLogger(__name__)


def compute_streak(history: Sequence[DayOutcome]) -> StreakResult:
    """Compute current and longest runs of completed days.

    Args:
        history: Scheduled days ordered oldest to newest

    Returns:
        StreakResult where ``current`` is the run ending at the newest entry
        (0 if that entry is incomplete) and ``longest`` the longest run anywhere
    """
    run = 0
    longest = 0
    for outcome in history:
        if outcome.is_fully_completed:
            run += 1
            longest = max(longest, run)
        else:
            run = 0
    return StreakResult(current=run, longest=longest)


def _qualifying_logs(task: Task, logs: Iterable[ActivityLog]) -> list[ActivityLog]:
    return [log for log in logs if log.task_id == task.id and log.qualifies]


def build_history(
    task: Task,
    logs: Iterable[ActivityLog],
    *,
    start_date: date,
    today: date,
    tz: tzinfo,
    gate_recurrence: bool | None = None,
) -> list[DayOutcome]:
    """Build the oldest-to-newest outcome of every scheduled day up to today.

    A day is complete only when every assigned pet has a qualifying log on it,
    so one pet's run is broken by a day another assigned pet missed.

    Args:
        task: Task whose schedule defines the days
        logs: Activity logs; other tasks' logs are ignored
        start_date: First local date considered
        today: Current local date; included only if already complete
        tz: Household timezone used to bucket ``completed_at``
        gate_recurrence: Passed through to the recurrence evaluator

    Returns:
        List of DayOutcome
    """
    logs_by_day: dict[date, list[ActivityLog]] = {}
    for log in _qualifying_logs(task, logs):
        logs_by_day.setdefault(local_date(log.completed_at, tz), []).append(log)

    history: list[DayOutcome] = []
    for on_date in scheduled_days(task, start_date, today, tz=tz, gate_recurrence=gate_recurrence):
        done = resolve(task, logs_by_day.get(on_date, [])).is_fully_completed
        if on_date == today and not done:
            continue
        history.append(DayOutcome(day=on_date, is_fully_completed=done))
    return history


def history_start(task: Task, logs: Iterable[ActivityLog], *, today: date, tz: tzinfo, max_days: int) -> date:
    """First date worth walking: task creation or earliest log, at most ``max_days`` back."""
    candidates = [local_date(log.completed_at, tz) for log in logs]
    if task.created_at is not None:
        candidates.append(local_date(task.created_at, tz))
    earliest = min(candidates, default=today)
    floor = today - timedelta(days=max_days - 1)
    return min(max(earliest, floor), today)


def compute_streak_snapshot(
    task: Task,
    logs: Iterable[ActivityLog],
    *,
    pet_id: str,
    now: datetime,
    tz: tzinfo,
    max_history_days: int | None = None,
    gate_recurrence: bool | None = None,
) -> Streak:
    """Derive the Streak row for one (pet, task) pair as of ``now``.

    The run counts days on which the whole task was completed. The pet's own
    logs only decide ``last_completed_at`` and ``completed_today``. Logs
    stamped after ``now`` are ignored.
    """
    today = local_date(now, tz)
    max_days = max_history_days or settings.max_streak_history_days
    now_local = to_local(now, tz)
    task_logs = [log for log in _qualifying_logs(task, logs) if to_local(log.completed_at, tz) <= now_local]
    pet_logs = [log for log in task_logs if log.pet_id == pet_id]

    start_date = history_start(task, task_logs, today=today, tz=tz, max_days=max_days)
    history = build_history(
        task,
        task_logs,
        start_date=start_date,
        today=today,
        tz=tz,
        gate_recurrence=gate_recurrence,
    )
    result = compute_streak(history)
    last_completed_at = max((log.completed_at for log in pet_logs), key=lambda ts: to_local(ts, tz), default=None)

    logger.debug(
        "Streak for task %s pet %s: current=%d longest=%d over %d days",
        task.id,
        pet_id,
        result.current,
        result.longest,
        len(history),
    )

    return Streak(
        household_id=task.household_id,
        pet_id=pet_id,
        task_id=task.id,
        current_streak=result.current,
        longest_streak=result.longest,
        last_completed_at=last_completed_at,
        completed_today=last_completed_at is not None and local_date(last_completed_at, tz) == today,
    )


def compute_household_streaks(
    tasks: Iterable[Task],
    logs: Sequence[ActivityLog],
    *,
    now: datetime,
    tz: tzinfo,
    pet_id: str | None = None,
    max_history_days: int | None = None,
    gate_recurrence: bool | None = None,
) -> list[Streak]:
    """Derive a Streak row for every active (task, assigned pet) pair."""
    streaks: list[Streak] = []
    for task in tasks:
        if not task.is_active:
            continue
        for assigned_pet in dict.fromkeys(task.pet_ids):
            if pet_id is not None and assigned_pet != pet_id:
                continue
            streaks.append(
                compute_streak_snapshot(
                    task,
                    logs,
                    pet_id=assigned_pet,
                    now=now,
                    tz=tz,
                    max_history_days=max_history_days,
                    gate_recurrence=gate_recurrence,
                )
            )
    return streaks


def is_hot_streak(current_streak: int, *, threshold: int | None = None) -> bool:
    """Whether a streak earns the "hot" badge."""
    return current_streak >= (threshold if threshold is not None else settings.hot_streak_threshold)
