"""Pydantic models for service layer return types.

These models provide type safety at service boundaries; they are what the UI
layer renders.
"""

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field

from pawplan.domain.log import ActivityLog
from pawplan.domain.task import TaskFrequency, TaskType


class TimeOfDay(StrEnum):
    """Display bucket for grouping tasks and activity."""

    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"


class PeriodBucket(BaseModel):
    """Household-local day key and time-of-day bucket for a timestamp."""

    day_key: str
    time_of_day: TimeOfDay


class CompletionState(BaseModel):
    """Completion of one task within one window."""

    completed_pet_ids: frozenset[str] = Field(default_factory=frozenset)
    is_fully_completed: bool = False
    completed_count: int = 0


class DayOutcome(BaseModel):
    """One scheduled day in a streak history."""

    day: date
    is_fully_completed: bool


class StreakResult(BaseModel):
    """Current and longest run over a history."""

    current: int = 0
    longest: int = 0


class TaskDayStatus(BaseModel):
    """A task's state on one day, as shown in the Today view."""

    task_id: str
    title: str
    task_type: TaskType | None
    frequency: TaskFrequency
    time_of_day: TimeOfDay
    pet_ids: list[str]
    completed_pet_ids: list[str]
    completed_count: int
    total_pets: int
    is_fully_completed: bool
    progress_label: str
    pets_label: str


class DayOverview(BaseModel):
    """All tasks scheduled on a day, grouped by time of day."""

    day_key: str
    groups: dict[TimeOfDay, list[TaskDayStatus]]
    done_count: int
    pending_count: int
    summary: str


class CalendarDay(BaseModel):
    """Calendar cell summary for one day."""

    day_key: str
    scheduled_task_ids: list[str]
    completed_task_ids: list[str]

    @property
    def is_all_done(self) -> bool:
        return bool(self.scheduled_task_ids) and len(self.completed_task_ids) == len(self.scheduled_task_ids)


class ActivityGroup(BaseModel):
    """Activity feed section ("Today", "Yesterday", "Monday, Oct 19")."""

    title: str
    day_key: str
    logs: list[ActivityLog]

