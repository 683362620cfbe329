"""Task domain models and enums."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class TaskType(StrEnum):
    """Kind of pet-care duty."""

    FOOD = "food"
    MEDS = "meds"
    WALK = "walk"
    GROOMING = "grooming"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Display label (e.g. "Feeding" for food)."""
        return _TASK_TYPE_LABELS[self]


_TASK_TYPE_LABELS: dict[TaskType, str] = {
    TaskType.FOOD: "Feeding",
    TaskType.MEDS: "Medication",
    TaskType.WALK: "Walk",
    TaskType.GROOMING: "Grooming",
    TaskType.OTHER: "Other",
}


class TaskFrequency(StrEnum):
    """How often a task recurs."""

    ONCE = "once"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        """Display label (e.g. "One-time" for once)."""
        return "One-time" if self is TaskFrequency.ONCE else self.value.capitalize()


class Task(BaseModel):
    """Task data transfer object."""

    id: str = Field(..., description="Unique task ID from the store")
    household_id: str = Field(..., description="Owning household ID")
    title: str = Field(..., description="Task title (e.g. 'Morning feeding')")
    task_type: TaskType | None = Field(default=None, description="Kind of duty")
    pet_ids: list[str] = Field(default_factory=list, description="Pets that must each be cared for")
    frequency: TaskFrequency = Field(..., description="Recurrence frequency")
    recurrence_rule: dict[str, Any] = Field(
        default_factory=dict,
        description="Frequency-specific keys: time, day_of_month, date, weekday, days_of_week, cron",
    )
    is_active: bool = Field(default=True, description="False once the task is soft-deleted")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    details: str | None = Field(default=None, description="Free-text instructions")

    @property
    def scheduled_time(self) -> Any:
        """Raw ``time`` entry of the recurrence rule, if any."""
        return self.recurrence_rule.get("time")
