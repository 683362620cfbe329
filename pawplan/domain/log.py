"""Activity log domain models."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field


class ActivityStatus(StrEnum):
    """Outcome recorded for a pet's task instance."""

    COMPLETED = "completed"
    SKIPPED = "skipped"
    MISSED = "missed"


class ActivityLog(BaseModel):
    """Append-only activity log entry.

    ``completed_at`` is the authoritative event time; it alone decides which
    day a log belongs to. ``scheduled_for`` is kept for display only.
    """

    id: str = Field(..., description="Unique log ID from the store")
    household_id: str = Field(..., description="Owning household ID")
    task_id: str | None = Field(default=None, description="Task this log satisfies, None for ad-hoc activity")
    pet_id: str = Field(..., description="Pet the activity was done for")
    completed_by: str | None = Field(default=None, description="User who logged the activity")
    status: ActivityStatus = Field(default=ActivityStatus.COMPLETED, description="Recorded outcome")
    completed_at: datetime = Field(..., description="When the activity happened")
    scheduled_for: datetime | None = Field(default=None, description="Occurrence the user meant to log")
    note: str | None = Field(default=None, description="Optional note")

    @property
    def qualifies(self) -> bool:
        """Whether this log can satisfy a task (only completed logs do)."""
        return self.status == ActivityStatus.COMPLETED
