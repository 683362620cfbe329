"""Streak domain model (derived, never the source of truth)."""

from datetime import datetime

from pydantic import BaseModel, Field


class Streak(BaseModel):
    """Derived streak row for a (pet, task) pair.

    Always reproducible from tasks and activity logs. Persisted copies are a cache.
    """

    household_id: str = Field(..., description="Owning household ID")
    pet_id: str = Field(..., description="Pet the streak belongs to")
    task_id: str | None = Field(default=None, description="Task the streak tracks")
    current_streak: int = Field(default=0, ge=0, description="Consecutive completed scheduled days")
    longest_streak: int = Field(default=0, ge=0, description="Longest run ever observed")
    last_completed_at: datetime | None = Field(default=None, description="Newest qualifying completion")
    completed_today: bool = Field(default=False, description="Whether today's occurrence is already done")
