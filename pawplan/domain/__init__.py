"""Domain models and DTOs."""

from pawplan.domain.household import Household
from pawplan.domain.log import ActivityLog, ActivityStatus
from pawplan.domain.streak import Streak
from pawplan.domain.task import Task, TaskFrequency, TaskType


__all__ = [
    "ActivityLog",
    "ActivityStatus",
    "Household",
    "Streak",
    "Task",
    "TaskFrequency",
    "TaskType",
]
