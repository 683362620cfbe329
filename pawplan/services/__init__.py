from pawplan.services import (
    completion_service,
    period_service,
    recurrence_service,
    streak_service,
    tracker_service,
)


__all__ = [
    "completion_service",
    "period_service",
    "recurrence_service",
    "streak_service",
    "tracker_service",
]
