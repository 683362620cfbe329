"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from pawplan.core.cache_client import InMemoryCache
from pawplan.domain.household import Household
from pawplan.domain.log import ActivityLog, ActivityStatus
from pawplan.domain.task import Task, TaskFrequency, TaskType
from pawplan.services.streak_cache import StreakCache


def make_task(**overrides: Any) -> Task:
    """Build a daily two-pet task, overriding any field."""
    data: dict[str, Any] = {
        "id": "task_1",
        "household_id": "house_1",
        "title": "Dinner",
        "task_type": TaskType.FOOD,
        "pet_ids": ["rex", "milo"],
        "frequency": TaskFrequency.DAILY,
        "recurrence_rule": {},
        "is_active": True,
        "created_at": datetime(2026, 1, 1, tzinfo=UTC),
    }
    data.update(overrides)
    return Task(**data)


_log_counter = 0


def make_log(*, pet_id: str, completed_at: datetime, **overrides: Any) -> ActivityLog:
    """Build a completed log for task_1 in house_1."""
    global _log_counter  # noqa: PLW0603
    _log_counter += 1
    data: dict[str, Any] = {
        "id": f"log_{_log_counter}",
        "household_id": "house_1",
        "task_id": "task_1",
        "pet_id": pet_id,
        "completed_by": "user_1",
        "status": ActivityStatus.COMPLETED,
        "completed_at": completed_at,
    }
    data.update(overrides)
    return ActivityLog(**data)


@pytest.fixture
def task_factory() -> Callable[..., Task]:
    return make_task


@pytest.fixture
def log_factory() -> Callable[..., ActivityLog]:
    return make_log


@pytest.fixture
def utc_household() -> Household:
    return Household(id="house_1", name="Test House", timezone="UTC")


@pytest.fixture
def now() -> datetime:
    """Fixed clock: 2026-03-10 09:00 UTC (a Tuesday)."""
    return datetime(2026, 3, 10, 9, 0, tzinfo=UTC)


@pytest.fixture
def fresh_cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def streak_cache(fresh_cache: InMemoryCache) -> StreakCache:
    return StreakCache(fresh_cache, ttl_seconds=300)
