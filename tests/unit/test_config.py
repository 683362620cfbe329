"""Tests for configuration validation."""

import pytest
from pydantic import ValidationError

from pawplan.core.config import Constants, Settings


def test_defaults() -> None:
    """Test defaults used when no environment is configured."""
    settings = Settings(_env_file=None)

    assert settings.default_timezone == "UTC"
    assert settings.gate_recurrence is True
    assert settings.hot_streak_threshold == 3
    assert settings.streak_cache_ttl_seconds == 300


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test settings are read from PAWPLAN_-prefixed variables."""
    monkeypatch.setenv("PAWPLAN_DEFAULT_TIMEZONE", "Australia/Sydney")
    monkeypatch.setenv("PAWPLAN_GATE_RECURRENCE", "false")
    monkeypatch.setenv("PAWPLAN_HOT_STREAK_THRESHOLD", "7")

    settings = Settings(_env_file=None)

    assert settings.default_timezone == "Australia/Sydney"
    assert settings.gate_recurrence is False
    assert settings.hot_streak_threshold == 7


@pytest.mark.parametrize("field", ["hot_streak_threshold", "max_streak_history_days", "activity_feed_days"])
def test_rejects_non_positive_limits(field: str) -> None:
    """Test limits that must be at least 1."""
    with pytest.raises(ValidationError, match=field):
        Settings(_env_file=None, **{field: 0})


def test_time_of_day_boundaries_are_ordered() -> None:
    assert Constants.MORNING_START_HOUR < Constants.AFTERNOON_START_HOUR < Constants.EVENING_START_HOUR
