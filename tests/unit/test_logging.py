"""Unit tests for logging helpers."""

import logging
from unittest.mock import patch

import pytest

from pawplan.core.logging import configure_logfire, log_with_context, log_with_household_context


@pytest.mark.unit
class TestStructuredLogging:
    """Tests for structured logging helpers."""

    def test_context_is_attached_as_extra(self, caplog):
        logger = logging.getLogger("pawplan.test")

        with caplog.at_level(logging.INFO, logger="pawplan.test"):
            log_with_context(logger, "INFO", "Streaks recomputed", task_id="t1", pets=2)

        record = caplog.records[-1]
        assert record.getMessage() == "Streaks recomputed"
        assert record.task_id == "t1"
        assert record.pets == 2

    def test_household_context(self, caplog):
        logger = logging.getLogger("pawplan.test")

        with caplog.at_level(logging.WARNING, logger="pawplan.test"):
            log_with_household_context(logger, "warning", "Failed to fetch tasks", household_id="h1", error_code="E")

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.household_id == "h1"
        assert record.error_code == "E"

    def test_household_context_omitted_when_missing(self, caplog):
        logger = logging.getLogger("pawplan.test")

        with caplog.at_level(logging.INFO, logger="pawplan.test"):
            log_with_household_context(logger, "info", "No household")

        assert not hasattr(caplog.records[-1], "household_id")


@pytest.mark.unit
def test_configure_logfire_only_sends_with_token():
    with patch("pawplan.core.logging.logfire") as mock_logfire:
        configure_logfire()

    kwargs = mock_logfire.configure.call_args.kwargs
    assert kwargs["service_name"] == "pawplan"
    assert kwargs["send_to_logfire"] == "if-token-present"
