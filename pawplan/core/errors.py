"""Error classification utilities for the data-fetch boundary.

The derivation components never raise for malformed data. Errors only appear
where pawplan talks to the outside world (the record store, timezone lookup,
validation of raw records) and inside recurrence rule parsing, where they are
caught and logged. This module turns those exceptions into structured
responses the UI layer can render.
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ValidationError

from pawplan.core.record_store import RecordNotFoundError, RecordStoreError


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Store errors
    ERR_STORE_UNAVAILABLE = "ERR_STORE_UNAVAILABLE"
    ERR_RECORD_NOT_FOUND = "ERR_RECORD_NOT_FOUND"
    ERR_INVALID_RECORD = "ERR_INVALID_RECORD"

    # Schedule errors
    ERR_INVALID_TIMEZONE = "ERR_INVALID_TIMEZONE"
    ERR_INVALID_RECURRENCE_RULE = "ERR_INVALID_RECURRENCE_RULE"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


_ERROR_PATTERNS: dict[
    Literal["network", "timezone", "recurrence"],
    dict[str, list[str] | set[str]],
] = {
    "network": {
        "phrases": [
            "connection",
            "timeout",
            "network",
            "503",
            "502",
            "504",
            "unreachable",
        ],
        "exception_types": {"ConnectionError", "TimeoutError"},
    },
    "timezone": {
        "phrases": ["no time zone found", "timezone", "time zone"],
        "exception_types": {"ZoneInfoNotFoundError"},
    },
    "recurrence": {
        "phrases": ["recurrence", "day_of_month", "cron"],
        "exception_types": set(),
    },
}


def _match_error_pattern(
    *,
    error_str: str,
    exception_type: str,
    pattern_type: Literal["network", "timezone", "recurrence"],
) -> bool:
    """Return True if the error matches the configured pattern type."""
    patterns = _ERROR_PATTERNS[pattern_type]
    return any(phrase in error_str for phrase in patterns["phrases"]) or exception_type in patterns["exception_types"]


def classify_error_with_response(exception: Exception) -> ErrorResponse:  # noqa: PLR0911
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised while fetching or writing records

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    error_str = str(exception).lower()
    exception_type = type(exception).__name__

    if isinstance(exception, RecordNotFoundError):
        return ErrorResponse(
            code=ErrorCode.ERR_RECORD_NOT_FOUND,
            message="That record no longer exists.",
            suggestion="Refresh to load the latest tasks and pets.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, ValidationError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_RECORD,
            message="Some household data could not be read.",
            suggestion="Check the task or activity for missing fields and save it again.",
            severity=ErrorSeverity.MEDIUM,
        )

    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="timezone"):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_TIMEZONE,
            message="The household timezone is not recognised.",
            suggestion="Pick a timezone like 'Australia/Sydney' in household settings.",
            severity=ErrorSeverity.LOW,
        )

    if _match_error_pattern(error_str=error_str, exception_type=exception_type, pattern_type="recurrence"):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_RECURRENCE_RULE,
            message="Invalid task schedule.",
            suggestion="Use a day of month between 1 and 31, or a date like 2026-10-19 for one-time tasks.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, RecordStoreError) or _match_error_pattern(
        error_str=error_str, exception_type=exception_type, pattern_type="network"
    ):
        return ErrorResponse(
            code=ErrorCode.ERR_STORE_UNAVAILABLE,
            message="Couldn't reach your household data.",
            suggestion="Check your connection and pull to refresh.",
            severity=ErrorSeverity.HIGH,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
    )

