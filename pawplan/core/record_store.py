"""Read/append interface to the external persistence layer.

pawplan never owns storage. Whatever backs the household (a hosted Postgres,
SQLite, an HTTP API) is wrapped in an object satisfying ``RecordStore`` and
passed into the tracker service explicitly.

Records cross this boundary as plain dictionaries, the same shape the backend
returns, and are validated into domain models by the caller.
"""

from datetime import datetime
from typing import Any, Protocol


class RecordStoreError(Exception):
    """Raised when the backing store cannot complete an operation."""


class RecordNotFoundError(RecordStoreError):
    """Raised when a requested record does not exist."""


class RecordStore(Protocol):
    """Protocol for the persistence collaborator."""

    async def list_tasks(self, *, household_id: str) -> list[dict[str, Any]]:
        """Return active task records for a household."""
        ...

    async def list_activity_logs(
        self,
        *,
        household_id: str,
        start: datetime,
        end: datetime,
    ) -> list[dict[str, Any]]:
        """Return activity log records with ``start <= completed_at < end``."""
        ...

    async def create_activity_logs(self, *, records: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Append activity log records and return them as stored (with ids)."""
        ...
