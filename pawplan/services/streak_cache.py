"""Cache of derived streak rows.

Cached rows are an optimisation only: they expire after
``settings.streak_cache_ttl_seconds``, are dropped for a household whenever a
completion is recorded, and any failure to read or write them falls back to
recomputing from logs.

Key format: ``pawplan:streaks:<household_id>:<local date>:all`` for the
household list and ``...:pet=<pet_id>`` for one pet. The local date is part of
the key because "today" decides whether the newest day counts.
"""

import json
import logging
from datetime import date

from pydantic import TypeAdapter, ValidationError

from pawplan.core.cache_client import InMemoryCache, cache_client
from pawplan.core.config import Constants, settings
from pawplan.domain.streak import Streak


logger = logging.getLogger(__name__)

_STREAK_LIST = TypeAdapter(list[Streak])


def cache_key(household_id: str, today: date, pet_id: str | None = None) -> str:
    scope = "all" if pet_id is None else f"pet={pet_id}"
    return f"{Constants.STREAK_CACHE_KEY_PREFIX}:{household_id}:{today.isoformat()}:{scope}"


class StreakCache:
    """Read-through helper around the shared in-memory cache."""

    def __init__(self, cache: InMemoryCache | None = None, *, ttl_seconds: int | None = None) -> None:
        self._cache = cache if cache is not None else cache_client
        self._ttl_seconds = settings.streak_cache_ttl_seconds if ttl_seconds is None else ttl_seconds

    async def get(self, household_id: str, today: date, pet_id: str | None = None) -> list[Streak] | None:
        """Return cached streaks, or None on a miss or an unreadable entry."""
        key = cache_key(household_id, today, pet_id)
        try:
            cached_value = await self._cache.get(key)
        except Exception as e:
            logger.warning("Failed to read cached streaks: %s", e)
            return None

        if cached_value is None:
            return None

        try:
            streaks = _STREAK_LIST.validate_json(cached_value)
        except ValidationError as e:
            logger.warning("Failed to deserialize cached streaks for %s: %s", key, e)
            return None

        logger.debug("Returning cached streaks for %s", key)
        return streaks

    async def set(self, household_id: str, today: date, streaks: list[Streak], pet_id: str | None = None) -> None:
        """Store streaks; failures are logged and ignored."""
        key = cache_key(household_id, today, pet_id)
        try:
            cache_value = json.dumps([streak.model_dump(mode="json") for streak in streaks])
            await self._cache.set(key, cache_value, self._ttl_seconds)
        except Exception as e:
            logger.warning("Failed to cache streaks for %s: %s", key, e)

    async def invalidate_household(self, household_id: str) -> int:
        """Drop every cached streak list of a household.

        Returns:
            Number of entries removed (0 if invalidation failed)
        """
        try:
            keys = await self._cache.keys(f"{Constants.STREAK_CACHE_KEY_PREFIX}:{household_id}:*")
            if not keys:
                logger.debug("No cached streaks to invalidate for household %s", household_id)
                return 0
            await self._cache.delete(*keys)
        except Exception as e:
            logger.warning("Failed to invalidate streak cache for household %s: %s", household_id, e)
            return 0

        logger.info("Invalidated %d streak cache entries for household %s", len(keys), household_id)
        return len(keys)


streak_cache = StreakCache()
