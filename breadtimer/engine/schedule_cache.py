"""
In-memory cache for computed schedules.

Caches schedules by recipe, step list and target time so that repeated
requests (a UI recomputing on every keystroke) skip recomputation.
"""

import hashlib
import json
import logging
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from breadtimer.config import settings
from breadtimer.models.schemas import ScheduledStep, Step

logger = logging.getLogger(__name__)


class ScheduleCache:
    """
    Bounded in-memory cache of computed schedules.

    Keys are a hash of the recipe id, the full step list and the target time,
    so editing a recipe's steps can never return a stale schedule. When the
    cache is full the oldest entry is evicted.

    Note: This is a simple per-process cache.
    """

    def __init__(self, max_entries: Optional[int] = None):
        """
        Initialize the cache.

        Args:
            max_entries: Maximum number of cached schedules. Defaults to config setting.
        """
        self._cache: Dict[str, List[ScheduledStep]] = {}
        self._max_entries = max_entries or settings.schedule_cache_max_entries

    def _generate_key(
        self, recipe_id: Optional[str], steps: Sequence[Step], target_time: datetime
    ) -> str:
        """Generate a cache key from recipe ID, steps and target time."""
        content = json.dumps(
            {
                "recipe_id": recipe_id,
                "steps": [step.model_dump(mode="json") for step in steps],
                "target_time": target_time.isoformat(),
            },
            sort_keys=True,
        )
        return hashlib.sha256(content.encode()).hexdigest()[:32]

    def get(
        self, recipe_id: Optional[str], steps: Sequence[Step], target_time: datetime
    ) -> Optional[List[ScheduledStep]]:
        """
        Get a cached schedule if available.

        Returns:
            A copy of the cached scheduled steps, or None on a miss.
        """
        key = self._generate_key(recipe_id, steps, target_time)
        entry = self._cache.get(key)

        if entry is None:
            return None

        logger.debug(f"Cache hit for schedule of {recipe_id} ending {target_time.isoformat()}")
        return list(entry)

    def set(
        self,
        recipe_id: Optional[str],
        steps: Sequence[Step],
        target_time: datetime,
        schedule: List[ScheduledStep],
    ) -> None:
        """Cache a computed schedule, evicting the oldest entry when full."""
        key = self._generate_key(recipe_id, steps, target_time)

        if key not in self._cache and len(self._cache) >= self._max_entries:
            oldest_key = next(iter(self._cache))
            del self._cache[oldest_key]

        self._cache[key] = list(schedule)

    def clear(self) -> None:
        """Clear all cached entries."""
        self._cache.clear()
        logger.info("Schedule cache cleared")

    @property
    def size(self) -> int:
        """Return the number of entries in the cache."""
        return len(self._cache)


# Global cache instance
_schedule_cache: Optional[ScheduleCache] = None


def get_schedule_cache() -> ScheduleCache:
    """Get or create the global schedule cache."""
    global _schedule_cache
    if _schedule_cache is None:
        _schedule_cache = ScheduleCache()
    return _schedule_cache
