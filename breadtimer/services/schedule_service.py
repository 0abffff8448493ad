"""
Schedule service: resolves recipes and target times, then runs the calculator.
"""
import logging
from datetime import datetime
from typing import Optional, Sequence, Union

from sqlalchemy.orm import Session

from breadtimer.config import settings
from breadtimer.engine.schedule_cache import ScheduleCache, get_schedule_cache
from breadtimer.engine.schedule_calculator import compute_schedule, parse_target_time
from breadtimer.errors import InvalidInputError
from breadtimer.features import Feature, FeatureFlagService, get_feature_service
from breadtimer.models.schemas import Schedule, Step
from breadtimer.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)


class ScheduleService:
    """
    Computes bread schedules for stored recipes or ad-hoc step lists.

    Each call replaces any previous result; nothing is patched incrementally.
    """

    def __init__(
        self,
        db: Session,
        cache: Optional[ScheduleCache] = None,
        feature_service: Optional[FeatureFlagService] = None,
    ):
        """
        Initialize the schedule service.

        Args:
            db: SQLAlchemy session used to look up custom recipes.
            cache: Optional schedule cache. Defaults to the global cache.
            feature_service: Optional feature flag service.
        """
        self.recipe_service = RecipeService(db)
        self._cache = cache or get_schedule_cache()
        features = feature_service or get_feature_service()
        self._use_cache = (
            settings.schedule_cache_enabled and features.is_enabled(Feature.SCHEDULE_CACHE)
        )

    def schedule_for_recipe(
        self,
        recipe_id: Optional[str],
        target_time: Union[str, datetime, None],
    ) -> Schedule:
        """
        Compute the schedule of a catalog recipe.

        Raises:
            InvalidInputError: If no recipe is selected or the target time is invalid.
            RecipeNotFoundError: If the recipe does not exist.
        """
        if not recipe_id:
            raise InvalidInputError(
                "Please select a recipe and target completion time",
                details={"recipe_id": recipe_id},
            )
        target = parse_target_time(target_time)
        recipe = self.recipe_service.get_recipe(recipe_id)
        return self._build(recipe.id, recipe.name, recipe.steps, target)

    def schedule_for_steps(
        self,
        name: str,
        steps: Sequence[Step],
        target_time: Union[str, datetime, None],
    ) -> Schedule:
        """Compute the schedule of an unsaved step list."""
        target = parse_target_time(target_time)
        return self._build(None, name, steps, target)

    def _build(
        self,
        recipe_id: Optional[str],
        name: str,
        steps: Sequence[Step],
        target: datetime,
    ) -> Schedule:
        scheduled = self._cache.get(recipe_id, steps, target) if self._use_cache else None
        if scheduled is None:
            scheduled = compute_schedule(steps, target)
            if self._use_cache:
                self._cache.set(recipe_id, steps, target, scheduled)
            logger.debug(f"Computed {len(scheduled)}-step schedule for '{name}' ending {target.isoformat()}")

        return Schedule(
            recipe_id=recipe_id,
            recipe_name=name,
            target_time=target,
            steps=scheduled,
        )
