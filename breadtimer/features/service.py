"""
Feature flag service for checking feature states from routes and services.
"""

from typing import Dict, Optional
from fastapi import Depends, HTTPException, status

from breadtimer.features.flags import Feature, FeatureFlags, feature_flags


class FeatureFlagService:
    """
    Evaluates feature flags.

    Attributes:
        flags: The FeatureFlags configuration instance
    """

    def __init__(self, flags: Optional[FeatureFlags] = None):
        self.flags = flags or feature_flags

    def is_enabled(self, feature: Feature) -> bool:
        """
        Check if a feature is enabled.

        Example:
            if feature_service.is_enabled(Feature.CUSTOM_RECIPES):
                recipe_service.create_recipe(definition)
        """
        return self.flags.get_flag(feature)

    def require_feature(self, feature: Feature) -> None:
        """
        Require a feature to be enabled.

        Raises:
            HTTPException: 503 Service Unavailable if feature is disabled
        """
        if not self.is_enabled(feature):
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail={
                    "error_code": "FEATURE_DISABLED",
                    "message": f"Feature '{feature.value}' is currently disabled",
                    "feature": feature.value,
                },
            )

    def get_all_flags(self) -> Dict[str, bool]:
        """Map every feature name to its enabled state."""
        return self.flags.get_all_flags()


# Global service instance
_feature_service: Optional[FeatureFlagService] = None


def get_feature_service() -> FeatureFlagService:
    """
    Get or create the global feature flag service instance.

    Also used as a FastAPI dependency, so tests can override it.
    """
    global _feature_service
    if _feature_service is None:
        _feature_service = FeatureFlagService()
    return _feature_service


def require_feature(feature: Feature):
    """
    FastAPI dependency factory that requires a feature to be enabled.

    Usage:
        @router.get("/{recipe_id}/calendar")
        def download_calendar(
            recipe_id: str,
            _: None = Depends(require_feature(Feature.EXPORT_CALENDAR)),
        ):
            ...

    Args:
        feature: The feature that must be enabled

    Returns:
        A dependency function that raises HTTPException if feature is disabled
    """

    def check_feature(
        feature_service: FeatureFlagService = Depends(get_feature_service),
    ) -> None:
        feature_service.require_feature(feature)

    return check_feature
