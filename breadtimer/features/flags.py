"""
Feature flag definitions and configuration.

This module defines all available feature flags and their default states.
Feature flags can be overridden via environment variables.
"""

from enum import Enum
from typing import Dict
from pydantic_settings import BaseSettings, SettingsConfigDict


class Feature(str, Enum):
    """
    Enumeration of all feature flags in the application.

    Each feature flag represents a toggleable capability that can be
    enabled or disabled without code changes.
    """

    # Export features
    EXPORT_CALENDAR = "export_calendar"

    # Recipe features
    CUSTOM_RECIPES = "custom_recipes"

    # Scheduling features
    SCHEDULE_CACHE = "schedule_cache"


# Default states for all features (True = enabled by default)
DEFAULT_FEATURE_STATES: Dict[Feature, bool] = {
    Feature.EXPORT_CALENDAR: True,
    Feature.CUSTOM_RECIPES: True,
    Feature.SCHEDULE_CACHE: True,
}


class FeatureFlags(BaseSettings):
    """
    Feature flag settings loaded from environment variables.

    Each feature flag can be toggled via an environment variable:
    FEATURE_<FLAG_NAME>=true/false

    Example:
        FEATURE_EXPORT_CALENDAR=false
        FEATURE_CUSTOM_RECIPES=false
    """

    feature_export_calendar: bool = DEFAULT_FEATURE_STATES[Feature.EXPORT_CALENDAR]
    feature_custom_recipes: bool = DEFAULT_FEATURE_STATES[Feature.CUSTOM_RECIPES]
    feature_schedule_cache: bool = DEFAULT_FEATURE_STATES[Feature.SCHEDULE_CACHE]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore non-feature-flag environment variables
    )

    def get_flag(self, feature: Feature) -> bool:
        """
        Get the current state of a feature flag.

        Args:
            feature: The feature to check

        Returns:
            True if the feature is enabled, False otherwise
        """
        attr_name = f"feature_{feature.value}"
        return getattr(self, attr_name, DEFAULT_FEATURE_STATES.get(feature, False))

    def get_all_flags(self) -> Dict[str, bool]:
        """
        Get the current state of all feature flags.

        Returns:
            Dictionary mapping feature names to their enabled states
        """
        return {feature.value: self.get_flag(feature) for feature in Feature}


def get_feature_flags(**overrides) -> FeatureFlags:
    """
    Factory function to create FeatureFlags instance.

    Useful for testing where you need to override specific flags
    without modifying environment variables.

    Args:
        **overrides: Key-value pairs to override default flags

    Returns:
        FeatureFlags instance with overrides applied
    """
    return FeatureFlags(**overrides)


# Global feature flags instance
feature_flags = get_feature_flags()
