"""
Feature flags API routes.

Lets clients hide UI for features the server has switched off.
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Dict

from breadtimer.features import FeatureFlagService, get_feature_service

router = APIRouter(prefix="/api/features", tags=["features"])


class FeatureFlagsResponse(BaseModel):
    """Feature flag states keyed by feature name."""

    flags: Dict[str, bool]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "flags": {
                        "export_calendar": True,
                        "custom_recipes": True,
                        "schedule_cache": True,
                    }
                }
            ]
        }
    }


@router.get("", response_model=FeatureFlagsResponse)
async def get_feature_flags(
    feature_service: FeatureFlagService = Depends(get_feature_service),
):
    """
    Get current state of all feature flags.
    """
    return FeatureFlagsResponse(flags=feature_service.get_all_flags())
