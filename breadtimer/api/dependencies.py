"""
FastAPI dependencies and error translation shared by the route modules.
"""
from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session

from breadtimer.db.database import get_db
from breadtimer.errors import BreadTimerError
from breadtimer.features import FeatureFlagService, get_feature_service
from breadtimer.services.recipe_service import RecipeService
from breadtimer.services.schedule_service import ScheduleService


def get_recipe_service(db: Session = Depends(get_db)) -> RecipeService:
    """
    Dependency providing a RecipeService bound to the request's session.

    Usage:
        @router.get("/recipes")
        def list_recipes(service: RecipeService = Depends(get_recipe_service)):
            return service.list_recipes()
    """
    return RecipeService(db)


def get_schedule_service(
    db: Session = Depends(get_db),
    feature_service: FeatureFlagService = Depends(get_feature_service),
) -> ScheduleService:
    """Dependency providing a ScheduleService bound to the request's session."""
    return ScheduleService(db, feature_service=feature_service)


def to_http_exception(error: BreadTimerError) -> HTTPException:
    """
    Convert an application error into an HTTPException.

    The response body becomes {"detail": {"error_code", "message", "details"}}
    with the status code carried by the error.
    """
    return HTTPException(
        status_code=error.status_code,
        detail=error.to_response().model_dump(),
    )
