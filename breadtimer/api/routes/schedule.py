"""
Schedule API routes: work back from a target completion time.
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from breadtimer.api.dependencies import get_schedule_service, to_http_exception
from breadtimer.api.routes.recipes import StepRequest
from breadtimer.errors import BreadTimerError
from breadtimer.models.schemas import Schedule, ScheduledStep
from breadtimer.services.recipe_service import validate_step_definitions
from breadtimer.services.schedule_service import ScheduleService
from breadtimer.utils.sanitization import SanitizedStr

router = APIRouter(prefix="/api/schedule", tags=["schedule"])


class ScheduleResponse(BaseModel):
    """A computed schedule with its overall start time."""
    recipe_id: Optional[str] = None
    recipe_name: str
    target_time: datetime
    start_time: Optional[datetime] = None
    total_time: float
    steps: List[ScheduledStep]

    @classmethod
    def from_schedule(cls, schedule: Schedule) -> "ScheduleResponse":
        return cls(
            recipe_id=schedule.recipe_id,
            recipe_name=schedule.recipe_name,
            target_time=schedule.target_time,
            start_time=schedule.start_time,
            total_time=schedule.total_time,
            steps=schedule.steps,
        )


class AdHocScheduleRequest(BaseModel):
    """Request to schedule a step list that is not stored as a recipe."""
    name: SanitizedStr = Field(default="Bread", description="Label for the schedule")
    target_time: Optional[str] = Field(default=None, description="Local date-time, e.g. 2024-01-01T08:00")
    steps: List[StepRequest] = Field(default_factory=list)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Baguette",
                    "target_time": "2024-01-01T08:00",
                    "steps": [
                        {"name": "Mixing", "duration": 0.5, "type": "active"},
                        {"name": "Rise", "duration": 2, "type": "waiting"},
                        {"name": "Bake", "duration": 0.5, "type": "active"}
                    ]
                }
            ]
        }
    }


@router.get("/{recipe_id}", response_model=ScheduleResponse)
async def get_recipe_schedule(
    recipe_id: str,
    target_time: Optional[str] = Query(None, description="Target completion time, e.g. 2024-01-01T08:00"),
    schedule_service: ScheduleService = Depends(get_schedule_service),
):
    """
    Compute when each step of a recipe must start so the bread is done at target_time.

    Returns 400 with `VALIDATION_INVALID_INPUT` when target_time is missing or unparseable.
    """
    try:
        schedule = schedule_service.schedule_for_recipe(recipe_id, target_time)
    except BreadTimerError as e:
        raise to_http_exception(e)
    return ScheduleResponse.from_schedule(schedule)


@router.post("", response_model=ScheduleResponse)
async def create_ad_hoc_schedule(
    request: AdHocScheduleRequest,
    schedule_service: ScheduleService = Depends(get_schedule_service),
):
    """
    Compute a schedule for an unsaved list of steps.

    An empty step list produces an empty schedule. Steps are checked like
    recipe steps: blank names and too many steps give 422.
    """
    try:
        steps = validate_step_definitions([step.to_definition() for step in request.steps])
        schedule = schedule_service.schedule_for_steps(request.name, steps, request.target_time)
    except BreadTimerError as e:
        raise to_http_exception(e)
    return ScheduleResponse.from_schedule(schedule)
