"""
Export routes for calendar downloads.
"""
import logging
from io import BytesIO
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from breadtimer.api.dependencies import get_schedule_service, to_http_exception
from breadtimer.errors import BreadTimerError
from breadtimer.features import Feature
from breadtimer.features.service import require_feature
from breadtimer.services.calendar_service import (
    CALENDAR_MEDIA_TYPE,
    calendar_filename,
    export_calendar,
)
from breadtimer.services.schedule_service import ScheduleService

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/api/export", tags=["export"])


@router.get("/{recipe_id}/calendar")
async def download_recipe_calendar(
    recipe_id: str,
    target_time: Optional[str] = Query(None, description="Target completion time, e.g. 2024-01-01T08:00"),
    schedule_service: ScheduleService = Depends(get_schedule_service),
    _: None = Depends(require_feature(Feature.EXPORT_CALENDAR)),
):
    """
    Download a recipe's schedule as an iCalendar (.ics) file.

    The file holds one event per step, in schedule order.

    **Feature flag**: Requires `export_calendar` feature to be enabled.
    """
    try:
        schedule = schedule_service.schedule_for_recipe(recipe_id, target_time)
        ics_bytes = export_calendar(schedule.recipe_name, schedule.steps)
    except BreadTimerError as e:
        raise to_http_exception(e)

    filename = calendar_filename(schedule.recipe_name)
    logger.info(f"Exported {len(schedule.steps)} calendar events for '{recipe_id}'")

    return StreamingResponse(
        BytesIO(ics_bytes),
        media_type=CALENDAR_MEDIA_TYPE,
        headers={
            "Content-Disposition": f"attachment; filename={filename}"
        }
    )
