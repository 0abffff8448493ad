"""
iCalendar export for bread schedules.

Produces a minimal VCALENDAR document with one VEVENT per scheduled step,
suitable for importing into any calendar application.
"""
import re
from datetime import datetime, timezone
from typing import List, Optional, Sequence
from zoneinfo import ZoneInfo

from breadtimer.config import settings
from breadtimer.errors import EmptyScheduleError
from breadtimer.models.schemas import ScheduledStep

CRLF = "\r\n"
CALENDAR_MEDIA_TYPE = "text/calendar; charset=utf-8"


def format_ics_datetime(value: datetime, tz_name: Optional[str] = None) -> str:
    """
    Render a timestamp as an iCalendar UTC date-time, e.g. 20240101T073000Z.

    Naive datetimes are wall-clock times in ``tz_name`` (default: the
    configured timezone). Sub-second precision is dropped.

    Args:
        value: The timestamp to format.
        tz_name: IANA timezone used for naive values.

    Returns:
        The compact YYYYMMDDTHHMMSSZ representation.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=ZoneInfo(tz_name or settings.timezone))
    return value.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def escape_ics_text(value: str) -> str:
    """Escape a TEXT property value (backslash, semicolon, comma, newline)."""
    value = value.replace("\\", "\\\\").replace(";", "\\;").replace(",", "\\,")
    return re.sub(r"\r\n|\r|\n", "\\\\n", value)


def export_calendar(
    recipe_name: str,
    schedule: Sequence[ScheduledStep],
    tz_name: Optional[str] = None,
) -> bytes:
    """
    Serialize a schedule to an iCalendar document.

    Events follow schedule order. Each SUMMARY reads "<recipe> - <step>".

    Args:
        recipe_name: Name of the recipe being baked.
        schedule: Scheduled steps, forward ordered.
        tz_name: IANA timezone used for naive timestamps.

    Returns:
        The UTF-8 encoded document, lines joined with CRLF.

    Raises:
        EmptyScheduleError: If the schedule has no steps.
    """
    if not schedule:
        raise EmptyScheduleError(recipe_name)

    lines: List[str] = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "CALSCALE:GREGORIAN",
    ]
    for step in schedule:
        lines.extend([
            "BEGIN:VEVENT",
            f"SUMMARY:{escape_ics_text(f'{recipe_name} - {step.name}')}",
            f"DTSTART:{format_ics_datetime(step.start_time, tz_name)}",
            f"DTEND:{format_ics_datetime(step.end_time, tz_name)}",
            "END:VEVENT",
        ])
    lines.append("END:VCALENDAR")

    return CRLF.join(lines).encode("utf-8")


def calendar_filename(recipe_name: str) -> str:
    """
    Download filename for a recipe's calendar.

    Examples:
        >>> calendar_filename("Sourdough Bread")
        'sourdough-bread-schedule.ics'
    """
    slug = re.sub(r"\s+", "-", recipe_name.strip().lower())
    slug = re.sub(r"[^\w\-.]+", "_", slug).strip("._")
    return f"{slug or 'bread'}-schedule.ics"
