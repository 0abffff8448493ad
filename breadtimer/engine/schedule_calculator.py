"""
Backward schedule calculator.

Pins every step of a recipe to absolute timestamps so that the last step
ends exactly at the requested completion time and each step ends when the
next one begins.
"""
from datetime import datetime, timedelta
from typing import List, Sequence, Union

from breadtimer.errors import InvalidInputError
from breadtimer.models.schemas import ScheduledStep, Step


def parse_target_time(value: Union[str, datetime, None]) -> datetime:
    """
    Parse a target completion time.

    Accepts a datetime unchanged, or an ISO-8601 local date-time string such
    as the value of an HTML ``datetime-local`` input ("2024-01-01T08:00").
    Strings carrying an offset (or a trailing "Z") produce aware datetimes.

    Args:
        value: The raw target time.

    Returns:
        The parsed datetime.

    Raises:
        InvalidInputError: If the value is missing or cannot be parsed.
    """
    if isinstance(value, datetime):
        return value

    if value is None or not str(value).strip():
        raise InvalidInputError(
            "Please select a recipe and target completion time",
            details={"target_time": value},
        )

    text = str(value).strip()
    # fromisoformat only learned the "Z" suffix in Python 3.11
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"

    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise InvalidInputError(
            "Invalid date format",
            details={"target_time": value},
        )


def compute_schedule(
    steps: Sequence[Step],
    target_end: Union[str, datetime, None],
) -> List[ScheduledStep]:
    """
    Compute start and end times for each step, working back from target_end.

    Steps are walked last to first. The cursor starts at the target time;
    each step ends at the cursor and starts ``duration`` hours earlier, and
    the cursor then moves to that start. Results are inserted at the front
    so the returned list keeps the recipe's forward order.

    An empty step list yields an empty schedule. No timezone conversion
    happens here: a naive target produces naive timestamps.

    Args:
        steps: Ordered recipe steps (validated, non-negative durations).
        target_end: When the last step must be finished.

    Returns:
        Scheduled steps in the same order as ``steps``.

    Raises:
        InvalidInputError: If target_end is missing or unparseable, or the
            schedule would start before the earliest representable date.
    """
    cursor = parse_target_time(target_end)
    schedule: List[ScheduledStep] = []

    for step in reversed(steps):
        try:
            start_time = cursor - timedelta(hours=step.duration)
        except OverflowError:
            raise InvalidInputError(
                "Schedule does not fit in the supported date range",
                details={"step": step.name, "duration": step.duration},
            )
        schedule.insert(0, ScheduledStep(
            name=step.name,
            duration=step.duration,
            type=step.type,
            start_time=start_time,
            end_time=cursor,
        ))
        cursor = start_time

    return schedule
