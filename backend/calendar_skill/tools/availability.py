from pydantic import BaseModel, ConfigDict, Field
from datetime import date
from typing import Any, Dict, List, Optional

from ..utils.logger import logger
from ..utils.time_utils import TimeFormat, TimeOfDay, classify_period


class Interval(BaseModel):
    """A clock-of-day span, either a busy event or a free window."""

    model_config = ConfigDict(frozen=True)

    start: str
    end: str


# Searched when no preference narrows the window
DEFAULT_WINDOW = Interval(start="00:00", end="23:59")

START_OF_DAY = "00:00"
END_OF_DAY = "24:00"


def empty_buckets() -> Dict[TimeOfDay, List[Interval]]:
    return {period: [] for period in TimeOfDay}


class AvailabilityResult(BaseModel):
    intervals: List[Interval] = Field(default_factory=list)
    by_period: Dict[TimeOfDay, List[Interval]] = Field(default_factory=empty_buckets)

    @property
    def available_periods(self) -> List[TimeOfDay]:
        return [period for period in TimeOfDay if self.by_period.get(period)]


def busy_intervals(
    events: List[Dict[str, Any]],
    timezone: str,
    day: Optional[date] = None
) -> List[Interval]:
    """
    Convert calendar events into local clock-of-day busy intervals.

    An event that runs past the end of the day ends at "24:00"; one that began
    on an earlier day starts at "00:00".

    Args:
        events: Calendar events sorted by start time
        timezone: User's timezone, used when an event carries none
        day: Day being searched; defaults to each event's own start date

    Returns:
        Busy intervals in the same order
    """
    busy = []

    for event in events:
        start = event.get('start', {})
        end = event.get('end', {})

        # All-day events only carry a date and do not block a time of day
        if 'dateTime' not in start or 'dateTime' not in end:
            logger.info(f"Skipping all-day event: {event.get('summary', 'No title')}")
            continue

        start_dt = TimeFormat.to_local_datetime(start, timezone)
        end_dt = TimeFormat.to_local_datetime(end, timezone)
        event_day = day or start_dt.date()

        busy.append(Interval(
            start=START_OF_DAY if start_dt.date() < event_day else start_dt.strftime('%H:%M'),
            end=END_OF_DAY if end_dt.date() > event_day else end_dt.strftime('%H:%M')
        ))

    return busy


def compute_availability(window: Interval, busy: List[Interval]) -> AvailabilityResult:
    """
    Find the free gaps between busy intervals inside a bounding window.

    A gap before a busy interval is classified by the period of day it starts
    in; the trailing gap after the last busy interval only goes into the flat
    list. A busy interval that starts exactly at the cursor leaves no gap.

    Args:
        window: Bounding window in clock-of-day
        busy: Chronologically sorted busy intervals inside the window

    Returns:
        Free intervals, flat and grouped by period of day
    """
    result = AvailabilityResult()
    cursor = window.start

    for interval in busy:
        if interval.start > cursor:
            gap = Interval(start=cursor, end=interval.start)
            result.intervals.append(gap)
            result.by_period[classify_period(cursor)].append(gap)

        cursor = max(cursor, interval.end)

    if cursor < window.end:
        result.intervals.append(Interval(start=cursor, end=window.end))

    logger.info(
        f"Availability {window.start}-{window.end}: {len(busy)} busy, "
        f"{len(result.intervals)} free across {len(result.available_periods)} periods"
    )
    return result
