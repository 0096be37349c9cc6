"""
Spoken response assembly.

Every spoken list goes through join_spoken so events, preferences, free
intervals and period names all read the same way.
"""

from typing import Any, Dict, Iterable, List

from .prompts import (
    ASK_EVENT_TIME,
    ASK_PERIOD,
    NO_AVAILABILITY,
    NO_PERIOD_AVAILABILITY,
    NO_PREFERENCES,
    NO_UPCOMING_EVENTS,
    WHOLE_DAY_AVAILABLE,
    WINDOW_AVAILABLE,
)
from ..tools.availability import DEFAULT_WINDOW, AvailabilityResult, Interval
from ..utils.time_utils import TimeOfDay, format_clock, format_clock_24


def join_spoken(items: Iterable[str]) -> str:
    """
    Join items for speech: "A", "A and B", "A, B, and C".
    """
    items = list(items)

    if len(items) <= 1:
        return "".join(items)

    if len(items) == 2:
        return f"{items[0]} and {items[1]}"

    return ", ".join(items[:-1]) + f", and {items[-1]}"


def describe_interval(interval: Interval) -> str:
    return f"from {format_clock_24(interval.start)} to {format_clock_24(interval.end)}"


def render_availability(result: AvailabilityResult, window: Interval, busy_count: int) -> str:
    """
    Pick how to present availability for a day.

    Args:
        result: Free intervals inside the window
        window: Window that was searched
        busy_count: Number of busy events found in the window

    Returns:
        Spoken sentence
    """
    if busy_count == 0:
        if window == DEFAULT_WINDOW:
            return WHOLE_DAY_AVAILABLE
        return WINDOW_AVAILABLE.format(
            start=format_clock_24(window.start),
            end=format_clock_24(window.end)
        )

    if not result.intervals:
        return NO_AVAILABILITY

    periods = result.available_periods

    # Too many gaps to list: ask for a time of day instead
    if len(result.intervals) > 2 and len(periods) > 1:
        period_names = [f"in the {period.spoken}" for period in periods]
        return f"Okay, you have availability {join_spoken(period_names)}. {ASK_PERIOD}"

    intervals = [describe_interval(interval) for interval in result.intervals]
    return f"Okay, you have availability {join_spoken(intervals)}. {ASK_EVENT_TIME}"


def render_period_availability(period: TimeOfDay, intervals: List[Interval]) -> str:
    if not intervals:
        return NO_PERIOD_AVAILABILITY.format(period=period.spoken)

    spoken = join_spoken(describe_interval(interval) for interval in intervals)
    return f"You have availability {spoken}. {ASK_EVENT_TIME}"


def render_event_count(count: int) -> str:
    speech = f"You have {count} event{'' if count == 1 else 's'} in the next 24 hours."

    if count > 0:
        speech += f" Would you like to hear what {'it is' if count == 1 else 'they are'}?"

    return speech


def render_events(events: List[Dict[str, Any]], timezone: str) -> str:
    if not events:
        return NO_UPCOMING_EVENTS

    described = []
    for event in events:
        summary = event.get('summary', 'an untitled event')
        start = event.get('start', {})
        end = event.get('end', {})

        if 'dateTime' in start and 'dateTime' in end:
            described.append(
                f"{summary} from {format_clock(start, timezone)} to {format_clock(end, timezone)}"
            )
        else:
            described.append(f"{summary} all day")

    return f"You have {join_spoken(described)}."


def render_preferences(preferences: Dict[str, Interval]) -> str:
    if not preferences:
        return NO_PREFERENCES

    described = []
    for event_type, window in preferences.items():
        if window.start == window.end:
            described.append(f"{event_type} events at {format_clock_24(window.start)}")
        else:
            described.append(f"{event_type} events {describe_interval(window)}")

    return f"You prefer to have {join_spoken(described)}."
