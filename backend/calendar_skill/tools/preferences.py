from typing import Dict, Optional, Tuple
from pathlib import Path
import json

from .availability import Interval
from ..utils.config import settings
from ..utils.logger import logger
from ..utils.time_utils import TimeOfDay, format_clock_24


# Coded slot tokens for a time of day
PERIOD_CODES: Dict[str, TimeOfDay] = {
    "MO": TimeOfDay.MORNING,
    "AF": TimeOfDay.AFTERNOON,
    "EV": TimeOfDay.EVENING,
    "NI": TimeOfDay.NIGHT,
}

PERIOD_WINDOWS: Dict[TimeOfDay, Tuple[Interval, str]] = {
    TimeOfDay.MORNING: (Interval(start="05:00", end="11:00"), "in the morning"),
    TimeOfDay.AFTERNOON: (Interval(start="12:00", end="16:00"), "in the afternoon"),
    TimeOfDay.EVENING: (Interval(start="17:00", end="20:00"), "in the evening"),
    TimeOfDay.NIGHT: (Interval(start="21:00", end="24:00"), "at night"),
}

Preferences = Dict[str, Interval]


def normalize_event_type(event_type: str) -> str:
    """Strip a trailing " event" or " events" off a category slot value."""
    if event_type.endswith(" event"):
        return event_type[:-len(" event")]
    if event_type.endswith(" events"):
        return event_type[:-len(" events")]
    return event_type


def resolve_preference_window(time: str, end_time: Optional[str] = None) -> Tuple[Interval, str]:
    """
    Turn the time slots of a preference request into a window.

    Args:
        time: A coded period token ("MO", "AF", "EV", "NI") or an HH:MM clock
        end_time: Optional HH:MM end clock

    Returns:
        Tuple of (window, spoken description of the window)
    """
    period = PERIOD_CODES.get(time)
    if period is not None:
        return PERIOD_WINDOWS[period]

    if end_time:
        return (
            Interval(start=time, end=end_time),
            f"from {format_clock_24(time)} to {format_clock_24(end_time)}"
        )

    return Interval(start=time, end=time), f"at {format_clock_24(time)}"


def apply_preference(preferences: Preferences, event_type: str, window: Interval) -> Preferences:
    updated = dict(preferences)
    updated[event_type] = window
    return updated


def remove_preference(preferences: Preferences, event_type: str) -> Preferences:
    updated = dict(preferences)
    updated.pop(event_type, None)
    return updated


class PreferenceStore:
    """Durable per-user preference storage, one JSON document per user."""

    def __init__(self, directory: Optional[str] = None):
        self.directory = Path(directory or settings.preferences_dir)

    def _path_for(self, user_id: str) -> Path:
        safe_id = "".join(c if c.isalnum() or c in "._-" else "_" for c in user_id)
        return self.directory / f"{safe_id}.json"

    def load(self, user_id: str) -> Preferences:
        path = self._path_for(user_id)

        if not path.exists():
            logger.info(f"No stored preferences for user: {user_id}")
            return {}

        with open(path, 'r') as f:
            data = json.load(f)

        return {
            event_type: Interval.model_validate(window)
            for event_type, window in data.get('preferences', {}).items()
        }

    def save(self, user_id: str, preferences: Preferences) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

        data = {
            'preferences': {
                event_type: window.model_dump()
                for event_type, window in preferences.items()
            }
        }

        with open(self._path_for(user_id), 'w') as f:
            json.dump(data, f)

        logger.info(f"Saved {len(preferences)} preferences for user: {user_id}")
