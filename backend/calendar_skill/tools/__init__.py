"""Tools for calendar access, availability, preferences and timezone handling."""

from .availability import AvailabilityResult, Interval, busy_intervals, compute_availability
from .calendar import GoogleCalendarTool
from .preferences import PreferenceStore
from .timezone import DeviceSettingsClient

__all__ = [
    "AvailabilityResult",
    "Interval",
    "busy_intervals",
    "compute_availability",
    "GoogleCalendarTool",
    "PreferenceStore",
    "DeviceSettingsClient"
]
