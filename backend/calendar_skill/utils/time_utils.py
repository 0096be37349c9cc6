"""
Time utility functions for clock-of-day handling.

This module provides a consistent interface for time handling throughout the skill:
- Internal storage: zero-padded 24-hour clock strings (HH:MM)
- Spoken output: zero-padded 12-hour clock with lower-case meridiem (hh:mm am)
- Calendar API: timezone-qualified instants ({dateTime, timeZone})

Clock strings are compared lexicographically, which only orders times correctly
within a single day. Windows and events that cross midnight are not supported.
"""

import re
from enum import Enum
from typing import Any, Dict, Optional, Tuple
from datetime import date as date_cls, datetime, time, timedelta
import pytz
from dateutil import parser


CLOCK_PATTERN = re.compile(r'^(\d{1,2}):(\d{2})$')

DURATION_PATTERN = re.compile(
    r'^P(?:(\d+)W)?(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?)?$'
)


class TimeOfDay(str, Enum):
    EARLY_MORNING = "early_morning"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"

    @property
    def spoken(self) -> str:
        return self.value.replace("_", " ")

    @classmethod
    def from_spoken(cls, value: str) -> "TimeOfDay":
        """Map a slot value such as "early morning" to its bucket."""
        return cls(value.strip().lower().replace(" ", "_"))


# Upper bounds (exclusive), checked in order
PERIOD_BREAKPOINTS: Tuple[Tuple[str, TimeOfDay], ...] = (
    ("05:00", TimeOfDay.EARLY_MORNING),
    ("12:00", TimeOfDay.MORNING),
    ("17:00", TimeOfDay.AFTERNOON),
    ("21:00", TimeOfDay.EVENING),
    ("24:00", TimeOfDay.NIGHT),
)


class TimeFormat:
    """
    Utility class for clock-of-day classification and formatting.
    """

    @staticmethod
    def split_clock(clock: str) -> Tuple[int, int]:
        """
        Split an "HH:MM" clock string into hour and minute.

        Raises:
            ValueError: if the string is not a clock time
        """
        match = CLOCK_PATTERN.match(str(clock).strip())
        if not match:
            raise ValueError(f"Not a clock time: {clock!r}")

        hour = int(match.group(1))
        minute = int(match.group(2))

        if hour > 24 or minute >= 60 or (hour == 24 and minute != 0):
            raise ValueError(f"Clock time out of range: {clock!r}")

        return hour, minute

    @staticmethod
    def classify_period(clock: str) -> TimeOfDay:
        """
        Get the period-of-day bucket for a clock time.

        Args:
            clock: Zero-padded 24-hour clock string (HH:MM)

        Returns:
            The TimeOfDay the clock falls into

        Raises:
            ValueError: for "24:00" and later, which belong to no period
        """
        for upper_bound, period in PERIOD_BREAKPOINTS:
            if clock < upper_bound:
                return period

        raise ValueError(f"No period of day for {clock!r}")

    @staticmethod
    def to_12hr_full(clock: str) -> str:
        """
        Convert a bare 24-hour clock to the spoken 12-hour form, without any
        timezone conversion.

        Examples:
            "15:00" → "03:00 pm"
            "09:30" → "09:30 am"
            "24:00" → "12:00 am"
        """
        hour, minute = TimeFormat.split_clock(clock)
        hour = hour % 24

        am_pm = "am" if hour < 12 else "pm"
        hour_12 = hour % 12
        if hour_12 == 0:
            hour_12 = 12

        return f"{hour_12:02d}:{minute:02d} {am_pm}"

    @staticmethod
    def to_local_datetime(time_obj: Dict[str, Any], timezone: str) -> datetime:
        """
        Resolve a calendar time object to an aware datetime in the object's own
        timezone, falling back to the given timezone when it carries none.
        """
        tz = pytz.timezone(time_obj.get('timeZone') or timezone)
        dt = parser.isoparse(time_obj['dateTime'])

        if dt.tzinfo is None:
            return tz.localize(dt)

        return dt.astimezone(tz)

    @staticmethod
    def localize_clock(day: date_cls, clock: str, timezone: str) -> datetime:
        """
        Build an aware datetime for a date and clock time.

        "24:00" is midnight at the start of the following day.
        """
        hour, minute = TimeFormat.split_clock(clock)

        if hour == 24:
            day = day + timedelta(days=1)
            hour = 0

        tz = pytz.timezone(timezone)
        return tz.localize(datetime.combine(day, time(hour, minute)))


def classify_period(clock: str) -> TimeOfDay:
    """Shorthand for TimeFormat.classify_period()"""
    return TimeFormat.classify_period(clock)


def format_clock(time_obj: Dict[str, Any], timezone: str) -> str:
    """Format a calendar time object as "hh:mm am" in its own timezone."""
    return TimeFormat.to_local_datetime(time_obj, timezone).strftime('%I:%M %p').lower()


def format_clock_24(clock: str) -> str:
    """Shorthand for TimeFormat.to_12hr_full()"""
    return TimeFormat.to_12hr_full(clock)



def localize_clock(day: date_cls, clock: str, timezone: str) -> datetime:
    """Shorthand for TimeFormat.localize_clock()"""
    return TimeFormat.localize_clock(day, clock, timezone)


def parse_duration(value: str) -> timedelta:
    """
    Parse an ISO-8601 duration as delivered by the duration slot.

    Examples:
        "PT1H30M" → 1:30:00
        "P1D" → 1 day
    """
    match = DURATION_PATTERN.match(str(value).strip().upper()) if value else None
    if not match or not any(match.groups()):
        raise ValueError(f"Not an ISO-8601 duration: {value!r}")

    weeks, days, hours, minutes, seconds = (int(part) if part else 0 for part in match.groups())
    return timedelta(weeks=weeks, days=days, hours=hours, minutes=minutes, seconds=seconds)


def format_spoken_date(dt: datetime) -> str:
    """Format a date the way it is read out, e.g. "October 19th, 2026"."""
    day = dt.day
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")

    return f"{dt.strftime('%B')} {day}{suffix}, {dt.year}"


def parse_date(date_string: Optional[str], timezone: str) -> date_cls:
    """
    Parse a date slot value, falling back to today in the given timezone.
    """
    if date_string:
        try:
            return parser.parse(date_string).date()
        except (ValueError, OverflowError):
            pass

    tz = pytz.timezone(timezone)
    return datetime.now(tz).date()
