"""Shared test fixtures for the calendar skill tests.

Provides fakes for the external collaborators (calendar provider and device
settings API) plus helpers for building request envelopes and calendar events.

Usage:
    async def test_something(services, calendar):
        envelope = make_envelope(intent="GetEventsIntent")
        ...
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from calendar_skill.agent.services import SkillServices
from calendar_skill.tools.preferences import PreferenceStore


TIMEZONE = "America/New_York"
USER_ID = "amzn1.ask.account.TESTUSER"


# ─────────────────────────────────────────────────────────────────────────────
# Builders
# ─────────────────────────────────────────────────────────────────────────────


def make_event(
    summary: str,
    day: str,
    start: str,
    end: str,
    timezone: str = TIMEZONE,
    event_id: Optional[str] = None,
    end_day: Optional[str] = None,
) -> Dict[str, Any]:
    """Build a calendar event the way the Calendar API returns it."""
    return {
        "id": event_id or f"{summary.lower()}-{start}",
        "summary": summary,
        "start": {"dateTime": f"{day}T{start}:00", "timeZone": timezone},
        "end": {"dateTime": f"{end_day or day}T{end}:00", "timeZone": timezone},
    }


def make_envelope(
    intent: Optional[str] = None,
    slots: Optional[Dict[str, Optional[str]]] = None,
    attributes: Optional[Dict[str, Any]] = None,
    request_type: str = "IntentRequest",
    new: bool = False,
    access_token: Optional[str] = "google-token",
    user_id: str = USER_ID,
) -> Dict[str, Any]:
    """Build a voice platform request envelope."""
    user: Dict[str, Any] = {"userId": user_id}
    if access_token:
        user["accessToken"] = access_token

    request: Dict[str, Any] = {"type": request_type, "requestId": "req-1"}
    if intent:
        request["intent"] = {
            "name": intent,
            "slots": {
                name: {"name": name, "value": value}
                for name, value in (slots or {}).items()
            },
        }

    return {
        "version": "1.0",
        "session": {
            "new": new,
            "sessionId": "session-1",
            "application": {"applicationId": "amzn1.ask.skill.test"},
            "attributes": attributes or {},
            "user": user,
        },
        "context": {
            "System": {
                "application": {"applicationId": "amzn1.ask.skill.test"},
                "user": user,
                "device": {"deviceId": "device-1"},
                "apiEndpoint": "https://api.amazonalexa.com",
                "apiAccessToken": "platform-token",
            }
        },
        "request": request,
    }


def speech_of(response: Dict[str, Any]) -> Optional[str]:
    return response["response"].get("outputSpeech", {}).get("text")


# ─────────────────────────────────────────────────────────────────────────────
# Fakes
# ─────────────────────────────────────────────────────────────────────────────


class FakeCalendar:
    """Stands in for GoogleCalendarTool and records every call."""

    def __init__(self, events: Optional[List[Dict[str, Any]]] = None):
        self.events = events or []
        self.fail_list = False
        self.fail_create = False
        self.list_calls: List[tuple] = []
        self.created: List[Dict[str, Any]] = []
        self.deleted: List[str] = []

    def list_events(self, start_time, end_time):
        self.list_calls.append((start_time, end_time))
        if self.fail_list:
            raise RuntimeError("calendar unavailable")
        return list(self.events)

    def create_event(self, summary, start_time, end_time, timezone, recurrence=None):
        if self.fail_create:
            raise RuntimeError("insert failed")
        self.created.append({
            "summary": summary,
            "start_time": start_time,
            "end_time": end_time,
            "timezone": timezone,
            "recurrence": recurrence,
        })
        return {"id": f"created-{len(self.created)}"}

    def delete_event(self, event_id):
        self.deleted.append(event_id)


class FakeDeviceSettings:
    def __init__(self, timezone: str = TIMEZONE):
        self.timezone = timezone
        self.calls = 0

    async def get_timezone(self, api_endpoint, device_id, api_access_token):
        self.calls += 1
        return self.timezone


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def calendar() -> FakeCalendar:
    return FakeCalendar()


@pytest.fixture
def preference_store(tmp_path: Path) -> PreferenceStore:
    return PreferenceStore(str(tmp_path / "preferences"))


@pytest.fixture
def services(calendar: FakeCalendar, preference_store: PreferenceStore) -> SkillServices:
    """Services wired to fakes; every token resolves to the same calendar."""
    return SkillServices(
        preference_store=preference_store,
        device_settings=FakeDeviceSettings(),
        calendar_factory=lambda access_token: calendar,
    )
