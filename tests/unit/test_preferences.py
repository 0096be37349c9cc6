"""Tests for preference normalization, windows and storage."""

import json

import pytest

from calendar_skill.tools.availability import Interval
from calendar_skill.tools.preferences import (
    PreferenceStore,
    apply_preference,
    normalize_event_type,
    remove_preference,
    resolve_preference_window,
)


class TestNormalizeEventType:
    @pytest.mark.parametrize("raw,expected", [
        ("dentist events", "dentist"),
        ("dentist event", "dentist"),
        ("team meeting", "team meeting"),
        ("Dentist Events", "Dentist Events"),
        ("events", "events"),
        ("prevent", "prevent"),
    ])
    def test_suffix_stripped(self, raw: str, expected: str):
        assert normalize_event_type(raw) == expected


class TestResolvePreferenceWindow:
    @pytest.mark.parametrize("code,window,description", [
        ("MO", Interval(start="05:00", end="11:00"), "in the morning"),
        ("AF", Interval(start="12:00", end="16:00"), "in the afternoon"),
        ("EV", Interval(start="17:00", end="20:00"), "in the evening"),
        ("NI", Interval(start="21:00", end="24:00"), "at night"),
    ])
    def test_coded_periods(self, code, window, description):
        assert resolve_preference_window(code) == (window, description)

    def test_coded_period_ignores_end_time(self):
        window, _ = resolve_preference_window("MO", "09:00")
        assert window == Interval(start="05:00", end="11:00")

    def test_single_time(self):
        assert resolve_preference_window("12:30") == (
            Interval(start="12:30", end="12:30"),
            "at 12:30 pm",
        )

    def test_explicit_range(self):
        assert resolve_preference_window("14:00", "15:30") == (
            Interval(start="14:00", end="15:30"),
            "from 02:00 pm to 03:30 pm",
        )


class TestPreferenceMutation:
    def test_apply_returns_new_mapping(self):
        original = {"lunch": Interval(start="12:30", end="12:30")}

        updated = apply_preference(original, "gym", Interval(start="05:00", end="11:00"))

        assert set(updated) == {"lunch", "gym"}
        assert set(original) == {"lunch"}

    def test_apply_overwrites(self):
        original = {"lunch": Interval(start="12:30", end="12:30")}

        updated = apply_preference(original, "lunch", Interval(start="13:00", end="13:00"))

        assert updated["lunch"] == Interval(start="13:00", end="13:00")
        assert original["lunch"] == Interval(start="12:30", end="12:30")

    def test_remove_returns_new_mapping(self):
        original = {"lunch": Interval(start="12:30", end="12:30")}

        assert remove_preference(original, "lunch") == {}
        assert "lunch" in original

    def test_remove_missing_is_noop(self):
        assert remove_preference({}, "lunch") == {}


class TestPreferenceStore:
    def test_missing_user_has_no_preferences(self, preference_store):
        assert preference_store.load("nobody") == {}

    def test_save_and_load(self, preference_store):
        preferences = {
            "lunch": Interval(start="12:30", end="12:30"),
            "gym": Interval(start="05:00", end="11:00"),
        }

        preference_store.save("amzn1.ask.account.ABC", preferences)

        assert preference_store.load("amzn1.ask.account.ABC") == preferences

    def test_users_are_isolated(self, preference_store):
        preference_store.save("user-a", {"lunch": Interval(start="12:30", end="12:30")})

        assert preference_store.load("user-b") == {}

    def test_document_format(self, tmp_path):
        store = PreferenceStore(str(tmp_path))
        store.save("user/with/slashes", {"gym": Interval(start="05:00", end="11:00")})

        files = list(tmp_path.glob("*.json"))
        assert len(files) == 1
        assert json.loads(files[0].read_text()) == {
            "preferences": {"gym": {"start": "05:00", "end": "11:00"}}
        }
