"""Shared test fixtures for the ClockAlign engine test suite."""

import pytest
from datetime import date, datetime, timezone

from clockalign.engine.local_time import to_utc
from clockalign.errors import ConfigurationError
from clockalign.models.golden_window import Participant
from clockalign.models.sacrifice import ScoreRow


# ── Time ─────────────────────────────────────────────────────────────────

@pytest.fixture
def reference_date():
    """A fixed reference day for golden-window tests (no DST change nearby)."""
    return date(2025, 2, 1)


@pytest.fixture
def frozen_today():
    return date(2026, 2, 15)


@pytest.fixture
def meeting_instant():
    """2025-02-01T17:00Z: 9 AM Los Angeles, 5 PM London, 10:30 PM Kolkata."""
    return datetime(2025, 2, 1, 17, 0, tzinfo=timezone.utc)


# ── Projector ────────────────────────────────────────────────────────────

class FakeProjector:
    """Fixed whole-hour offsets, no DST. Unknown zones raise like the real one."""

    def __init__(self, offsets):
        self.offsets = dict(offsets)
        self.calls = []

    def local_hour(self, instant, timezone_id):
        return (to_utc(instant).hour + self.utc_offset_minutes(instant, timezone_id) // 60) % 24

    def utc_offset_minutes(self, instant, timezone_id):
        self.calls.append((instant, timezone_id))
        if timezone_id not in self.offsets:
            raise ConfigurationError(f"Unknown timezone: {timezone_id}", timezone_id=timezone_id)
        return self.offsets[timezone_id] * 60


@pytest.fixture
def fake_projector():
    """Projector with three synthetic zones: UTC, UTC+5 and UTC-8."""
    return FakeProjector({"Test/Zero": 0, "Test/Plus5": 5, "Test/Minus8": -8})


# ── Factories ────────────────────────────────────────────────────────────

@pytest.fixture
def make_participant():
    """Factory fixture for Participant with sensible defaults.

    Usage:
        p = make_participant(timezone="Asia/Tokyo", energy_type=EnergyType.NIGHT_OWL)
    """
    _counter = 0

    def _factory(**overrides):
        nonlocal _counter
        _counter += 1
        defaults = {
            "id": f"participant-{_counter}",
            "name": f"Participant {_counter}",
            "timezone": "UTC",
        }
        defaults.update(overrides)
        return Participant(**defaults)

    return _factory


@pytest.fixture
def make_score_row():
    """Factory fixture for persisted score rows; each row gets its own slot id."""
    _counter = 0

    def _factory(user_id="user1", points=1.0, category="golden", **overrides):
        nonlocal _counter
        _counter += 1
        defaults = {
            "user_id": user_id,
            "points": points,
            "category": category,
            "meeting_slot_id": f"slot-{_counter}",
        }
        defaults.update(overrides)
        return ScoreRow(**defaults)

    return _factory
