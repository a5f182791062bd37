"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date, time
from pathlib import Path

import pytest

# Make the project root importable without installing
sys.path.insert(0, str(Path(__file__).parent.parent))

from daybook.calendar_model import Calendar
from daybook.event import Event
from daybook.registry import CalendarRegistry
from daybook.storage import JsonCalendarStorage


def _build_event(title="event", day=date(2020, 4, 1), start="09:00", end="10:00", **kwargs) -> Event:
    """Build an event from HH:MM strings."""
    return Event(title, day, time.fromisoformat(start), time.fromisoformat(end), **kwargs)


@pytest.fixture
def calendar():
    """An empty calendar."""
    return Calendar()


@pytest.fixture
def registry():
    """A freshly bootstrapped registry holding only "Default"."""
    return CalendarRegistry.bootstrap()


@pytest.fixture
def state_file(tmp_path):
    """Path for a state file that does not exist yet."""
    return tmp_path / "state" / "calendars.json"


@pytest.fixture
def storage(state_file):
    return JsonCalendarStorage(state_file)


@pytest.fixture
def make_event():
    """Factory building events from HH:MM strings."""
    return _build_event
