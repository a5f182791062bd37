"""
Persistent storage for Daybook calendars.

Abstract base class and a JSON implementation. The JSON file holds one
iCalendar (VCALENDAR) document per calendar, so each calendar's events stay
readable by other calendar software:

    {
      "format": 1,
      "updated": "2021-01-01T12:00:00",
      "calendars": [{"name": "Default", "ical": "BEGIN:VCALENDAR..."}]
    }

Times are stored as floating (naive local) date-times with second
resolution.
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from icalendar import Calendar as ICalCalendar, Event as ICalEvent

from .debug import debug_print
from .errors import InvalidArgumentError, StorageError
from .event import Event


FORMAT_VERSION = 1

PRODID = '-//Daybook//daybook//EN'

# name -> events, in the calendar's own order
CalendarState = dict[str, list[Event]]


def _debug_print(msg: str) -> None:
    debug_print("STORAGE", msg)


class CalendarStorageBackend(ABC):
    """
    Abstract base class for calendar storage backends.

    load() returns None when nothing has been stored yet. Any failure to
    read or write is raised as StorageError.
    """

    @abstractmethod
    def load(self) -> Optional[CalendarState]:
        """Load all calendars."""
        pass

    @abstractmethod
    def save(self, state: CalendarState) -> None:
        """Replace all stored calendars with `state`."""
        pass


# ==================== iCalendar conversion ====================

def event_to_ical(event: Event) -> ICalEvent:
    """Convert an Event to an icalendar VEVENT."""
    vevent = ICalEvent()
    vevent.add('uid', event.uid)
    vevent.add('summary', event.title)
    vevent.add('dtstart', event.start)
    vevent.add('dtend', event.end)
    if event.location is not None:
        vevent.add('location', event.location)
    if event.notes is not None:
        vevent.add('description', event.notes)
    if event.color is not None:
        vevent.add('color', event.color)
    return vevent


def _to_naive_datetime(value) -> datetime:
    if not isinstance(value, datetime):
        # All-day value from a foreign file - midnight
        value = datetime.combine(value, datetime.min.time())
    if value.tzinfo is not None:
        value = value.replace(tzinfo=None)
    return value


def _optional_text(component: ICalEvent, key: str) -> Optional[str]:
    value = component.get(key)
    return str(value) if value is not None else None


def event_from_ical(component: ICalEvent) -> Event:
    """
    Convert an icalendar VEVENT to an Event.

    No validation is applied, so an event saved with inverted times is
    restored as it was.
    """
    dtstart = component.get('DTSTART')
    if dtstart is None:
        raise ValueError("VEVENT without DTSTART")
    start = _to_naive_datetime(dtstart.dt)

    dtend = component.get('DTEND')
    end_time = _to_naive_datetime(dtend.dt).time() if dtend is not None else start.time()

    return Event(
        title=_optional_text(component, 'SUMMARY') or '',
        date=start.date(),
        start_time=start.time(),
        end_time=end_time,
        location=_optional_text(component, 'LOCATION'),
        notes=_optional_text(component, 'DESCRIPTION'),
        color=_optional_text(component, 'COLOR'),
        uid=_optional_text(component, 'UID'),
    )


def calendar_to_ical(events: list[Event]) -> str:
    """Serialize a list of events as VCALENDAR text."""
    vcal = ICalCalendar()
    vcal.add('prodid', PRODID)
    vcal.add('version', '2.0')
    for event in events:
        vcal.add_component(event_to_ical(event))
    return vcal.to_ical().decode('utf-8')


def calendar_from_ical(ical_text: str, known: Optional[dict[str, Event]] = None) -> list[Event]:
    """
    Parse VCALENDAR text into events.

    Events whose UID is already in `known` are returned as that same object,
    so an event stored in several places comes back as one shared event.
    `known` is updated with every event parsed.
    """
    if known is None:
        known = {}
    vcal = ICalCalendar.from_ical(ical_text)
    events = []
    for component in vcal.walk('VEVENT'):
        uid = _optional_text(component, 'UID')
        if uid and uid in known:
            events.append(known[uid])
            continue
        event = event_from_ical(component)
        known[event.uid] = event
        events.append(event)
    return events


# ==================== JSON file backend ====================

class JsonCalendarStorage(CalendarStorageBackend):
    """
    Single JSON file holding every calendar.

    Writes go to a temporary file in the same directory which then replaces
    the target, so a crash never leaves a half-written file behind.
    """

    def __init__(self, path: Path):
        if path is None:
            raise InvalidArgumentError("Storage path must not be None")
        self.path = Path(path)

    def load(self) -> Optional[CalendarState]:
        if not self.path.exists():
            _debug_print(f"No state file at {self.path}")
            return None

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)

            known: dict[str, Event] = {}
            state: CalendarState = {}
            for entry in data["calendars"]:
                name = entry["name"]
                if name in state:
                    raise ValueError(f"Duplicate calendar name {name!r}")
                state[name] = calendar_from_ical(entry["ical"], known)
        except (OSError, ValueError, KeyError, TypeError) as e:
            raise StorageError(f"Cannot load calendars from {self.path}: {e}") from e

        _debug_print(f"Loaded {len(state)} calendars from {self.path}")
        return state

    def save(self, state: CalendarState) -> None:
        data = {
            "format": FORMAT_VERSION,
            "updated": datetime.now().isoformat(timespec='seconds'),
            "calendars": [
                {"name": name, "ical": calendar_to_ical(events)}
                for name, events in state.items()
            ],
        }

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=self.path.name, suffix='.tmp', dir=self.path.parent)
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Cannot save calendars to {self.path}: {e}") from e

        _debug_print(f"Saved {len(state)} calendars to {self.path}")


def get_default_state_path() -> Path:
    """Get the default state file path respecting XDG."""
    xdg_data = os.environ.get('XDG_DATA_HOME', os.path.expanduser('~/.local/share'))
    return Path(xdg_data) / 'daybook' / 'calendars.json'


def create_storage_backend(path: Optional[Path] = None) -> CalendarStorageBackend:
    """Factory function to create a storage backend."""
    if path is None:
        path = get_default_state_path()
    return JsonCalendarStorage(path)
