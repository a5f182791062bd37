"""
Registry of named calendars.

The registry is the single entry point for callers: every operation names
the calendar it works on and fails with NoSuchCalendarError if that name is
unknown. delete() is the exception; it reports a missing calendar through its
return value instead.

There is no global instance. Create one registry per session (usually via
load() or bootstrap()) and pass it to whatever needs it.
"""

from datetime import datetime, date
from typing import Iterable, Optional

from .calendar_model import Calendar, SUNDAY
from .debug import debug_print
from .errors import (
    CalendarAlreadyExistsError, InvalidArgumentError, NoSuchCalendarError, StorageError,
)
from .event import Event
from .notifier import ChangeCallback
from .storage import CalendarStorageBackend


DEFAULT_CALENDAR_NAME = "Default"

LOAD_POLICIES = ("fail", "reset")


def _debug_print(msg: str) -> None:
    debug_print("REGISTRY", msg)


class CalendarRegistry:
    """
    Maps unique, case-sensitive names to Calendar objects.

    Listeners added with add_listener() are attached to every calendar in the
    registry, including calendars created later.
    """

    def __init__(self, week_start: int = SUNDAY):
        self._calendars: dict[str, Calendar] = {}
        self._listeners: list[ChangeCallback] = []
        self.week_start = week_start

    @classmethod
    def bootstrap(cls, default_name: str = DEFAULT_CALENDAR_NAME, week_start: int = SUNDAY) -> 'CalendarRegistry':
        """Create a registry holding one empty calendar."""
        registry = cls(week_start=week_start)
        registry.create(default_name)
        return registry

    @classmethod
    def load(
        cls,
        storage: CalendarStorageBackend,
        on_error: str = "fail",
        default_name: str = DEFAULT_CALENDAR_NAME,
        week_start: int = SUNDAY,
    ) -> 'CalendarRegistry':
        """
        Build a registry from persisted state.

        With nothing stored yet the registry is bootstrapped with one empty
        calendar named `default_name`.

        Args:
            storage: Backend to read from
            on_error: "fail" re-raises StorageError, "reset" starts over with
                a bootstrapped registry
            default_name: Name of the bootstrap calendar
            week_start: Weekday weeks begin on (Monday=0 ... Sunday=6)

        Raises:
            StorageError: if the state cannot be read and on_error is "fail"
            InvalidArgumentError: if on_error is not a known policy
        """
        if on_error not in LOAD_POLICIES:
            raise InvalidArgumentError(f"Unknown load policy: {on_error!r}")

        try:
            state = storage.load()
        except StorageError as e:
            if on_error == "fail":
                raise
            _debug_print(f"Load failed, starting over with a fresh registry: {e}")
            return cls.bootstrap(default_name, week_start=week_start)

        if state is None:
            _debug_print("No stored calendars, bootstrapping")
            return cls.bootstrap(default_name, week_start=week_start)

        registry = cls(week_start=week_start)
        for name, events in state.items():
            calendar = registry.create(name)
            for event in events:
                calendar.add_event(event)
        _debug_print(f"Loaded {len(state)} calendars")
        return registry

    def save(self, storage: CalendarStorageBackend) -> None:
        """Write every calendar to storage."""
        storage.save({name: calendar.events for name, calendar in self.items()})

    # ==================== Listeners ====================

    def add_listener(self, callback: ChangeCallback) -> None:
        """Attach a callback to all current and future calendars."""
        if callback in self._listeners:
            return
        self._listeners.append(callback)
        for calendar in self._calendars.values():
            calendar.add_listener(callback)

    def remove_listener(self, callback: ChangeCallback) -> None:
        if callback not in self._listeners:
            return
        self._listeners.remove(callback)
        for calendar in self._calendars.values():
            calendar.remove_listener(callback)

    # ==================== Calendar management ====================

    def list_names(self) -> set[str]:
        """Snapshot of the current calendar names."""
        return set(self._calendars)

    def items(self) -> list[tuple[str, Calendar]]:
        """(name, calendar) pairs sorted by name."""
        return sorted(self._calendars.items(), key=lambda item: item[0])

    def __contains__(self, name: object) -> bool:
        return name in self._calendars

    def __len__(self):
        return len(self._calendars)

    def get(self, name: str) -> Calendar:
        try:
            return self._calendars[name]
        except KeyError:
            raise NoSuchCalendarError(name) from None

    def create(self, name: str) -> Calendar:
        """
        Add a new, empty calendar.

        Raises:
            CalendarAlreadyExistsError: if the name is taken
        """
        if name in self._calendars:
            raise CalendarAlreadyExistsError(name)
        calendar = Calendar()
        for callback in self._listeners:
            calendar.add_listener(callback)
        self._calendars[name] = calendar
        _debug_print(f"Created calendar {name!r}")
        return calendar

    def delete(self, name: str) -> bool:
        """Remove a calendar. Returns False if there was none by that name."""
        calendar = self._calendars.pop(name, None)
        if calendar is None:
            return False
        for callback in self._listeners:
            calendar.remove_listener(callback)
        _debug_print(f"Deleted calendar {name!r}")
        return True

    def rename(self, old_name: str, new_name: str) -> None:
        """
        Move a calendar to a new name, keeping its events.

        Raises:
            NoSuchCalendarError: if old_name is not registered
            CalendarAlreadyExistsError: if new_name is already registered
        """
        if old_name not in self._calendars:
            raise NoSuchCalendarError(old_name)
        if new_name in self._calendars:
            raise CalendarAlreadyExistsError(new_name)
        self._calendars[new_name] = self._calendars.pop(old_name)
        _debug_print(f"Renamed calendar {old_name!r} to {new_name!r}")

    # ==================== Events ====================

    def add_event(self, name: str, event: Event) -> None:
        self.get(name).add_event(event)

    def remove_event(self, name: str, event: Event) -> None:
        self.get(name).remove_event(event)

    def mark_modified(self, name: str, event: Event) -> None:
        self.get(name).mark_modified(event)

    # ==================== Queries ====================

    def query_all(self, name: str) -> list[Event]:
        return self.get(name).all_events()

    def query_range(self, name: str, before: Optional[datetime], after: Optional[datetime]) -> list[Event]:
        return self.get(name).events_in_range(before, after)

    def query_year(self, name: str, year: int) -> list[Event]:
        return self.get(name).events_in_year(year)

    def query_month(self, name: str, year: int, month: int) -> list[Event]:
        return self.get(name).events_in_month(year, month)

    def query_week(self, name: str, day: date) -> list[Event]:
        return self.get(name).events_in_week(day, self.week_start)

    def query_day(self, name: str, year_or_date, month: Optional[int] = None,
                  day: Optional[int] = None) -> list[Event]:
        return self.get(name).events_in_day(year_or_date, month, day)

    def query_hour(self, name: str, year_or_datetime, month: Optional[int] = None,
                   day: Optional[int] = None, hour: Optional[int] = None) -> list[Event]:
        return self.get(name).events_in_hour(year_or_datetime, month, day, hour)

    def events_for_day(self, day: date, names: Optional[Iterable[str]] = None) -> list[tuple[str, Event]]:
        """
        Collect one day's events as (calendar name, event) pairs.

        Names that are not registered are skipped. Calendars are visited in
        name order.
        """
        wanted = self.list_names() if names is None else set(names) & self.list_names()
        pairs = []
        for name in sorted(wanted):
            pairs.extend((name, event) for event in self._calendars[name].events_in_day(day))
        return pairs

    def __repr__(self):
        return f"CalendarRegistry(names={sorted(self._calendars)!r})"
