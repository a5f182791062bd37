"""
A single calendar: an ordered collection of events with range queries.

Every period query (year, month, week, day, hour) is answered by
events_in_range(), which matches events whose start lies strictly between
its two bounds. Periods are half-open, [first instant, first instant of the
next period): the lower bound handed to events_in_range() is moved back by
one microsecond, the resolution of datetime, so an event starting exactly at
the first instant of a period belongs to that period and not the previous
one. At the ends of the datetime range a bound that cannot be represented is
passed as None, which leaves that side open.
"""

from datetime import MAXYEAR, datetime, date, timedelta
from typing import Iterator, Optional, Union

from .event import Event
from .notifier import ChangeNotifier, ChangeCallback


# Smallest step between two datetime values
RESOLUTION = timedelta(microseconds=1)

SUNDAY = 6


class Calendar:
    """
    Events of one calendar in insertion order.

    The same event may be added more than once; removal takes out the first
    occurrence only. Observers are told about every add, remove and
    mark_modified call.
    """

    def __init__(self):
        self._events: list[Event] = []
        self._notifier = ChangeNotifier()

    # ==================== Observers ====================

    def add_listener(self, callback: ChangeCallback) -> None:
        self._notifier.add_listener(callback)

    def remove_listener(self, callback: ChangeCallback) -> None:
        self._notifier.remove_listener(callback)

    # ==================== Mutation ====================

    def add_event(self, event: Event) -> None:
        """Append an event. No duplicate check is made."""
        self._events.append(event)
        self._notifier.notify(self, event)

    def remove_event(self, event: Event) -> None:
        """Remove the first occurrence of this exact event, if present."""
        for i, existing in enumerate(self._events):
            if existing is event:
                del self._events[i]
                break
        self._notifier.notify(self, None)

    def mark_modified(self, event: Event) -> None:
        """Tell observers that an event was edited in place."""
        self._notifier.notify(self, event)

    # ==================== Access ====================

    @property
    def events(self) -> list[Event]:
        """Snapshot of all events in insertion order."""
        return list(self._events)

    def all_events(self) -> list[Event]:
        return self.events

    def __len__(self):
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(list(self._events))

    def __contains__(self, event: object) -> bool:
        return any(existing is event for existing in self._events)

    # ==================== Range queries ====================

    def events_in_range(self, before: Optional[datetime], after: Optional[datetime]) -> list[Event]:
        """
        Events starting strictly after `before` and strictly before `after`.

        A bound of None leaves that side open.
        """
        return [
            e for e in list(self._events)
            if (before is None or before < e.start) and (after is None or e.start < after)
        ]

    def _events_in_period(self, first: datetime, next_first: Optional[datetime]) -> list[Event]:
        # Nothing lies before datetime.min, so that side needs no bound
        before = None if first == datetime.min else first - RESOLUTION
        return self.events_in_range(before, next_first)

    def events_in_year(self, year: int) -> list[Event]:
        return self._events_in_period(datetime(year, 1, 1), _first_of_year(year + 1))

    def events_in_month(self, year: int, month: int) -> list[Event]:
        first = datetime(year, month, 1)
        if month == 12:
            next_first = _first_of_year(year + 1)
        else:
            next_first = datetime(year, month + 1, 1)
        return self._events_in_period(first, next_first)

    def events_in_week(self, day: date, week_start: int = SUNDAY) -> list[Event]:
        """
        Events in the week containing `day`.

        Args:
            day: Any date within the week
            week_start: Weekday the week begins on (Monday=0 ... Sunday=6)
        """
        offset = (day.weekday() - week_start) % 7
        midnight = datetime.combine(day, datetime.min.time())
        first = _shifted(midnight, -timedelta(days=offset)) or datetime.min
        return self._events_in_period(first, _shifted(midnight, timedelta(days=7 - offset)))

    def events_in_day(self, year_or_date: Union[int, date], month: Optional[int] = None,
                      day: Optional[int] = None) -> list[Event]:
        """Events on one day, given as a date or as year, month, day."""
        if isinstance(year_or_date, date):
            year_or_date, month, day = year_or_date.year, year_or_date.month, year_or_date.day
        first = datetime(year_or_date, month, day)
        return self._events_in_period(first, _shifted(first, timedelta(days=1)))

    def events_in_hour(self, year_or_datetime: Union[int, datetime], month: Optional[int] = None,
                       day: Optional[int] = None, hour: Optional[int] = None) -> list[Event]:
        """Events in one hour, given as a datetime or as year, month, day, hour."""
        if isinstance(year_or_datetime, datetime):
            when = year_or_datetime
            first = datetime(when.year, when.month, when.day, when.hour)
        else:
            first = datetime(year_or_datetime, month, day, hour)
        return self._events_in_period(first, _shifted(first, timedelta(hours=1)))

    def __repr__(self):
        return f"Calendar(events={len(self._events)})"


def _first_of_year(year: int) -> Optional[datetime]:
    """Midnight on January 1st, or None past the last representable year."""
    return datetime(year, 1, 1) if year <= MAXYEAR else None


def _shifted(when: datetime, delta: timedelta) -> Optional[datetime]:
    """`when + delta`, or None if that falls outside the datetime range."""
    try:
        return when + delta
    except OverflowError:
        return None
