"""
Calendar events.

An Event holds its start as a single datetime instant and exposes the
calendar date and time of day as accessors over it, so the two can never
drift apart. The end is a time of day on the same date.

Events are compared by identity: two events with the same fields are still
two different entries. Setters never re-validate; use create_event() to
build an event from untrusted input.
"""

import re
import uuid
from datetime import datetime, date as dt_date, time as dt_time, timedelta
from typing import Optional

from .errors import InvalidArgumentError


_COLOR_RE = re.compile(r'^#[0-9a-fA-F]{6}$')

# Last whole second of a day; stored times have second resolution
_END_OF_DAY = dt_time(23, 59, 59)


class Event:
    """One scheduled item on a calendar."""

    __slots__ = ('title', '_start', 'end_time', 'location', 'notes', 'color', 'uid')

    def __init__(
        self,
        title: str,
        date: dt_date,
        start_time: dt_time,
        end_time: dt_time,
        location: Optional[str] = None,
        notes: Optional[str] = None,
        color: Optional[str] = None,
        uid: Optional[str] = None,
    ):
        if title is None:
            raise InvalidArgumentError("Event title must not be None")
        self.title = title
        self._start = datetime.combine(date, start_time)
        self.end_time = end_time
        self.location = location
        self.notes = notes
        self.color = color
        self.uid = uid or str(uuid.uuid4())

    @classmethod
    def at(cls, title: str, when: datetime, end_time: Optional[dt_time] = None) -> 'Event':
        """
        Create an event starting at a single instant.

        Without an explicit end time the event lasts one hour, cut off at
        the end of the same day.
        """
        if end_time is None:
            later = when + timedelta(hours=1)
            end_time = later.time() if later.date() == when.date() else _END_OF_DAY
        return cls(title, when.date(), when.time(), end_time)

    # ==================== Time accessors ====================

    @property
    def start(self) -> datetime:
        """Start instant (date and start time combined)."""
        return self._start

    @start.setter
    def start(self, value: datetime):
        self._start = value

    @property
    def date(self) -> dt_date:
        return self._start.date()

    @date.setter
    def date(self, value: dt_date):
        self._start = datetime.combine(value, self._start.time())

    @property
    def start_time(self) -> dt_time:
        return self._start.time()

    @start_time.setter
    def start_time(self, value: dt_time):
        self._start = datetime.combine(self._start.date(), value)

    @property
    def end(self) -> datetime:
        """End instant on the event's date."""
        return datetime.combine(self._start.date(), self.end_time)

    @property
    def duration(self) -> timedelta:
        """Duration; negative when an edit left the times inverted."""
        return self.end - self._start

    @property
    def rgb(self) -> Optional[tuple[int, int, int]]:
        """Color as an (r, g, b) triple, or None if no color is set."""
        if not self.color:
            return None
        value = self.color.lstrip('#')
        return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    def __repr__(self):
        return (f"Event(title={self.title!r}, start={self._start.isoformat()}, "
                f"end_time={self.end_time.isoformat()})")


def create_event(
    title: str,
    date: dt_date,
    start_time: dt_time,
    end_time: dt_time,
    location: Optional[str] = None,
    notes: Optional[str] = None,
    color: Optional[str] = None,
) -> Event:
    """
    Validate input and create an Event.

    Raises:
        InvalidArgumentError: if the title is missing, a date or time has
            the wrong type, the end is not after the start, or the color is
            not written as #rrggbb.
    """
    if title is None:
        raise InvalidArgumentError("Please enter an event title.")
    # datetime is a date subclass, but it would silently drop its time here
    if not isinstance(date, dt_date) or isinstance(date, datetime):
        raise InvalidArgumentError(f"Event date must be a date, got {type(date).__name__}")
    for label, value in (("start", start_time), ("end", end_time)):
        if not isinstance(value, dt_time):
            raise InvalidArgumentError(f"Event {label} time must be a time, got {type(value).__name__}")
    if end_time <= start_time:
        raise InvalidArgumentError("End time must be after start time.")
    if color is not None and not _COLOR_RE.match(color):
        raise InvalidArgumentError(f"Invalid color {color!r}, expected #rrggbb")

    return Event(title, date, start_time, end_time, location=location, notes=notes, color=color)
