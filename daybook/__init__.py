"""
Daybook Core Module

This module provides the core functionality for calendar operations:
- Events (event.py) - Event and the validating create_event() factory
- Calendars (calendar_model.py) - per-name event store with range queries
- Registry (registry.py) - named calendars with unique names
- Layout (layout.py) - greedy column layout for overlapping events
- Storage (storage.py) - JSON/iCalendar persistence
- Configuration parsing (config.py)
"""

from .errors import (
    DaybookError,
    CalendarAlreadyExistsError,
    NoSuchCalendarError,
    InvalidArgumentError,
    StorageError,
)
from .event import Event, create_event
from .notifier import ChangeNotifier
from .calendar_model import Calendar
from .registry import CalendarRegistry, DEFAULT_CALENDAR_NAME
from .layout import OverlapLayoutEngine, Placement
from .storage import CalendarStorageBackend, JsonCalendarStorage, create_storage_backend
from .config import Config

__all__ = [
    'DaybookError',
    'CalendarAlreadyExistsError',
    'NoSuchCalendarError',
    'InvalidArgumentError',
    'StorageError',
    'Event',
    'create_event',
    'ChangeNotifier',
    'Calendar',
    'CalendarRegistry',
    'DEFAULT_CALENDAR_NAME',
    'OverlapLayoutEngine',
    'Placement',
    'CalendarStorageBackend',
    'JsonCalendarStorage',
    'create_storage_backend',
    'Config',
]
