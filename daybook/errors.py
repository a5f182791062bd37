"""
Error types raised by the Daybook core.

Registry lookups raise NoSuchCalendarError, name collisions raise
CalendarAlreadyExistsError. Storage problems are reported as StorageError,
which is an OSError so callers can treat it like any other I/O failure.
"""


class DaybookError(Exception):
    """Base class for all Daybook errors."""


class CalendarAlreadyExistsError(DaybookError):
    """A calendar by the given name already exists."""

    def __init__(self, name: str):
        super().__init__(f'A calendar already exists with the name "{name}"')
        self.name = name


class NoSuchCalendarError(DaybookError, KeyError):
    """No calendar with the given name exists."""

    def __init__(self, name: str):
        super().__init__(f'No calendar exists with the name "{name}"')
        self.name = name

    def __str__(self):
        # KeyError would repr() the message
        return self.args[0]


class InvalidArgumentError(DaybookError, ValueError):
    """A required argument is missing or malformed."""


class StorageError(DaybookError, OSError):
    """Reading or writing persisted calendars failed."""
