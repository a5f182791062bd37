"""
Configuration parser for Daybook.

Handles TOML file parsing into dataclasses. Every setting has a default, so
a missing config file at the default location simply means "use defaults".
"""

import tomllib
import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional

from .errors import InvalidArgumentError
from .layout import DEFAULT_SUBDIVISIONS_PER_HOUR
from .registry import DEFAULT_CALENDAR_NAME, LOAD_POLICIES
from .storage import get_default_state_path


WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


@dataclass
class LayoutConfig:
    """Configuration for the day grid."""
    hour_subdivisions: int = DEFAULT_SUBDIVISIONS_PER_HOUR  # Rows per hour (4 = quarter hours)


@dataclass
class CalendarConfig:
    """Configuration for calendar queries."""
    week_start: int = 6  # Weekday weeks begin on (0=Monday, 6=Sunday)


DEFAULT_DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
DEFAULT_MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


@dataclass
class LocalizationConfig:
    """Day and month names used by the command line output."""
    day_names: list[str] = field(default_factory=lambda: list(DEFAULT_DAY_NAMES))  # Monday first
    month_names: list[str] = field(default_factory=lambda: list(DEFAULT_MONTH_NAMES))

    def day_name(self, weekday: int) -> str:
        """Name for a Python weekday number (0=Monday)."""
        return self.day_names[weekday] if 0 <= weekday < len(self.day_names) else ""

    def month_name(self, month: int) -> str:
        return self.month_names[month - 1] if 1 <= month <= len(self.month_names) else ""


@dataclass
class Config:
    """Main configuration container for Daybook."""

    state_file: Path = field(default_factory=get_default_state_path)
    default_calendar: str = DEFAULT_CALENDAR_NAME
    on_load_error: str = "fail"  # "fail" or "reset"
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    calendar: CalendarConfig = field(default_factory=CalendarConfig)
    localization: LocalizationConfig = field(default_factory=LocalizationConfig)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'daybook' / 'daybook.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """
        Load configuration from a TOML file.

        An explicitly given file must exist. Without one, the default path
        is tried and defaults are used if nothing is there.

        Raises:
            FileNotFoundError: if `config_path` is given but does not exist
            InvalidArgumentError: if a setting has an unusable value
        """
        if config_path is None:
            config_path = cls.get_default_config_path()
            if not config_path.exists():
                return cls()
        elif not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with Path(config_path).open('rb') as f:
            return cls.from_dict(tomllib.load(f))

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Build a Config from parsed TOML data."""
        # Parse General section
        general = data.get('General', {})
        state_file_str = general.get('state_file')
        state_file = Path(os.path.expanduser(state_file_str)) if state_file_str else get_default_state_path()

        default_calendar = general.get('default_calendar', DEFAULT_CALENDAR_NAME)
        if not isinstance(default_calendar, str):
            raise InvalidArgumentError(f"default_calendar must be a string, got {default_calendar!r}")

        on_load_error = general.get('on_load_error', 'fail')
        if on_load_error not in LOAD_POLICIES:
            raise InvalidArgumentError(
                f"on_load_error must be one of {', '.join(LOAD_POLICIES)}, got {on_load_error!r}"
            )

        # Parse Layout section
        layout_data = data.get('Layout', {})
        hour_subdivisions = layout_data.get('hour_subdivisions', LayoutConfig.hour_subdivisions)
        if not isinstance(hour_subdivisions, int) or isinstance(hour_subdivisions, bool) or hour_subdivisions < 1:
            raise InvalidArgumentError(f"hour_subdivisions must be a positive integer, got {hour_subdivisions!r}")
        layout = LayoutConfig(hour_subdivisions=hour_subdivisions)

        # Parse Calendar section
        calendar_data = data.get('Calendar', {})
        week_start_name = str(calendar_data.get('week_start', 'sunday')).lower()
        if week_start_name not in WEEKDAYS:
            raise InvalidArgumentError(f"week_start must be a day name, got {week_start_name!r}")
        calendar = CalendarConfig(week_start=WEEKDAYS.index(week_start_name))

        # Localization: space-separated names, all or nothing per list
        localization_data = data.get('Localization', {})
        localization = LocalizationConfig(
            day_names=_name_list(localization_data, 'day_names', DEFAULT_DAY_NAMES),
            month_names=_name_list(localization_data, 'month_names', DEFAULT_MONTH_NAMES),
        )

        return cls(
            state_file=state_file,
            default_calendar=default_calendar,
            on_load_error=on_load_error,
            layout=layout,
            calendar=calendar,
            localization=localization,
        )


def _name_list(section: dict, key: str, defaults: list[str]) -> list[str]:
    value = section.get(key, '')
    if not value:
        return list(defaults)
    names = value.split() if isinstance(value, str) else list(value)
    if len(names) != len(defaults):
        raise InvalidArgumentError(f"{key} needs {len(defaults)} names, got {len(names)}")
    return names
