#!/usr/bin/env python3
"""
Daybook - manage named calendars of timed events from the command line.

This is the main entry point for the application.
"""

import sys
import argparse
from datetime import date, time, timedelta
from pathlib import Path

from daybook.config import Config
from daybook.debug import set_debug, debug_print
from daybook.errors import DaybookError
from daybook.event import create_event
from daybook.layout import OverlapLayoutEngine
from daybook.registry import CalendarRegistry
from daybook.storage import JsonCalendarStorage


EXAMPLE_CONFIG = """
[General]
state_file = "~/.local/share/daybook/calendars.json"
default_calendar = "Default"
on_load_error = "fail"

[Layout]
hour_subdivisions = 4

[Calendar]
week_start = "sunday"

[Localization]
day_names = "Mon Tue Wed Thu Fri Sat Sun"
"""


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date {value!r}, expected YYYY-MM-DD")


def _parse_time(value: str) -> time:
    try:
        return time.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid time {value!r}, expected HH:MM")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="daybook",
        description="Daybook - named calendars of timed events"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: auto-detect)"
    )
    parser.add_argument(
        "--state",
        type=Path,
        help="Path to the calendar state file (overrides the configuration)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("calendars", help="List calendar names")

    p = commands.add_parser("create", help="Create a calendar")
    p.add_argument("name")

    p = commands.add_parser("delete", help="Delete a calendar")
    p.add_argument("name")

    p = commands.add_parser("rename", help="Rename a calendar")
    p.add_argument("old_name")
    p.add_argument("new_name")

    p = commands.add_parser("add", help="Add an event to a calendar")
    p.add_argument("calendar")
    p.add_argument("title")
    p.add_argument("--date", type=_parse_date, required=True, help="YYYY-MM-DD")
    p.add_argument("--start", type=_parse_time, required=True, help="HH:MM")
    p.add_argument("--end", type=_parse_time, required=True, help="HH:MM")
    p.add_argument("--location")
    p.add_argument("--notes")
    p.add_argument("--color", help="#rrggbb")

    p = commands.add_parser("remove", help="Remove an event by the index shown by 'events'")
    p.add_argument("calendar")
    p.add_argument("index", type=int)

    events_parser = p = commands.add_parser("events", help="List events of a calendar")
    p.add_argument("calendar")
    p.add_argument("--year", type=int)
    p.add_argument("--month", type=int, help="Requires --year")
    p.add_argument("--day", type=int, help="Requires --month")
    p.add_argument("--hour", type=int, help="Requires --day")

    for name, help_text in (("day", "Show the column layout of one day"),
                            ("week", "Show the events of one week")):
        p = commands.add_parser(name, help=help_text)
        p.add_argument("date", type=_parse_date)
        p.add_argument("--calendar", action="append", dest="calendars",
                       help="Only show this calendar (repeatable)")

    args = parser.parse_args(argv)
    if args.command == "events":
        _check_period_filters(events_parser, args)
    return args


def _check_period_filters(parser, args) -> None:
    """--month needs --year, --day needs --month, --hour needs --day."""
    given = None
    for flag in ("hour", "day", "month", "year"):
        value = getattr(args, flag)
        if value is None and given is not None:
            parser.error(f"--{given} requires --{flag}")
        if value is not None:
            given = flag


def _format_event(event) -> str:
    text = f"{event.date.isoformat()} {event.start_time:%H:%M}-{event.end_time:%H:%M}  {event.title}"
    if event.location:
        text += f"  @ {event.location}"
    return text


def _query(registry: CalendarRegistry, args):
    name = args.calendar
    if args.year is None:
        return registry.query_all(name)
    if args.month is None:
        return registry.query_year(name, args.year)
    if args.day is None:
        return registry.query_month(name, args.year, args.month)
    if args.hour is None:
        return registry.query_day(name, args.year, args.month, args.day)
    return registry.query_hour(name, args.year, args.month, args.day, args.hour)


def run_command(args, config: Config, registry: CalendarRegistry) -> bool:
    """
    Execute one command against the registry.

    Returns True if the registry changed and needs saving.
    """
    if args.command == "calendars":
        for name in sorted(registry.list_names()):
            print(name)
        return False

    if args.command == "create":
        registry.create(args.name)
        return True

    if args.command == "delete":
        if not registry.delete(args.name):
            print(f"No calendar named \"{args.name}\"")
            return False
        return True

    if args.command == "rename":
        registry.rename(args.old_name, args.new_name)
        return True

    if args.command == "add":
        event = create_event(args.title, args.date, args.start, args.end,
                             location=args.location, notes=args.notes, color=args.color)
        registry.add_event(args.calendar, event)
        return True

    if args.command == "remove":
        events = registry.query_all(args.calendar)
        if not 0 <= args.index < len(events):
            raise DaybookError(f"No event with index {args.index} in \"{args.calendar}\"")
        registry.remove_event(args.calendar, events[args.index])
        return True

    if args.command == "events":
        all_events = registry.query_all(args.calendar)
        selected = {id(e) for e in _query(registry, args)}
        for index, event in enumerate(all_events):
            if id(event) in selected:
                print(f"{index:3d}  {_format_event(event)}")
        return False

    if args.command == "day":
        engine = OverlapLayoutEngine(config.layout.hour_subdivisions)
        placements = engine.placements(registry.events_for_day(args.date, args.calendars))
        total = placements[0].total_columns if placements else 0
        weekday = config.localization.day_name(args.date.weekday())
        print(f"{weekday} {args.date.isoformat()} ({total} columns)")
        for placement in sorted(placements, key=lambda p: (p.column, p.start_row)):
            print(f"  [{placement.column}] {_format_event(placement.event)}  ({placement.calendar_name})")
        return False

    if args.command == "week":
        week_start = config.calendar.week_start
        first = args.date - timedelta(days=(args.date.weekday() - week_start) % 7)
        print(f"Week of {first.day} {config.localization.month_name(first.month)} {first.year}")
        for offset in range(7):
            day = first + timedelta(days=offset)
            print(f"{config.localization.day_name(day.weekday())} {day.isoformat()}")
            for calendar_name, event in registry.events_for_day(day, args.calendars):
                print(f"    {event.start_time:%H:%M}-{event.end_time:%H:%M}  {event.title}  ({calendar_name})")
        return False

    raise DaybookError(f"Unknown command: {args.command}")


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    set_debug(args.debug)

    # Load configuration
    try:
        config = Config.load(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("\nExample configuration:", file=sys.stderr)
        print(EXAMPLE_CONFIG, file=sys.stderr)
        return 1
    except (DaybookError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    if args.state is not None:
        config.state_file = args.state
    debug_print("MAIN", f"State file: {config.state_file}")

    try:
        storage = JsonCalendarStorage(config.state_file)
        registry = CalendarRegistry.load(
            storage,
            on_error=config.on_load_error,
            default_name=config.default_calendar,
            week_start=config.calendar.week_start,
        )
        if run_command(args, config, registry):
            registry.save(storage)
    except (DaybookError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
