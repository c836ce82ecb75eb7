#!/usr/bin/env python3
"""
Calendar Layout - dump the layout model for a month or week as JSON.

Reads events from a JSON list (dashboard wire format) or an .ics file.
"""

import sys
import json
import argparse
from datetime import date
from pathlib import Path

from engine.config import Config
from engine.event_model import CalendarEvent
from engine.formatting import format_date_range, format_event_time
from engine.grid import MonthWindow, WeekWindow, build_grid
from engine.ical_import import events_from_ical
from engine.layout_engine import CalendarLayoutEngine
from engine.timezone_utils import now_local_naive, set_timezone


def parse_month(value: str) -> MonthWindow:
    try:
        year, month = value.split('-')
        return MonthWindow(int(year), int(month))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}")


def parse_week(value: str) -> WeekWindow:
    try:
        return WeekWindow(date.fromisoformat(value))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Calendar Layout - compute bars, cells and timed positions for a calendar view"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: built-in settings)"
    )
    parser.add_argument(
        "-e", "--events",
        type=Path,
        required=True,
        help="JSON event list or .ics file"
    )
    window = parser.add_mutually_exclusive_group(required=True)
    window.add_argument("--month", type=parse_month, help="Month view, YYYY-MM")
    window.add_argument("--week", type=parse_week, help="Week view containing YYYY-MM-DD")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    return parser.parse_args(argv)


def load_events(path: Path, first: date, last: date) -> list:
    text = path.read_text(encoding='utf-8')
    if path.suffix.lower() == '.ics':
        return events_from_ical(text, first, last)
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("Event file must contain a JSON list")
    return [CalendarEvent.from_dict(item) for item in data]


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = Config.load(args.config) if args.config else Config()
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (ValueError, OSError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    set_timezone(config.timezone)
    window = args.month or args.week

    try:
        grid = build_grid(window)
        events = load_events(args.events, grid.first_date, grid.last_date)
    except (ValueError, OSError) as e:
        print(f"Error loading events: {e}", file=sys.stderr)
        return 1

    engine = CalendarLayoutEngine(config.layout, config.holidays)
    model = engine.layout(events, window, now=now_local_naive())

    if args.debug:
        print(f"Loaded configuration from: {args.config or 'defaults'}", file=sys.stderr)
        print(f"  Events: {len(events)}", file=sys.stderr)
        print(f"  Bars: {len(model.bars)}", file=sys.stderr)
        print(f"  Errors: {len(model.errors)}", file=sys.stderr)

    output = model.to_dict()
    output['caps'] = {day: engine.cell_cap(date.fromisoformat(day)) for day in output['singleDay']}
    failed = {error.event_id for error in model.errors}
    output['labels'] = {
        event.id: {
            'time': format_event_time(event, config.labels),
            'dateRange': format_date_range(event, config.labels),
        }
        for event in events if event.id not in failed
    }
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
