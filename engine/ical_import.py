"""
iCalendar adapter: VCALENDAR text to CalendarEvent values.

Recurring events are expanded inside the requested window using the
recurring_ical_events library. iCalendar all-day events have an exclusive
DTEND; the layout engine works with inclusive end dates, so one day is
taken off.
"""

import sys
from datetime import date, datetime, timedelta
from typing import Optional

from icalendar import Calendar as ICalCalendar, Event as ICalEvent
from recurring_ical_events import of as recurring_events_of

from .event_model import CalendarEvent
from .timezone_utils import to_local_naive


def _debug_print(msg: str) -> None:
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] ICAL: {msg}", file=sys.stderr)


def _is_date_only(value) -> bool:
    return isinstance(value, date) and not isinstance(value, datetime)


def _format_value(value) -> str:
    if _is_date_only(value):
        return value.isoformat()
    return to_local_naive(value).isoformat(timespec='seconds')


def _text(component: ICalEvent, key: str) -> Optional[str]:
    value = component.get(key)
    return str(value) if value is not None else None


def _first_category(component: ICalEvent) -> Optional[str]:
    categories = component.get('CATEGORIES')
    if isinstance(categories, list):
        categories = categories[0] if categories else None
    cats = getattr(categories, 'cats', None)
    return str(cats[0]) if cats else None


def convert_vevent(component: ICalEvent, recurring: bool = False) -> CalendarEvent:
    """
    Convert one VEVENT (or expanded occurrence) into a CalendarEvent.

    Raises:
        ValueError: if the component has no usable DTSTART.
    """
    dtstart = component.get('DTSTART')
    if dtstart is None:
        raise ValueError("VEVENT without DTSTART")
    start = dtstart.dt
    all_day = _is_date_only(start)

    end_value = None
    dtend = component.get('DTEND')
    if dtend is not None:
        end = dtend.dt
        if all_day and _is_date_only(end):
            # Exclusive end -> inclusive last day
            end = max(start, end - timedelta(days=1))
        end_value = _format_value(end)

    uid = _text(component, 'UID') or ''
    start_value = _format_value(start)
    event_id = f"{uid}@{start_value[:10]}" if recurring else uid

    return CalendarEvent(
        id=event_id,
        title=_text(component, 'SUMMARY') or 'Untitled',
        start=start_value,
        end=end_value,
        is_all_day=all_day,
        color=_text(component, 'COLOR'),
        type=_first_category(component),
        description=_text(component, 'DESCRIPTION'),
    )


def events_from_ical(ical_text: str, window_start: date, window_end: date) -> list[CalendarEvent]:
    """
    Parse VCALENDAR text and return the events touching [window_start, window_end].

    Args:
        ical_text: Raw iCalendar text.
        window_start: First visible date.
        window_end: Last visible date (inclusive).

    Returns:
        Events in the order the library yields them. Components that
        cannot be converted are skipped and reported on stderr.
    """
    calendar = ICalCalendar.from_ical(ical_text)
    recurring_uids = {
        str(component.get('UID'))
        for component in calendar.walk('VEVENT')
        if component.get('RRULE') is not None
    }

    occurrences = recurring_events_of(calendar).between(window_start, window_end + timedelta(days=1))
    events = []
    for component in occurrences:
        try:
            uid = _text(component, 'UID')
            events.append(convert_vevent(component, recurring=uid in recurring_uids))
        except (ValueError, TypeError, AttributeError) as e:
            _debug_print(f"Skipping VEVENT {component.get('UID')}: {e}")
    _debug_print(f"Loaded {len(events)} events for {window_start} to {window_end}")
    return events
