"""
Event model for the layout engine.

Events arrive in the dashboard's wire format: ISO date or date-time
strings for start and end. They are split on 'T' into a calendar date and
an optional clock time. Dates stay naive; no UTC conversion happens here.
"""

import re
from dataclasses import dataclass
from datetime import date, time
from typing import Any, Optional


_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_TIME_RE = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?")


class ValidationError(Exception):
    """An individual event could not be parsed. Other events are unaffected."""

    def __init__(self, event_id: str, reason: str):
        super().__init__(f"Event {event_id!r}: {reason}")
        self.event_id = event_id
        self.reason = reason

    def __eq__(self, other):
        if isinstance(other, ValidationError):
            return (self.event_id, self.reason) == (other.event_id, other.reason)
        return NotImplemented

    def __hash__(self):
        return hash((self.event_id, self.reason))

    def __repr__(self):
        return f"ValidationError(event_id={self.event_id!r}, reason={self.reason!r})"


@dataclass(frozen=True)
class CalendarEvent:
    """
    An event as supplied by the event source.

    `start` and `end` are ISO-8601 strings ("2025-01-29" or
    "2025-01-29T09:15:00"). A missing end means the event ends on its
    start date.
    """
    id: str
    title: str
    start: str
    end: Optional[str] = None
    is_all_day: bool = True
    color: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'CalendarEvent':
        """
        Build an event from the wire format.

        Accepts both `start`/`end` and the dashboard API's `date`/`endDate`
        keys. `isAllDay` defaults to true, as it does in the API. Values are
        passed through unchecked; normalize_event rejects the wrong types.
        """
        start = data.get('start', data.get('date'))
        end = data.get('end', data.get('endDate'))
        return cls(
            id=str(data.get('id', '')),
            title=data.get('title') or '',
            start=start if start is not None else '',
            end=end or None,
            is_all_day=data.get('isAllDay', data.get('is_all_day', True)),
            color=data.get('color'),
            type=data.get('type'),
            description=data.get('description'),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'start': self.start,
            'end': self.end,
            'isAllDay': self.is_all_day,
            'color': self.color,
            'type': self.type,
            'description': self.description,
        }


@dataclass(frozen=True)
class NormalizedEvent:
    """
    Parsed, date-only view of an event.

    start_time/end_time are None for all-day events and for date-only
    strings. `inverted` records that the input ended before it started
    and was clamped to a single day.
    """
    event: CalendarEvent
    start_date: date
    end_date: date
    start_time: Optional[time]
    end_time: Optional[time]
    has_explicit_end: bool
    inverted: bool = False

    @property
    def id(self) -> str:
        return self.event.id

    @property
    def is_multi_day(self) -> bool:
        return self.end_date != self.start_date

    @property
    def is_timed(self) -> bool:
        return not self.event.is_all_day and self.start_time is not None

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


def split_iso(value: str) -> tuple[str, Optional[str]]:
    """Split an ISO string on 'T' into its date part and optional time part."""
    if 'T' in value:
        date_part, time_part = value.split('T', 1)
        return date_part, time_part
    return value, None


def parse_date_part(value: str) -> date:
    """Parse a YYYY-MM-DD string as a naive calendar date."""
    match = _DATE_RE.match(value.strip())
    if not match:
        raise ValueError(f"not a YYYY-MM-DD date: {value!r}")
    year, month, day = (int(g) for g in match.groups())
    return date(year, month, day)


def parse_time_part(value: str) -> time:
    """
    Parse the clock part of an ISO date-time.

    Only hours, minutes and seconds are used; fractions and offsets
    after them are ignored, which keeps the wall-clock reading.
    """
    match = _TIME_RE.match(value.strip())
    if not match:
        raise ValueError(f"not an HH:MM time: {value!r}")
    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3)) if match.group(3) else 0
    return time(hour, minute, second)


def normalize_event(event: CalendarEvent) -> NormalizedEvent:
    """
    Parse an event's start/end strings.

    Raises:
        ValidationError: if either string is malformed.
    """
    if not event.start:
        raise ValidationError(event.id, "missing start")
    if not isinstance(event.start, str):
        raise ValidationError(event.id, f"start must be an ISO string, got {type(event.start).__name__}")
    if event.end is not None and not isinstance(event.end, str):
        raise ValidationError(event.id, f"end must be an ISO string, got {type(event.end).__name__}")
    if not isinstance(event.is_all_day, bool):
        raise ValidationError(event.id, f"isAllDay must be a boolean, got {event.is_all_day!r}")

    start_str, start_time_str = split_iso(event.start)
    has_explicit_end = bool(event.end)
    end_str, end_time_str = split_iso(event.end) if has_explicit_end else (start_str, None)

    try:
        start_date = parse_date_part(start_str)
        end_date = parse_date_part(end_str)
        start_time = parse_time_part(start_time_str) if start_time_str else None
        end_time = parse_time_part(end_time_str) if end_time_str else None
    except ValueError as e:
        raise ValidationError(event.id, str(e)) from e

    if event.is_all_day:
        start_time = None
        end_time = None

    inverted = False
    if end_date < start_date:
        # Collapse to the start day; the positioner's minimum block covers the time.
        end_date = start_date
        end_time = None
        inverted = True

    return NormalizedEvent(
        event=event,
        start_date=start_date,
        end_date=end_date,
        start_time=start_time,
        end_time=end_time,
        has_explicit_end=has_explicit_end,
        inverted=inverted,
    )


def coerce_event(value: Any) -> CalendarEvent:
    """Accept either a CalendarEvent or a wire-format dict."""
    if isinstance(value, CalendarEvent):
        return value
    if isinstance(value, dict):
        return CalendarEvent.from_dict(value)
    raise TypeError(f"Unsupported event value: {type(value).__name__}")
