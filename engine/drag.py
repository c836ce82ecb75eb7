"""
Drag-and-drop date translation.

Dropping an event on an anchor date moves its start to that date and its
end by the same number of days, so the length in days never changes.
Clock times in the original strings are carried over untouched.

A DragSession is a plain value passed from drag start to drop; nothing
about an ongoing drag is kept in module state. Persisting the result and
rolling back on failure belong to the caller.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
from typing import Optional

from .event_model import CalendarEvent, normalize_event, split_iso


@dataclass(frozen=True)
class DragTranslation:
    new_start: str
    new_end: Optional[str]  # None when the event had no explicit end

    def to_dict(self) -> dict:
        return {'newStart': self.new_start, 'newEnd': self.new_end}


def _with_date(original: str, new_date: date) -> str:
    """Replace the date part of an ISO string, keeping any time part."""
    _, time_part = split_iso(original)
    if time_part is None:
        return new_date.isoformat()
    return f"{new_date.isoformat()}T{time_part}"


def translate_event(event: CalendarEvent, anchor_date: date) -> DragTranslation:
    """
    Move an event so it starts on `anchor_date`.

    Raises:
        ValidationError: if the event's dates cannot be parsed.
    """
    normalized = normalize_event(event)
    new_start = _with_date(event.start, anchor_date)
    if not normalized.has_explicit_end:
        return DragTranslation(new_start=new_start, new_end=None)
    new_end_date = anchor_date + timedelta(days=normalized.duration_days)
    if normalized.inverted:
        # Clamped range: the end lands on the new start day
        return DragTranslation(new_start=new_start, new_end=new_end_date.isoformat())
    return DragTranslation(new_start=new_start, new_end=_with_date(event.end, new_end_date))


def translate_to_time(event: CalendarEvent, anchor_date: date, new_time: time) -> DragTranslation:
    """
    Move a timed event to a new date and clock time, keeping its duration.

    Used by the week view where the drop position also picks the start
    time. All-day and date-only events fall back to translate_event.
    """
    normalized = normalize_event(event)
    if not normalized.is_timed:
        return translate_event(event, anchor_date)

    new_start = datetime.combine(anchor_date, new_time)
    if normalized.end_time is None:
        # No end clock time to carry: keep whatever end translate_event gives
        by_date = translate_event(event, anchor_date)
        return DragTranslation(new_start=new_start.isoformat(timespec='seconds'), new_end=by_date.new_end)

    orig_start = datetime.combine(normalized.start_date, normalized.start_time)
    orig_end = datetime.combine(normalized.end_date, normalized.end_time)
    duration = max(timedelta(0), orig_end - orig_start)
    new_end = new_start + duration
    return DragTranslation(
        new_start=new_start.isoformat(timespec='seconds'),
        new_end=new_end.isoformat(timespec='seconds'),
    )


@dataclass(frozen=True)
class DragSession:
    """
    An in-progress drag of one event.

    Only the event as it was when the drag started is kept; the drop
    target alone decides where it lands.
    """
    event: CalendarEvent

    def drop(self, anchor_date: date) -> DragTranslation:
        return translate_event(self.event, anchor_date)

    def drop_at_time(self, anchor_date: date, new_time: time) -> DragTranslation:
        return translate_to_time(self.event, anchor_date, new_time)

    def apply(self, translation: DragTranslation) -> CalendarEvent:
        """The event with the translation applied, for an optimistic update."""
        return replace(self.event, start=translation.new_start, end=translation.new_end)

    def rollback(self) -> CalendarEvent:
        """The event as it was before the drag, for when persisting fails."""
        return self.event

    def is_noop(self, anchor_date: date) -> bool:
        """True when dropping on `anchor_date` would not move the event."""
        return self.drop(anchor_date) == DragTranslation(self.event.start, self.event.end or None)


def begin_drag(event: CalendarEvent) -> DragSession:
    """
    Start a drag.

    Raises:
        ValidationError: if the event's dates cannot be parsed.
    """
    normalize_event(event)
    return DragSession(event=event)
