"""
Single-day event assignment.

Pure filtering: which events sit entirely on one date, how many do not fit
under a display cap, and how many events of any length touch a date. The
cap itself is the caller's policy.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from .event_model import CalendarEvent, NormalizedEvent
from .grid import GridModel
from .span_index import DateSpanIndex


def single_day_events(events: Sequence[NormalizedEvent], day: date) -> list[CalendarEvent]:
    """Events starting and ending on `day`, in input order."""
    return [e.event for e in events if e.start_date == e.end_date == day]


def overflow(count: int, cap: int) -> int:
    """Events hidden once `cap` are shown. A cap below zero counts as zero."""
    return max(0, count - max(cap, 0))


def touching_count(events: Sequence[NormalizedEvent], day: date) -> int:
    """All events covering `day`, multi-day ones included."""
    return sum(1 for e in events if e.covers(day))


def event_dots(events: Sequence[NormalizedEvent], day: date, limit: int = 3) -> list[CalendarEvent]:
    """The first `limit` events touching `day`, for compact dot indicators."""
    return [e.event for e in events if e.covers(day)][:max(limit, 0)]


@dataclass
class SingleDayAssignment:
    """Per-date results for the in-window cells of a grid."""
    by_date: dict[date, list[CalendarEvent]] = field(default_factory=dict)
    touching: dict[date, int] = field(default_factory=dict)

    def events_on(self, day: date) -> list[CalendarEvent]:
        return self.by_date.get(day, [])

    def overflow(self, day: date, cap: int) -> int:
        return overflow(len(self.events_on(day)), cap)

    def visible(self, day: date, cap: int) -> list[CalendarEvent]:
        return self.events_on(day)[:max(cap, 0)]


def assign_single_day(events: Sequence[NormalizedEvent], grid: GridModel) -> SingleDayAssignment:
    """
    Collect single-day events and touching counts for every in-window cell.

    Cells without events are present with an empty list and a zero count.
    """
    assignment = SingleDayAssignment()
    dates = grid.in_window_dates()
    for day in dates:
        assignment.by_date[day] = []

    index: DateSpanIndex[NormalizedEvent] = DateSpanIndex()
    for event in events:
        if event.start_date == event.end_date and event.start_date in assignment.by_date:
            assignment.by_date[event.start_date].append(event.event)
        index.add(event.start_date, event.end_date, event)

    for day in dates:
        assignment.touching[day] = len(index.covering(day))
    return assignment
