"""
Multi-day bar layout.

Events spanning more than one calendar date become one bar per week-row
they touch. Bars in the same row are stacked in the order the events were
supplied; this is not a minimal-row interval colouring.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Sequence

from .event_model import NormalizedEvent
from .grid import GridModel, MonthWindow
from .span_index import DateSpanIndex


@dataclass(frozen=True)
class Bar:
    event_id: str
    row: int
    start_column: int
    span: int  # inclusive column count, >= 1
    is_start: bool
    is_end: bool
    stack_slot: int

    @property
    def end_column(self) -> int:
        return self.start_column + self.span - 1

    def to_dict(self) -> dict:
        return {
            'eventId': self.event_id,
            'row': self.row,
            'startColumn': self.start_column,
            'span': self.span,
            'isStart': self.is_start,
            'isEnd': self.is_end,
            'stackSlot': self.stack_slot,
        }


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _row_bounds(grid: GridModel, row: int) -> Optional[tuple[date, date]]:
    """
    Visible date range of a week-row.

    Sunday..Saturday for the week view; for the month view only the
    in-window cells count.
    """
    week_start = grid.row_start(row)
    if isinstance(grid.window, MonthWindow):
        columns = grid.in_window_columns(row)
        if columns is None:
            return None
        first, last = columns
        return week_start + timedelta(days=first), week_start + timedelta(days=last)
    return week_start, week_start + timedelta(days=6)


def segment_for_row(event: NormalizedEvent, grid: GridModel, row: int) -> Optional[tuple[int, int, bool, bool]]:
    """
    Columns an event occupies in one week-row.

    Returns (start_column, end_column, is_start, is_end), or None when the
    event does not reach the visible part of the row. The columns stop at
    the in-window cells; is_start and is_end look at the whole Sunday to
    Saturday week.
    """
    bounds = _row_bounds(grid, row)
    if bounds is None:
        return None
    row_first, row_last = bounds
    if event.end_date < row_first or event.start_date > row_last:
        return None

    week_start = grid.row_start(row)
    week_end = week_start + timedelta(days=6)
    seg_start = max(event.start_date, row_first)
    seg_end = min(event.end_date, row_last)
    start_column = _clamp((seg_start - week_start).days, 0, 6)
    end_column = _clamp((seg_end - week_start).days, 0, 6)
    if start_column > end_column:
        return None
    return (
        start_column,
        end_column,
        week_start <= event.start_date <= week_end,
        week_start <= event.end_date <= week_end,
    )


def layout_bars(events: Sequence[NormalizedEvent], grid: GridModel) -> list[Bar]:
    """
    Lay out multi-day events over the grid.

    Single-day events, all-day or not, are ignored here. Bars come back
    ordered by row, then stack slot.
    """
    index: DateSpanIndex[NormalizedEvent] = DateSpanIndex()
    for event in events:
        if event.is_multi_day:
            index.add(event.start_date, event.end_date, event)

    bars: list[Bar] = []
    for row in range(grid.rows):
        week_start = grid.row_start(row)
        slot = 0
        for event in index.intersecting(week_start, week_start + timedelta(days=6)):
            segment = segment_for_row(event, grid, row)
            if segment is None:
                continue
            start_column, end_column, is_start, is_end = segment
            bars.append(Bar(
                event_id=event.id,
                row=row,
                start_column=start_column,
                span=end_column - start_column + 1,
                is_start=is_start,
                is_end=is_end,
                stack_slot=slot,
            ))
            slot += 1
    return bars
