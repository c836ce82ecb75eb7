"""
Calendar layout engine.

Combines the grid builder, bar layout, single-day assigner and timed
positioner into one pure call: (events, window, now) -> LayoutModel.
The model is plain data; rendering is left to whoever consumes it.
"""

import sys
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Any, Iterable, Optional, Sequence, Union

from .bars import Bar, layout_bars
from .config import LayoutConfig
from .drag import DragSession, begin_drag
from .event_model import CalendarEvent, NormalizedEvent, ValidationError, coerce_event, normalize_event
from .grid import GridModel, ViewWindow, build_grid
from .single_day import assign_single_day, event_dots, overflow
from .timed import TimedPosition, now_indicator, position_event, y_to_time


def _debug_print(msg: str) -> None:
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] LAYOUT: {msg}", file=sys.stderr)


@dataclass
class LayoutModel:
    """Everything a month or week renderer needs, as plain values."""
    grid: GridModel
    bars: list[Bar] = field(default_factory=list)
    single_day: dict[date, list[CalendarEvent]] = field(default_factory=dict)
    touching: dict[date, int] = field(default_factory=dict)
    dots: dict[date, list[CalendarEvent]] = field(default_factory=dict)
    timed_positions: dict[str, TimedPosition] = field(default_factory=dict)
    now_indicator: Optional[float] = None
    now_column: Optional[int] = None
    errors: list[ValidationError] = field(default_factory=list)

    def overflow(self, day: date, cap: int) -> int:
        return overflow(len(self.single_day.get(day, [])), cap)

    def visible_single_day(self, day: date, cap: int) -> list[CalendarEvent]:
        return self.single_day.get(day, [])[:max(cap, 0)]

    def bars_for_row(self, row: int) -> list[Bar]:
        return [bar for bar in self.bars if bar.row == row]

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible rendering of the model."""
        return {
            'cells': [
                {
                    'date': cell.date.isoformat(),
                    'row': cell.row,
                    'column': cell.column,
                    'inWindow': cell.in_window,
                }
                for cell in self.grid.cells
            ],
            'bars': [bar.to_dict() for bar in self.bars],
            'singleDay': {
                day.isoformat(): [event.id for event in events]
                for day, events in self.single_day.items()
            },
            'touching': {day.isoformat(): count for day, count in self.touching.items()},
            'timedPositions': {
                event_id: position.to_dict() for event_id, position in self.timed_positions.items()
            },
            'nowIndicator': self.now_indicator,
            'nowColumn': self.now_column,
            'errors': [{'eventId': e.event_id, 'reason': e.reason} for e in self.errors],
        }


EventInput = Union[CalendarEvent, dict]


class CalendarLayoutEngine:
    """
    Stateless layout contract.

    The engine holds configuration only (metrics and holidays); each call
    to layout() works from its arguments alone, so repeated calls with the
    same input give equal models.
    """

    def __init__(self, layout: Optional[LayoutConfig] = None, holidays: Iterable[date] = ()):
        self.layout_config = layout or LayoutConfig()
        self.layout_config.validate()
        self.holidays = frozenset(holidays)

    def cell_cap(self, day: date) -> int:
        """How many single-day events a cell shows; holidays get fewer slots."""
        if day in self.holidays:
            return self.layout_config.holiday_cell_event_cap
        return self.layout_config.cell_event_cap

    def normalize(self, events: Sequence[EventInput]) -> tuple[list[NormalizedEvent], list[ValidationError]]:
        """
        Parse every event, isolating failures.

        Returns:
            (normalized events in input order, one ValidationError per failed event)
        """
        normalized = []
        errors = []
        for value in events:
            try:
                event = coerce_event(value)
            except TypeError as e:
                errors.append(ValidationError('', str(e)))
                continue
            try:
                normalized.append(normalize_event(event))
            except ValidationError as e:
                _debug_print(f"Skipping event {e.event_id}: {e.reason}")
                errors.append(e)
        return normalized, errors

    def layout(
        self,
        events: Sequence[EventInput],
        window: ViewWindow,
        now: Optional[datetime] = None,
    ) -> LayoutModel:
        """
        Lay out `events` over `window`.

        Args:
            events: CalendarEvent values or wire-format dicts for the window.
            window: MonthWindow or WeekWindow.
            now: Current local time; without it there is no now indicator.
        """
        cfg = self.layout_config
        grid = build_grid(window)
        normalized, errors = self.normalize(events)

        assignment = assign_single_day(normalized, grid)
        dots = {
            day: event_dots(normalized, day, cfg.dot_limit)
            for day, count in assignment.touching.items() if count
        }

        timed_positions = {}
        for event in normalized:
            if event.is_multi_day or grid.cell_for(event.start_date) is None:
                continue
            position = position_event(event, cfg.hour_height, cfg.start_hour, cfg.minimum_duration_minutes)
            if position is not None:
                timed_positions[event.id] = position

        indicator = None
        now_column = None
        if now is not None:
            indicator = now_indicator(now, cfg.hour_height, cfg.start_hour, cfg.end_hour)
            cell = grid.cell_for(now.date())
            if cell is not None and cell.in_window:
                now_column = cell.column

        return LayoutModel(
            grid=grid,
            bars=layout_bars(normalized, grid),
            single_day=assignment.by_date,
            touching=assignment.touching,
            dots=dots,
            timed_positions=timed_positions,
            now_indicator=indicator,
            now_column=now_column,
            errors=errors,
        )

    def begin_drag(self, event: EventInput) -> DragSession:
        return begin_drag(coerce_event(event))

    def time_at(self, y: float) -> time:
        """Clock time under a week-view offset, snapped for dropping."""
        cfg = self.layout_config
        return y_to_time(y, cfg.hour_height, cfg.start_hour, cfg.end_hour, cfg.drag_snap_minutes)
