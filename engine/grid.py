"""
Day-cell grid for month and week windows.

Week-rows always run Sunday (column 0) to Saturday (column 6), whatever
the locale.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Union


@dataclass(frozen=True)
class MonthWindow:
    year: int
    month: int  # 1-12


@dataclass(frozen=True)
class WeekWindow:
    start_date: date


ViewWindow = Union[MonthWindow, WeekWindow]


@dataclass(frozen=True)
class DayCell:
    """
    One cell of the grid.

    Month-view blanks before day 1 and after the last day carry the
    adjacent calendar date with in_window=False; they never host bars
    or single-day events.
    """
    date: date
    column: int
    row: int
    in_window: bool


def sunday_column(d: date) -> int:
    """Column of `d` in a Sunday-first week (Sunday=0 ... Saturday=6)."""
    return (d.weekday() + 1) % 7


def align_to_sunday(d: date) -> date:
    """The Sunday on or before `d`."""
    return d - timedelta(days=sunday_column(d))


@dataclass(frozen=True)
class GridModel:
    window: ViewWindow
    cells: tuple[DayCell, ...]
    rows: int

    @property
    def first_date(self) -> date:
        return self.cells[0].date

    @property
    def last_date(self) -> date:
        return self.cells[-1].date

    def row_start(self, row: int) -> date:
        """Sunday of the given week-row."""
        return self.cells[row * 7].date

    def row_cells(self, row: int) -> tuple[DayCell, ...]:
        return self.cells[row * 7:(row + 1) * 7]

    def in_window_columns(self, row: int) -> Optional[tuple[int, int]]:
        """First and last in-window column of a row, or None if it has none."""
        columns = [c.column for c in self.row_cells(row) if c.in_window]
        if not columns:
            return None
        return columns[0], columns[-1]

    def cell_for(self, d: date) -> Optional[DayCell]:
        if d < self.first_date or d > self.last_date:
            return None
        return self.cells[(d - self.first_date).days]

    def in_window_dates(self) -> list[date]:
        return [c.date for c in self.cells if c.in_window]


def build_month_grid(window: MonthWindow) -> GridModel:
    if not 1 <= window.month <= 12:
        raise ValueError(f"Month must be 1-12, got {window.month}")
    first_day = date(window.year, window.month, 1)
    offset = sunday_column(first_day)
    days_in_month = calendar.monthrange(window.year, window.month)[1]
    rows = -(-(offset + days_in_month) // 7)

    grid_start = first_day - timedelta(days=offset)
    cells = []
    for i in range(rows * 7):
        cells.append(DayCell(
            date=grid_start + timedelta(days=i),
            column=i % 7,
            row=i // 7,
            in_window=0 <= i - offset < days_in_month,
        ))
    return GridModel(window=window, cells=tuple(cells), rows=rows)


def build_week_grid(window: WeekWindow) -> GridModel:
    # Callers should pass a Sunday, but re-align regardless.
    start = align_to_sunday(window.start_date)
    cells = tuple(
        DayCell(date=start + timedelta(days=i), column=i, row=0, in_window=True)
        for i in range(7)
    )
    return GridModel(window=WeekWindow(start), cells=cells, rows=1)


def build_grid(window: ViewWindow) -> GridModel:
    """Expand a month or week window into its day cells."""
    if isinstance(window, MonthWindow):
        return build_month_grid(window)
    if isinstance(window, WeekWindow):
        return build_week_grid(window)
    raise TypeError(f"Unsupported view window: {window!r}")
