import random
import unittest
from datetime import date, timedelta

from engine.bars import Bar, layout_bars
from engine.event_model import CalendarEvent, normalize_event
from engine.grid import MonthWindow, WeekWindow, build_grid


def _events(*specs):
    return [
        normalize_event(CalendarEvent(id=eid, title=eid, start=start, end=end))
        for eid, start, end in specs
    ]


class TestMultiDayBarLayout(unittest.TestCase):
    def test_bar_within_one_row(self) -> None:
        events = _events(("trip", "2025-01-29", "2025-01-31"))
        bars = layout_bars(events, build_grid(MonthWindow(2025, 1)))
        self.assertEqual(bars, [
            Bar(event_id="trip", row=4, start_column=3, span=3, is_start=True, is_end=True, stack_slot=0),
        ])

    def test_event_crossing_month_boundary(self) -> None:
        events = _events(("trip", "2025-02-28", "2025-03-03"))

        feb = layout_bars(events, build_grid(MonthWindow(2025, 2)))
        self.assertEqual(len(feb), 1)
        self.assertEqual((feb[0].row, feb[0].start_column, feb[0].span), (4, 5, 1))
        self.assertTrue(feb[0].is_start)
        self.assertFalse(feb[0].is_end)

        march = layout_bars(events, build_grid(MonthWindow(2025, 3)))
        # Mar 1 2025 is a Saturday: one cell in row 0, then Sun-Mon in row 1.
        self.assertEqual(len(march), 2)
        first, second = march
        self.assertEqual((first.row, first.start_column, first.span), (0, 6, 1))
        self.assertTrue(first.is_start)
        self.assertFalse(first.is_end)
        self.assertEqual((second.row, second.start_column, second.span), (1, 0, 2))
        self.assertFalse(second.is_start)
        self.assertTrue(second.is_end)

    def test_edge_flags_use_the_whole_week(self) -> None:
        # Row 4 of February 2025 runs Feb 23 to Mar 1; Mar 1 is a blank cell.
        events = _events(("trip", "2025-02-27", "2025-03-01"))
        bars = layout_bars(events, build_grid(MonthWindow(2025, 2)))
        self.assertEqual(bars, [
            Bar(event_id="trip", row=4, start_column=4, span=2, is_start=True, is_end=True, stack_slot=0),
        ])

    def test_event_split_across_rows(self) -> None:
        events = _events(("conf", "2025-01-10", "2025-01-14"))
        bars = layout_bars(events, build_grid(MonthWindow(2025, 1)))
        self.assertEqual([(b.row, b.start_column, b.span, b.is_start, b.is_end) for b in bars], [
            (1, 5, 2, True, False),
            (2, 0, 3, False, True),
        ])

    def test_week_view_clamps_to_full_row(self) -> None:
        events = _events(("long", "2025-01-20", "2025-02-05"))
        bars = layout_bars(events, build_grid(WeekWindow(date(2025, 1, 26))))
        self.assertEqual(len(bars), 1)
        self.assertEqual((bars[0].start_column, bars[0].span), (0, 7))
        self.assertFalse(bars[0].is_start)
        self.assertFalse(bars[0].is_end)

    def test_single_day_events_produce_no_bars(self) -> None:
        events = [
            normalize_event(CalendarEvent(id="a", title="a", start="2025-01-15")),
            normalize_event(CalendarEvent(id="b", title="b", start="2025-01-15", end="2025-01-15")),
            normalize_event(CalendarEvent(
                id="c", title="c", start="2025-01-15T09:00:00", end="2025-01-15T18:00:00", is_all_day=False)),
        ]
        self.assertEqual(layout_bars(events, build_grid(MonthWindow(2025, 1))), [])

    def test_event_outside_window_produces_no_bars(self) -> None:
        events = _events(("old", "2024-11-01", "2024-11-05"))
        self.assertEqual(layout_bars(events, build_grid(MonthWindow(2025, 1))), [])

    def test_blank_cells_never_host_bars(self) -> None:
        # Dec 29-31 2024 are blanks in the January 2025 grid.
        events = _events(("nye", "2024-12-29", "2024-12-31"))
        self.assertEqual(layout_bars(events, build_grid(MonthWindow(2025, 1))), [])

    def test_stacking_follows_input_order(self) -> None:
        events = _events(
            ("short", "2025-01-28", "2025-01-29"),
            ("wide", "2025-01-26", "2025-01-31"),
            ("apart", "2025-01-31", "2025-02-01"),
        )
        bars = layout_bars(events, build_grid(WeekWindow(date(2025, 1, 26))))
        self.assertEqual([(b.event_id, b.stack_slot) for b in bars], [
            ("short", 0),
            ("wide", 1),
            ("apart", 2),
        ])

    def test_column_bounds_hold_for_random_events(self) -> None:
        rng = random.Random(1234)
        base = date(2025, 1, 1)
        specs = []
        for i in range(200):
            start = base + timedelta(days=rng.randint(-20, 60))
            end = start + timedelta(days=rng.randint(1, 20))
            specs.append((f"e{i}", start.isoformat(), end.isoformat()))
        events = _events(*specs)

        for window in (MonthWindow(2025, 1), MonthWindow(2025, 2), WeekWindow(date(2025, 1, 15))):
            grid = build_grid(window)
            bars = layout_bars(events, grid)
            self.assertTrue(bars)
            for bar in bars:
                self.assertGreaterEqual(bar.span, 1)
                self.assertTrue(0 <= bar.start_column <= bar.end_column <= 6, bar)
                for column in range(bar.start_column, bar.end_column + 1):
                    self.assertTrue(grid.row_cells(bar.row)[column].in_window, bar)
            rows = {}
            for bar in bars:
                rows.setdefault(bar.row, []).append(bar.stack_slot)
            for slots in rows.values():
                self.assertEqual(slots, list(range(len(slots))))


if __name__ == "__main__":
    unittest.main(verbosity=2)
