import json
import unittest
from datetime import date, datetime, time

from engine.config import LayoutConfig
from engine.event_model import CalendarEvent, ValidationError
from engine.grid import MonthWindow, WeekWindow
from engine.layout_engine import CalendarLayoutEngine
from engine.timed import TimedPosition


EVENTS = [
    {"id": "trip", "title": "Trip", "date": "2025-01-29", "endDate": "2025-01-31", "isAllDay": True},
    {"id": "bad", "title": "Broken", "date": "2025-01-32", "isAllDay": True},
    {"id": "standup", "title": "Standup", "date": "2025-01-15T09:15:00",
     "endDate": "2025-01-15T09:40:00", "isAllDay": False},
    {"id": "lunch", "title": "Lunch", "date": "2025-01-15T12:00:00", "endDate": "2025-01-15T13:00:00",
     "isAllDay": False},
    {"id": "bday", "title": "Birthday", "date": "2025-01-15", "endDate": None, "isAllDay": True},
    {"id": "flight", "title": "Flight", "date": "2025-01-20T22:00:00", "endDate": "2025-01-21T06:00:00",
     "isAllDay": False},
]


class TestCalendarLayoutEngine(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = CalendarLayoutEngine(LayoutConfig(hour_height=48), holidays=[date(2025, 1, 1)])

    def test_bad_event_is_isolated(self) -> None:
        model = self.engine.layout(EVENTS, MonthWindow(2025, 1))
        self.assertEqual([e.event_id for e in model.errors], ["bad"])
        self.assertIsInstance(model.errors[0], ValidationError)
        self.assertEqual([(b.event_id, b.row, b.start_column, b.span) for b in model.bars], [
            ("flight", 3, 1, 2),
            ("trip", 4, 3, 3),
        ])

    def test_wrongly_typed_fields_are_isolated(self) -> None:
        events = [
            {"id": "ok", "title": "Ok", "start": "2025-01-06", "end": "2025-01-08"},
            {"id": "numeric", "title": "Numeric", "start": 20250105},
            {"id": "numeric-end", "title": "Numeric end", "start": "2025-01-05", "end": 20250107},
            {"id": "flag", "title": "Flag", "start": "2025-01-09", "isAllDay": "false"},
        ]
        model = self.engine.layout(events, MonthWindow(2025, 1))
        self.assertEqual([e.event_id for e in model.errors], ["numeric", "numeric-end", "flag"])
        self.assertEqual([(b.event_id, b.row, b.start_column, b.span) for b in model.bars], [
            ("ok", 1, 1, 3),
        ])
        self.assertEqual(model.single_day[date(2025, 1, 9)], [])

    def test_single_day_and_overflow(self) -> None:
        model = self.engine.layout(EVENTS, MonthWindow(2025, 1))
        day = date(2025, 1, 15)
        self.assertEqual([e.id for e in model.single_day[day]], ["standup", "lunch", "bday"])
        self.assertEqual(model.overflow(day, 2), 1)
        self.assertEqual(model.overflow(day, 0), 3)
        self.assertEqual(model.overflow(day, -1), 3)
        self.assertEqual([e.id for e in model.visible_single_day(day, 2)], ["standup", "lunch"])
        self.assertEqual(model.touching[date(2025, 1, 30)], 1)
        self.assertEqual([e.id for e in model.dots[day]], ["standup", "lunch", "bday"])
        self.assertNotIn(date(2025, 1, 2), model.dots)

    def test_timed_positions(self) -> None:
        model = self.engine.layout(EVENTS, WeekWindow(date(2025, 1, 12)))
        self.assertEqual(model.timed_positions["standup"], TimedPosition(top=108, height=24))
        self.assertEqual(model.timed_positions["lunch"], TimedPosition(top=240, height=48))
        self.assertNotIn("bday", model.timed_positions)
        self.assertNotIn("flight", model.timed_positions)

    def test_now_indicator_and_column(self) -> None:
        model = self.engine.layout(EVENTS, MonthWindow(2025, 1), now=datetime(2025, 1, 29, 9, 15))
        self.assertEqual(model.now_indicator, 108)
        self.assertEqual(model.now_column, 3)

        outside = self.engine.layout(EVENTS, MonthWindow(2025, 1), now=datetime(2025, 3, 3, 23, 30))
        self.assertIsNone(outside.now_indicator)
        self.assertIsNone(outside.now_column)

        self.assertIsNone(self.engine.layout(EVENTS, MonthWindow(2025, 1)).now_indicator)

    def test_layout_is_idempotent(self) -> None:
        now = datetime(2025, 1, 15, 10, 0)
        first = self.engine.layout(EVENTS, MonthWindow(2025, 1), now=now)
        second = self.engine.layout(EVENTS, MonthWindow(2025, 1), now=now)
        self.assertEqual(first, second)
        self.assertEqual(first.to_dict(), second.to_dict())

    def test_accepts_event_values(self) -> None:
        events = [CalendarEvent(id="a", title="A", start="2025-01-06", end="2025-01-08"), 42]
        model = self.engine.layout(events, WeekWindow(date(2025, 1, 8)))
        self.assertEqual(len(model.bars), 1)
        self.assertEqual((model.bars[0].start_column, model.bars[0].span), (1, 3))
        self.assertEqual(len(model.errors), 1)
        self.assertEqual(model.errors[0].event_id, "")

    def test_cell_cap_is_smaller_on_holidays(self) -> None:
        self.assertEqual(self.engine.cell_cap(date(2025, 1, 1)), 2)
        self.assertEqual(self.engine.cell_cap(date(2025, 1, 2)), 3)

    def test_to_dict_is_json_ready(self) -> None:
        model = self.engine.layout(EVENTS, MonthWindow(2025, 1), now=datetime(2025, 1, 29, 9, 15))
        data = json.loads(json.dumps(model.to_dict()))
        self.assertEqual(len(data["cells"]), 35)
        self.assertIn({"eventId": "trip", "row": 4, "startColumn": 3, "span": 3,
                       "isStart": True, "isEnd": True, "stackSlot": 0}, data["bars"])
        self.assertEqual(data["singleDay"]["2025-01-15"], ["standup", "lunch", "bday"])
        self.assertEqual(data["errors"][0]["eventId"], "bad")
        self.assertEqual(data["timedPositions"]["standup"], {"top": 108.0, "height": 24.0})

    def test_begin_drag_from_wire_event(self) -> None:
        session = self.engine.begin_drag(EVENTS[0])
        self.assertEqual(session.event.id, "trip")
        self.assertEqual(session.drop(date(2025, 2, 7)).new_end, "2025-02-09")

    def test_time_at_uses_configured_snap(self) -> None:
        self.assertEqual(self.engine.time_at(110), time(9, 15))
        coarse = CalendarLayoutEngine(LayoutConfig(drag_snap_minutes=30))
        self.assertEqual(coarse.time_at(110), time(9, 30))

    def test_invalid_layout_config_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            CalendarLayoutEngine(LayoutConfig(start_hour=20, end_hour=8))


if __name__ == "__main__":
    unittest.main(verbosity=2)
