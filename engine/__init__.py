"""
Calendar Layout Engine

This package turns a list of calendar events into a layout model for
month and week views:
- Configuration parsing (config.py)
- Event parsing and normalization (event_model.py)
- Day-cell grid for month/week windows (grid.py)
- Multi-day bars with stacking (bars.py)
- Single-day events, overflow and dots (single_day.py)
- Timed event positions and the now indicator (timed.py)
- Drag-and-drop date translation (drag.py)
- The engine tying it together (layout_engine.py)
- iCalendar import adapter (ical_import.py)
"""

from .config import Config, LayoutConfig, LabelsConfig
from .event_model import CalendarEvent, NormalizedEvent, ValidationError, normalize_event
from .grid import MonthWindow, WeekWindow, DayCell, GridModel, build_grid
from .bars import Bar, layout_bars
from .timed import TimedPosition
from .drag import DragSession, DragTranslation, translate_event
from .layout_engine import CalendarLayoutEngine, LayoutModel

__all__ = [
    'Config',
    'LayoutConfig',
    'LabelsConfig',
    'CalendarEvent',
    'NormalizedEvent',
    'ValidationError',
    'normalize_event',
    'MonthWindow',
    'WeekWindow',
    'DayCell',
    'GridModel',
    'build_grid',
    'Bar',
    'layout_bars',
    'TimedPosition',
    'DragSession',
    'DragTranslation',
    'translate_event',
    'CalendarLayoutEngine',
    'LayoutModel',
]
