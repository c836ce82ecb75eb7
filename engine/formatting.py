"""
Short text descriptions of an event's time and date range.
"""

from typing import Optional

from .config import LabelsConfig
from .event_model import CalendarEvent, split_iso


def format_event_time(event: CalendarEvent, labels: Optional[LabelsConfig] = None) -> str:
    """'All day', 'HH:MM - HH:MM', or 'HH:MM' when the event has no end time."""
    labels = labels or LabelsConfig()
    if event.is_all_day:
        return labels.allday_label
    _, start_time = split_iso(event.start)
    _, end_time = split_iso(event.end) if event.end else (None, None)
    start_label = start_time[:5] if start_time else ''
    end_label = end_time[:5] if end_time else ''
    if start_label and end_label:
        return f"{start_label} - {end_label}"
    return start_label


def format_date_range(event: CalendarEvent, labels: Optional[LabelsConfig] = None) -> str:
    """'start ~ end' for events spanning several dates, else an empty string."""
    labels = labels or LabelsConfig()
    start_date, _ = split_iso(event.start)
    if not event.end:
        return ''
    end_date, _ = split_iso(event.end)
    if end_date == start_date:
        return ''
    return f"{start_date}{labels.date_range_separator}{end_date}"
