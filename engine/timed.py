"""
Timed-event positioning inside a fixed-hour viewport.

Offsets are abstract units: minutes scaled by a caller-supplied hour
height. The viewport starts at `start_hour`; anything earlier is pinned
to the top.
"""

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional, Union

from .event_model import NormalizedEvent


DEFAULT_START_HOUR = 7
DEFAULT_END_HOUR = 23
DEFAULT_MINIMUM_DURATION_MINUTES = 30


@dataclass(frozen=True)
class TimedPosition:
    top: float
    height: float

    def to_dict(self) -> dict:
        return {'top': self.top, 'height': self.height}


def minutes_of(t: Union[time, datetime]) -> int:
    """Minutes since midnight; seconds are dropped."""
    return t.hour * 60 + t.minute


def offset_for_minutes(minutes: int, hour_height: float, start_hour: int = DEFAULT_START_HOUR) -> float:
    return max(0, minutes - start_hour * 60) / 60 * hour_height


def position_for_minutes(
    start_minutes: int,
    end_minutes: Optional[int],
    hour_height: float,
    start_hour: int = DEFAULT_START_HOUR,
    minimum_duration_minutes: int = DEFAULT_MINIMUM_DURATION_MINUTES,
) -> TimedPosition:
    """
    Place a start/end pair in the viewport.

    A missing or earlier end falls back to the minimum duration, so the
    height is never below minimum_duration_minutes / 60 * hour_height.
    """
    if end_minutes is None:
        end_minutes = start_minutes
    duration = max(minimum_duration_minutes, end_minutes - start_minutes)
    return TimedPosition(
        top=offset_for_minutes(start_minutes, hour_height, start_hour),
        height=duration / 60 * hour_height,
    )


def position_event(
    event: NormalizedEvent,
    hour_height: float,
    start_hour: int = DEFAULT_START_HOUR,
    minimum_duration_minutes: int = DEFAULT_MINIMUM_DURATION_MINUTES,
) -> Optional[TimedPosition]:
    """
    Position a timed event, or return None for all-day/date-only events.

    Args:
        event: Normalized event with a start clock time.
        hour_height: Units per hour in the viewport.
        start_hour: First visible hour.
        minimum_duration_minutes: Floor for the rendered duration.
    """
    if not event.is_timed:
        return None
    end_minutes = minutes_of(event.end_time) if event.end_time is not None else None
    return position_for_minutes(
        minutes_of(event.start_time),
        end_minutes,
        hour_height,
        start_hour,
        minimum_duration_minutes,
    )


def now_indicator(
    now: Union[time, datetime],
    hour_height: float,
    start_hour: int = DEFAULT_START_HOUR,
    end_hour: int = DEFAULT_END_HOUR,
) -> Optional[float]:
    """Offset of the current-time line, or None outside [start_hour, end_hour)."""
    minutes = minutes_of(now)
    if not start_hour * 60 <= minutes < end_hour * 60:
        return None
    return offset_for_minutes(minutes, hour_height, start_hour)


def y_to_time(
    y: float,
    hour_height: float,
    start_hour: int = DEFAULT_START_HOUR,
    end_hour: int = DEFAULT_END_HOUR,
    snap_minutes: int = 15,
) -> time:
    """Convert a viewport offset back to a clock time, snapped to the interval."""
    minutes = start_hour * 60 + int(y / hour_height * 60)
    snapped = round(minutes / snap_minutes) * snap_minutes
    snapped = max(start_hour * 60, min(end_hour * 60 - 1, snapped))
    return time(hour=snapped // 60, minute=snapped % 60)
