"""
Timezone utilities for the layout engine.

The layout itself works on naive calendar dates. These helpers are used at
the edges only: turning aware datetimes from iCalendar data into naive local
time, and reading the current local time for the now indicator.
"""

from datetime import datetime
import time as _time
import pytz


# Default timezone - can be overridden by config
_local_timezone_name: str = "Europe/Amsterdam"


def set_timezone(timezone_name: str):
    """Set the local timezone used by the adapters."""
    global _local_timezone_name
    _local_timezone_name = timezone_name


def get_timezone_name() -> str:
    return _local_timezone_name


def get_local_timezone():
    """
    Get the local timezone as a pytz timezone object.

    Falls back to the system timezone name and finally to a fixed
    offset built from the C library's notion of local time.
    """
    try:
        return pytz.timezone(_local_timezone_name)
    except pytz.UnknownTimeZoneError:
        pass
    try:
        return pytz.timezone(_time.tzname[0])
    except pytz.UnknownTimeZoneError:
        if _time.localtime().tm_isdst:
            offset_seconds = -_time.altzone
        else:
            offset_seconds = -_time.timezone
        return pytz.FixedOffset(offset_seconds // 60)


def to_local_naive(dt: datetime) -> datetime:
    """
    Convert a datetime to a naive datetime in local time.

    Args:
        dt: An aware datetime (any zone) or a naive one.

    Returns:
        A naive datetime. Naive input is treated as floating local
        time and returned unchanged.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(get_local_timezone()).replace(tzinfo=None)


def now_local_naive() -> datetime:
    """Current wall-clock time in the configured timezone, without tzinfo."""
    return datetime.now(pytz.UTC).astimezone(get_local_timezone()).replace(tzinfo=None)
