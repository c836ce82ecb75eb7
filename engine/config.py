"""
Configuration parser for the calendar layout engine.

Handles TOML file parsing for layout metrics, labels and holidays.
"""

import tomllib
import os
import sys
from datetime import date, datetime
from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional


def _debug_print(message: str) -> None:
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] CONFIG: {message}", file=sys.stderr)


@dataclass
class LayoutConfig:
    """Configuration for layout metrics."""
    hour_height: int = 48  # Height of an hour slot in the week view
    start_hour: int = 7    # First visible hour of the timed grid
    end_hour: int = 23     # Visible hours end before this hour
    minimum_duration_minutes: int = 30
    drag_snap_minutes: int = 15
    cell_event_cap: int = 3
    holiday_cell_event_cap: int = 2
    dot_limit: int = 3     # Max event dots per month cell

    def validate(self):
        """Raise ValueError for settings the positioner cannot work with."""
        if self.hour_height <= 0:
            raise ValueError(f"hour_height must be positive, got {self.hour_height}")
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise ValueError(
                f"Visible hours must satisfy 0 <= start_hour < end_hour <= 24, "
                f"got {self.start_hour}..{self.end_hour}"
            )
        if self.minimum_duration_minutes < 0:
            raise ValueError("minimum_duration_minutes must not be negative")
        if self.drag_snap_minutes <= 0:
            raise ValueError("drag_snap_minutes must be positive")


@dataclass
class LabelsConfig:
    """Configuration for text labels used when describing events."""
    allday_label: str = "All day"
    date_range_separator: str = " ~ "


@dataclass
class Config:
    """Main configuration container."""

    timezone: str = "Europe/Amsterdam"
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    labels: LabelsConfig = field(default_factory=LabelsConfig)
    holidays: list[date] = field(default_factory=list)

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get the default configuration file path."""
        xdg_config = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))
        return Path(xdg_config) / 'calendar-layout' / 'calendar-layout.toml'

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from TOML file."""
        if config_path is None:
            config_path = cls.get_default_config_path()

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'rb') as f:
            data = tomllib.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Build a Config from already parsed TOML data."""
        general = data.get('General', {})
        timezone = general.get('timezone', cls.timezone)

        holidays = []
        for value in general.get('holidays', []):
            # tomllib yields date objects for bare TOML dates
            if isinstance(value, date):
                holidays.append(value)
            else:
                try:
                    holidays.append(date.fromisoformat(str(value)))
                except ValueError:
                    raise ValueError(f"Invalid holiday date: {value!r}")

        layout_data = data.get('Layout', {})
        layout = LayoutConfig(
            hour_height=layout_data.get('hour_height', LayoutConfig.hour_height),
            start_hour=layout_data.get('start_hour', LayoutConfig.start_hour),
            end_hour=layout_data.get('end_hour', LayoutConfig.end_hour),
            minimum_duration_minutes=layout_data.get(
                'minimum_duration_minutes', LayoutConfig.minimum_duration_minutes),
            drag_snap_minutes=layout_data.get('drag_snap_minutes', LayoutConfig.drag_snap_minutes),
            cell_event_cap=layout_data.get('cell_event_cap', LayoutConfig.cell_event_cap),
            holiday_cell_event_cap=layout_data.get(
                'holiday_cell_event_cap', LayoutConfig.holiday_cell_event_cap),
            dot_limit=layout_data.get('dot_limit', LayoutConfig.dot_limit),
        )
        layout.validate()

        labels_data = data.get('Labels', {})
        labels = LabelsConfig(
            allday_label=labels_data.get('allday_label', LabelsConfig.allday_label),
            date_range_separator=labels_data.get(
                'date_range_separator', LabelsConfig.date_range_separator),
        )

        unknown = set(data) - {'General', 'Layout', 'Labels'}
        if unknown:
            _debug_print(f"Ignoring unknown sections: {sorted(unknown)}")

        return cls(
            timezone=timezone,
            layout=layout,
            labels=labels,
            holidays=holidays,
        )
