"""
Time window units and conversions.
"""

from __future__ import annotations

from enum import Enum

MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24


class WindowUnit(str, Enum):
    """Unit of a time window quantity."""

    DAYS = "days"
    HOURS = "hours"
    MINUTES = "minutes"

    @property
    def abbreviation(self) -> str:
        """Single-letter suffix used in compact displays (e.g. ``1h``)."""
        return self.value[0]


def parse_window_unit(value: WindowUnit | str) -> WindowUnit | None:
    """Return the matching WindowUnit, or None if ``value`` is not one."""
    if isinstance(value, WindowUnit):
        return value
    try:
        return WindowUnit(value)
    except ValueError:
        return None


def convert_to_minutes(value: float, unit: WindowUnit | str) -> float:
    """Convert a window length to minutes. No rounding is applied."""
    unit = WindowUnit(unit)
    if unit == WindowUnit.DAYS:
        return value * HOURS_PER_DAY * MINUTES_PER_HOUR
    elif unit == WindowUnit.HOURS:
        return value * MINUTES_PER_HOUR
    return value
