"""
Error budget calculator.

Derives the allowed error ratio and allowed failure count from an SLO
target (a percentage, e.g. 99.9) and the expected event volume.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return math.floor(value + 0.5)


def calculate_error_budget_ratio(slo: float) -> float:
    """Allowed error ratio: 1 for slo=0, 0 for slo=100."""
    return 1 - slo / 100


def calculate_allowed_failure_count(total_events: int, slo: float) -> int:
    """
    Number of failed events the error budget allows over the window.

    The ratio is computed as ``(100 - slo) / 100`` rather than
    ``1 - slo / 100``; the former is exact for inputs such as 99.9.
    """
    ratio = (100 - slo) / 100
    return round_half_up(total_events * ratio)


@dataclass(frozen=True)
class ErrorBudget:
    """Error budget snapshot for an SLO over its aggregation window."""

    slo: float
    window_days: int
    total_events: int
    ratio: float
    allowed_failures: int

    @classmethod
    def from_target(cls, slo: float, window_days: int, total_events: int) -> ErrorBudget:
        return cls(
            slo=slo,
            window_days=window_days,
            total_events=total_events,
            ratio=calculate_error_budget_ratio(slo),
            allowed_failures=calculate_allowed_failure_count(total_events, slo),
        )

    @property
    def budget_minutes(self) -> float:
        """Error budget expressed as minutes of full outage."""
        return self.window_days * 24 * 60 * self.ratio

    def to_dict(self) -> dict[str, Any]:
        return {
            "slo": self.slo,
            "windowDays": self.window_days,
            "totalEvents": self.total_events,
            "ebRatio": self.ratio,
            "allowedFailures": self.allowed_failures,
            "budgetMinutes": self.budget_minutes,
        }
