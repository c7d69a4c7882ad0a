"""
Alerting data models.

Multi-window, multi-burn-rate alert configuration and derived results,
following the Google SRE Workbook alerting methodology.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from burncalc.slos.units import WindowUnit


class AlertType(str, Enum):
    """Alert severity classification. Presentational only."""

    PAGE = "page"
    TICKET = "ticket"


class AlertField(str, Enum):
    """AlertConfig fields that accept user edits."""

    LONG_WINDOW_VALUE = "longWindowValue"
    LONG_WINDOW_UNIT = "longWindowUnit"
    BUDGET_CONSUMED = "budgetConsumed"


@dataclass(frozen=True)
class AlertConfig:
    """
    One user-configurable alerting rule.

    ``budget_consumed`` is the percentage of the total error budget that
    would be consumed if the burn rate persisted for the long window.
    Burn rate is derived from it, never the reverse.
    """

    id: str
    label: str
    type: AlertType
    long_window_value: float
    long_window_unit: WindowUnit
    budget_consumed: float

    @property
    def severity_label(self) -> str:
        """Human-facing routing label for the alert card badge."""
        if self.type == AlertType.TICKET:
            return "Ticket / Issue"
        return "Page / Mention" if self.id == "p2" else "Page / Call"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "type": self.type.value,
            "longWindowValue": self.long_window_value,
            "longWindowUnit": self.long_window_unit.value,
            "budgetConsumed": self.budget_consumed,
        }


@dataclass(frozen=True)
class ShortWindow:
    """Short observation window derived from the long window."""

    value: float
    unit: WindowUnit

    def __str__(self) -> str:
        return f"{self.value:g}{self.unit.abbreviation}"


@dataclass(frozen=True)
class AlertResult:
    """Threshold and trigger count for one alert."""

    threshold: float  # Error rate that must be exceeded to fire
    trigger_error_count: int  # Errors in the long window needed to cross threshold


@dataclass(frozen=True)
class ExtendedAlertResult(AlertResult):
    """AlertResult plus the burn rate and short window it was derived with."""

    burn_rate: float
    short_window: ShortWindow

    def to_dict(self) -> dict[str, Any]:
        return {
            "burnRate": self.burn_rate,
            "shortWindow": {
                "value": self.short_window.value,
                "unit": self.short_window.unit.value,
            },
            "threshold": self.threshold,
            "triggerErrorCount": self.trigger_error_count,
        }


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of a validated edit. Rejected edits leave state untouched."""

    accepted: bool
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.accepted

    @classmethod
    def ok(cls) -> UpdateResult:
        return cls(accepted=True)

    @classmethod
    def rejected(cls, reason: str) -> UpdateResult:
        return cls(accepted=False, reason=reason)
