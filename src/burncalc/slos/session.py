"""
SLO session state.

Holds the top-level SLO definition inputs and the error budget derived
from them. Every setter validates its input and either commits it or
returns a rejected UpdateResult without touching state.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

import structlog

from burncalc.core.errors import ValidationError
from burncalc.slos.calculator import (
    ErrorBudget,
    calculate_allowed_failure_count,
    calculate_error_budget_ratio,
)
from burncalc.slos.formatting import format_number
from burncalc.slos.models import UpdateResult

if TYPE_CHECKING:
    from burncalc.config.settings import Settings

logger = structlog.get_logger()

DEFAULT_SLO = 99.9
DEFAULT_WINDOW_DAYS = 30
DEFAULT_TOTAL_EVENTS = 1_000_000

SLO_PRESETS = (99.99, 99.9, 99.5, 99.0)
WINDOW_PRESETS = (30, 28, 7)

GOOD_EVENTS_COLOR = "#4ade80"
ERROR_BUDGET_COLOR = "#f87171"

_DIGITS = re.compile(r"[0-9]+")


class CollectionFrequency(str, Enum):
    """Metric collection frequency. Recorded for display, no effect on math."""

    TEN_SECONDS = "10s"
    THIRTY_SECONDS = "30s"
    ONE_MINUTE = "1m"
    FIVE_MINUTES = "5m"


@dataclass(frozen=True)
class CompositionSlice:
    """One slice of the good-events vs error-budget composition chart."""

    name: str
    value: float
    color: str


class SloSession:
    """SLO definition inputs plus the derived error budget."""

    def __init__(
        self,
        slo: float = DEFAULT_SLO,
        window_days: int = DEFAULT_WINDOW_DAYS,
        total_events: int = DEFAULT_TOTAL_EVENTS,
        collection_freq: CollectionFrequency | str = CollectionFrequency.ONE_MINUTE,
        sli_description: str = "",
    ) -> None:
        self.sli_description = sli_description
        self._slo = DEFAULT_SLO
        self._window_days = DEFAULT_WINDOW_DAYS
        self._total_events = DEFAULT_TOTAL_EVENTS
        self._collection_freq = CollectionFrequency.ONE_MINUTE

        for result in (
            self.set_slo(slo),
            self.set_window_days(window_days),
            self.set_total_events(total_events),
            self.set_collection_freq(collection_freq),
        ):
            if not result:
                raise ValidationError(result.reason or "invalid session value")

    @classmethod
    def from_settings(cls, settings: Settings) -> SloSession:
        return cls(
            slo=settings.slo,
            window_days=settings.window_days,
            total_events=settings.total_events,
            collection_freq=settings.collection_freq,
        )

    # === Inputs ===

    @property
    def slo(self) -> float:
        return self._slo

    @property
    def window_days(self) -> int:
        return self._window_days

    @property
    def total_events(self) -> int:
        return self._total_events

    @property
    def collection_freq(self) -> CollectionFrequency:
        return self._collection_freq

    def set_sli_description(self, description: str) -> UpdateResult:
        self.sli_description = description
        return UpdateResult.ok()

    def set_slo(self, slo: float) -> UpdateResult:
        """Set the SLO target percentage (0-100 inclusive)."""
        if not 0 <= slo <= 100:
            return UpdateResult.rejected("SLO must be between 0 and 100")
        return self._commit("slo", float(slo))

    def set_window_days(self, window_days: int) -> UpdateResult:
        """Set the aggregation window. Zero-length windows are rejected."""
        if isinstance(window_days, bool) or not isinstance(window_days, int):
            return UpdateResult.rejected("window must be a whole number of days")
        if window_days < 1:
            return UpdateResult.rejected("window must be at least 1 day")
        return self._commit("window_days", window_days)

    def set_total_events(self, total_events: int) -> UpdateResult:
        if isinstance(total_events, bool) or not isinstance(total_events, int):
            return UpdateResult.rejected("total events must be a whole number")
        if total_events < 0:
            return UpdateResult.rejected("total events cannot be negative")
        return self._commit("total_events", total_events)

    def set_total_events_text(self, raw_value: str) -> UpdateResult:
        """
        Set total events from form text such as ``"1,000,000"``.

        Thousands separators are stripped and an empty field means 0.
        """
        raw_value = raw_value.replace(",", "").strip()
        if raw_value == "":
            return self.set_total_events(0)
        if not _DIGITS.fullmatch(raw_value):
            return UpdateResult.rejected("total events must be a whole number")
        return self.set_total_events(int(raw_value))

    def set_collection_freq(self, collection_freq: CollectionFrequency | str) -> UpdateResult:
        try:
            freq = CollectionFrequency(collection_freq)
        except ValueError:
            return UpdateResult.rejected(f"unknown collection frequency: {collection_freq}")
        self._collection_freq = freq
        return UpdateResult.ok()

    def _commit(self, name: str, value: Any) -> UpdateResult:
        setattr(self, f"_{name}", value)
        logger.debug("session_updated", field=name, value=value)
        return UpdateResult.ok()

    # === Derived ===

    @property
    def eb_ratio(self) -> float:
        return calculate_error_budget_ratio(self._slo)

    @property
    def allowed_failures(self) -> int:
        return calculate_allowed_failure_count(self._total_events, self._slo)

    @property
    def formatted_total_events(self) -> str:
        return format_number(self._total_events, 0)

    def error_budget(self) -> ErrorBudget:
        return ErrorBudget.from_target(self._slo, self._window_days, self._total_events)

    def composition(self) -> list[CompositionSlice]:
        """Good events vs error budget, as percentages of all events."""
        return [
            CompositionSlice("Good Events (SLO)", self._slo, GOOD_EVENTS_COLOR),
            CompositionSlice("Error Budget", 100 - self._slo, ERROR_BUDGET_COLOR),
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "sliDescription": self.sli_description,
            "slo": self._slo,
            "windowDays": self._window_days,
            "totalEvents": self._total_events,
            "collectionFreq": self._collection_freq.value,
            "ebRatio": self.eb_ratio,
            "allowedFailures": self.allowed_failures,
        }
