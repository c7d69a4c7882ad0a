"""
Alert set management.

Holds the ordered set of burn-rate alert configurations, validates edits
to them, and derives per-alert results from the current SLO session.
Results are recomputed from scratch on every read, so they always
reflect the most recently committed configuration.
"""

from __future__ import annotations

import dataclasses
import re
from typing import TYPE_CHECKING, Iterable, Sequence

import structlog

from burncalc.core.errors import ValidationError
from burncalc.slos.burn_rate import (
    calculate_burn_rate_alert,
    calculate_burn_rate_from_budget,
    calculate_short_window,
)
from burncalc.slos.models import (
    AlertConfig,
    AlertField,
    AlertType,
    ExtendedAlertResult,
    UpdateResult,
)
from burncalc.slos.units import (
    HOURS_PER_DAY,
    MINUTES_PER_HOUR,
    WindowUnit,
    convert_to_minutes,
    parse_window_unit,
)

if TYPE_CHECKING:
    from burncalc.slos.session import SloSession

logger = structlog.get_logger()

LONG_WINDOW_MIN = 1
LONG_WINDOW_MAX = 999
BUDGET_CONSUMED_MAX = 100

_INTEGER_PATTERN = re.compile(r"[0-9]*")
_DECIMAL_PATTERN = re.compile(r"[0-9]*\.?[0-9]*")

DEFAULT_ALERTS: tuple[AlertConfig, ...] = (
    AlertConfig(
        id="p1",
        label="Page 1 (Critical)",
        type=AlertType.PAGE,
        long_window_value=1,
        long_window_unit=WindowUnit.HOURS,
        budget_consumed=2,
    ),
    AlertConfig(
        id="p2",
        label="Page 2 (High)",
        type=AlertType.PAGE,
        long_window_value=6,
        long_window_unit=WindowUnit.HOURS,
        budget_consumed=5,
    ),
    AlertConfig(
        id="ticket",
        label="Ticket (Low)",
        type=AlertType.TICKET,
        long_window_value=3,
        long_window_unit=WindowUnit.DAYS,
        budget_consumed=10,
    ),
)


def compute_alert_results(
    alerts: Iterable[AlertConfig],
    slo: float,
    window_days: int,
    total_events: int,
) -> dict[str, ExtendedAlertResult]:
    """
    Derive burn rate, threshold, trigger count and short window per alert.

    A pure function of its arguments: the same inputs always produce the
    same mapping.
    """
    results: dict[str, ExtendedAlertResult] = {}
    total_window_minutes = window_days * HOURS_PER_DAY * MINUTES_PER_HOUR

    for alert in alerts:
        long_window_minutes = convert_to_minutes(alert.long_window_value, alert.long_window_unit)

        burn_rate = calculate_burn_rate_from_budget(
            alert.budget_consumed,
            total_window_minutes,
            long_window_minutes,
        )
        metrics = calculate_burn_rate_alert(slo, window_days, total_events, alert, burn_rate)
        short_window = calculate_short_window(alert.long_window_value, alert.long_window_unit)

        results[alert.id] = ExtendedAlertResult(
            threshold=metrics.threshold,
            trigger_error_count=metrics.trigger_error_count,
            burn_rate=burn_rate,
            short_window=short_window,
        )

    return results


def _parse_long_window_value(raw_value: str) -> int | UpdateResult:
    if not _INTEGER_PATTERN.fullmatch(raw_value):
        return UpdateResult.rejected("long window must be a whole number")

    value = int(raw_value)
    if value < LONG_WINDOW_MIN or value > LONG_WINDOW_MAX:
        return UpdateResult.rejected(
            f"long window must be between {LONG_WINDOW_MIN} and {LONG_WINDOW_MAX}"
        )
    return value


def _parse_budget_consumed(raw_value: str) -> float | UpdateResult:
    # "." satisfies the pattern but carries no digits
    if not _DECIMAL_PATTERN.fullmatch(raw_value) or raw_value == ".":
        return UpdateResult.rejected("budget consumed must be a non-negative number")

    value = float(raw_value)
    if value > BUDGET_CONSUMED_MAX:
        return UpdateResult.rejected(f"budget consumed cannot exceed {BUDGET_CONSUMED_MAX}%")
    return value


class AlertSet:
    """
    Ordered collection of alert configurations bound to an SLO session.

    Every edit goes through ``update_alert``, which either commits a fully
    valid value or leaves the alert untouched.
    """

    def __init__(
        self,
        session: SloSession,
        alerts: Sequence[AlertConfig] = DEFAULT_ALERTS,
    ) -> None:
        ids = [alert.id for alert in alerts]
        duplicates = sorted({alert_id for alert_id in ids if ids.count(alert_id) > 1})
        if duplicates:
            raise ValidationError("Alert ids must be unique", details={"duplicates": duplicates})

        self.session = session
        self._alerts: list[AlertConfig] = list(alerts)

    def get_alerts(self) -> list[AlertConfig]:
        """Alert configurations in display order."""
        return list(self._alerts)

    def get_alert(self, alert_id: str) -> AlertConfig | None:
        for alert in self._alerts:
            if alert.id == alert_id:
                return alert
        return None

    def get_alert_results(self) -> dict[str, ExtendedAlertResult]:
        """Derived results keyed by alert id, for the current session values."""
        return compute_alert_results(
            self._alerts,
            self.session.slo,
            self.session.window_days,
            self.session.total_events,
        )

    def reset(self) -> None:
        """Restore the default three-alert configuration."""
        self._alerts = list(DEFAULT_ALERTS)
        logger.debug("alerts_reset")

    def update_alert(
        self,
        alert_id: str,
        field: AlertField | str,
        raw_value: str | WindowUnit,
    ) -> UpdateResult:
        """
        Validate and apply an edit to one field of one alert.

        ``raw_value`` is the string typed by the user. An empty string
        clears a numeric field to 0. Invalid input is rejected and the
        prior value kept; the returned UpdateResult says why.
        """
        alert = self.get_alert(alert_id)
        if alert is None:
            return UpdateResult.rejected(f"unknown alert: {alert_id}")

        try:
            field = AlertField(field)
        except ValueError:
            return UpdateResult.rejected(f"field is not editable: {field}")

        if field == AlertField.LONG_WINDOW_UNIT:
            unit = parse_window_unit(raw_value)
            if unit is None:
                return UpdateResult.rejected(f"unknown window unit: {raw_value}")
            return self._commit(alert, long_window_unit=unit)

        if not isinstance(raw_value, str):
            raw_value = str(raw_value)

        if raw_value == "":
            if field == AlertField.LONG_WINDOW_VALUE:
                return self._commit(alert, long_window_value=0)
            return self._commit(alert, budget_consumed=0)

        if field == AlertField.LONG_WINDOW_VALUE:
            parsed_window = _parse_long_window_value(raw_value)
            if isinstance(parsed_window, UpdateResult):
                return parsed_window
            return self._commit(alert, long_window_value=parsed_window)

        parsed_budget = _parse_budget_consumed(raw_value)
        if isinstance(parsed_budget, UpdateResult):
            return parsed_budget
        return self._commit(alert, budget_consumed=parsed_budget)

    def _commit(self, alert: AlertConfig, **changes: object) -> UpdateResult:
        updated = dataclasses.replace(alert, **changes)
        self._alerts = [updated if a.id == alert.id else a for a in self._alerts]
        logger.debug("alert_updated", alert_id=alert.id, **changes)
        return UpdateResult.ok()

    def __iter__(self):
        return iter(self._alerts)

    def __len__(self) -> int:
        return len(self._alerts)
