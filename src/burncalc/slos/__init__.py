"""
SLO error budget and burn-rate alerting.

This module handles error budget derivation, multi-window burn-rate
alert thresholds, and the editable alert set and SLO session state.
"""

from burncalc.slos.alerts import DEFAULT_ALERTS, AlertSet, compute_alert_results
from burncalc.slos.burn_rate import (
    calculate_burn_rate_alert,
    calculate_burn_rate_from_budget,
    calculate_short_window,
    calculate_time_to_exhaustion,
)
from burncalc.slos.calculator import (
    ErrorBudget,
    calculate_allowed_failure_count,
    calculate_error_budget_ratio,
)
from burncalc.slos.formatting import format_duration, format_number, format_percentage
from burncalc.slos.models import (
    AlertConfig,
    AlertField,
    AlertResult,
    AlertType,
    ExtendedAlertResult,
    ShortWindow,
    UpdateResult,
)
from burncalc.slos.session import CollectionFrequency, CompositionSlice, SloSession
from burncalc.slos.units import WindowUnit, convert_to_minutes

__all__ = [
    "AlertConfig",
    "AlertField",
    "AlertResult",
    "AlertSet",
    "AlertType",
    "CollectionFrequency",
    "CompositionSlice",
    "DEFAULT_ALERTS",
    "ErrorBudget",
    "ExtendedAlertResult",
    "ShortWindow",
    "SloSession",
    "UpdateResult",
    "WindowUnit",
    "calculate_allowed_failure_count",
    "calculate_burn_rate_alert",
    "calculate_burn_rate_from_budget",
    "calculate_error_budget_ratio",
    "calculate_short_window",
    "calculate_time_to_exhaustion",
    "compute_alert_results",
    "convert_to_minutes",
    "format_duration",
    "format_number",
    "format_percentage",
]
