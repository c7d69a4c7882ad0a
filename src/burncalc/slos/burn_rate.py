"""
Burn-rate alert calculator.

Implements the multi-window, multi-burn-rate alerting arithmetic from the
Google SRE Workbook:

    burn rate  = (budget consumed x total window) / long window
    threshold  = burn rate x (1 - SLO)
    short window = long window / 12

Burn rate 1.0 exhausts the error budget exactly at the end of the
aggregation window; 14.4 over one hour of a 30-day window consumes 2%.
"""

from __future__ import annotations

import math
from datetime import timedelta

from burncalc.slos.calculator import calculate_error_budget_ratio, round_half_up
from burncalc.slos.models import AlertConfig, AlertResult, ShortWindow
from burncalc.slos.units import HOURS_PER_DAY, MINUTES_PER_HOUR, WindowUnit, convert_to_minutes

SHORT_WINDOW_DIVISOR = 12


def calculate_short_window(long_value: float, long_unit: WindowUnit | str) -> ShortWindow:
    """
    Derive the short window as 1/12 of the long window.

    Days and hours step down one unit so the result stays whole
    (1d -> 2h, 1h -> 5m). Minute windows round and never drop below 1m.
    """
    long_unit = WindowUnit(long_unit)
    if long_unit == WindowUnit.DAYS:
        return ShortWindow(long_value * 2, WindowUnit.HOURS)
    elif long_unit == WindowUnit.HOURS:
        return ShortWindow(long_value * 5, WindowUnit.MINUTES)

    result = round_half_up(long_value / SHORT_WINDOW_DIVISOR)
    return ShortWindow(result if result > 0 else 1, WindowUnit.MINUTES)


def calculate_burn_rate_from_budget(
    budget_consumed_percent: float,
    total_window_minutes: float,
    long_window_minutes: float,
) -> float:
    """
    Burn rate implied by consuming a share of the budget within the long window.

    Args:
        budget_consumed_percent: Percentage of total budget, e.g. 2 for 2%
        total_window_minutes: Length of the SLO aggregation window
        long_window_minutes: Length of the alert's long window

    Returns:
        Burn rate multiplier, or 0.0 when either window is empty
    """
    if long_window_minutes == 0 or total_window_minutes == 0:
        return 0.0

    budget_consumed_ratio = budget_consumed_percent / 100
    return (budget_consumed_ratio * total_window_minutes) / long_window_minutes


def calculate_burn_rate_alert(
    slo: float,
    total_window_days: float,
    total_events: int,
    alert: AlertConfig,
    burn_rate: float,
) -> AlertResult:
    """
    Compute the error-rate threshold and trigger error count for an alert.

    The trigger count is rounded up: the first whole error count that
    breaches the threshold is the one that fires.

    Raises:
        ValueError: If ``total_window_days`` is not positive.
    """
    if total_window_days <= 0:
        raise ValueError(f"total_window_days must be positive, got {total_window_days}")

    eb_ratio = calculate_error_budget_ratio(slo)
    threshold = burn_rate * eb_ratio

    total_window_minutes = total_window_days * HOURS_PER_DAY * MINUTES_PER_HOUR
    long_window_minutes = convert_to_minutes(alert.long_window_value, alert.long_window_unit)

    events_per_minute = total_events / total_window_minutes
    events_in_long_window = events_per_minute * long_window_minutes

    trigger_error_count = math.ceil(events_in_long_window * threshold)

    return AlertResult(threshold=threshold, trigger_error_count=trigger_error_count)


def calculate_time_to_exhaustion(window_days: float, burn_rate: float) -> timedelta | None:
    """
    Time until the whole budget is gone at a sustained burn rate.

    Returns None when the burn rate is not positive (never exhausted).
    Durations longer than ``timedelta.max`` are capped at it.
    """
    if burn_rate <= 0:
        return None
    days = window_days / burn_rate
    if days >= timedelta.max.days:
        return timedelta.max
    return timedelta(days=days)
