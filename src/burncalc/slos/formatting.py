"""
Display formatting for counts, ratios and durations.

Rounding is half away from zero on the shortest decimal representation
of the value, so ``format_number(999.99, 0)`` gives ``"1,000"``.
"""

from __future__ import annotations

import math
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal, localcontext

# Below this ratio percentages switch to scientific notation
SCIENTIFIC_THRESHOLD = 0.00001


def _round_decimal(num: float, digits: int) -> Decimal:
    value = Decimal(str(num))
    with localcontext() as ctx:
        # quantize fails once the result needs more digits than prec
        ctx.prec = max(ctx.prec, value.adjusted() + digits + 2)
        return value.quantize(Decimal(1).scaleb(-digits), rounding=ROUND_HALF_UP)


def _non_finite(num: float) -> str:
    if math.isnan(num):
        return "NaN"
    return "Infinity" if num > 0 else "-Infinity"


def _trim_fraction(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_number(num: float, maximum_fraction_digits: int = 2) -> str:
    """
    Format a number with thousands separators.

    The value is rounded to ``maximum_fraction_digits`` and trailing zeros
    are dropped: ``format_number(123.4)`` is ``"123.4"``, not ``"123.40"``.
    """
    if not math.isfinite(num):
        return _non_finite(num)

    rounded = _round_decimal(num, maximum_fraction_digits)
    if rounded == 0:
        rounded = abs(rounded)
    text = f"{rounded:,f}"

    if maximum_fraction_digits == 0:
        return text
    return _trim_fraction(text)


def format_percentage(num: float, decimals: int = 3) -> str:
    """
    Format a ratio (0.001) as a percentage string ("0.1%").

    Ratios in (0, 0.00001) render in scientific notation of the ratio
    itself, e.g. ``1.00e-7%``, rather than collapsing to ``0%``.
    """
    if 0 < num < SCIENTIFIC_THRESHOLD:
        mantissa, exponent = f"{num:.2e}".split("e")
        return f"{mantissa}e{int(exponent)}%"
    if not math.isfinite(num):
        return f"{_non_finite(num)}%"
    return f"{format_number(num * 100, decimals)}%"


def format_duration(duration: timedelta | None) -> str:
    """Render a time-to-exhaustion duration in the largest sensible unit."""
    if duration is None:
        return "Never"

    days = duration.total_seconds() / 86400
    if days >= 1:
        return f"{format_number(days, 1)} days"

    hours = days * 24
    if hours >= 1:
        return f"{format_number(hours, 1)} hours"

    return f"{format_number(hours * 60, 1)} minutes"
