"""Round-half-up helpers.

Python's round() uses banker's rounding and inherits binary float error
(round(0.15, 1) == 0.1). Scores are displayed to users, so every rounding in
the engine goes through Decimal with ROUND_HALF_UP on the repr of the float.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 0) -> float:
    """Round to ``places`` decimals, halves away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def round1(value: float) -> float:
    return round_half_up(value, 1)


def round_int(value: float) -> int:
    return int(round_half_up(value, 0))


def format_number(value: float) -> str:
    """Render to one decimal without a trailing ``.0`` (2.0 → "2", 1.67 → "1.7")."""
    rounded = round1(value)
    if rounded.is_integer():
        return str(int(rounded))
    return repr(rounded)
