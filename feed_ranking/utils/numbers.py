"""
Numeric helpers: counter coercion and clamping shared by every stage.
"""

import math
from typing import Any


def non_negative(value: Any) -> float:
    """Coerce a counter to a non-negative finite float; anything else becomes 0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
