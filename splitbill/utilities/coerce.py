"""Lenient numeric coercion used at the data-model boundary and inside the engine."""
import math
from typing import Any


def to_number(value: Any, default: float = 0.0) -> float:
    """Convert value to float, returning default for None, garbage or NaN."""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number):
        return default
    return number


def to_quantity(value: Any, default: int = 1) -> int:
    """Parse an item quantity; anything unparsable or zero falls back to default."""
    try:
        quantity = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return quantity or default


__all__ = ["to_number", "to_quantity"]
