"""
Type converters — shared value conversion utilities.
Version: 1.0.0
"""
import math
from typing import Any, Optional


def to_number(value: Any) -> Optional[float]:
    """Convert value to a finite float, returning None if invalid.

    Booleans are rejected; ``True`` is not a markup.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        val = float(value)
    except (ValueError, TypeError):
        return None
    return val if math.isfinite(val) else None


def is_positive_int(value: Any) -> bool:
    """True for integers (or integral floats) greater than zero."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value > 0
    if isinstance(value, float) and value.is_integer():
        return value > 0
    return False
