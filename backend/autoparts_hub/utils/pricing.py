"""
Pricing calculator — sale price, line subtotal, markup unit conversion.

All markups handled here are percentages (25 means +25% over cost).
Factor values (1.25) only exist in legacy storage records and are
converted with percent_to_factor / factor_to_percent at that boundary.

No rounding is applied to computed values; format_price is for display only.
Version: 1.0.0
"""
from typing import Any, Optional

from autoparts_hub.core.constants.pricing import CURRENCY_SYMBOL


def percent_to_factor(percent: float) -> float:
    """30 -> 1.30"""
    return 1 + (percent / 100)


def factor_to_percent(factor: float) -> float:
    """1.30 -> 30"""
    return (factor - 1) * 100


def parse_percent(value: Any) -> Optional[float]:
    """
    Parse a percentage typed by a user.

    Accepts ``"30"``, ``"30%"``, ``" 30.5 "``, ``"30,5"`` or a number.
    Unparseable input yields None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = str(value).replace("%", "").replace(",", ".").strip()
    try:
        return float(cleaned)
    except ValueError:
        return None


def final_price(base_cost: float, markup: float) -> float:
    """Sale price of one unit: base cost plus ``markup`` percent."""
    return base_cost * percent_to_factor(markup)


def line_subtotal(unit_price: float, quantity: int) -> float:
    """Subtotal for ``quantity`` units; quantity must be a positive integer."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValueError(f"quantity must be a positive integer, got {quantity!r}")
    return unit_price * quantity


def format_price(amount: float) -> str:
    """
    Format an amount the way Argentine pesos are shown: ``$ 18.750,00``.

    Presentation only; never feed the result back into a calculation.
    """
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,.2f}"
    # 1,234.56 -> 1.234,56
    grouped = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{CURRENCY_SYMBOL} {grouped}"


def format_percent(markup: float) -> str:
    """25.0 -> '25', 12.5 -> '12.5'"""
    return f"{markup:g}"
