"""
Constants package — re-exports from domain-specific modules.

Centralized business constants for the Auto-Parts Order Hub.

Usage:
    from autoparts_hub.core.constants.pricing import DEFAULT_MARKUP_PERCENT
    # or import everything:
    from autoparts_hub.core.constants import pricing, orders
Version: 1.0.0
"""

from autoparts_hub.core.constants import pricing, orders
from autoparts_hub.core.constants.pricing import (
    DEFAULT_MARKUP_PERCENT,
    MODE_GENERAL,
    MODE_BY_CATEGORY,
    MODE_BY_SUBCATEGORY,
    COEF_UNIT_PERCENT,
    COEF_UNIT_FACTOR,
    CURRENCY_SYMBOL,
)
from autoparts_hub.core.constants.orders import (
    SAVED_ORDERS_LIMIT,
    STORE_NAME,
    STORE_SIGNATURE,
    WHATSAPP_BASE_URL,
)

__all__ = [
    "pricing",
    "orders",
    "DEFAULT_MARKUP_PERCENT",
    "MODE_GENERAL",
    "MODE_BY_CATEGORY",
    "MODE_BY_SUBCATEGORY",
    "COEF_UNIT_PERCENT",
    "COEF_UNIT_FACTOR",
    "CURRENCY_SYMBOL",
    "SAVED_ORDERS_LIMIT",
    "STORE_NAME",
    "STORE_SIGNATURE",
    "WHATSAPP_BASE_URL",
]
