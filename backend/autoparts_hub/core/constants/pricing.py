"""
Pricing constants — default markup, coefficient modes, currency.

Pricing and markup constants.

Markups are percentages everywhere inside the service (25 means +25%).
Stored records may still carry legacy multiplicative factors; those are
converted once, at the storage boundary.
Version: 1.0.0
"""

# Sale price = base_cost * (1 + markup / 100)
DEFAULT_MARKUP_PERCENT: float = 25.0

# Coefficient configuration modes
MODE_GENERAL: str = "general"
MODE_BY_CATEGORY: str = "by_category"
MODE_BY_SUBCATEGORY: str = "by_subcategory"

# Unit tag stored next to coefficient records
COEF_UNIT_PERCENT: str = "percent"
COEF_UNIT_FACTOR: str = "factor"

CURRENCY_SYMBOL: str = "$"
