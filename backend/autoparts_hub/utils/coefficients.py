"""
Coefficient resolver — effective markup for a category or subcategory.

resolve() is total: unknown keys, missing configuration and junk values
all fall back silently, first to the general value and then to the
system default.
Version: 1.0.0
"""
from typing import Any, Optional

from autoparts_hub.core.constants.pricing import (
    DEFAULT_MARKUP_PERCENT,
    MODE_BY_CATEGORY,
    MODE_BY_SUBCATEGORY,
)
from autoparts_hub.schemas.catalog import Product
from autoparts_hub.schemas.coefficients import CoefficientConfig
from autoparts_hub.utils.type_converters import to_number


def _coerce_markup(value: Any) -> Optional[float]:
    val = to_number(value)
    if val is None or val < 0:
        return None
    return val


def general_markup(config: Optional[CoefficientConfig]) -> float:
    """General markup of a configuration, or the default when unusable."""
    if config is None:
        return DEFAULT_MARKUP_PERCENT
    val = _coerce_markup(config.general_value)
    return DEFAULT_MARKUP_PERCENT if val is None else val


def resolve(config: Optional[CoefficientConfig], classification_key: Optional[str]) -> float:
    """
    Return the markup percent to apply for ``classification_key``.

    Per-key overrides are only consulted when the mode is per-key; an
    override of 0 is honoured (selling at cost is a valid choice).
    """
    if config is None:
        return DEFAULT_MARKUP_PERCENT

    if config.mode in (MODE_BY_CATEGORY, MODE_BY_SUBCATEGORY) and classification_key is not None:
        override = _coerce_markup(config.per_key_values.get(classification_key))
        if override is not None:
            return override

    return general_markup(config)


def classification_key(config: Optional[CoefficientConfig], product: Product) -> Optional[str]:
    """Key of ``product`` that the configuration's mode resolves against."""
    if config is None:
        return None
    if config.mode == MODE_BY_CATEGORY:
        return product.category
    if config.mode == MODE_BY_SUBCATEGORY:
        return product.subcategory
    return None


def resolve_for_product(config: Optional[CoefficientConfig], product: Product) -> float:
    """Markup percent for a catalog product under ``config``."""
    return resolve(config, classification_key(config, product))
