"""
Coefficient schemas — per-user markup configuration.
Version: 1.0.0
"""
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator

from autoparts_hub.core.constants.pricing import (
    MODE_GENERAL,
    MODE_BY_CATEGORY,
    MODE_BY_SUBCATEGORY,
)
from autoparts_hub.utils.pricing import parse_percent

# Older records used shorter mode names
_MODE_ALIASES = {
    MODE_GENERAL: MODE_GENERAL,
    MODE_BY_CATEGORY: MODE_BY_CATEGORY,
    MODE_BY_SUBCATEGORY: MODE_BY_SUBCATEGORY,
    "category": MODE_BY_CATEGORY,
    "subcategory": MODE_BY_SUBCATEGORY,
}


def normalize_mode(value: Optional[str]) -> str:
    """Map any known mode spelling to its canonical name; unknown -> general."""
    if not value:
        return MODE_GENERAL
    return _MODE_ALIASES.get(str(value).strip().lower(), MODE_GENERAL)


def _typed_percent(value):
    """Accept ``"30%"`` or ``"12,5"`` as typed; unparseable text is left for pydantic to reject."""
    if isinstance(value, str):
        parsed = parse_percent(value)
        return value if parsed is None else parsed
    return value


class CoefficientConfig(BaseModel):
    """
    Markup configuration for one user, in percent.

    ``per_key_values`` maps a category name or subcategory id to an
    override. Keys missing from it are resolved against
    ``general_value`` at lookup time, never copied in.
    """
    mode: str = MODE_GENERAL
    general_value: Optional[float] = None
    per_key_values: Dict[str, float] = Field(default_factory=dict)

    @field_validator("mode", mode="before")
    @classmethod
    def _canonical_mode(cls, value):
        return normalize_mode(value)

    @field_validator("general_value", mode="before")
    @classmethod
    def _general_percent(cls, value):
        return _typed_percent(value)

    @field_validator("per_key_values", mode="before")
    @classmethod
    def _per_key_percent(cls, value):
        if isinstance(value, dict):
            return {key: _typed_percent(v) for key, v in value.items()}
        return value


class CoefficientUpdateRequest(CoefficientConfig):
    """
    Replace the user's configuration.

    With ``carry_forward`` set, overrides stored for keys absent from
    ``per_key_values`` are kept instead of dropped.
    """
    carry_forward: bool = False


class CoefficientConfigResponse(BaseModel):
    config: CoefficientConfig
    configured: bool
    default_markup: float


class ResolvedMarkupResponse(BaseModel):
    key: Optional[str] = None
    markup: float
