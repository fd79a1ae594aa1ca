"""
Coefficient routes — read, replace, and resolve the caller's markup configuration.
Version: 1.0.0
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from autoparts_hub.core.constants.pricing import DEFAULT_MARKUP_PERCENT
from autoparts_hub.routes.dependencies import get_user_session
from autoparts_hub.schemas.coefficients import (
    CoefficientConfig,
    CoefficientConfigResponse,
    CoefficientUpdateRequest,
    ResolvedMarkupResponse,
)
from autoparts_hub.services.session_service import StorefrontSession

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/coefficients", tags=["coefficients"])


def _response(config: Optional[CoefficientConfig]) -> CoefficientConfigResponse:
    return CoefficientConfigResponse(
        config=config or CoefficientConfig(general_value=DEFAULT_MARKUP_PERCENT),
        configured=config is not None,
        default_markup=DEFAULT_MARKUP_PERCENT,
    )


@router.get("", response_model=CoefficientConfigResponse)
async def get_coefficients(session: StorefrontSession = Depends(get_user_session)):
    """Current configuration; users without one get the default markup."""
    return _response(await session.ensure_config())


@router.put("", response_model=CoefficientConfigResponse)
async def replace_coefficients(
    body: CoefficientUpdateRequest,
    session: StorefrontSession = Depends(get_user_session),
):
    """Save the whole configuration. Lines already in the order keep their markup."""
    config = CoefficientConfig(
        mode=body.mode,
        general_value=body.general_value,
        per_key_values=body.per_key_values,
    )
    saved = await session.update_config(config, carry_forward=body.carry_forward)
    return _response(saved)


@router.get("/resolve", response_model=ResolvedMarkupResponse)
async def resolve_markup(
    key: Optional[str] = Query(default=None),
    session: StorefrontSession = Depends(get_user_session),
):
    """Effective markup for a category/subcategory key."""
    return ResolvedMarkupResponse(key=key, markup=await session.resolve_markup(key))
