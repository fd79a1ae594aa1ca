"""
Order routes — build the current order, save it, reopen saved ones, and
hand it off as a message or CSV.
Version: 1.0.0
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from autoparts_hub.routes.dependencies import get_user_session
from autoparts_hub.schemas.orders import (
    AddLineRequest,
    OrderDetailsRequest,
    OrderMessageResponse,
    OrderSnapshot,
    QuoteResponse,
    SavedOrdersResponse,
    SelectionRequest,
    SelectionResponse,
    UpdateLineRequest,
)
from autoparts_hub.services.export_service import order_to_csv
from autoparts_hub.services.session_service import StorefrontSession

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/order", tags=["order"])
saved_router = APIRouter(prefix="/orders/saved", tags=["saved-orders"])


@router.get("", response_model=OrderSnapshot)
async def get_order(session: StorefrontSession = Depends(get_user_session)):
    return session.snapshot()


@router.post("/lines", response_model=OrderSnapshot)
async def add_line(
    body: AddLineRequest,
    session: StorefrontSession = Depends(get_user_session),
):
    """Add a product, or replace its line if already present."""
    await session.add_product(body.code, body.quantity, body.markup)
    return session.snapshot()


@router.put("/lines/{code}", response_model=OrderSnapshot)
async def update_line(
    code: str,
    body: UpdateLineRequest,
    session: StorefrontSession = Depends(get_user_session),
):
    session.update_line(code, body.quantity, body.markup)
    return session.snapshot()


@router.delete("/lines/{code}", response_model=OrderSnapshot)
async def remove_line(
    code: str,
    session: StorefrontSession = Depends(get_user_session),
):
    session.remove_line(code)
    return session.snapshot()


@router.delete("", response_model=OrderSnapshot)
async def clear_order(session: StorefrontSession = Depends(get_user_session)):
    """Empty the order; it gets a new id."""
    session.clear_order()
    return session.snapshot()


@router.patch("", response_model=OrderSnapshot)
async def update_details(
    body: OrderDetailsRequest,
    session: StorefrontSession = Depends(get_user_session),
):
    """Update the customer name and/or notes; omitted fields are left as they are."""
    session.set_details(**body.model_dump(exclude_unset=True))
    return session.snapshot()


@router.get("/selection", response_model=SelectionResponse)
async def get_selection(session: StorefrontSession = Depends(get_user_session)):
    return SelectionResponse(product=session.selected_product)


@router.put("/selection", response_model=SelectionResponse)
async def set_selection(
    body: SelectionRequest,
    session: StorefrontSession = Depends(get_user_session),
):
    return SelectionResponse(product=session.select(body.code))


@router.get("/quote/{code}", response_model=QuoteResponse)
async def quote_product(
    code: str,
    session: StorefrontSession = Depends(get_user_session),
):
    """Unit price of a product at the caller's configured markup."""
    return QuoteResponse(code=code, **await session.quote(code))


@router.post("/save", response_model=OrderSnapshot)
async def save_order(session: StorefrontSession = Depends(get_user_session)):
    return await session.save_order()


@router.get("/message", response_model=OrderMessageResponse)
async def order_message(
    phone: Optional[str] = Query(default=None),
    session: StorefrontSession = Depends(get_user_session),
):
    """Message text and WhatsApp link for the current order."""
    return OrderMessageResponse(**session.render_message(phone))


@router.get("/export.csv")
async def export_order(session: StorefrontSession = Depends(get_user_session)):
    snapshot = session.export_snapshot()
    return Response(
        content=order_to_csv(snapshot),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="pedido-{snapshot.id[:8]}.csv"'},
    )


# -- Saved orders ----------------------------------------------------------

@saved_router.get("", response_model=SavedOrdersResponse)
async def list_saved_orders(session: StorefrontSession = Depends(get_user_session)):
    orders = await session.list_saved_orders()
    return SavedOrdersResponse(orders=orders, total=len(orders))


@saved_router.post("/{order_id}/load", response_model=OrderSnapshot)
async def load_saved_order(
    order_id: str,
    session: StorefrontSession = Depends(get_user_session),
):
    await session.load_saved_order(order_id)
    return session.snapshot()


@saved_router.post("/{order_id}/duplicate", response_model=OrderSnapshot)
async def duplicate_saved_order(
    order_id: str,
    session: StorefrontSession = Depends(get_user_session),
):
    await session.duplicate_saved_order(order_id)
    return session.snapshot()


@saved_router.delete("/{order_id}", status_code=204)
async def delete_saved_order(
    order_id: str,
    session: StorefrontSession = Depends(get_user_session),
):
    await session.delete_saved_order(order_id)
    return Response(status_code=204)
