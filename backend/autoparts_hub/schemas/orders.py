"""
Order schemas — immutable order snapshots and order API payloads.
Version: 1.0.0
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from autoparts_hub.schemas.catalog import Product


class OrderLineSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    product: Product
    quantity: int
    markup: float
    unit_price: float
    line_subtotal: float


class OrderSnapshot(BaseModel):
    """
    Point-in-time copy of an order handed to export, messaging and
    persistence. ``total`` equals the sum of line subtotals.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    customer_name: Optional[str] = None
    notes: Optional[str] = None
    lines: List[OrderLineSnapshot] = []
    total: float = 0.0
    created_at: Optional[datetime] = None


class AddLineRequest(BaseModel):
    """Add a product to the order (or replace its line).

    Without ``markup`` the user's configured markup for the product applies.
    """
    code: str
    quantity: int
    markup: Optional[float] = None


class UpdateLineRequest(BaseModel):
    """Change quantity and optionally markup; omitted markup keeps the line's own."""
    quantity: int
    markup: Optional[float] = None


class OrderDetailsRequest(BaseModel):
    customer_name: Optional[str] = None
    notes: Optional[str] = None


class SelectionRequest(BaseModel):
    code: Optional[str] = None


class SelectionResponse(BaseModel):
    product: Optional[Product] = None


class QuoteResponse(BaseModel):
    code: str
    markup: float
    base_cost: float
    unit_price: float
    list_price: Optional[float] = None


class SavedOrderSummary(BaseModel):
    """One entry of the saved-order history; ``order_id`` is the order it was taken from."""
    id: str
    order_id: Optional[str] = None
    customer_name: Optional[str] = None
    total: float
    line_count: int
    created_at: Optional[datetime] = None


class SavedOrdersResponse(BaseModel):
    orders: List[SavedOrderSummary]
    total: int


class OrderMessageResponse(BaseModel):
    text: str
    whatsapp_url: str
