"""
Order message rendering — chat-ready text and WhatsApp hand-off URL.

Sending is done by the user's chat app; this module only renders text
from an OrderSnapshot and builds the ``wa.me`` link that carries it.
Version: 1.0.0
"""
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import quote

from autoparts_hub.core.constants.orders import (
    MESSAGE_RULE,
    STORE_NAME,
    STORE_SIGNATURE,
    WHATSAPP_BASE_URL,
)
from autoparts_hub.schemas.orders import OrderSnapshot
from autoparts_hub.utils.pricing import format_percent, format_price


def render_order_message(snapshot: OrderSnapshot, now: Optional[datetime] = None) -> str:
    """Itemized order text using WhatsApp markup (*bold*, _italic_)."""
    when = snapshot.created_at or now or datetime.now(timezone.utc)

    parts = [
        f"*PEDIDO - {STORE_NAME}*",
        MESSAGE_RULE,
        "",
        f"*Fecha:* {when.strftime('%d/%m/%Y %H:%M')}",
    ]
    if snapshot.customer_name:
        parts.append(f"*Cliente:* {snapshot.customer_name}")
    parts += ["", "*DETALLE DEL PEDIDO*", MESSAGE_RULE, ""]

    for index, line in enumerate(snapshot.lines, start=1):
        parts += [
            f"{index}. *{line.product.code}*",
            f"   {line.product.description}",
            f"   Cant: {line.quantity} | "
            f"Ganancia: {format_percent(line.markup)}% | "
            f"P.Unit: {format_price(line.unit_price)}",
            f"   *Subtotal: {format_price(line.line_subtotal)}*",
            "",
        ]

    parts += [MESSAGE_RULE, f"*TOTAL: {format_price(snapshot.total)}*", MESSAGE_RULE, ""]
    if snapshot.notes:
        parts += [f"*Observaciones:* {snapshot.notes}", ""]
    parts.append(f"_{STORE_SIGNATURE}_")
    return "\n".join(parts)


def build_whatsapp_url(text: str, phone: Optional[str] = None) -> str:
    """``https://wa.me/<phone>?text=...``; without a phone the app asks for a contact."""
    digits = "".join(ch for ch in phone if ch.isdigit()) if phone else ""
    return f"{WHATSAPP_BASE_URL}{digits}?text={quote(text, safe='')}"
