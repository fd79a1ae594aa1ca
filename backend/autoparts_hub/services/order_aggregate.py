"""
Order aggregate — in-memory order being built by one session.

Lines are keyed by product code (one line per code) and keep insertion
order. The order total is recomputed synchronously after every mutation,
so ``total`` always equals the sum of the current line subtotals.

A line freezes the markup it was added with; later configuration changes
do not reprice it.
Version: 1.0.0
"""
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

from autoparts_hub.core.exceptions import InvalidLineInput
from autoparts_hub.schemas.catalog import Product
from autoparts_hub.schemas.orders import OrderLineSnapshot, OrderSnapshot
from autoparts_hub.utils.pricing import final_price, line_subtotal
from autoparts_hub.utils.type_converters import is_positive_int, to_number

logger = logging.getLogger(__name__)


def new_order_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class OrderLine:
    product: Product
    quantity: int
    markup: float

    @property
    def code(self) -> str:
        return self.product.code

    @property
    def unit_price(self) -> float:
        return final_price(self.product.base_cost, self.markup)

    @property
    def line_subtotal(self) -> float:
        return line_subtotal(self.unit_price, self.quantity)

    def snapshot(self) -> OrderLineSnapshot:
        return OrderLineSnapshot(
            product=self.product,
            quantity=self.quantity,
            markup=self.markup,
            unit_price=self.unit_price,
            line_subtotal=self.line_subtotal,
        )


def _validate_line_input(quantity: Any, markup: Any, code: Optional[str]) -> Tuple[int, float]:
    if not is_positive_int(quantity):
        raise InvalidLineInput(
            f"Quantity must be a positive integer, got {quantity!r}", code=code
        )
    value = to_number(markup)
    if value is None:
        raise InvalidLineInput(f"Markup must be numeric, got {markup!r}", code=code)
    if value < 0:
        raise InvalidLineInput(f"Markup cannot be negative, got {value}", code=code)
    return int(quantity), value


class Order:
    """Mutable order owned by a single session."""

    def __init__(
        self,
        order_id: Optional[str] = None,
        customer_name: Optional[str] = None,
        notes: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> None:
        self.id = order_id or new_order_id()
        self.customer_name = customer_name
        self.notes = notes
        # Set when the order is saved, not when it is started
        self.created_at = created_at
        self._lines: Dict[str, OrderLine] = {}
        self._total = 0.0

    # -- Read access ---------------------------------------------------------

    @property
    def lines(self) -> Tuple[OrderLine, ...]:
        return tuple(self._lines.values())

    @property
    def total(self) -> float:
        return self._total

    def current_total(self) -> float:
        return self._total

    def get_line(self, code: str) -> Optional[OrderLine]:
        return self._lines.get(code)

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, code: object) -> bool:
        return code in self._lines

    # -- Mutations -----------------------------------------------------------

    def add_or_update_line(self, product: Product, quantity: int, markup: float) -> OrderLine:
        """Add ``product`` or replace its existing line; raises InvalidLineInput."""
        qty, value = _validate_line_input(quantity, markup, product.code)
        line = OrderLine(product=product, quantity=qty, markup=value)
        # Reassigning an existing key keeps the line's position
        self._lines[product.code] = line
        self._recompute_total()
        logger.debug(
            "order=%s line=%s qty=%s markup=%s total=%s",
            self.id, product.code, qty, value, self._total,
        )
        return line

    def update_line(self, code: str, quantity: int, markup: Optional[float] = None) -> OrderLine:
        """Change an existing line; ``markup=None`` keeps the line's frozen markup."""
        existing = self._lines.get(code)
        if existing is None:
            raise InvalidLineInput(f"No line for product {code} in the order", code=code)
        return self.add_or_update_line(
            existing.product,
            quantity,
            existing.markup if markup is None else markup,
        )

    def remove_line(self, code: str) -> None:
        if self._lines.pop(code, None) is not None:
            logger.debug("order=%s removed line=%s", self.id, code)
        self._recompute_total()

    def clear(self) -> None:
        """Drop every line and start over under a fresh id."""
        self._lines.clear()
        self._total = 0.0
        self.id = new_order_id()
        self.customer_name = None
        self.notes = None
        self.created_at = None

    def _recompute_total(self) -> None:
        self._total = sum((line.line_subtotal for line in self._lines.values()), 0.0)

    # -- Snapshots -----------------------------------------------------------

    def snapshot(self, created_at: Optional[datetime] = None) -> OrderSnapshot:
        lines = [line.snapshot() for line in self._lines.values()]
        return OrderSnapshot(
            id=self.id,
            customer_name=self.customer_name,
            notes=self.notes,
            lines=lines,
            total=sum((line.line_subtotal for line in lines), 0.0),
            created_at=created_at or self.created_at,
        )

    @classmethod
    def from_snapshot(cls, snapshot: OrderSnapshot, keep_created_at: bool = True) -> "Order":
        """
        Rebuild an editable order from a saved snapshot under a fresh id.

        Line prices are derived again from each product's base cost and
        the line's stored markup.
        """
        order = cls(
            customer_name=snapshot.customer_name,
            notes=snapshot.notes,
            created_at=snapshot.created_at if keep_created_at else None,
        )
        for line in snapshot.lines:
            qty, value = _validate_line_input(line.quantity, line.markup, line.product.code)
            order._lines[line.product.code] = OrderLine(
                product=line.product, quantity=qty, markup=value
            )
        order._recompute_total()
        return order
