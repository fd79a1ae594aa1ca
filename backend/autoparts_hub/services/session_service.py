"""
Storefront session — per-user application state behind the order routes.

A StorefrontSession ties together what one user is working on: the
current Order, their coefficient configuration (loaded once, then kept
in memory), and the product selected in the catalog. Sessions are held
by a SessionRegistry built in the DI container; there is no module-level
state.

Persistence runs before any in-memory commit, so a PersistenceFailure
leaves the session exactly as it was.
Version: 1.0.0
"""
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from autoparts_hub.core.exceptions import OrderNotFoundError, ValidationError
from autoparts_hub.db.coefficient_store import CoefficientStore
from autoparts_hub.db.order_store import SavedOrderStore
from autoparts_hub.schemas.catalog import Product
from autoparts_hub.schemas.coefficients import CoefficientConfig
from autoparts_hub.schemas.orders import OrderSnapshot, SavedOrderSummary
from autoparts_hub.services.catalog_service import CatalogCache
from autoparts_hub.services.messaging_service import build_whatsapp_url, render_order_message
from autoparts_hub.services.order_aggregate import Order, OrderLine
from autoparts_hub.utils.coefficients import resolve, resolve_for_product
from autoparts_hub.utils.pricing import final_price

logger = logging.getLogger(__name__)

_DETAIL_FIELDS = ("customer_name", "notes")


class StorefrontSession:
    """Order-building state and operations for one user."""

    def __init__(
        self,
        user_id: str,
        catalog: CatalogCache,
        coefficient_store: CoefficientStore,
        order_store: SavedOrderStore,
        whatsapp_phone: Optional[str] = None,
    ) -> None:
        self.user_id = user_id
        self.catalog = catalog
        self._coefficients = coefficient_store
        self._orders = order_store
        self._whatsapp_phone = whatsapp_phone
        self.order = Order()
        self.config: Optional[CoefficientConfig] = None
        self._config_loaded = False
        self.selected_code: Optional[str] = None

    # -- Coefficient configuration ------------------------------------------

    async def ensure_config(self) -> Optional[CoefficientConfig]:
        """Load the user's configuration on first use; None means defaults."""
        if not self._config_loaded:
            self.config = await self._coefficients.load(self.user_id)
            self._config_loaded = True
        return self.config

    async def update_config(
        self, config: CoefficientConfig, carry_forward: bool = False
    ) -> CoefficientConfig:
        """
        Persist ``config`` as the user's whole configuration.

        With ``carry_forward``, overrides from the current configuration for
        keys the new one does not mention are kept. Existing order lines
        keep the markup they were added with.
        """
        current = await self.ensure_config()
        new_config = config.model_copy(deep=True)
        if carry_forward and current is not None:
            merged = dict(current.per_key_values)
            merged.update(new_config.per_key_values)
            new_config.per_key_values = merged

        await self._coefficients.save(self.user_id, new_config)
        self.config = new_config
        return new_config

    async def resolve_markup(self, key: Optional[str]) -> float:
        return resolve(await self.ensure_config(), key)

    async def markup_for(self, product: Product) -> float:
        return resolve_for_product(await self.ensure_config(), product)

    # -- Catalog selection / quotes -----------------------------------------

    def select(self, code: Optional[str]) -> Optional[Product]:
        if code is None:
            self.selected_code = None
            return None
        product = self.catalog.require(code)
        self.selected_code = code
        return product

    @property
    def selected_product(self) -> Optional[Product]:
        # A refresh may have dropped the product
        return self.catalog.get(self.selected_code) if self.selected_code else None

    async def quote(self, code: str) -> Dict[str, float]:
        product = self.catalog.require(code)
        markup = await self.markup_for(product)
        return {
            "markup": markup,
            "base_cost": product.base_cost,
            "unit_price": final_price(product.base_cost, markup),
            "list_price": product.list_price,
        }

    # -- Order lines --------------------------------------------------------

    async def add_product(
        self, code: str, quantity: int, markup: Optional[float] = None
    ) -> OrderLine:
        """Add or replace the line for ``code``; markup defaults to the configured one."""
        product = self.catalog.require(code)
        if markup is None:
            markup = await self.markup_for(product)
        return self.order.add_or_update_line(product, quantity, markup)

    def update_line(self, code: str, quantity: int, markup: Optional[float] = None) -> OrderLine:
        return self.order.update_line(code, quantity, markup)

    def remove_line(self, code: str) -> None:
        self.order.remove_line(code)

    def clear_order(self) -> None:
        self.order.clear()

    def set_details(self, **changes: Optional[str]) -> None:
        """Update only the given header fields; omitted ones keep their value."""
        for field in _DETAIL_FIELDS:
            if field in changes:
                setattr(self.order, field, changes[field])

    def snapshot(self) -> OrderSnapshot:
        return self.order.snapshot()

    def _require_lines(self, action: str) -> None:
        if len(self.order) == 0:
            raise ValidationError(f"Cannot {action} an empty order")

    def export_snapshot(self) -> OrderSnapshot:
        """Snapshot for handing the order off; refuses an empty order."""
        self._require_lines("export")
        return self.snapshot()

    # -- Saved orders -------------------------------------------------------

    async def save_order(self) -> OrderSnapshot:
        """Persist the current order stamped with the save time."""
        self._require_lines("save")
        snapshot = self.order.snapshot(created_at=datetime.now(timezone.utc))
        entry_id = await self._orders.save_order(self.user_id, snapshot)
        self.order.created_at = snapshot.created_at
        logger.info("user=%s saved order=%s entry=%s", self.user_id, snapshot.id, entry_id)
        return snapshot

    async def list_saved_orders(self) -> List[SavedOrderSummary]:
        return await self._orders.list_orders(self.user_id)

    async def _get_saved(self, order_id: str) -> OrderSnapshot:
        snapshot = await self._orders.get_order(self.user_id, order_id)
        if snapshot is None:
            raise OrderNotFoundError(f"Saved order {order_id} not found")
        return snapshot

    async def load_saved_order(self, order_id: str) -> Order:
        """Reopen a saved order under a fresh id, keeping its original date."""
        self.order = Order.from_snapshot(await self._get_saved(order_id), keep_created_at=True)
        logger.info("user=%s loaded saved order=%s as %s", self.user_id, order_id, self.order.id)
        return self.order

    async def duplicate_saved_order(self, order_id: str) -> Order:
        """Start a new order with the lines of a saved one."""
        self.order = Order.from_snapshot(await self._get_saved(order_id), keep_created_at=False)
        logger.info("user=%s duplicated saved order=%s as %s", self.user_id, order_id, self.order.id)
        return self.order

    async def delete_saved_order(self, order_id: str) -> None:
        await self._orders.delete_order(self.user_id, order_id)

    # -- Outbound message ---------------------------------------------------

    def render_message(self, phone: Optional[str] = None) -> Dict[str, str]:
        self._require_lines("send")
        text = render_order_message(self.snapshot())
        return {
            "text": text,
            "whatsapp_url": build_whatsapp_url(text, phone or self._whatsapp_phone),
        }


class SessionRegistry:
    """
    Creates and keeps one StorefrontSession per user id.

    Sessions are never evicted: each one holds an order that has not been
    saved yet, and user ids come from the authenticating gateway, so the
    map grows with the registered user base rather than with requests.
    """

    def __init__(
        self,
        catalog: CatalogCache,
        coefficient_store: CoefficientStore,
        order_store: SavedOrderStore,
        whatsapp_phone: Optional[str] = None,
    ) -> None:
        self._catalog = catalog
        self._coefficient_store = coefficient_store
        self._order_store = order_store
        self._whatsapp_phone = whatsapp_phone
        self._sessions: Dict[str, StorefrontSession] = {}

    def get(self, user_id: str) -> StorefrontSession:
        session = self._sessions.get(user_id)
        if session is None:
            session = StorefrontSession(
                user_id,
                catalog=self._catalog,
                coefficient_store=self._coefficient_store,
                order_store=self._order_store,
                whatsapp_phone=self._whatsapp_phone,
            )
            self._sessions[user_id] = session
            logger.info("session started user=%s", user_id)
        return session

    def __len__(self) -> int:
        return len(self._sessions)
