"""
Saved order store — order history per user in Supabase.

Every save appends a new row holding the full snapshot as JSON, so saving
the same order twice keeps both versions. Rows have their own ``id``;
``order_id`` is the id of the order the snapshot was taken from. Only the
newest ``saved_orders_limit`` rows per user are kept; older ones are
pruned after every save.
Version: 1.0.0
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from autoparts_hub.core.config import settings
from autoparts_hub.core.exceptions import PersistenceFailure
from autoparts_hub.db.base_store import BaseStore
from autoparts_hub.schemas.orders import OrderSnapshot, SavedOrderSummary

logger = logging.getLogger("order_store")

_SUMMARY_COLUMNS = "id,order_id,customer_name,total,line_count,created_at"


class SavedOrderStore(BaseStore):
    """History of saved orders in the ``saved_orders`` table."""

    def __init__(
        self,
        supabase_client=None,
        table: str | None = None,
        limit: int | None = None,
    ) -> None:
        super().__init__(supabase_client)
        self._table = table or settings.saved_orders_table
        self._limit = limit or settings.saved_orders_limit

    async def save_order(self, user_id: str, snapshot: OrderSnapshot) -> str:
        """Append ``snapshot`` to the user's history; returns the new entry id."""
        entry_id = str(uuid.uuid4())
        row = {
            "id": entry_id,
            "order_id": snapshot.id,
            "user_id": user_id,
            "customer_name": snapshot.customer_name,
            "total": snapshot.total,
            "line_count": len(snapshot.lines),
            "payload": snapshot.model_dump(mode="json"),
            "created_at": snapshot.created_at.isoformat() if snapshot.created_at else None,
        }
        await self._insert(self._table, [row])
        logger.info(
            "saved order entry=%s order=%s user=%s lines=%s total=%s",
            entry_id, snapshot.id, user_id, len(snapshot.lines), snapshot.total,
        )
        await self._prune(user_id)
        return entry_id

    async def _prune(self, user_id: str) -> None:
        """Drop entries beyond the limit. The save already succeeded, so errors only warn."""
        try:
            rows = await self._select(
                self._table, "id", {"user_id": user_id}, order_by="created_at", desc=True
            )
            stale = [r["id"] for r in rows[self._limit:]]
            if stale:
                await self._delete_in(self._table, "id", stale)
                logger.info("pruned %s saved orders for user=%s", len(stale), user_id)
        except PersistenceFailure as e:
            logger.warning("saved order pruning failed for user=%s: %s", user_id, e)

    async def list_orders(self, user_id: str) -> List[SavedOrderSummary]:
        """Saved orders for ``user_id``, newest first."""
        rows = await self._select(
            self._table, _SUMMARY_COLUMNS, {"user_id": user_id},
            order_by="created_at", desc=True,
        )
        return [SavedOrderSummary(**r) for r in rows[: self._limit]]

    async def get_order(self, user_id: str, entry_id: str) -> Optional[OrderSnapshot]:
        rows = await self._select(
            self._table, "id,payload", {"user_id": user_id, "id": entry_id}
        )
        if not rows:
            return None
        return self._parse_payload(rows[0])

    async def delete_order(self, user_id: str, entry_id: str) -> None:
        await self._delete(self._table, {"user_id": user_id, "id": entry_id})
        logger.info("deleted saved order entry=%s user=%s", entry_id, user_id)

    @staticmethod
    def _parse_payload(row: Dict[str, Any]) -> Optional[OrderSnapshot]:
        try:
            return OrderSnapshot.model_validate(row.get("payload") or {})
        except PydanticValidationError as e:
            logger.error("corrupt saved order entry=%s error=%s", row.get("id"), e)
            return None
