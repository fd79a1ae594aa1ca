"""
Base store — shared Supabase client access for all stores.

Base Supabase store with shared CRUD helpers.

Domain stores inherit from this class to get standardised
upsert / select / delete primitives. Supabase errors surface as
PersistenceFailure so callers can offer a retry.
Version: 1.0.0
"""

import logging
from typing import Any, Dict, List

from postgrest.exceptions import APIError

from autoparts_hub.core.config import settings
from autoparts_hub.core.exceptions import PersistenceFailure
from autoparts_hub.clients.supabase_client import SupabaseClient

logger = logging.getLogger("base_store")


class BaseStore:
    """Base class for all Supabase stores providing shared CRUD operations."""

    def __init__(self, supabase_client: SupabaseClient | None = None) -> None:
        self._supabase_client = supabase_client or SupabaseClient(settings)

    @property
    def _client(self):
        """Get the Supabase client instance."""
        return self._supabase_client.client

    async def _insert(self, table: str, rows: List[Dict[str, Any]]) -> None:
        """Insert rows into a table."""
        if not rows:
            return
        try:
            self._client.table(table).insert(rows).execute()
        except APIError as e:
            logger.error("supabase error table=%s detail=%s", table, str(e))
            raise PersistenceFailure(table, f"insert failed: {e}") from e

    async def _upsert(
        self, table: str, rows: List[Dict[str, Any]], on_conflict: str | None = None
    ) -> None:
        """Upsert rows into a table (insert or update on conflict)."""
        if not rows:
            return
        try:
            if on_conflict:
                self._client.table(table).upsert(rows, on_conflict=on_conflict).execute()
            else:
                self._client.table(table).upsert(rows).execute()
        except APIError as e:
            logger.error("supabase error table=%s detail=%s", table, str(e))
            raise PersistenceFailure(table, f"upsert failed: {e}") from e

    async def _select(
        self,
        table: str,
        columns: str = "*",
        filters: Dict[str, Any] | None = None,
        order_by: str | None = None,
        desc: bool = False,
    ) -> List[Dict[str, Any]]:
        """Select rows from a table with optional equality filters and ordering."""
        try:
            query = self._client.table(table).select(columns)
            if filters:
                for key, value in filters.items():
                    query = query.eq(key, value)
            if order_by:
                query = query.order(order_by, desc=desc)
            response = query.execute()
            return response.data or []
        except APIError as e:
            logger.error("supabase error table=%s detail=%s", table, str(e))
            raise PersistenceFailure(table, f"select failed: {e}") from e

    async def _delete(self, table: str, filters: Dict[str, Any]) -> None:
        """Delete rows matching all equality filters."""
        try:
            query = self._client.table(table).delete()
            for key, value in filters.items():
                query = query.eq(key, value)
            query.execute()
        except APIError as e:
            logger.error("supabase error table=%s detail=%s", table, str(e))
            raise PersistenceFailure(table, f"delete failed: {e}") from e

    async def _delete_in(self, table: str, column: str, values: List[Any]) -> None:
        """Delete rows whose ``column`` is one of ``values``."""
        if not values:
            return
        try:
            self._client.table(table).delete().in_(column, values).execute()
        except APIError as e:
            logger.error("supabase error table=%s detail=%s", table, str(e))
            raise PersistenceFailure(table, f"delete failed: {e}") from e
