"""
Unit tests for BaseStore — shared Supabase client access and CRUD helpers.

Tests cover:
- Client property returns the Supabase client from SupabaseClient wrapper
- _insert delegates to supabase table insert
- _upsert delegates to supabase table upsert (with and without on_conflict)
- _select delegates to supabase table select with filters and ordering
- _delete / _delete_in apply their filters
- Error handling raises PersistenceFailure on APIError

Version: 1.0.0
"""
import pytest
from unittest.mock import MagicMock

from postgrest.exceptions import APIError

from autoparts_hub.core.exceptions import PersistenceFailure, RetryableError
from autoparts_hub.db.base_store import BaseStore


def _api_error(message):
    return APIError({"message": message, "code": "42000", "details": "", "hint": ""})


@pytest.fixture
def store(mock_supabase_client):
    """BaseStore instance wired to the mock SupabaseClient."""
    return BaseStore(supabase_client=mock_supabase_client)


@pytest.fixture
def mock_table(mock_supabase_client):
    return mock_supabase_client.client.table.return_value


# --------------------------------------------------------------------------
# _client property
# --------------------------------------------------------------------------

@pytest.mark.unit
class TestClientProperty:
    """Verify _client property delegates to SupabaseClient.client."""

    def test_client_returns_supabase_client(self, store, mock_supabase_client):
        assert store._client is mock_supabase_client.client


# --------------------------------------------------------------------------
# _insert
# --------------------------------------------------------------------------

@pytest.mark.unit
class TestInsert:

    @pytest.mark.asyncio
    async def test_insert_delegates(self, store, mock_table):
        rows = [{"id": "e1", "order_id": "o1"}]

        await store._insert("saved_orders", rows)

        store._client.table.assert_called_with("saved_orders")
        mock_table.insert.assert_called_once_with(rows)
        mock_table.upsert.assert_not_called()
        mock_table.execute.assert_called_once()

    @pytest.mark.asyncio
    async def test_insert_skips_empty_rows(self, store, mock_table):
        await store._insert("saved_orders", [])

        mock_table.insert.assert_not_called()

    @pytest.mark.asyncio
    async def test_insert_raises_persistence_failure_on_api_error(self, store, mock_table):
        mock_table.execute.side_effect = _api_error("duplicate key")

        with pytest.raises(PersistenceFailure, match="insert failed") as exc_info:
            await store._insert("saved_orders", [{"id": "e1"}])

        assert exc_info.value.table == "saved_orders"
        assert isinstance(exc_info.value.__cause__, APIError)


# --------------------------------------------------------------------------
# _upsert
# --------------------------------------------------------------------------

@pytest.mark.unit
class TestUpsert:

    @pytest.mark.asyncio
    async def test_upsert_without_on_conflict(self, store, mock_table):
        rows = [{"id": "o1"}]

        await store._upsert("saved_orders", rows)

        mock_table.upsert.assert_called_once_with(rows)

    @pytest.mark.asyncio
    async def test_upsert_with_on_conflict(self, store, mock_table):
        rows = [{"user_id": "u1", "mode": "general"}]

        await store._upsert("client_coefficients", rows, on_conflict="user_id")

        store._client.table.assert_called_with("client_coefficients")
        mock_table.upsert.assert_called_once_with(rows, on_conflict="user_id")
        mock_table.execute.assert_called_once()

    @pytest.mark.asyncio
    async def test_upsert_skips_empty_rows(self, store, mock_table):
        await store._upsert("saved_orders", [])

        mock_table.upsert.assert_not_called()

    @pytest.mark.asyncio
    async def test_upsert_raises_persistence_failure_on_api_error(self, store, mock_table):
        mock_table.execute.side_effect = _api_error("upsert failed")

        with pytest.raises(PersistenceFailure) as exc_info:
            await store._upsert("client_coefficients", [{"user_id": "u1"}])

        assert exc_info.value.table == "client_coefficients"
        assert isinstance(exc_info.value, RetryableError)
        assert isinstance(exc_info.value.__cause__, APIError)


# --------------------------------------------------------------------------
# _select
# --------------------------------------------------------------------------

@pytest.mark.unit
class TestSelect:

    @pytest.mark.asyncio
    async def test_select_returns_data(self, store, mock_table):
        mock_table.execute.return_value = MagicMock(data=[{"id": "o1"}])

        result = await store._select("saved_orders")

        assert result == [{"id": "o1"}]
        mock_table.select.assert_called_once_with("*")

    @pytest.mark.asyncio
    async def test_select_with_filters(self, store, mock_table):
        await store._select("saved_orders", filters={"user_id": "u1", "id": "o1"})

        assert mock_table.eq.call_count == 2

    @pytest.mark.asyncio
    async def test_select_with_ordering(self, store, mock_table):
        await store._select("saved_orders", "id", order_by="created_at", desc=True)

        mock_table.select.assert_called_once_with("id")
        mock_table.order.assert_called_once_with("created_at", desc=True)

    @pytest.mark.asyncio
    async def test_select_returns_empty_when_no_data(self, store, mock_table):
        mock_table.execute.return_value = MagicMock(data=None)

        assert await store._select("saved_orders") == []

    @pytest.mark.asyncio
    async def test_select_raises_persistence_failure(self, store, mock_table):
        mock_table.execute.side_effect = _api_error("relation does not exist")

        with pytest.raises(PersistenceFailure, match="select failed"):
            await store._select("saved_orders")


# --------------------------------------------------------------------------
# _delete / _delete_in
# --------------------------------------------------------------------------

@pytest.mark.unit
class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_applies_filters(self, store, mock_table):
        await store._delete("saved_orders", {"user_id": "u1", "id": "o1"})

        mock_table.delete.assert_called_once()
        mock_table.eq.assert_any_call("user_id", "u1")
        mock_table.eq.assert_any_call("id", "o1")
        mock_table.execute.assert_called_once()

    @pytest.mark.asyncio
    async def test_delete_in(self, store, mock_table):
        await store._delete_in("saved_orders", "id", ["o1", "o2"])

        mock_table.in_.assert_called_once_with("id", ["o1", "o2"])

    @pytest.mark.asyncio
    async def test_delete_in_skips_empty(self, store, mock_table):
        await store._delete_in("saved_orders", "id", [])

        mock_table.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_delete_raises_persistence_failure(self, store, mock_table):
        mock_table.execute.side_effect = _api_error("delete failed")

        with pytest.raises(PersistenceFailure):
            await store._delete("saved_orders", {"id": "o1"})
