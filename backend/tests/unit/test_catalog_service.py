"""
Unit tests for CatalogCache — wholesale replacement, lookups, and refresh fallback.

Tests cover:
- Replacing the list and indexing by code (duplicates keep the first)
- Search and category filters
- Category/subcategory grouping
- Refresh success and last-known-good fallback on failure
- Readers holding an old snapshot are unaffected by a refresh

Version: 1.0.0
"""
import asyncio

import pytest
from unittest.mock import AsyncMock, patch

from autoparts_hub.core.exceptions import CatalogFetchFailed, ProductNotFoundError
from autoparts_hub.schemas.catalog import Product
from autoparts_hub.services.catalog_service import CatalogCache


@pytest.mark.unit
class TestReplaceAndLookup:

    def test_starts_empty(self, mock_catalog_client):
        cache = CatalogCache(mock_catalog_client)
        assert cache.products() == ()
        assert cache.loaded_at is None
        assert cache.get("FAR-001") is None

    def test_replace_indexes_by_code(self, loaded_catalog):
        assert len(loaded_catalog.products()) == 4
        assert loaded_catalog.get("PAS-101").brand == "Brembo"
        assert loaded_catalog.loaded_at is not None

    def test_duplicate_codes_keep_first(self, mock_catalog_client):
        cache = CatalogCache(mock_catalog_client)
        cache.replace([
            Product(code="A", description="first", base_cost=1),
            Product(code="A", description="second", base_cost=2),
        ])
        assert len(cache.products()) == 1
        assert cache.get("A").description == "first"

    def test_require_missing_raises(self, loaded_catalog):
        with pytest.raises(ProductNotFoundError):
            loaded_catalog.require("NOPE")

    def test_replace_is_wholesale(self, loaded_catalog):
        loaded_catalog.replace([Product(code="NEW-1", base_cost=10)])
        assert [p.code for p in loaded_catalog.products()] == ["NEW-1"]
        assert loaded_catalog.get("FAR-001") is None


@pytest.mark.unit
class TestSearch:

    def test_no_filters_returns_all(self, loaded_catalog):
        assert len(loaded_catalog.search()) == 4

    def test_search_matches_code_description_brand(self, loaded_catalog):
        assert [p.code for p in loaded_catalog.search(search="pas-")] == ["PAS-101"]
        assert [p.code for p in loaded_catalog.search(search="ventilado")] == ["DIS-201"]
        assert [p.code for p in loaded_catalog.search(search="ngk")] == ["BUJ-701"]

    def test_category_filter(self, loaded_catalog):
        codes = [p.code for p in loaded_catalog.search(category="Frenos")]
        assert codes == ["PAS-101", "DIS-201"]

    def test_subcategory_filter(self, loaded_catalog):
        codes = [p.code for p in loaded_catalog.search(category="Frenos", subcategory="Discos")]
        assert codes == ["DIS-201"]

    def test_categories_grouping(self, loaded_catalog):
        assert loaded_catalog.categories() == {
            "Frenos": ["Discos", "Pastillas"],
            "Iluminación": ["Faros"],
            "Motor": ["Bujías"],
        }


@pytest.mark.unit
class TestRefresh:

    @pytest.mark.asyncio
    async def test_refresh_replaces_list(self, mock_catalog_client):
        cache = CatalogCache(mock_catalog_client)
        assert await cache.refresh() is True
        assert len(cache.products()) == 4
        assert cache.last_error is None

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_previous_list(self, loaded_catalog, mock_catalog_client):
        before = loaded_catalog.products()
        mock_catalog_client.fetch_catalog_with_retry.side_effect = CatalogFetchFailed(
            "HTTP 500", status_code=500, attempts=3
        )

        assert await loaded_catalog.refresh() is False

        assert loaded_catalog.products() is before
        assert "HTTP 500" in loaded_catalog.last_error

    @pytest.mark.asyncio
    async def test_three_consecutive_failures_keep_catalog(self, mock_settings, sample_products):
        """End to end through the real client: 3 failed attempts, cache untouched."""
        from autoparts_hub.clients.catalog_client import CatalogClient

        client = CatalogClient(mock_settings)
        client.fetch_catalog = AsyncMock(side_effect=CatalogFetchFailed("network down"))
        cache = CatalogCache(client)
        cache.replace(sample_products)
        before = cache.snapshot

        with patch("autoparts_hub.clients.catalog_client.asyncio.sleep", new_callable=AsyncMock):
            assert await cache.refresh() is False

        assert client.fetch_catalog.await_count == 3
        assert cache.snapshot is before
        assert [p.code for p in cache.products()] == [p.code for p in sample_products]

    @pytest.mark.asyncio
    async def test_reader_snapshot_survives_refresh(self, loaded_catalog, mock_catalog_client):
        held = loaded_catalog.snapshot
        mock_catalog_client.fetch_catalog_with_retry.return_value = [Product(code="Z", base_cost=1)]

        await loaded_catalog.refresh()

        assert len(held.products) == 4
        assert [p.code for p in loaded_catalog.products()] == ["Z"]


@pytest.mark.unit
class TestPeriodicRefresh:

    @pytest.mark.asyncio
    async def test_loop_refreshes_until_cancelled(self, mock_catalog_client):
        cache = CatalogCache(mock_catalog_client)
        sleep = AsyncMock(side_effect=[None, asyncio.CancelledError()])

        with patch("autoparts_hub.services.catalog_service.asyncio.sleep", sleep):
            with pytest.raises(asyncio.CancelledError):
                await cache.run_periodic_refresh(300)

        assert mock_catalog_client.fetch_catalog_with_retry.await_count == 2
        sleep.assert_awaited_with(300)
