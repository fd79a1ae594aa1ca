"""
Pytest configuration and shared fixtures for Auto-Parts Order Hub tests.

Provides mock clients, stores, a loaded catalog cache, and sample products.
Version: 1.0.0
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from autoparts_hub.schemas.catalog import Product
from autoparts_hub.services.catalog_service import CatalogCache


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_settings():
    """Settings object with test defaults (no real credentials)."""
    from autoparts_hub.core.config import Settings
    return Settings(
        supabase_url="https://test.supabase.co",
        supabase_key="test-supabase-key",
        supabase_service_role_key="test-supabase-key",
        catalog_url="https://catalog.test/api/catalogo.json",
        catalog_fetch_timeout=5.0,
        catalog_max_retries=3,
        catalog_retry_base_delay=1.0,
        catalog_refresh_seconds=300,
        auto_start_catalog_refresh=False,
        saved_orders_limit=20,
    )


# ---------------------------------------------------------------------------
# Clients (mocked)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_supabase_client():
    """Mocked SupabaseClient with a chainable table builder."""
    client = MagicMock()
    mock_table = MagicMock()
    for method in ("select", "insert", "upsert", "update", "delete", "eq", "in_", "order", "limit"):
        getattr(mock_table, method).return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])
    client.client.table.return_value = mock_table
    return client


@pytest.fixture
def mock_catalog_client(sample_products):
    """Mocked CatalogClient returning the sample catalog."""
    client = MagicMock()
    client.fetch_catalog_with_retry = AsyncMock(return_value=list(sample_products))
    return client


# ---------------------------------------------------------------------------
# Stores (mocked)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_coefficient_store():
    """Mocked CoefficientStore; users start without a configuration."""
    store = MagicMock()
    store.load = AsyncMock(return_value=None)
    store.save = AsyncMock(return_value=True)
    return store


@pytest.fixture
def mock_order_store():
    """Mocked SavedOrderStore."""
    store = MagicMock()
    store.save_order = AsyncMock()
    store.list_orders = AsyncMock(return_value=[])
    store.get_order = AsyncMock(return_value=None)
    store.delete_order = AsyncMock()
    return store


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@pytest.fixture
def loaded_catalog(mock_catalog_client, sample_products):
    """CatalogCache already holding the sample products."""
    cache = CatalogCache(mock_catalog_client)
    cache.replace(sample_products)
    return cache


# ---------------------------------------------------------------------------
# Sample test data
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_feed():
    """Catalog feed rows as served by the distributor (Spanish field names)."""
    return [
        {
            "codigo": "FAR-001",
            "descripcion": "Faro Delantero Derecho Universal LED",
            "categoria": "Iluminación",
            "subcategoria": "Faros",
            "marca": "Osram",
            "precioCosto": 15000,
            "precioLista": 22500,
            "imagenUrl": "https://images.test/far-001.jpg",
        },
        {
            "codigo": "PAS-101",
            "descripcion": "Pastillas de Freno Delanteras Cerámicas",
            "categoria": "Frenos",
            "subcategoria": "Pastillas",
            "marca": "Brembo",
            "precioCosto": 8500,
            "precioLista": 13500,
        },
        {
            "codigo": "DIS-201",
            "descripcion": "Disco de Freno Ventilado 280mm",
            "categoria": "Frenos",
            "subcategoria": "Discos",
            "marca": "Brembo",
            "precioCosto": 12000,
            "precioLista": 18500,
        },
        {
            "codigo": "BUJ-701",
            "descripcion": "Juego Bujías Iridium x4",
            "categoria": "Motor",
            "subcategoria": "Bujías",
            "marca": "NGK",
            "precioCosto": 8900,
            "precioLista": 13500,
        },
    ]


@pytest.fixture
def sample_products(sample_feed):
    return [Product.model_validate(row) for row in sample_feed]


@pytest.fixture
def headlight(sample_products):
    """FAR-001, base cost 15000."""
    return sample_products[0]


@pytest.fixture
def brake_pads(sample_products):
    """PAS-101, base cost 8500, category Frenos."""
    return sample_products[1]
