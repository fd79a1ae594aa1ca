"""
Fixtures for route integration tests.

The app runs with its real routers and exception handlers; the catalog
cache and session registry are swapped through dependency overrides so
no network or Supabase access happens.
Version: 1.0.0
"""
import os

import pytest
from unittest.mock import patch

os.environ.setdefault("AUTO_START_CATALOG_REFRESH", "false")

from fastapi.testclient import TestClient

from autoparts_hub.services.session_service import SessionRegistry

TEST_USER_ID = "test-user-id"


@pytest.fixture
def registry(loaded_catalog, mock_coefficient_store, mock_order_store):
    return SessionRegistry(
        loaded_catalog,
        mock_coefficient_store,
        mock_order_store,
        whatsapp_phone="5491100000000",
    )


def _make_client(catalog, registry, user_id):
    from autoparts_hub import main
    from autoparts_hub.container import get_catalog_cache, get_session_registry

    main.app.dependency_overrides[get_catalog_cache] = lambda: catalog
    main.app.dependency_overrides[get_session_registry] = lambda: registry
    with patch.object(main.settings, "auto_start_catalog_refresh", False):
        with TestClient(main.app, raise_server_exceptions=False) as c:
            if user_id:
                c.headers.update({"X-User-Id": user_id})
            yield c
    main.app.dependency_overrides.clear()


@pytest.fixture
def client(loaded_catalog, registry):
    """Test client authenticated as TEST_USER_ID."""
    yield from _make_client(loaded_catalog, registry, TEST_USER_ID)


@pytest.fixture
def unauthenticated_client(loaded_catalog, registry):
    """Test client without the X-User-Id header, to test 401."""
    yield from _make_client(loaded_catalog, registry, None)
