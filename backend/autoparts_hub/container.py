"""
Lazy DI container — singleton access to clients, stores, and services.

Lazy dependency-injection container.

Each getter builds its object on first call and returns the same instance
afterwards. Routes receive these through FastAPI ``Depends`` so tests can
swap them with ``app.dependency_overrides``.
Version: 1.0.0
"""

from functools import lru_cache

from autoparts_hub.core.config import settings
from autoparts_hub.clients.supabase_client import SupabaseClient
from autoparts_hub.clients.catalog_client import CatalogClient
from autoparts_hub.db.coefficient_store import CoefficientStore
from autoparts_hub.db.order_store import SavedOrderStore
from autoparts_hub.services.catalog_service import CatalogCache
from autoparts_hub.services.session_service import SessionRegistry


# -- Clients ---------------------------------------------------------------

@lru_cache(maxsize=1)
def get_supabase_client():
    return SupabaseClient(settings)


@lru_cache(maxsize=1)
def get_catalog_client():
    return CatalogClient(settings)


# -- DB Stores -------------------------------------------------------------

@lru_cache(maxsize=1)
def get_coefficient_store():
    return CoefficientStore(get_supabase_client())


@lru_cache(maxsize=1)
def get_saved_order_store():
    return SavedOrderStore(get_supabase_client())


# -- Services --------------------------------------------------------------

@lru_cache(maxsize=1)
def get_catalog_cache():
    return CatalogCache(get_catalog_client())


@lru_cache(maxsize=1)
def get_session_registry():
    return SessionRegistry(
        catalog=get_catalog_cache(),
        coefficient_store=get_coefficient_store(),
        order_store=get_saved_order_store(),
        whatsapp_phone=settings.whatsapp_phone,
    )
