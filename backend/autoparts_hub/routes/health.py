"""
Health routes — liveness plus catalog cache status.
Version: 1.0.0
"""
from fastapi import APIRouter, Depends

from autoparts_hub.container import get_catalog_cache
from autoparts_hub.services.catalog_service import CatalogCache

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(catalog: CatalogCache = Depends(get_catalog_cache)):
    """Healthy while the process serves; degraded when no catalog is loaded."""
    products = catalog.products()
    return {
        "status": "healthy" if products else "degraded",
        "catalog": {
            "products": len(products),
            "loaded_at": catalog.loaded_at.isoformat() if catalog.loaded_at else None,
            "last_error": catalog.last_error,
        },
    }
