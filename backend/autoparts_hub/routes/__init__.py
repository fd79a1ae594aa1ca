"""
Route aggregator — mounts all routers under /api/v1 prefix.

Route aggregation module.

Combines the storefront routers under /api/v1 prefix.
The health route is exported separately for main.py to mount at root.
Version: 1.0.0
"""
from fastapi import APIRouter

from autoparts_hub.routes.catalog import router as catalog_router
from autoparts_hub.routes.coefficients import router as coefficients_router
from autoparts_hub.routes.orders import router as order_router
from autoparts_hub.routes.orders import saved_router as saved_orders_router
from autoparts_hub.routes.health import router as health_router

v1_router = APIRouter(prefix="/api/v1")

v1_router.include_router(catalog_router)
v1_router.include_router(coefficients_router)
v1_router.include_router(order_router)
v1_router.include_router(saved_orders_router)

__all__ = ["v1_router", "health_router"]
