"""
Catalog routes — browse, search, refresh, and export the product list.
Version: 1.0.0
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from autoparts_hub.core.auth import get_current_user
from autoparts_hub.container import get_catalog_cache
from autoparts_hub.schemas.catalog import (
    CatalogRefreshResponse,
    CatalogResponse,
    CategoriesResponse,
    Product,
)
from autoparts_hub.services.catalog_service import CatalogCache
from autoparts_hub.services.export_service import products_to_csv

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/catalog", tags=["catalog"])


def _loaded_at(catalog: CatalogCache) -> Optional[str]:
    return catalog.loaded_at.isoformat() if catalog.loaded_at else None


@router.get("", response_model=CatalogResponse)
async def list_products(
    search: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    subcategory: Optional[str] = Query(default=None),
    catalog: CatalogCache = Depends(get_catalog_cache),
    current_user: dict = Depends(get_current_user),
):
    """List cached products, optionally filtered."""
    products = catalog.search(search=search, category=category, subcategory=subcategory)
    return CatalogResponse(products=products, total=len(products), loaded_at=_loaded_at(catalog))


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories(
    catalog: CatalogCache = Depends(get_catalog_cache),
    current_user: dict = Depends(get_current_user),
):
    """Categories and their subcategories, for the coefficient editor."""
    return CategoriesResponse(categories=catalog.categories())


@router.get("/export.csv")
async def export_products(
    search: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    catalog: CatalogCache = Depends(get_catalog_cache),
    current_user: dict = Depends(get_current_user),
):
    content = products_to_csv(catalog.search(search=search, category=category))
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="catalogo.csv"'},
    )


@router.post("/refresh", response_model=CatalogRefreshResponse)
async def refresh_catalog(
    catalog: CatalogCache = Depends(get_catalog_cache),
    current_user: dict = Depends(get_current_user),
):
    """Fetch the feed now. A failure keeps the cached list and is reported, not raised."""
    refreshed = await catalog.refresh()
    return CatalogRefreshResponse(
        refreshed=refreshed,
        total=len(catalog.products()),
        loaded_at=_loaded_at(catalog),
        error=None if refreshed else catalog.last_error,
    )


@router.get("/{code}", response_model=Product)
async def get_product(
    code: str,
    catalog: CatalogCache = Depends(get_catalog_cache),
    current_user: dict = Depends(get_current_user),
):
    return catalog.require(code)
