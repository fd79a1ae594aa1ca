"""
Catalog schemas — product entries from the catalog feed.
Version: 1.0.0
"""
from typing import Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Product(BaseModel):
    """
    One catalog entry. Immutable once loaded.

    ``base_cost`` is the distributor's cost and the pricing base;
    ``list_price`` is an independent reference price from the feed.
    The feed's Spanish field names are accepted as aliases.
    """
    model_config = ConfigDict(frozen=True)

    code: str = Field(validation_alias=AliasChoices("code", "codigo"))
    description: str = Field(default="", validation_alias=AliasChoices("description", "descripcion"))
    category: str = Field(default="", validation_alias=AliasChoices("category", "categoria"))
    subcategory: str = Field(default="", validation_alias=AliasChoices("subcategory", "subcategoria"))
    brand: str = Field(default="", validation_alias=AliasChoices("brand", "marca"))
    base_cost: float = Field(
        ge=0, validation_alias=AliasChoices("base_cost", "baseCost", "precioCosto")
    )
    list_price: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("list_price", "listPrice", "precioLista")
    )
    image_url: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("image_url", "imageUrl", "imagenUrl")
    )


class CatalogResponse(BaseModel):
    products: List[Product]
    total: int
    loaded_at: Optional[str] = None


class CategoriesResponse(BaseModel):
    """Category name -> sorted subcategory names."""
    categories: Dict[str, List[str]]


class CatalogRefreshResponse(BaseModel):
    refreshed: bool
    total: int
    loaded_at: Optional[str] = None
    error: Optional[str] = None
