"""
Catalog cache — in-memory product list refreshed from the catalog feed.

The cache holds one immutable CatalogSnapshot and swaps it with a single
assignment, so a reader sees either the previous list or the new one in
full. A failed refresh keeps the last-known-good snapshot.
Version: 1.0.0
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from autoparts_hub.core.exceptions import CatalogFetchFailed, ProductNotFoundError
from autoparts_hub.schemas.catalog import Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogSnapshot:
    products: Tuple[Product, ...] = ()
    by_code: Mapping[str, Product] = field(default_factory=lambda: MappingProxyType({}))
    loaded_at: Optional[datetime] = None

    @classmethod
    def build(cls, products: Iterable[Product]) -> "CatalogSnapshot":
        by_code: Dict[str, Product] = {}
        ordered: List[Product] = []
        for product in products:
            if product.code in by_code:
                logger.warning("duplicate product code=%s in catalog, keeping first", product.code)
                continue
            by_code[product.code] = product
            ordered.append(product)
        return cls(
            products=tuple(ordered),
            by_code=MappingProxyType(by_code),
            loaded_at=datetime.now(timezone.utc),
        )


class CatalogCache:
    """Shared product list; one instance per process."""

    def __init__(self, client) -> None:
        self._client = client
        self._snapshot = CatalogSnapshot()
        self.last_error: Optional[str] = None

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    @property
    def loaded_at(self) -> Optional[datetime]:
        return self._snapshot.loaded_at

    def products(self) -> Tuple[Product, ...]:
        return self._snapshot.products

    def get(self, code: str) -> Optional[Product]:
        return self._snapshot.by_code.get(code)

    def require(self, code: str) -> Product:
        product = self.get(code)
        if product is None:
            raise ProductNotFoundError(f"Product {code} not found in catalog")
        return product

    def replace(self, products: Iterable[Product]) -> CatalogSnapshot:
        """Swap in a new product list wholesale."""
        snapshot = CatalogSnapshot.build(products)
        self._snapshot = snapshot
        self.last_error = None
        return snapshot

    def search(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        subcategory: Optional[str] = None,
    ) -> List[Product]:
        """Case-insensitive match on code, description or brand, plus exact filters."""
        term = search.strip().lower() if search else None
        # Read the snapshot once so a concurrent refresh cannot mix lists
        products = self._snapshot.products
        result = []
        for p in products:
            if category and p.category != category:
                continue
            if subcategory and p.subcategory != subcategory:
                continue
            if term and not (
                term in p.code.lower()
                or term in p.description.lower()
                or term in p.brand.lower()
            ):
                continue
            result.append(p)
        return result

    def categories(self) -> Dict[str, List[str]]:
        grouped: Dict[str, set] = {}
        for p in self._snapshot.products:
            subs = grouped.setdefault(p.category, set())
            if p.subcategory:
                subs.add(p.subcategory)
        return {cat: sorted(subs) for cat, subs in sorted(grouped.items())}

    async def refresh(self) -> bool:
        """
        Fetch the feed and replace the list.

        Returns False (and keeps the current list) when the fetch fails
        after the client's retries.
        """
        try:
            products = await self._client.fetch_catalog_with_retry()
        except CatalogFetchFailed as e:
            self.last_error = str(e)
            logger.warning(
                "catalog refresh failed, keeping %s cached products: %s",
                len(self._snapshot.products), e,
            )
            return False

        snapshot = self.replace(products)
        logger.info("catalog refreshed products=%s", len(snapshot.products))
        return True

    async def run_periodic_refresh(self, interval_seconds: float) -> None:
        """Refresh now and then every ``interval_seconds`` until cancelled."""
        while True:
            await self.refresh()
            await asyncio.sleep(interval_seconds)
