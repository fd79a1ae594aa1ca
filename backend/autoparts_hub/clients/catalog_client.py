"""
Catalog HTTP client — fetches the product feed with bounded retry.
Version: 1.0.0
"""
import asyncio
import logging
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from autoparts_hub.core.config import Settings
from autoparts_hub.core.exceptions import CatalogFetchFailed
from autoparts_hub.schemas.catalog import Product

logger = logging.getLogger(__name__)


class CatalogClient:
    def __init__(self, settings: Settings) -> None:
        self._catalog_url = settings.catalog_url
        self._timeout = settings.catalog_fetch_timeout
        self._max_retries = max(1, settings.catalog_max_retries)
        self._base_delay = settings.catalog_retry_base_delay

    @staticmethod
    def parse_products(data: Any) -> List[Product]:
        """
        Turn the feed body into Products.

        The body must be a flat array. Entries that fail validation are
        skipped with a warning instead of discarding the whole feed.
        """
        if not isinstance(data, list):
            raise CatalogFetchFailed("response body is not an array of products")

        products: List[Product] = []
        for idx, item in enumerate(data):
            try:
                products.append(Product.model_validate(item))
            except PydanticValidationError as e:
                logger.warning("skipping catalog entry index=%s error=%s", idx, e.errors()[:1])
        return products

    async def fetch_catalog(self) -> List[Product]:
        """Single attempt; raises CatalogFetchFailed on any failure."""
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(self._catalog_url)
        except httpx.HTTPError as e:
            raise CatalogFetchFailed(f"{type(e).__name__}: {e}") from e

        if resp.status_code != 200:
            raise CatalogFetchFailed(
                f"HTTP {resp.status_code}", status_code=resp.status_code
            )

        try:
            body = resp.json()
        except ValueError as e:
            raise CatalogFetchFailed(f"invalid JSON: {e}") from e

        return self.parse_products(body)

    async def fetch_catalog_with_retry(self) -> List[Product]:
        """
        Fetch the catalog, retrying with exponential backoff.

        Delays between attempts are base, 2*base, 4*base, ... The last
        error is re-raised once attempts are exhausted.
        """
        last_error: Optional[CatalogFetchFailed] = None

        for attempt in range(self._max_retries):
            try:
                products = await self.fetch_catalog()
                logger.info(
                    "catalog fetched url=%s products=%s attempt=%s",
                    self._catalog_url, len(products), attempt + 1,
                )
                return products
            except CatalogFetchFailed as e:
                last_error = e
                if attempt < self._max_retries - 1:
                    wait_time = self._base_delay * (2 ** attempt)
                    logger.warning(
                        f"Catalog fetch failed on attempt {attempt + 1}/{self._max_retries}, "
                        f"retrying in {wait_time}s: {e}"
                    )
                    await asyncio.sleep(wait_time)

        raise CatalogFetchFailed(
            last_error.reason if last_error else "no attempts made",
            status_code=last_error.status_code if last_error else None,
            attempts=self._max_retries,
        ) from last_error
