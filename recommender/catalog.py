"""
Catalog Source Client

Fetches the product catalog snapshot used for one request.
Records are passed through untouched; the engine only reads
title, description, brand, category, price, rating and stock.
"""

from typing import Any, Mapping, Optional

import httpx

from recommender.logging_config import get_logger

logger = get_logger(__name__)

ProductRecord = Mapping[str, Any]

DEFAULT_CATALOG_URL = "https://dummyjson.com/products?limit=200&skip=0"


class CatalogError(RuntimeError):
    """Raised when the catalog cannot be fetched or decoded."""


class CatalogClient:
    """Async client for a dummyjson-style ``{"products": [...]}`` endpoint."""

    def __init__(
        self,
        url: str = DEFAULT_CATALOG_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def fetch_products(self) -> list[ProductRecord]:
        """
        Return the catalog snapshot.

        Raises:
            CatalogError: on network errors, non-2xx responses or invalid JSON.
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Catalog fetch failed", error=e, url=self.url)
            raise CatalogError(f"catalog fetch failed: {e}") from e

        products = data.get("products") if isinstance(data, dict) else None
        if not isinstance(products, list):
            products = []

        logger.info("Fetched products", count=len(products))
        return products
