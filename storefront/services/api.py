"""
Storefront API Client

Async HTTP access to the external stock and catalog services:
- GET /stock/{id}     -> {id, amount}
- GET /products/{id}  -> {id, title, price, image}

A 404 means "no such record" and is returned as None. Every other failure
(transport error, 5xx, malformed JSON, invalid payload) propagates to the
caller; the cart engine decides how to report it.
"""

import os
from typing import Any, Optional

import httpx

from storefront.logging import get_logger
from storefront.services.models import Product, Stock

logger = get_logger(__name__)

STOREFRONT_API_URL = os.environ.get("STOREFRONT_API_URL", "http://localhost:3333")
STOREFRONT_API_TIMEOUT = float(os.environ.get("STOREFRONT_API_TIMEOUT", "10"))


class StorefrontApiError(Exception):
    """Service answered with a payload that is not a JSON object."""


class StorefrontApi:
    """Stock and catalog queries over a shared httpx.AsyncClient."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = (base_url or STOREFRONT_API_URL).rstrip("/")
        self.timeout = STOREFRONT_API_TIMEOUT if timeout is None else timeout
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get HTTP client (lazy initialization)."""
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "StorefrontApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _get_json(self, path: str) -> Optional[dict[str, Any]]:
        response = await self.client.get(f"{self.base_url}{path}")
        if response.status_code == 404:
            logger.debug(f"GET {path} -> 404")
            return None
        response.raise_for_status()

        if not response.content:
            return None
        data = response.json()
        if data is None:
            return None
        if not isinstance(data, dict):
            raise StorefrontApiError(f"GET {path} returned {type(data).__name__}, expected object")
        return data

    async def get_stock(self, product_id: int) -> Optional[Stock]:
        """Get current stock record for a product, None if unknown."""
        data = await self._get_json(f"/stock/{product_id}")
        return Stock(**data) if data else None

    async def get_product(self, product_id: int) -> Optional[Product]:
        """Get product descriptive data, None if the catalog has nothing."""
        data = await self._get_json(f"/products/{product_id}")
        return Product.model_validate(data) if data else None
