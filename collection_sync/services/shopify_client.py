"""
Shopify Admin API Client

Async HTTP client for the Shopify Admin REST API. Covers the three calls
this service needs: listing recently updated products, fetching one
product, and creating a collect (product ↔ collection membership).

Retrying is left to callers; this client only classifies failures into
RateLimitError (429) and ShopifyAPIError (everything else).
"""

from datetime import datetime
from typing import Any, Optional

import httpx
import structlog

from collection_sync import __version__
from collection_sync.config import Settings, get_settings
from collection_sync.utils.errors import (
    ConfigurationError,
    RateLimitError,
    ShopifyAPIError,
)

logger = structlog.get_logger(__name__)

PAGE_LIMIT = 250


class ShopifyClient:
    """
    Async client for the Shopify Admin REST API.

    Usage:
        async with ShopifyClient() as client:
            products = await client.list_products(updated_at_min=since)
            await client.create_collect(product_id, collection_id)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Shopify client.

        Args:
            settings: Application settings (defaults to cached settings)
            transport: Optional httpx transport, used by tests

        Raises:
            ConfigurationError: If store name or access token is missing
        """
        settings = settings or get_settings()
        missing = [
            name
            for name, value in (
                ("SHOPIFY_STORE", settings.shopify_store),
                ("SHOPIFY_TOKEN", settings.shopify_token),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                "Shopify credentials are not configured", details={"missing": missing}
            )

        self.base_url = settings.shopify_base_url
        self.timeout = httpx.Timeout(settings.http_timeout, connect=5.0)
        self._token = settings.shopify_token
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._log = logger.bind(store=settings.shopify_store)

    async def __aenter__(self) -> "ShopifyClient":
        """Context manager entry - create async client."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
            headers={
                "X-Shopify-Access-Token": self._token,
                "Content-Type": "application/json",
                "User-Agent": f"collection-sync/{__version__}",
            },
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close async client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, raising if not initialized."""
        if self._client is None:
            raise ShopifyAPIError(
                "ShopifyClient not initialized. Use 'async with ShopifyClient() as client:'"
            )
        return self._client

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            self._log.error("Shopify request timed out", method=method, url=url, error=str(e))
            raise ShopifyAPIError(f"Shopify request timed out: {e}") from e
        except httpx.HTTPError as e:
            self._log.error("Shopify request failed", method=method, url=url, error=str(e))
            raise ShopifyAPIError(f"Shopify request failed: {e}") from e

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                "Shopify rate limit hit",
                retry_after=float(retry_after) if retry_after else None,
                body=response.text[:500],
            )

        if response.is_error:
            raise ShopifyAPIError(
                f"Shopify API error: HTTP {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                body=response.text[:500],
            )

        return response

    def _json(self, response: httpx.Response) -> dict[str, Any]:
        """Decode a JSON object body, raising ShopifyAPIError otherwise."""
        try:
            data = response.json()
        except ValueError as e:
            raise ShopifyAPIError(
                "Shopify returned a non-JSON body",
                status_code=response.status_code,
                body=response.text[:500],
            ) from e
        if not isinstance(data, dict):
            raise ShopifyAPIError(
                f"Shopify returned {type(data).__name__}, expected an object",
                status_code=response.status_code,
                body=response.text[:500],
            )
        return data

    async def create_collect(self, product_id: int, collection_id: int) -> dict[str, Any]:
        """
        Add a product to a custom collection.

        A 2xx response means the collect exists, so an unreadable body is
        logged and an empty record returned.

        Returns:
            The created collect record

        Raises:
            RateLimitError: On HTTP 429
            ShopifyAPIError: On any other failure
        """
        response = await self._request(
            "POST",
            "/collects.json",
            json={"collect": {"product_id": product_id, "collection_id": collection_id}},
        )
        try:
            collect = self._json(response).get("collect")
        except ShopifyAPIError as e:
            self._log.warning(
                "Collect created but response body unreadable",
                product_id=product_id,
                collection_id=collection_id,
                error=e.message,
            )
            return {}
        return collect if isinstance(collect, dict) else {}

    async def get_product(self, product_id: int) -> dict[str, Any]:
        """Fetch a single product with its variants."""
        response = await self._request("GET", f"/products/{product_id}.json")
        return self._json(response).get("product") or {}

    async def list_products(self, updated_at_min: datetime) -> list[dict[str, Any]]:
        """
        List every product created or updated since ``updated_at_min``.

        Follows Link-header pagination until the last page.

        Raises:
            RateLimitError: If any page is rate limited
            ShopifyAPIError: On any other failure
        """
        products: list[dict[str, Any]] = []
        url: Optional[str] = "/products.json"
        params: Optional[dict[str, Any]] = {
            "updated_at_min": updated_at_min.isoformat(),
            "limit": PAGE_LIMIT,
        }

        while url:
            response = await self._request("GET", url, params=params)
            page = self._json(response).get("products") or []
            products.extend(page)
            self._log.debug("Fetched products page", count=len(page), total=len(products))

            # The next link already carries page_info and limit
            url = response.links.get("next", {}).get("url")
            params = None

        return products
