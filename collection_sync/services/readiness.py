"""
Product readiness check.

A separate app generates variant SKUs shortly after a product is created.
Before classifying a freshly created product we poll it until every
variant has a SKU, or give up after a deadline and continue anyway.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable

import structlog
from pydantic import ValidationError

from collection_sync.schemas.products import ProductPayload
from collection_sync.services.shopify_client import ShopifyClient
from collection_sync.utils.errors import ShopifyAPIError

logger = structlog.get_logger(__name__)


class SkuReadinessCheck:
    """Polls a product until its variants carry SKUs."""

    def __init__(
        self,
        client: ShopifyClient,
        timeout: float = 30.0,
        interval: float = 5.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.timeout = timeout
        self.interval = interval
        self._sleep = sleep
        self._clock = clock

    async def wait(self, product: ProductPayload) -> bool:
        """
        Wait for the product's SKUs.

        Returns:
            True if every variant has a SKU, False on timeout or fetch error
        """
        if product.skus_ready:
            return True
        if self.timeout <= 0:
            return False

        log = logger.bind(product_id=product.id)
        log.info("Waiting for variant SKUs", timeout=self.timeout, interval=self.interval)
        deadline = self._clock() + self.timeout

        while True:
            remaining = deadline - self._clock()
            if remaining <= 0:
                log.warning("SKUs not ready before deadline, processing anyway")
                return False

            await self._sleep(min(self.interval, remaining))

            try:
                current = ProductPayload.model_validate(
                    await self.client.get_product(product.id)
                )
            except ShopifyAPIError as e:
                log.warning(
                    "Could not re-fetch product, processing anyway",
                    error=e.message,
                    status_code=e.status_code,
                )
                return False
            except ValidationError as e:
                log.warning(
                    "Re-fetched product is malformed, processing anyway",
                    errors=e.error_count(),
                )
                return False

            if current.skus_ready:
                log.info("Variant SKUs ready")
                return True
