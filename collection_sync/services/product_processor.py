"""
Product Processor
=================

Classifies products and writes their collection memberships.

Two entry points:
- ``process_product``: one product from a webhook
- ``process_recent``: every product updated in the trailing window

Writes are strictly sequential, in the order the classifier emitted them,
with a pacing pause after each successful write. A write that exhausts its
retries is logged and skipped; sibling collections and products continue.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

import structlog
from pydantic import ValidationError

from collection_sync.config import Settings, get_settings
from collection_sync.schemas.products import ProductPayload
from collection_sync.services.classification import TitleClassifier
from collection_sync.services.collection_writer import CollectionWriter
from collection_sync.services.readiness import SkuReadinessCheck
from collection_sync.services.shopify_client import ShopifyClient
from collection_sync.taxonomy import TaxonomyProvider
from collection_sync.utils.errors import CollectionWriteError, RateLimitError

logger = structlog.get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ProductResult:
    """Outcome of processing one product."""

    product_id: int
    title: str | None
    matched: list[int] = field(default_factory=list)
    added: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_id": self.product_id,
            "title": self.title,
            "matched": self.matched,
            "added": self.added,
            "failed": self.failed,
        }


@dataclass
class BatchResult:
    """Outcome of one batch run over recently updated products."""

    since: datetime
    products: list[ProductResult] = field(default_factory=list)
    restarts: int = 0
    skipped: int = 0

    @property
    def products_processed(self) -> int:
        return len(self.products)

    @property
    def collections_added(self) -> int:
        return sum(len(p.added) for p in self.products)

    @property
    def collections_failed(self) -> int:
        return sum(len(p.failed) for p in self.products)


class ProductProcessor:
    """
    Orchestrates classification and collection writes.

    Args:
        client: Open Shopify client
        taxonomy_provider: Lazily loaded taxonomy, shared across requests
        settings: Application settings (defaults to cached settings)
        sleep: Awaitable sleep used for pacing and backoff
        now: Clock for the batch window
    """

    def __init__(
        self,
        client: ShopifyClient,
        taxonomy_provider: TaxonomyProvider,
        settings: Settings | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.settings = settings or get_settings()
        self.client = client
        self.taxonomy_provider = taxonomy_provider
        self.writer = CollectionWriter(
            client,
            max_retries=self.settings.write_max_retries,
            retry_delay=self.settings.retry_delay_seconds,
            sleep=sleep,
        )
        self._sleep = sleep
        self._now = now
        self._classifier: TitleClassifier | None = None

    @property
    def classifier(self) -> TitleClassifier:
        """Classifier over the provider's taxonomy, built on first use."""
        if self._classifier is None:
            self._classifier = TitleClassifier(self.taxonomy_provider.get())
        return self._classifier

    async def wait_until_ready(self, product: ProductPayload) -> bool:
        """Wait for the product's variant SKUs to be generated."""
        check = SkuReadinessCheck(
            self.client,
            timeout=self.settings.sku_wait_timeout,
            interval=self.settings.sku_poll_interval,
            sleep=self._sleep,
        )
        return await check.wait(product)

    async def process_product(self, product: ProductPayload) -> ProductResult:
        """
        Classify one product and add it to every matched collection.

        Raises:
            TaxonomyLoadError: If the taxonomy cannot be loaded
        """
        log = logger.bind(product_id=product.id)
        log.info("Processing product", title=product.title)

        result = ProductResult(product_id=product.id, title=product.title)
        result.matched = self.classifier.classify(product.title)

        if not result.matched:
            log.info("No matching collections found", title=product.title)
            return result

        log.info(
            "Adding product to collections",
            count=len(result.matched),
            collection_ids=result.matched,
        )

        for collection_id in result.matched:
            try:
                await self.writer.add_product_to_collection(product.id, collection_id)
            except CollectionWriteError as e:
                log.error(
                    "Skipping collection",
                    collection_id=collection_id,
                    error=e.message,
                )
                result.failed.append(collection_id)
                continue

            result.added.append(collection_id)
            await self._sleep(self.settings.collection_pacing_seconds)

        log.info(
            "Product processed",
            added=len(result.added),
            failed=len(result.failed),
        )
        return result

    async def _list_recent_products(self, result: BatchResult) -> list[dict[str, Any]]:
        """List recent products, restarting the whole listing on rate limits."""
        while True:
            result.since = self._now() - timedelta(minutes=self.settings.batch_window_minutes)
            try:
                return await self.client.list_products(updated_at_min=result.since)
            except RateLimitError:
                result.restarts += 1
                logger.warning(
                    "Rate limit hit while listing products, restarting",
                    wait_seconds=self.settings.retry_delay_seconds,
                    restarts=result.restarts,
                )
                await self._sleep(self.settings.retry_delay_seconds)

    async def process_recent(self) -> BatchResult:
        """
        Process every product created or updated in the trailing window.

        Raises:
            ShopifyAPIError: If listing products fails for a reason other
                than rate limiting
            TaxonomyLoadError: If the taxonomy cannot be loaded
        """
        # Fail before touching the API if the taxonomy is unusable
        self.taxonomy_provider.get()

        result = BatchResult(since=self._now())
        products = await self._list_recent_products(result)

        if not products:
            logger.info("No new or updated products found", since=result.since.isoformat())
            return result

        logger.info("Found products to process", count=len(products))

        for raw in products:
            try:
                product = ProductPayload.model_validate(raw)
            except ValidationError as e:
                result.skipped += 1
                logger.warning(
                    "Skipping malformed product",
                    product_id=raw.get("id") if isinstance(raw, dict) else None,
                    errors=e.error_count(),
                )
                continue
            result.products.append(await self.process_product(product))

        logger.info(
            "Finished processing products",
            products=result.products_processed,
            skipped=result.skipped,
            added=result.collections_added,
            failed=result.collections_failed,
        )
        return result
