"""
Collection Writer

Adds a product to a collection with bounded retry and fixed backoff.
Every failed attempt, whatever the error, costs one unit of the retry
budget and is followed by the same fixed wait.
"""

import asyncio
from collections.abc import Awaitable, Callable

import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from collection_sync.services.shopify_client import ShopifyClient
from collection_sync.utils.errors import (
    CollectionWriteError,
    RateLimitError,
    ShopifyAPIError,
)

logger = structlog.get_logger(__name__)

DEFAULT_RETRIES = 3
DEFAULT_RETRY_DELAY = 2.0


class CollectionWriter:
    """
    Writes product → collection memberships.

    Args:
        client: Open Shopify client
        max_retries: Default retry budget per write
        retry_delay: Seconds to wait between attempts
        sleep: Awaitable sleep, replaced in tests
    """

    def __init__(
        self,
        client: ShopifyClient,
        max_retries: int = DEFAULT_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.client = client
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._sleep = sleep

    def _before_sleep(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        remaining = retry_state.retry_object.stop.max_attempt_number - retry_state.attempt_number
        if isinstance(error, RateLimitError):
            logger.warning(
                "Rate limit hit, waiting before retry",
                wait_seconds=self.retry_delay,
                retries_left=remaining,
            )
        else:
            logger.warning(
                "Error adding product to collection, retrying",
                error=str(error),
                status_code=getattr(error, "status_code", None),
                wait_seconds=self.retry_delay,
                retries_left=remaining,
            )

    async def _attempt(self, product_id: int, collection_id: int) -> None:
        # Anything unexpected counts as a failed attempt and is retried
        try:
            await self.client.create_collect(product_id, collection_id)
        except ShopifyAPIError:
            raise
        except Exception as e:
            raise ShopifyAPIError(
                f"Unexpected error: {type(e).__name__}: {e}"
            ) from e

    async def add_product_to_collection(
        self,
        product_id: int,
        collection_id: int,
        retries: int | None = None,
    ) -> None:
        """
        Add a product to a collection.

        Makes at most ``retries + 1`` attempts.

        Raises:
            CollectionWriteError: When every attempt failed. The last
                Shopify error is chained as ``__cause__``.
        """
        budget = self.max_retries if retries is None else retries
        log = logger.bind(product_id=product_id, collection_id=collection_id)

        retrying = AsyncRetrying(
            stop=stop_after_attempt(budget + 1),
            wait=wait_fixed(self.retry_delay),
            retry=retry_if_exception_type(ShopifyAPIError),
            before_sleep=self._before_sleep,
            sleep=self._sleep,
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    await self._attempt(product_id, collection_id)
        except ShopifyAPIError as e:
            log.error(
                "Failed to add product to collection",
                attempts=budget + 1,
                status_code=e.status_code,
                error=e.message,
                body=e.body,
            )
            raise CollectionWriteError(
                f"Failed to add product to collection: {e.message}",
                details={
                    "product_id": product_id,
                    "collection_id": collection_id,
                    "attempts": budget + 1,
                    "status_code": e.status_code,
                },
            ) from e

        log.info("Added product to collection")
