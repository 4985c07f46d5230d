"""
API Dependencies
================

Factories injected into route handlers.
"""

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Annotated

from fastapi import Depends, Request

from collection_sync.config import Settings, get_settings
from collection_sync.services import ProductProcessor, ShopifyClient
from collection_sync.taxonomy import TaxonomyProvider

ProcessorFactory = Callable[[], AbstractAsyncContextManager[ProductProcessor]]


def get_taxonomy_provider(request: Request) -> TaxonomyProvider:
    """Return the taxonomy provider created at application startup."""
    return request.app.state.taxonomy_provider


def get_processor_factory(
    settings: Annotated[Settings, Depends(get_settings)],
    taxonomy_provider: Annotated[TaxonomyProvider, Depends(get_taxonomy_provider)],
) -> ProcessorFactory:
    """
    Return a factory that opens a Shopify client and wraps it in a processor.

    Handlers open the processor inside their own error handling so that
    configuration errors follow each endpoint's response policy.
    """

    @asynccontextmanager
    async def open_processor() -> AsyncIterator[ProductProcessor]:
        async with ShopifyClient(settings) as client:
            yield ProductProcessor(client, taxonomy_provider, settings)

    return open_processor
