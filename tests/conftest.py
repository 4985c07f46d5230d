"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for collection-sync tests.
"""

from types import MappingProxyType
from unittest.mock import AsyncMock, MagicMock

import pytest

from collection_sync.config import Settings
from collection_sync.taxonomy import CollectionTaxonomy, TaxonomyProvider

BEADS = 101
ROUND_POLISHED = 111
ROUND_FACETED = 112
ROUND_FROSTED = 113
RONDELLE_POLISHED = 121
RONDELLE_FACETED = 122
RONDELLE_FROSTED = 123
FREEFORM = 130
HEART = 201
TEARDROP = 202
ROSE_QUARTZ = 301
TIGER_EYE = 302
AMETHYST = 303


@pytest.fixture
def taxonomy():
    """Small taxonomy with readable collection IDs."""
    return CollectionTaxonomy(
        collection_ids=MappingProxyType(
            {
                "BEADS": BEADS,
                "ROUND_POLISHED": ROUND_POLISHED,
                "ROUND_FACETED": ROUND_FACETED,
                "ROUND_FROSTED": ROUND_FROSTED,
                "RONDELLE_POLISHED": RONDELLE_POLISHED,
                "RONDELLE_FACETED": RONDELLE_FACETED,
                "RONDELLE_FROSTED": RONDELLE_FROSTED,
                "FREEFORM": FREEFORM,
            }
        ),
        shape_collections=MappingProxyType({"HEART": HEART, "TEARDROP": TEARDROP}),
        freeform_shapes=("FREEFORM", "NUGGET", "NUGGETS", "CHIPS"),
        stone_aliases=MappingProxyType(
            {
                "ROSE QUARTZ": ("ROSE QUARTZ", "PINK QUARTZ"),
                "TIGER EYE": ("TIGER EYE", "TIGERS EYE", "TIGER'S EYE"),
                "AMETHYST": ("AMETHYST",),
                "LAPIS LAZULI": ("LAPIS LAZULI", "LAPIS"),
            }
        ),
        gemstone_collections=MappingProxyType(
            {"ROSE QUARTZ": ROSE_QUARTZ, "TIGER EYE": TIGER_EYE, "AMETHYST": AMETHYST}
        ),
    )


@pytest.fixture
def taxonomy_provider(taxonomy):
    """Provider stub returning the test taxonomy."""
    provider = MagicMock(spec=TaxonomyProvider)
    provider.get.return_value = taxonomy
    return provider


@pytest.fixture
def settings(tmp_path):
    """Settings with credentials and fast, predictable delays."""
    return Settings(
        _env_file=None,
        shopify_store="test-store",
        shopify_token="shpat_test",
        shopify_webhook_secret="webhook-secret",
        collections_file=tmp_path / "collections.json",
        write_max_retries=3,
        retry_delay_seconds=2.0,
        collection_pacing_seconds=1.0,
        sku_wait_timeout=30.0,
        sku_poll_interval=5.0,
    )


@pytest.fixture
def mock_sleep():
    """Awaitable sleep that returns immediately and records its calls."""
    return AsyncMock(return_value=None)


@pytest.fixture
def mock_shopify_client():
    """Shopify client with every API call mocked."""
    client = AsyncMock()
    client.create_collect = AsyncMock(return_value={"id": 1})
    client.list_products = AsyncMock(return_value=[])
    client.get_product = AsyncMock(return_value={})
    return client
