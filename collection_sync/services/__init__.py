"""
Services
========

Classification, Shopify access and collection assignment.
"""

from collection_sync.services.collection_writer import CollectionWriter
from collection_sync.services.product_processor import (
    BatchResult,
    ProductProcessor,
    ProductResult,
)
from collection_sync.services.readiness import SkuReadinessCheck
from collection_sync.services.shopify_client import ShopifyClient

__all__ = [
    "BatchResult",
    "CollectionWriter",
    "ProductProcessor",
    "ProductResult",
    "ShopifyClient",
    "SkuReadinessCheck",
]
