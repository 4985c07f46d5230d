"""
Schemas Module
==============

Pydantic models for webhook payloads and API responses.
"""

from collection_sync.schemas.products import (
    ProductDeletionPayload,
    ProductPayload,
    ProductVariant,
)
from collection_sync.schemas.responses import (
    EnvCheckResponse,
    ErrorResponse,
    ProcessResponse,
    ProductResultResponse,
    StatusResponse,
)

__all__ = [
    "EnvCheckResponse",
    "ErrorResponse",
    "ProcessResponse",
    "ProductDeletionPayload",
    "ProductPayload",
    "ProductResultResponse",
    "ProductVariant",
    "StatusResponse",
]
