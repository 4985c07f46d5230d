"""
Custom Exception Classes
========================

Application-specific exceptions for proper error handling.
"""

from typing import Any


class CollectionSyncError(Exception):
    """Base exception for the collection sync service."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(CollectionSyncError):
    """Raised when configuration is invalid."""

    pass


class TaxonomyLoadError(CollectionSyncError):
    """
    Raised when the collections snapshot cannot be read or parsed.

    The service cannot classify anything without it, so this is never retried.
    """

    pass


class ShopifyAPIError(CollectionSyncError):
    """Raised when a Shopify Admin API call fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code
        self.body = body


class RateLimitError(ShopifyAPIError):
    """Raised when Shopify answers 429 Too Many Requests."""

    def __init__(
        self,
        message: str,
        retry_after: float | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message, status_code=429, body=body)
        self.retry_after = retry_after


class CollectionWriteError(CollectionSyncError):
    """Raised when adding a product to a collection exhausts its retries."""

    pass


class WebhookVerificationError(CollectionSyncError):
    """Raised when a webhook's HMAC signature is missing or does not match."""

    pass
