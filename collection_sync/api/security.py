"""
Webhook Signature Verification
==============================

Shopify signs every webhook with base64(HMAC-SHA256(secret, raw body)) in
the X-Shopify-Hmac-Sha256 header. The signature is checked against the raw
request bytes before the body is parsed. There is no bypass.
"""

import base64
import hashlib
import hmac
from typing import Annotated

from fastapi import Depends, Request

from collection_sync.config import Settings, get_settings
from collection_sync.utils.errors import WebhookVerificationError
from collection_sync.utils.logger import get_logger

logger = get_logger(__name__)

HMAC_HEADER = "X-Shopify-Hmac-Sha256"
TOPIC_HEADER = "X-Shopify-Topic"
SHOP_HEADER = "X-Shopify-Shop-Domain"


def compute_signature(secret: str, body: bytes) -> str:
    """Return the base64 HMAC-SHA256 digest Shopify would send for ``body``."""
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(secret: str | None, body: bytes, signature: str | None) -> None:
    """
    Check a webhook signature.

    Raises:
        WebhookVerificationError: If the secret is unset, the header is
            missing, or the digest does not match
    """
    if not secret:
        raise WebhookVerificationError("Webhook secret is not configured")
    if not signature:
        raise WebhookVerificationError("Missing webhook signature")

    expected = compute_signature(secret, body)
    if not hmac.compare_digest(expected.encode("ascii"), signature.encode("ascii", "ignore")):
        raise WebhookVerificationError("Invalid webhook signature")


async def verified_webhook_body(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
) -> bytes:
    """
    FastAPI dependency returning the raw body of a verified webhook.

    Raises:
        WebhookVerificationError: Rendered as 401 by the app's error handler
    """
    body = await request.body()
    signature = request.headers.get(HMAC_HEADER)

    log = logger.bind(
        path=request.url.path,
        topic=request.headers.get(TOPIC_HEADER),
        shop=request.headers.get(SHOP_HEADER),
        body_length=len(body),
    )

    try:
        verify_signature(settings.shopify_webhook_secret, body, signature)
    except WebhookVerificationError as e:
        log.warning("Webhook verification failed", reason=e.message)
        raise

    log.info("Webhook signature verified")
    return body
