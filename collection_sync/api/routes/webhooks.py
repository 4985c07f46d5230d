"""
Webhook Routes
==============

Shopify product webhooks. Every request must carry a valid HMAC signature.

Endpoints:
- POST /webhook/product - products/create and products/update
- POST /webhook/product-deletion - products/delete

Deletion webhooks are always acknowledged with 200 once verified, even if
processing fails, so Shopify does not redeliver them.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from collection_sync.api.dependencies import ProcessorFactory, get_processor_factory
from collection_sync.api.security import verified_webhook_body
from collection_sync.schemas.products import ProductDeletionPayload, ProductPayload
from collection_sync.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/product",
    response_class=PlainTextResponse,
    summary="Product create/update webhook",
    responses={
        200: {"description": "Product processed"},
        400: {"description": "Payload is not a product"},
        401: {"description": "Missing or invalid signature"},
        500: {"description": "Processing failed"},
    },
)
async def product_webhook(
    body: Annotated[bytes, Depends(verified_webhook_body)],
    open_processor: Annotated[ProcessorFactory, Depends(get_processor_factory)],
) -> PlainTextResponse:
    """
    Classify a created or updated product and add it to its collections.

    Waits for variant SKUs to be generated before classifying.
    """
    try:
        product = ProductPayload.model_validate_json(body)
    except ValidationError as e:
        logger.warning("Invalid product webhook payload", error_count=e.error_count())
        return PlainTextResponse(
            "Invalid webhook payload", status_code=status.HTTP_400_BAD_REQUEST
        )

    log = logger.bind(product_id=product.id)
    log.info("Product webhook received", title=product.title, variants=len(product.variants))

    try:
        async with open_processor() as processor:
            await processor.wait_until_ready(product)
            result = await processor.process_product(product)
    except Exception as e:
        log.exception("Error processing webhook", error=str(e))
        return PlainTextResponse(
            "Error processing webhook",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    log.info("Product processed successfully", added=result.added, failed=result.failed)
    return PlainTextResponse("OK")


@router.post(
    "/product-deletion",
    response_class=PlainTextResponse,
    summary="Product deletion webhook",
    responses={
        200: {"description": "Webhook acknowledged"},
        401: {"description": "Missing or invalid signature"},
    },
)
async def product_deletion_webhook(
    body: Annotated[bytes, Depends(verified_webhook_body)],
    open_processor: Annotated[ProcessorFactory, Depends(get_processor_factory)],
) -> PlainTextResponse:
    """
    Acknowledge a product deletion.

    The payload is run through the same processor as an upsert; deletion
    payloads normally carry no title, so this usually writes nothing.
    """
    try:
        payload = ProductDeletionPayload.model_validate_json(body)
        logger.info("Processing webhook for product deletion", product_id=payload.id)

        async with open_processor() as processor:
            await processor.process_product(
                ProductPayload(id=payload.id, title=payload.title)
            )
    except Exception as e:
        logger.exception("Error processing deletion webhook", error=str(e))
        return PlainTextResponse("Webhook received but processing failed")

    logger.info("Successfully processed product deletion", product_id=payload.id)
    return PlainTextResponse("Webhook processed successfully")
