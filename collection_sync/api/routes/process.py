"""
Process Routes
==============

Manual trigger for the batch run.

Endpoints:
- POST /process - Classify every product updated in the trailing window
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from collection_sync.api.dependencies import ProcessorFactory, get_processor_factory
from collection_sync.schemas.responses import (
    ErrorResponse,
    ProcessResponse,
    ProductResultResponse,
)
from collection_sync.utils.errors import CollectionSyncError
from collection_sync.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ProcessResponse,
    summary="Process recent products",
    description=(
        "Fetch products created or updated in the trailing window, classify "
        "their titles and add them to the matching collections. Runs to "
        "completion before responding."
    ),
    responses={
        200: {"description": "Batch completed (individual writes may have failed)"},
        500: {"model": ErrorResponse, "description": "Batch aborted"},
    },
)
async def process_products(
    open_processor: Annotated[ProcessorFactory, Depends(get_processor_factory)],
):
    """
    Run one batch over recently updated products.

    Per-collection failures are reported in the body; only failures that
    abort the whole batch return 500.
    """
    logger.info("Manual process triggered")

    try:
        async with open_processor() as processor:
            result = await processor.process_recent()
    except CollectionSyncError as e:
        logger.error(
            "Error processing products",
            error_type=type(e).__name__,
            message=e.message,
            details=e.details,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(message=e.message).model_dump(),
        )
    except Exception as e:
        logger.exception("Unexpected error processing products", error_type=type(e).__name__)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(message=f"Error processing products: {e}").model_dump(),
        )

    return ProcessResponse(
        message="Products processed successfully",
        since=result.since,
        products_processed=result.products_processed,
        collections_added=result.collections_added,
        collections_failed=result.collections_failed,
        products=[ProductResultResponse(**p.to_dict()) for p in result.products],
    )
