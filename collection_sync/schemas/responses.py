"""
Pydantic Response Models
========================

API response schemas for the collection sync endpoints.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class StatusResponse(BaseModel):
    """Response for the liveness and test endpoints."""

    status: Literal["ok"] = "ok"
    message: str
    time: datetime | None = None


class ProductResultResponse(BaseModel):
    """Collections matched, added and failed for one product."""

    product_id: int
    title: str | None
    matched: list[int]
    added: list[int]
    failed: list[int]


class ProcessResponse(BaseModel):
    """
    Response for POST /process.

    Attributes:
        status: Always 'success'; failures return an ErrorResponse
        message: Human-readable summary
        since: Start of the processed window
        products_processed: Number of products classified
        collections_added: Successful collection writes
        collections_failed: Writes that exhausted their retries
        products: Per-product detail
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": "success",
                "message": "Products processed successfully",
                "since": "2025-05-12T06:45:29+00:00",
                "products_processed": 1,
                "collections_added": 3,
                "collections_failed": 0,
                "products": [],
            }
        }
    )

    status: Literal["success"] = "success"
    message: str
    since: datetime
    products_processed: int
    collections_added: int
    collections_failed: int
    products: list[ProductResultResponse]


class ErrorResponse(BaseModel):
    """Error body returned by the manual trigger."""

    status: Literal["error"] = "error"
    message: str


class EnvCheckResponse(BaseModel):
    """
    Response for GET /env-check.

    Secret values are never echoed; they are reported as set or not set.
    """

    status: Literal["ok", "error"]
    message: str
    environment: Annotated[
        dict[str, str | None],
        Field(description="Variable name → value or set/not-set marker"),
    ]
