"""
Product Payload Models
======================

Shopify product shapes as received from webhooks and the products API.
Unknown fields are kept so the full payload can be logged.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class ProductVariant(BaseModel):
    """A product variant. Only the SKU matters here."""

    model_config = ConfigDict(extra="allow")

    id: int | None = None
    sku: str | None = None

    @property
    def has_sku(self) -> bool:
        return bool(self.sku and self.sku.strip())


class ProductPayload(BaseModel):
    """
    Body of the products/create and products/update webhooks.

    Also used for entries returned by ``GET /products.json``.
    """

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={
            "example": {
                "id": 7981234567890,
                "title": "Round Faceted Rose Quartz Beads 8mm",
                "variants": [{"id": 43912345678901, "sku": "RQ-RF-08"}],
            }
        },
    )

    id: Annotated[int, Field(description="Shopify product ID")]
    title: Annotated[str | None, Field(description="Product title")] = None
    variants: list[ProductVariant] = Field(
        default_factory=list, description="Product variants"
    )

    @property
    def skus_ready(self) -> bool:
        """True when every variant carries a non-empty SKU."""
        return bool(self.variants) and all(v.has_sku for v in self.variants)


class ProductDeletionPayload(BaseModel):
    """Body of the products/delete webhook. Shopify sends only the ID."""

    model_config = ConfigDict(extra="allow")

    id: int
    title: str | None = None
