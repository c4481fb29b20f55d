"""API schemas for the Product Catalog API.

Pydantic models for request/response validation and serialization.
Every response uses the ``{status, message, ...}`` envelope.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from product_catalog.catalog.models import Product, ProductPatch
from product_catalog.catalog.pagination import PaginationResult


# ============================================================================
# Common Schemas
# ============================================================================


class MessageResponse(BaseModel):
    """Envelope with status flag and message only."""

    status: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Human-readable outcome message")


class ErrorResponse(MessageResponse):
    """Failure envelope.

    Validation and internal errors add details and the request ID.
    """

    status: bool = Field(default=False, description="Always false")
    details: list[dict[str, Any]] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class PaginationSchema(BaseModel):
    """Page metadata (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(..., description="Requested page number")
    total_pages: int = Field(..., alias="totalPages", description="Number of pages")
    page_size: int = Field(..., alias="pageSize", description="Requested page size")
    total: int = Field(..., description="Total number of products")
    showing: int = Field(..., description="Products returned on this page")

    @classmethod
    def from_result(cls, result: PaginationResult) -> "PaginationSchema":
        return cls(
            page=result.page,
            total_pages=result.total_pages,
            page_size=result.page_size,
            total=result.total,
            showing=result.showing,
        )


# ============================================================================
# Product Schemas
# ============================================================================


class ProductSummarySchema(BaseModel):
    """Core product fields."""

    sku: str = Field(..., description="Stock Keeping Unit")
    title: str = Field(..., description="Product title")
    description: str = Field(..., description="Product description")
    qty: int = Field(..., description="Available quantity")

    @classmethod
    def from_product(cls, product: Product) -> "ProductSummarySchema":
        return cls(**product.to_summary())


class ProductSchema(ProductSummarySchema):
    """Stored product with timestamps."""

    created_at: datetime = Field(..., description="Creation time (UTC)")
    updated_at: datetime = Field(..., description="Last update time (UTC)")

    @classmethod
    def from_product(cls, product: Product) -> "ProductSchema":
        return cls(
            **product.to_summary(),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductCreateRequest(BaseModel):
    """Request to create a product."""

    model_config = ConfigDict(extra="ignore")

    sku: str = Field(..., min_length=1, description="Stock Keeping Unit")
    title: str = Field(..., description="Product title")
    description: str = Field(..., description="Product description")
    qty: int = Field(..., ge=0, description="Available quantity")

    def to_product(self) -> Product:
        return Product(
            sku=self.sku,
            title=self.title,
            description=self.description,
            qty=self.qty,
        )


class ProductUpdateRequest(BaseModel):
    """Partial update; omitted or null fields keep their stored value.

    Unknown keys, including ``sku``, are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, description="New title")
    description: str | None = Field(default=None, description="New description")
    qty: int | None = Field(default=None, ge=0, description="New quantity")

    def to_patch(self) -> ProductPatch:
        return ProductPatch(
            title=self.title,
            description=self.description,
            qty=self.qty,
        )


class ProductResponse(MessageResponse):
    """Envelope carrying a single product."""

    product: ProductSchema = Field(..., description="The affected product")


class ProductListResponse(MessageResponse):
    """Envelope carrying one page of products."""

    products: list[ProductSummarySchema] = Field(..., description="Products on this page")
    pagination: PaginationSchema = Field(..., description="Page metadata")
