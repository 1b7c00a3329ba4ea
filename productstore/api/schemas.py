"""API schemas for the product catalog.

Pydantic models for response serialization. All field names are exchanged
in camelCase.
"""

from dataclasses import asdict
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from productstore.catalog.models import Product
from productstore.catalog.pagination import PageMeta


class ApiModel(BaseModel):
    """Base response schema with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(ApiModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    success: bool = Field(default=False)
    status_code: int = Field(..., description="HTTP status code")
    message: str = Field(..., description="Human-readable error message")
    error_code: str = Field(..., description="Machine-readable error code")
    request_id: str | None = Field(default=None, description="Request ID for correlation")


class OwnerSchema(ApiModel):
    """Display-safe subset of the owning user."""

    id: str
    username: str
    email: str


# ============================================================================
# Product Schemas
# ============================================================================


class ProductSchema(ApiModel):
    """Product representation.

    `createdBy` is the owner ID, or the owner's public profile when the
    owner was loaded.
    """

    id: str
    product_name: str
    category: str
    price: float
    quantity: int
    total_value: float
    in_stock: bool
    description: str | None = None
    created_by: str | OwnerSchema
    created_at: datetime
    updated_at: datetime


class PaginationSchema(ApiModel):
    """Page metadata."""

    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next_page: bool
    has_prev_page: bool


class ProductListData(ApiModel):
    """Listing payload."""

    products: list[ProductSchema]
    pagination: PaginationSchema


class ProductListResponse(ApiModel):
    """Response for product listing."""

    success: bool = True
    data: ProductListData


class ProductCreatedResponse(ApiModel):
    """Response for product creation."""

    success: bool = True
    message: str
    data: ProductSchema


class ProductDetailResponse(ApiModel):
    """Response for a single product."""

    success: bool = True
    product: ProductSchema


class ProductUpdatedResponse(ApiModel):
    """Response for product update."""

    success: bool = True
    message: str
    updated_product: ProductSchema


class ProductDeletedResponse(ApiModel):
    """Response for product deletion."""

    success: bool = True
    message: str
    product: ProductSchema


class GeneratedProductResponse(ApiModel):
    """Response for AI product generation."""

    success: bool = True
    message: str
    generated_product: dict[str, Any]


# ============================================================================
# Converters
# ============================================================================


def product_to_schema(product: Product, include_owner: bool = False) -> ProductSchema:
    """Convert a Product row to its response schema.

    Args:
        product: Product row.
        include_owner: Embed the owner profile; the owner must be loaded.

    Returns:
        Product schema.
    """
    created_by: str | OwnerSchema = product.created_by
    if include_owner:
        created_by = OwnerSchema.model_validate(product.owner)

    return ProductSchema(
        id=product.id,
        product_name=product.product_name,
        category=product.category,
        price=product.price,
        quantity=product.quantity,
        total_value=product.total_value,
        in_stock=product.in_stock,
        description=product.description,
        created_by=created_by,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def page_meta_to_schema(meta: PageMeta) -> PaginationSchema:
    """Convert page metadata to its response schema."""
    return PaginationSchema(**asdict(meta))
