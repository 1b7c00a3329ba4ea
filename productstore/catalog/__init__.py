"""Product Catalog.

Validation, filtering, pagination, persistence and orchestration for
product operations.
"""

from productstore.catalog.filters import ProductFilter
from productstore.catalog.generator import ProductGenerator
from productstore.catalog.models import Product
from productstore.catalog.pagination import PageMeta, PaginatedResult, PaginationParams
from productstore.catalog.repository import ProductRepository
from productstore.catalog.service import ProductService
from productstore.catalog.validation import (
    ListingQuery,
    ProductCreate,
    ProductUpdate,
    StockUpdate,
    validate_listing_query,
)

__all__ = [
    # Models
    "Product",
    # Validation
    "ListingQuery",
    "ProductCreate",
    "ProductUpdate",
    "StockUpdate",
    "validate_listing_query",
    # Filtering and pagination
    "ProductFilter",
    "PageMeta",
    "PaginatedResult",
    "PaginationParams",
    # Generator
    "ProductGenerator",
    # Repository
    "ProductRepository",
    # Service
    "ProductService",
]
