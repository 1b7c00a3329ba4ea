"""Pagination and sorting for product listings.

Computes the skip/limit window, the ORDER BY clause and the page metadata
returned to clients.
"""

import math
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from productstore.catalog.models import Product
from productstore.catalog.validation import ListingQuery
from productstore.domain.product import SortField, SortOrder

T = TypeVar("T")

SORT_COLUMNS = {
    SortField.CREATED_AT: Product.created_at,
    SortField.UPDATED_AT: Product.updated_at,
    SortField.PRODUCT_NAME: Product.product_name,
    SortField.PRICE: Product.price,
    SortField.CATEGORY: Product.category,
}


@dataclass
class PaginationParams:
    """Pagination parameters.

    Attributes:
        page: Page number (1-indexed).
        limit: Items per page.
        sort_by: Sort field.
        sort_order: Sort order (asc/desc).
    """

    page: int = 1
    limit: int = 10
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

    @classmethod
    def from_query(cls, query: ListingQuery) -> "PaginationParams":
        """Build pagination parameters from validated listing parameters."""
        return cls(
            page=query.page,
            limit=query.limit,
            sort_by=query.sort_by,
            sort_order=query.sort_order,
        )

    @property
    def skip(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.limit

    def order_by(self) -> list[Any]:
        """Build ORDER BY clauses.

        The product ID breaks ties so equal sort keys keep a stable order
        from one page to the next.
        """
        column = SORT_COLUMNS[self.sort_by]
        if self.sort_order == SortOrder.ASC:
            return [column.asc(), Product.id.asc()]
        return [column.desc(), Product.id.desc()]


@dataclass(frozen=True)
class PageMeta:
    """Metadata describing one page of results."""

    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def build(cls, page: int, limit: int, total_count: int) -> "PageMeta":
        """Derive page metadata from a total count.

        Args:
            page: Requested page, kept even when past the last page.
            limit: Items per page.
            total_count: Number of matching records.

        Returns:
            Page metadata.
        """
        total_pages = math.ceil(total_count / limit)
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_count=total_count,
            limit=limit,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: Items on this page.
        meta: Page metadata.
    """

    items: list[T]
    meta: PageMeta
