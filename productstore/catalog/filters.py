"""Product listing filters.

Translates validated listing parameters into SQLAlchemy conditions. Only
supplied criteria produce a clause; no criteria means no WHERE at all.
"""

from dataclasses import dataclass
from typing import Any

from sqlalchemy import or_

from productstore.catalog.models import Product
from productstore.catalog.validation import ListingQuery


@dataclass
class ProductFilter:
    """Filter parameters for product search.

    Attributes:
        search: Text matched case-insensitively in name or description.
        category: Exact category.
        in_stock: Exact stock flag.
        created_by: Owner user ID.
        min_price: Inclusive minimum price.
        max_price: Inclusive maximum price.
    """

    search: str | None = None
    category: str | None = None
    in_stock: bool | None = None
    created_by: str | None = None
    min_price: float | None = None
    max_price: float | None = None

    @classmethod
    def from_query(cls, query: ListingQuery) -> "ProductFilter":
        """Build a filter from validated listing parameters."""
        return cls(
            search=query.search,
            category=query.category,
            in_stock=query.in_stock,
            created_by=query.created_by,
            min_price=query.min_price,
            max_price=query.max_price,
        )

    @property
    def is_empty(self) -> bool:
        """True when no criterion is set."""
        return not self.conditions()

    def conditions(self) -> list[Any]:
        """Build the conjunction of supplied criteria.

        Returns:
            SQLAlchemy boolean clauses, to be combined with AND.
        """
        conditions = []

        if self.search:
            conditions.append(
                or_(
                    Product.product_name.icontains(self.search, autoescape=True),
                    Product.description.icontains(self.search, autoescape=True),
                )
            )

        if self.category is not None:
            conditions.append(Product.category == self.category)

        if self.in_stock is not None:
            conditions.append(Product.in_stock == self.in_stock)

        if self.created_by is not None:
            conditions.append(Product.created_by == self.created_by)

        if self.min_price is not None:
            conditions.append(Product.price >= self.min_price)

        if self.max_price is not None:
            conditions.append(Product.price <= self.max_price)

        return conditions
