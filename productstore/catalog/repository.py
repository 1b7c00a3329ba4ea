"""Product repository for database operations.

Provides CRUD operations for products with filtering and sorting. Writes
that need ownership are single conditional statements, so the owner check
and the mutation cannot interleave with another request.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import and_, delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from productstore.catalog.models import Product
from productstore.catalog.pagination import PaginationParams
from productstore.domain.exceptions import DuplicateError


class ProductRepository:
    """Repository for Product database operations.

    Example usage:
        async with database.session() as session:
            repo = ProductRepository(session)
            products = await repo.find_all(
                ProductFilter(category="Food").conditions(),
                PaginationParams(page=2, limit=5),
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def add(self, product: Product) -> Product:
        """Insert a product.

        Args:
            product: Product to save.

        Returns:
            Saved product with generated fields populated.

        Raises:
            DuplicateError: If the normalized name is already taken.
        """
        self.session.add(product)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise DuplicateError("name", product.product_name) from e
        return product

    async def get_by_id(self, product_id: str, include_owner: bool = True) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.
            include_owner: Whether to eagerly load the owning user.

        Returns:
            Product if found, None otherwise.
        """
        query = select(Product).where(Product.id == product_id)

        if include_owner:
            query = query.options(selectinload(Product.owner))

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_name_key(self, name_key: str) -> Product | None:
        """Get product by its normalized name."""
        result = await self.session.execute(
            select(Product).where(Product.name_key == name_key)
        )
        return result.scalar_one_or_none()

    async def find_all(
        self,
        conditions: Sequence[Any],
        pagination: PaginationParams,
        include_owner: bool = True,
    ) -> Sequence[Product]:
        """Find products with filtering, sorting, and pagination.

        Args:
            conditions: Filter clauses combined with AND.
            pagination: Page window and sort order.
            include_owner: Whether to eagerly load owning users.

        Returns:
            Products in the requested window.
        """
        query = select(Product)

        if conditions:
            query = query.where(and_(*conditions))

        query = (
            query.order_by(*pagination.order_by())
            .offset(pagination.skip)
            .limit(pagination.limit)
        )

        if include_owner:
            query = query.options(selectinload(Product.owner))

        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(self, conditions: Sequence[Any]) -> int:
        """Count products matching filters.

        Args:
            conditions: Filter clauses combined with AND.

        Returns:
            Count of matching products.
        """
        query = select(func.count(Product.id))

        if conditions:
            query = query.where(and_(*conditions))

        result = await self.session.execute(query)
        return result.scalar_one()

    async def update_owned(
        self,
        product_id: str,
        owner_id: str,
        values: dict[str, Any],
    ) -> Product | None:
        """Update a product only if it belongs to the given owner.

        Args:
            product_id: Product ID.
            owner_id: Acting user ID.
            values: Column values or SQL expressions to set.

        Returns:
            Updated product, or None when no product has that ID and owner.

        Raises:
            DuplicateError: If a new name collides with another product.
        """
        statement = (
            update(Product)
            .where(Product.id == product_id, Product.created_by == owner_id)
            .values(**values)
            .returning(Product)
            .execution_options(synchronize_session="fetch", populate_existing=True)
        )
        try:
            result = await self.session.execute(statement)
        except IntegrityError as e:
            raise DuplicateError("name", str(values.get("product_name", ""))) from e
        return result.scalar_one_or_none()

    async def delete_owned(self, product_id: str, owner_id: str) -> Product | None:
        """Delete a product only if it belongs to the given owner.

        Args:
            product_id: Product ID.
            owner_id: Acting user ID.

        Returns:
            The deleted product, or None when no product has that ID and owner.
        """
        statement = (
            delete(Product)
            .where(Product.id == product_id, Product.created_by == owner_id)
            .returning(Product)
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()
