"""Catalog service for product operations.

High-level service that combines validation, filtering, pagination and
repository operations for the product catalog.
"""

from collections.abc import Mapping
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from productstore.catalog.filters import ProductFilter
from productstore.catalog.generator import ProductGenerator
from productstore.catalog.models import Product
from productstore.catalog.pagination import PageMeta, PaginatedResult, PaginationParams
from productstore.catalog.repository import ProductRepository
from productstore.catalog.validation import (
    ProductCreate,
    ProductUpdate,
    validate_listing_query,
)
from productstore.domain.exceptions import (
    DuplicateError,
    NotAuthorizedError,
    NotFoundError,
    ValidationError,
)
from productstore.domain.product import compute_total_value, is_valid_object_id, normalize_name

logger = structlog.get_logger()


def _check_product_id(product_id: str) -> None:
    if not is_valid_object_id(product_id):
        raise ValidationError(["Invalid product ID format"])


class ProductService:
    """Service for product catalog operations.

    Example usage:
        async with database.session() as session:
            service = ProductService(session)

            product = await service.create(
                ProductCreate(product_name="Wireless Mouse", category="Electronics",
                              price=25, quantity=4),
                owner_id=user.id,
            )
            page = await service.list_products({"page": "1", "limit": "5"})
    """

    def __init__(
        self,
        session: AsyncSession,
        generator: ProductGenerator | None = None,
    ) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
            generator: AI product generator, needed only by `generate`.
        """
        self.session = session
        self.repository = ProductRepository(session)
        self.generator = generator

    async def create(self, data: ProductCreate, owner_id: str) -> Product:
        """Create a product owned by the acting user.

        Args:
            data: Validated product fields.
            owner_id: Authenticated user ID.

        Returns:
            Stored product.

        Raises:
            DuplicateError: If a product with the same name exists (any case).
        """
        name_key = normalize_name(data.product_name)
        if await self.repository.get_by_name_key(name_key) is not None:
            logger.warning("Duplicate product name rejected", product_name=data.product_name)
            raise DuplicateError("name", data.product_name)

        product = Product(
            product_name=data.product_name,
            name_key=name_key,
            category=data.category,
            price=data.price,
            quantity=data.quantity,
            total_value=compute_total_value(data.price, data.quantity),
            in_stock=data.in_stock,
            description=data.description,
            created_by=owner_id,
        )
        await self.repository.add(product)
        await self.session.commit()

        logger.info("Product created", product_id=product.id, owner_id=owner_id)
        return product

    async def list_products(self, raw_query: Mapping[str, Any]) -> PaginatedResult[Product]:
        """List products matching query parameters.

        Args:
            raw_query: Untyped query-string parameters.

        Returns:
            Products in the requested page plus page metadata.

        Raises:
            ValidationError: If any parameter is invalid.
        """
        query = validate_listing_query(raw_query)
        conditions = ProductFilter.from_query(query).conditions()
        pagination = PaginationParams.from_query(query)

        total_count = await self.repository.count(conditions)

        # Pages past the end are empty; the offset may not fit a database integer
        products: list[Product] = []
        if pagination.skip < total_count:
            products = list(await self.repository.find_all(conditions, pagination))

        return PaginatedResult(
            items=products,
            meta=PageMeta.build(pagination.page, pagination.limit, total_count),
        )

    async def get(self, product_id: str) -> Product:
        """Get a product with its owner loaded.

        Raises:
            ValidationError: If the ID is malformed.
            NotFoundError: If no product has that ID.
        """
        _check_product_id(product_id)

        product = await self.repository.get_by_id(product_id)
        if product is None:
            raise NotFoundError(product_id)
        return product

    async def update(self, product_id: str, patch: ProductUpdate, owner_id: str) -> Product:
        """Apply a partial update to a product the user owns.

        Args:
            product_id: Product ID.
            patch: Fields to change.
            owner_id: Authenticated user ID.

        Returns:
            Updated product.

        Raises:
            ValidationError: If the ID is malformed.
            NotAuthorizedError: If the product is missing or owned by someone else.
            DuplicateError: If the new name is taken.
        """
        _check_product_id(product_id)

        values = patch.changes()
        if "product_name" in values:
            values["name_key"] = normalize_name(values["product_name"])

        # Unpatched fields resolve to their current column values inside the UPDATE
        values["total_value"] = compute_total_value(
            values.get("price", Product.price),
            values.get("quantity", Product.quantity),
        )

        product = await self.repository.update_owned(product_id, owner_id, values)
        if product is None:
            logger.warning("Product update rejected", product_id=product_id, owner_id=owner_id)
            raise NotAuthorizedError(product_id)
        await self.session.commit()

        logger.info("Product updated", product_id=product_id, fields=sorted(patch.changes()))
        return product

    async def update_stock(self, product_id: str, quantity: int, owner_id: str) -> Product:
        """Set the stock level of a product the user owns.

        `in_stock` follows the quantity: true iff quantity > 0.

        Raises:
            ValidationError: If the ID is malformed.
            NotAuthorizedError: If the product is missing or owned by someone else.
        """
        _check_product_id(product_id)

        values = {
            "quantity": quantity,
            "in_stock": quantity > 0,
            "total_value": compute_total_value(Product.price, quantity),
        }
        product = await self.repository.update_owned(product_id, owner_id, values)
        if product is None:
            logger.warning("Stock update rejected", product_id=product_id, owner_id=owner_id)
            raise NotAuthorizedError(product_id)
        await self.session.commit()

        logger.info("Product stock updated", product_id=product_id, quantity=quantity)
        return product

    async def delete(self, product_id: str, owner_id: str) -> Product:
        """Permanently delete a product the user owns.

        Returns:
            The deleted product.

        Raises:
            ValidationError: If the ID is malformed.
            NotAuthorizedError: If the product is missing or owned by someone else.
        """
        _check_product_id(product_id)

        product = await self.repository.delete_owned(product_id, owner_id)
        if product is None:
            logger.warning("Product delete rejected", product_id=product_id, owner_id=owner_id)
            raise NotAuthorizedError(product_id)
        await self.session.commit()

        logger.info("Product deleted", product_id=product_id, owner_id=owner_id)
        return product

    async def generate(self) -> dict[str, Any]:
        """Generate a product listing without storing it.

        Raises:
            UpstreamError: If generation fails or returns unusable output.
        """
        if self.generator is None:
            raise RuntimeError("ProductService was created without a generator")
        return await self.generator.generate()
