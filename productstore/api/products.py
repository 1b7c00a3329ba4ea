"""Product API endpoints.

CRUD over the catalog plus AI-backed product generation. Reads are
public; writes require an authenticated user and, for existing products,
ownership.
"""

from fastapi import APIRouter, Depends, Request, status

from productstore.api.dependencies import CurrentUser, Service, get_current_user
from productstore.api.schemas import (
    ErrorResponse,
    GeneratedProductResponse,
    ProductCreatedResponse,
    ProductDeletedResponse,
    ProductDetailResponse,
    ProductListData,
    ProductListResponse,
    ProductUpdatedResponse,
    page_meta_to_schema,
    product_to_schema,
)
from productstore.catalog.validation import ProductCreate, ProductUpdate, StockUpdate

router = APIRouter(prefix="/products", tags=["Products"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
}


@router.post(
    "",
    response_model=ProductCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Create a product",
)
async def create_product(
    body: ProductCreate,
    user: CurrentUser,
    service: Service,
) -> ProductCreatedResponse:
    """Create a product owned by the authenticated user.

    `totalValue` is computed from price and quantity.
    """
    product = await service.create(body, owner_id=user.id)
    return ProductCreatedResponse(
        message="Product created successfully",
        data=product_to_schema(product),
    )


@router.get(
    "",
    response_model=ProductListResponse,
    responses={400: {"model": ErrorResponse}},
    summary="List products",
    description=(
        "Paginated product listing. Query parameters: page, limit, search, "
        "category, inStock, minPrice, maxPrice, sortBy, sortOrder, createdBy."
    ),
)
async def list_products(request: Request, service: Service) -> ProductListResponse:
    """List products with filtering, sorting and pagination."""
    result = await service.list_products(request.query_params)
    return ProductListResponse(
        data=ProductListData(
            products=[product_to_schema(p, include_owner=True) for p in result.items],
            pagination=page_meta_to_schema(result.meta),
        )
    )


@router.post(
    "/generate",
    response_model=GeneratedProductResponse,
    dependencies=[Depends(get_current_user)],
    responses={401: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Generate a product with AI",
    description="Returns a generated product listing. Nothing is stored.",
)
async def generate_product(service: Service) -> GeneratedProductResponse:
    """Generate a fake product listing."""
    generated = await service.generate()
    return GeneratedProductResponse(
        message="Product generated successfully",
        generated_product=generated,
    )


@router.get(
    "/{product_id}",
    response_model=ProductDetailResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Get product details",
)
async def get_product(product_id: str, service: Service) -> ProductDetailResponse:
    """Get a product with its owner's public profile."""
    product = await service.get(product_id)
    return ProductDetailResponse(product=product_to_schema(product, include_owner=True))


@router.put(
    "/{product_id}",
    response_model=ProductUpdatedResponse,
    responses=ERROR_RESPONSES,
    summary="Update a product",
)
async def update_product(
    product_id: str,
    body: ProductUpdate,
    user: CurrentUser,
    service: Service,
) -> ProductUpdatedResponse:
    """Partially update a product owned by the authenticated user."""
    product = await service.update(product_id, body, owner_id=user.id)
    return ProductUpdatedResponse(
        message="Product updated successfully",
        updated_product=product_to_schema(product),
    )


@router.patch(
    "/{product_id}/stock",
    response_model=ProductUpdatedResponse,
    responses=ERROR_RESPONSES,
    summary="Update product stock",
)
async def update_stock(
    product_id: str,
    body: StockUpdate,
    user: CurrentUser,
    service: Service,
) -> ProductUpdatedResponse:
    """Set the stock quantity; `inStock` follows whether any units remain."""
    product = await service.update_stock(product_id, body.quantity, owner_id=user.id)
    return ProductUpdatedResponse(
        message="Product stock updated successfully",
        updated_product=product_to_schema(product),
    )


@router.delete(
    "/{product_id}",
    response_model=ProductDeletedResponse,
    responses=ERROR_RESPONSES,
    summary="Delete a product",
)
async def delete_product(
    product_id: str,
    user: CurrentUser,
    service: Service,
) -> ProductDeletedResponse:
    """Permanently delete a product owned by the authenticated user."""
    product = await service.delete(product_id, owner_id=user.id)
    return ProductDeletedResponse(
        message="Product deleted successfully",
        product=product_to_schema(product),
    )
