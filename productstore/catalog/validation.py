"""Input validation for catalog operations.

Turns untyped request input into typed, normalized records. Listing
parameters arrive as query-string text and are coerced here; create and
update bodies are JSON and validated by their schemas.

Every violated rule is collected and reported at once rather than failing
on the first bad field.
"""

import math
from collections.abc import Mapping, Sequence
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from productstore.domain.exceptions import ValidationError
from productstore.domain.product import (
    DESCRIPTION_MAX_LENGTH,
    MAX_PRICE,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    Category,
    SortField,
    SortOrder,
    is_valid_object_id,
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

PRICE_RANGE_MESSAGE = "minPrice cannot be greater than maxPrice"


class CamelModel(BaseModel):
    """Base schema exchanging camelCase field names with clients."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


ProductName = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=NAME_MIN_LENGTH,
        max_length=NAME_MAX_LENGTH,
    ),
]
Description = Annotated[
    str,
    StringConstraints(strip_whitespace=True, max_length=DESCRIPTION_MAX_LENGTH),
]


# ============================================================================
# Body Schemas
# ============================================================================


class ProductCreate(CamelModel):
    """Body for creating a product.

    `totalValue`, `createdBy` and identifiers are not accepted from clients;
    unknown fields are dropped.
    """

    model_config = ConfigDict(use_enum_values=True)

    product_name: ProductName
    category: Category
    price: float = Field(..., ge=0, le=MAX_PRICE)
    quantity: int = Field(..., ge=1)
    in_stock: bool = True
    description: Description | None = None


class ProductUpdate(CamelModel):
    """Partial update body. Only fields present in the request are applied."""

    model_config = ConfigDict(use_enum_values=True)

    product_name: ProductName | None = None
    category: Category | None = None
    price: float | None = Field(default=None, ge=0, le=MAX_PRICE)
    quantity: int | None = Field(default=None, ge=1)
    in_stock: bool | None = None
    description: Description | None = None

    @field_validator("product_name", "category", "price", "quantity", "in_stock", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        """Required columns can be omitted but not cleared."""
        if value is None:
            raise PydanticCustomError("null_value", "Field cannot be null")
        return value

    def changes(self) -> dict[str, Any]:
        """Fields explicitly sent by the client, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class StockUpdate(CamelModel):
    """Body for setting the stock level of a product."""

    quantity: int = Field(..., ge=0)


# ============================================================================
# Listing Query
# ============================================================================


def _invalid(message: str) -> PydanticCustomError:
    return PydanticCustomError("invalid_query", message)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _parse_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_price(value: Any) -> float | None:
    number = _parse_number(value)
    if number is None or number < 0:
        return None
    return number


class ListingQuery(CamelModel):
    """Validated product listing parameters.

    Attributes:
        page: Page number (1-indexed).
        limit: Items per page, 1-100.
        search: Case-insensitive text matched in name or description.
        category: Exact category.
        in_stock: Exact stock flag.
        min_price: Inclusive lower price bound.
        max_price: Inclusive upper price bound.
        sort_by: Sort field.
        sort_order: Sort direction.
        created_by: Owner user ID.
    """

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    search: str | None = None
    category: str | None = None
    in_stock: bool | None = None
    min_price: float | None = None
    max_price: float | None = None
    sort_by: SortField = SortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC
    created_by: str | None = None

    @field_validator("page", mode="before")
    @classmethod
    def parse_page(cls, value: Any) -> int:
        if _is_blank(value):
            return DEFAULT_PAGE
        page = _parse_int(value)
        if page is None or page < 1:
            raise _invalid("page must be a positive integer")
        return page

    @field_validator("limit", mode="before")
    @classmethod
    def parse_limit(cls, value: Any) -> int:
        if _is_blank(value):
            return DEFAULT_LIMIT
        limit = _parse_int(value)
        if limit is None or not 1 <= limit <= MAX_LIMIT:
            raise _invalid(f"limit must be a positive integer between 1 and {MAX_LIMIT}")
        return limit

    @field_validator("search", "category", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> str | None:
        if _is_blank(value):
            return None
        return str(value).strip()

    @field_validator("in_stock", mode="before")
    @classmethod
    def parse_in_stock(cls, value: Any) -> bool | None:
        if _is_blank(value):
            return None
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text not in ("true", "false"):
            raise _invalid('inStock must be "true" or "false"')
        return text == "true"

    @field_validator("min_price", mode="before")
    @classmethod
    def parse_min_price(cls, value: Any) -> float | None:
        if _is_blank(value):
            return None
        price = _parse_price(value)
        if price is None:
            raise _invalid("minPrice must be a non-negative number")
        return price

    @field_validator("max_price", mode="before")
    @classmethod
    def parse_max_price(cls, value: Any) -> float | None:
        if _is_blank(value):
            return None
        price = _parse_price(value)
        if price is None:
            raise _invalid("maxPrice must be a non-negative number")
        return price

    @field_validator("sort_by", mode="before")
    @classmethod
    def parse_sort_by(cls, value: Any) -> SortField:
        if _is_blank(value):
            return SortField.CREATED_AT
        allowed = [field.value for field in SortField]
        if str(value).strip() not in allowed:
            raise _invalid(f"sortBy must be one of: {', '.join(allowed)}")
        return SortField(str(value).strip())

    @field_validator("sort_order", mode="before")
    @classmethod
    def parse_sort_order(cls, value: Any) -> SortOrder:
        if _is_blank(value):
            return SortOrder.DESC
        text = str(value).strip().lower()
        if text not in ("asc", "desc"):
            raise _invalid('sortOrder must be "asc" or "desc"')
        return SortOrder(text)

    @field_validator("created_by", mode="before")
    @classmethod
    def parse_created_by(cls, value: Any) -> str | None:
        if _is_blank(value):
            return None
        text = str(value).strip()
        if not is_valid_object_id(text):
            raise _invalid("createdBy must be a valid 24-character hex identifier")
        return text

    @model_validator(mode="after")
    def check_price_range(self) -> "ListingQuery":
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.min_price > self.max_price
        ):
            raise _invalid(PRICE_RANGE_MESSAGE)
        return self


def _price_range_error(raw: Mapping[str, Any]) -> str | None:
    # Field errors stop pydantic before the model validator runs
    min_price = _parse_price(raw.get("minPrice")) if not _is_blank(raw.get("minPrice")) else None
    max_price = _parse_price(raw.get("maxPrice")) if not _is_blank(raw.get("maxPrice")) else None
    if min_price is not None and max_price is not None and min_price > max_price:
        return PRICE_RANGE_MESSAGE
    return None


def validate_listing_query(raw: Mapping[str, Any]) -> ListingQuery:
    """Validate raw listing parameters.

    Args:
        raw: Query-string parameters, camelCase keys, string values.

    Returns:
        Typed listing parameters with defaults applied.

    Raises:
        ValidationError: Listing every violated rule.
    """
    try:
        return ListingQuery.model_validate(dict(raw))
    except PydanticValidationError as e:
        errors = [error["msg"] for error in e.errors()]
        range_error = _price_range_error(raw)
        if range_error and range_error not in errors:
            errors.append(range_error)
        raise ValidationError(errors) from e


def format_validation_errors(errors: Sequence[Mapping[str, Any]]) -> list[str]:
    """Render pydantic error entries as `field: message` strings.

    Args:
        errors: Entries from `ValidationError.errors()`.

    Returns:
        One message per entry.
    """
    messages = []
    for error in errors:
        path = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{path or 'field'}: {error.get('msg', 'Invalid value')}")
    return messages
