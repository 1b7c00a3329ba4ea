"""Product value types and pure rules.

Holds the enums and helpers shared by validation, persistence and the
service layer. Nothing here touches the database.
"""

import re
from enum import Enum
from typing import Any
from uuid import uuid4

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

MAX_PRICE = 100_000
NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000


class Category(str, Enum):
    """Supported product categories."""

    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    FOOD = "Food"


class SortField(str, Enum):
    """Fields a product listing can be sorted by."""

    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    PRODUCT_NAME = "productName"
    PRICE = "price"
    CATEGORY = "category"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


def compute_total_value(price: Any, quantity: Any) -> Any:
    """Compute the stored total value of a product line.

    Works on plain numbers and on SQLAlchemy column expressions alike,
    so a conditional UPDATE can recompute the value from current columns.

    Args:
        price: Unit price.
        quantity: Number of units.

    Returns:
        price * quantity.
    """
    return price * quantity


def normalize_name(name: str) -> str:
    """Key used for case-insensitive name uniqueness."""
    return name.strip().lower()


def new_object_id() -> str:
    """Generate a new 24-hex-character identifier."""
    return uuid4().hex[:24]


def is_valid_object_id(value: str | None) -> bool:
    """Check whether a string has the 24-hex identifier format."""
    return bool(value) and OBJECT_ID_PATTERN.match(value) is not None
