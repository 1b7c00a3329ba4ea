"""Domain layer.

Exceptions and pure product rules shared across the catalog.
"""

from productstore.domain.exceptions import (
    DomainError,
    DuplicateError,
    InternalError,
    NotAuthorizedError,
    NotFoundError,
    UnauthorizedError,
    UpstreamError,
    ValidationError,
)
from productstore.domain.product import (
    Category,
    SortField,
    SortOrder,
    compute_total_value,
    is_valid_object_id,
    new_object_id,
    normalize_name,
)

__all__ = [
    # Exceptions
    "DomainError",
    "DuplicateError",
    "InternalError",
    "NotAuthorizedError",
    "NotFoundError",
    "UnauthorizedError",
    "UpstreamError",
    "ValidationError",
    # Product rules
    "Category",
    "SortField",
    "SortOrder",
    "compute_total_value",
    "is_valid_object_id",
    "new_object_id",
    "normalize_name",
]
