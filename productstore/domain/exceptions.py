"""Domain exceptions.

All errors raised by the catalog core. Each exception carries the HTTP
status and machine-readable code it is rendered with, so the API layer can
format every failure through one handler.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    Attributes:
        status_code: HTTP status used when the error reaches the API boundary.
        error_code: Machine-readable error code.
    """

    status_code: int = 500
    error_code: str = "ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(DomainError):
    """Raised when input is malformed or out of range.

    The message lists every violated field, joined by commas.
    """

    status_code = 400
    error_code = "VALIDATION_ERROR"

    def __init__(self, errors: list[str]) -> None:
        """Initialize validation error.

        Args:
            errors: One message per violated rule.
        """
        super().__init__(", ".join(errors), details={"errors": list(errors)})
        self.errors = list(errors)


class DuplicateError(DomainError):
    """Raised when a unique value (product name) is already taken."""

    status_code = 400
    error_code = "DUPLICATE"

    def __init__(self, field: str, value: str) -> None:
        super().__init__(
            f"Product with this {field} already exists",
            details={"field": field, "value": value},
        )


class UnauthorizedError(DomainError):
    """Raised when the request carries no valid identity."""

    status_code = 401
    error_code = "UNAUTHORIZED"


class NotAuthorizedError(DomainError):
    """Raised when the acting identity does not own the resource.

    Also raised when the resource does not exist at all, so a caller
    cannot probe for other users' products.
    """

    status_code = 403
    error_code = "NOT_AUTHORIZED"

    def __init__(self, product_id: str) -> None:
        super().__init__(
            "Not authorized or product not found",
            details={"product_id": product_id},
        )


class NotFoundError(DomainError):
    """Raised when no record matches the requested identifier."""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, product_id: str) -> None:
        super().__init__("Product not found", details={"product_id": product_id})


class UpstreamError(DomainError):
    """Raised when the text-generation service fails or returns garbage."""

    status_code = 502
    error_code = "UPSTREAM_ERROR"


class InternalError(DomainError):
    """Raised for unexpected failures that must not leak internals."""

    status_code = 500
    error_code = "INTERNAL_ERROR"
