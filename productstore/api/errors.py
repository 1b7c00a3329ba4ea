"""Exception handlers.

Every failure leaves the API through one formatter:
`{success: false, statusCode, message, errorCode, requestId}`.
"""

import structlog
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from productstore.api.schemas import ErrorResponse
from productstore.catalog.validation import format_validation_errors
from productstore.domain.exceptions import DomainError, InternalError

logger = structlog.get_logger()


def error_response(
    request: Request,
    status_code: int,
    message: str,
    error_code: str,
) -> JSONResponse:
    """Build the uniform error body.

    Args:
        request: Request being answered.
        status_code: HTTP status.
        message: Human-readable message.
        error_code: Machine-readable code.

    Returns:
        JSON error response.
    """
    body = ErrorResponse(
        status_code=status_code,
        message=message,
        error_code=error_code,
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Render a domain error with its own status and code."""
    return error_response(request, exc.status_code, exc.message, exc.error_code)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render body/path validation failures as 400 with every violation listed."""
    message = ", ".join(format_validation_errors(exc.errors())) or "Validation failed"
    return error_response(request, status.HTTP_400_BAD_REQUEST, message, "VALIDATION_ERROR")


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with consistent format."""
    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
    else:
        error_code = "ERROR"
        message = str(detail)
    return error_response(request, exc.status_code, message, error_code)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions with consistent format."""
    logger.exception(
        "Unhandled exception in handler",
        path=request.url.path,
        method=request.method,
        error=str(exc),
    )
    error = InternalError("An internal error occurred")
    return error_response(request, error.status_code, error.message, error.error_code)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the application."""
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
