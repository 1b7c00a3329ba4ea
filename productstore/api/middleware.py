"""API middleware.

Tags every request with a correlation ID and writes one access log line
per request.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def _access_log_method(status_code: int) -> Callable[..., None]:
    if status_code >= 500:
        return logger.error
    if status_code >= 400:
        return logger.warning
    return logger.info


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Correlates a request with its logs and its response.

    The client's `X-Request-ID` is reused when present. The ID is stored
    on `request.state` for the error formatter, bound into the structlog
    context for the duration of the request, and echoed on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            started = time.perf_counter()
            status_code = 500
            try:
                response = await call_next(request)
                status_code = response.status_code
            finally:
                _access_log_method(status_code)(
                    "Request completed",
                    method=request.method,
                    path=request.url.path,
                    client=request.client.host if request.client else None,
                    status_code=status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def setup_middleware(app: FastAPI) -> None:
    """Install request middleware on the application."""
    app.add_middleware(RequestIdMiddleware)
