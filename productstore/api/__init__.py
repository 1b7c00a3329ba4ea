"""API layer module.

Contains FastAPI routers, middleware, exception handlers and response schemas.
"""

from productstore.api.health import router as health_router
from productstore.api.products import router as products_router

__all__ = [
    "health_router",
    "products_router",
]
