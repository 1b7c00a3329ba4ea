"""Product catalog API main application module.

This module builds the FastAPI application and configures core
middleware, routers, exception handlers and startup/shutdown events.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from productstore.api.errors import setup_exception_handlers
from productstore.api.health import router as health_router
from productstore.api.middleware import setup_middleware
from productstore.api.products import router as products_router
from productstore.infrastructure.config import Settings, get_settings
from productstore.infrastructure.database import Database
from productstore.infrastructure.logging_config import configure_logging
from productstore.infrastructure.security import TokenVerifier
from productstore.infrastructure.text_generation import GeminiTextGenerator

logger = structlog.get_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the application.

    Args:
        settings: Explicit settings; loaded from the environment when omitted.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Acquire the database and generator handles, release them on shutdown."""
        logger.info(
            "Starting product catalog API",
            version=settings.api_version,
            debug=settings.debug,
        )

        database = Database(settings.database_url, echo=settings.debug)
        if settings.create_tables:
            await database.create_tables()

        app.state.database = database
        app.state.text_generator = GeminiTextGenerator(
            api_key=settings.gemini_api_key,
            model_name=settings.gemini_model,
            temperature=settings.gemini_temperature,
            top_p=settings.gemini_top_p,
            top_k=settings.gemini_top_k,
        )
        if not settings.gemini_api_key:
            logger.warning("GEMINI_API_KEY not set, product generation disabled")

        yield

        logger.info("Shutting down product catalog API")
        await database.dispose()

    app = FastAPI(
        title="Product Catalog API",
        description="Product catalog CRUD with AI-generated listings",
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.token_verifier = TokenVerifier(settings.jwt_secret, settings.jwt_algorithm)

    # CORS middleware (must be added before custom middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_middleware(app)
    setup_exception_handlers(app)

    app.include_router(health_router, tags=["Health"])
    app.include_router(products_router)

    return app


app = create_app()
