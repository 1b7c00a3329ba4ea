"""Database configuration and session management.

Provides the async SQLAlchemy engine and session factory behind an explicit
handle. The application creates one `Database` at startup and disposes it at
shutdown; nothing here is a module-level connection.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

logger = structlog.get_logger()

# Base class for models
Base = declarative_base()


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.endswith("://"))


def _unicode_lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def _register_sqlite_functions(dbapi_connection: Any, connection_record: Any) -> None:
    # Built-in SQLite lower() only folds ASCII
    dbapi_connection.create_function("lower", 1, _unicode_lower)


class Database:
    """Async engine plus session factory with an explicit lifecycle.

    Example usage:
        database = Database(settings.database_url)
        await database.create_tables()

        async with database.session() as session:
            ...

        await database.dispose()
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        """Create the engine and session factory.

        Args:
            url: Async SQLAlchemy database URL.
            echo: Whether to log SQL statements.
        """
        engine_kwargs: dict[str, Any] = {"echo": echo}
        if _is_memory_sqlite(url):
            # One shared connection, or every session sees an empty database
            engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True

        self.url = url
        self.engine = create_async_engine(url, **engine_kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _register_sqlite_functions)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_tables(self) -> None:
        """Create database tables if they don't exist."""
        # Register every mapped class on the shared metadata
        import productstore.catalog.models  # noqa: F401
        import productstore.infrastructure.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Check database connectivity.

        Returns:
            True if a trivial query succeeds.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning("Database ping failed", error=str(e))
            return False
        return True

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session, committing on success and rolling back on error.

        Yields:
            AsyncSession for database operations.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def dispose(self) -> None:
        """Release all pooled connections."""
        await self.engine.dispose()
