"""Shared fixtures for catalog and API tests.

Every test gets its own in-memory SQLite database. The Gemini client is
replaced with a scripted fake.
"""

from collections.abc import AsyncGenerator, Callable, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from productstore.api.dependencies import get_text_generator
from productstore.infrastructure.config import Settings
from productstore.infrastructure.database import Database
from productstore.infrastructure.models import User
from productstore.infrastructure.security import create_access_token
from productstore.main import create_app

TEST_JWT_SECRET = "test-jwt-secret"


class FakeTextGenerator:
    """Text generator returning a scripted response."""

    def __init__(self, response: str | Exception = "{}") -> None:
        self.response = response
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Create a fresh in-memory database."""
    db = Database("sqlite+aiosqlite://")
    await db.create_tables()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Open a session on the test database."""
    async with database.session_factory() as db_session:
        yield db_session


@pytest_asyncio.fixture
async def alice(session: AsyncSession) -> User:
    """Create user Alice."""
    user = User(username="alice", email="alice@example.com")
    session.add(user)
    await session.commit()
    return user


@pytest_asyncio.fixture
async def bob(session: AsyncSession) -> User:
    """Create user Bob."""
    user = User(username="bob", email="bob@example.com")
    session.add(user)
    await session.commit()
    return user


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at an in-memory database."""
    return Settings(
        database_url="sqlite+aiosqlite://",
        jwt_secret=TEST_JWT_SECRET,
        gemini_api_key=None,
        log_level="WARNING",
        log_json=False,
    )


@pytest.fixture
def fake_generator() -> FakeTextGenerator:
    """Scripted text generator; set `.response` in the test."""
    return FakeTextGenerator()


@pytest.fixture
def app(settings: Settings, fake_generator: FakeTextGenerator) -> FastAPI:
    """Create an application wired to the fake generator."""
    application = create_app(settings)
    application.dependency_overrides[get_text_generator] = lambda: fake_generator
    return application


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Create test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


async def _insert_user(database: Database, username: str, email: str) -> str:
    async with database.session() as db_session:
        user = User(username=username, email=email)
        db_session.add(user)
        await db_session.flush()
        return user.id


@pytest.fixture
def make_user(
    app: FastAPI, client: TestClient
) -> Callable[[str], tuple[str, dict[str, str]]]:
    """Factory creating a user and returning (user_id, auth_headers)."""

    def _make(username: str) -> tuple[str, dict[str, str]]:
        user_id = client.portal.call(
            _insert_user,
            app.state.database,
            username,
            f"{username}@example.com",
        )
        token = create_access_token(user_id, TEST_JWT_SECRET)
        return user_id, {"Authorization": f"Bearer {token}"}

    return _make
