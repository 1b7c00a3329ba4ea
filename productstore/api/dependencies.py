"""Request-scoped dependencies.

Resolves the database session, the authenticated user and the product
service from the handles stored on the application state at startup.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from productstore.catalog.generator import ProductGenerator
from productstore.catalog.service import ProductService
from productstore.domain.exceptions import UnauthorizedError
from productstore.infrastructure.database import Database
from productstore.infrastructure.models import User
from productstore.infrastructure.security import TokenVerifier
from productstore.infrastructure.text_generation import TextGenerator


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Yields:
        AsyncSession committed on success, rolled back on error.
    """
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session


def get_text_generator(request: Request) -> TextGenerator:
    """Get the text generator created at startup."""
    return request.app.state.text_generator


def get_token_verifier(request: Request) -> TokenVerifier:
    """Get the token verifier created at startup."""
    return request.app.state.token_verifier


def _extract_token(request: Request) -> str | None:
    cookie_name = request.app.state.settings.access_token_cookie
    token = request.cookies.get(cookie_name)
    if token:
        return token

    auth_header = request.headers.get("Authorization")
    if auth_header:
        parts = auth_header.split(" ", 1)
        if len(parts) == 2 and parts[0].lower() == "bearer" and parts[1]:
            return parts[1]
    return None


async def get_current_user(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
) -> User:
    """Resolve the authenticated user.

    Reads the access token from the cookie or a Bearer header.

    Raises:
        UnauthorizedError: If the token is missing, invalid, or names an
            unknown user.
    """
    token = _extract_token(request)
    if token is None:
        raise UnauthorizedError("Unauthorized")

    user_id = verifier.verify(token)
    user = await session.get(User, user_id)
    if user is None:
        raise UnauthorizedError("Unauthorized")
    return user


def get_product_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    text_generator: Annotated[TextGenerator, Depends(get_text_generator)],
) -> ProductService:
    """Get product service bound to the request session."""
    return ProductService(session, generator=ProductGenerator(text_generator))


CurrentUser = Annotated[User, Depends(get_current_user)]
Service = Annotated[ProductService, Depends(get_product_service)]
