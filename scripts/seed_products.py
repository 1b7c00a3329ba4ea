#!/usr/bin/env python3
"""Seed product catalog script.

Creates tables, ensures a demo user exists, prints an access token for it,
and optionally stores AI-generated products owned by that user.

Usage:
    python scripts/seed_products.py
    python scripts/seed_products.py --generate 5
    python scripts/seed_products.py --username alice --email alice@example.com
"""

import argparse
import asyncio

import structlog
from sqlalchemy import select

from productstore.catalog.generator import ProductGenerator
from productstore.catalog.service import ProductService
from productstore.catalog.validation import ProductCreate
from productstore.domain.exceptions import DomainError
from productstore.infrastructure.config import get_settings
from productstore.infrastructure.database import Database
from productstore.infrastructure.logging_config import configure_logging
from productstore.infrastructure.models import User
from productstore.infrastructure.security import create_access_token
from productstore.infrastructure.text_generation import GeminiTextGenerator

logger = structlog.get_logger()


async def ensure_user(database: Database, username: str, email: str) -> User:
    """Get or create the demo user.

    Args:
        database: Database handle.
        username: Username.
        email: Email.

    Returns:
        The user.
    """
    async with database.session() as session:
        result = await session.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            user = User(username=username, email=email)
            session.add(user)
            await session.flush()
            logger.info("Created user", user_id=user.id, username=username)
        return user


async def generate_products(database: Database, generator: ProductGenerator, owner_id: str, count: int) -> int:
    """Generate and store products.

    Products the model returns in an unusable shape are skipped.

    Returns:
        Number of products stored.
    """
    created = 0
    for _ in range(count):
        try:
            generated = await generator.generate()
        except DomainError as e:
            logger.warning("Skipping failed generation", error=e.message)
            continue

        try:
            data = ProductCreate.model_validate(generated)
        except ValueError as e:
            logger.warning("Skipping invalid generated product", error=str(e))
            continue

        try:
            async with database.session() as session:
                await ProductService(session).create(data, owner_id=owner_id)
        except DomainError as e:
            logger.warning("Skipping generated product", error=e.message)
            continue
        created += 1
    return created


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the product catalog")
    parser.add_argument("--username", default="demo", help="Demo user name")
    parser.add_argument("--email", default="demo@example.com", help="Demo user email")
    parser.add_argument(
        "--generate",
        type=int,
        default=0,
        metavar="N",
        help="Number of AI-generated products to store",
    )
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level, json_output=False)

    database = Database(settings.database_url)
    try:
        await database.create_tables()
        user = await ensure_user(database, args.username, args.email)

        token = create_access_token(user.id, settings.jwt_secret, settings.jwt_algorithm)
        print(f"User ID: {user.id}")
        print(f"Access token: {token}")

        if args.generate:
            generator = ProductGenerator(
                GeminiTextGenerator(
                    api_key=settings.gemini_api_key,
                    model_name=settings.gemini_model,
                )
            )
            created = await generate_products(database, generator, user.id, args.generate)
            print(f"Products created: {created}/{args.generate}")
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(main())
