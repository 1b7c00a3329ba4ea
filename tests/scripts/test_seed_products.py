"""Tests for the catalog seed script."""

import importlib.util
import json
from pathlib import Path

import pytest

from productstore.catalog.generator import ProductGenerator
from productstore.catalog.service import ProductService
from productstore.domain.exceptions import UpstreamError
from productstore.infrastructure.database import Database

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "seed_products.py"


def load_seed_script():
    spec = importlib.util.spec_from_file_location("seed_products", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class ScriptedTextGenerator:
    """Returns queued responses in order; exceptions are raised."""

    def __init__(self, responses: list) -> None:
        self.responses = list(responses)

    async def generate(self, prompt: str) -> str:
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def generated(name: str) -> str:
    return json.dumps(
        {
            "productName": name,
            "category": "Food",
            "inStock": True,
            "price": 12.5,
            "quantity": 8,
            "description": "Small-batch seeded product.",
        }
    )


class TestGenerateProducts:
    """Tests for generate_products."""

    @pytest.mark.asyncio
    async def test_unusable_generations_are_skipped(self, database: Database) -> None:
        seed = load_seed_script()
        user = await seed.ensure_user(database, "demo", "demo@example.com")
        text_generator = ScriptedTextGenerator(
            [
                UpstreamError("Text generation service failed"),
                "not json at all",
                generated("Smoked Fig Jam"),
                json.dumps({"productName": "No Category"}),
                generated("smoked fig jam"),
                generated("Saffron Honey"),
            ]
        )

        created = await seed.generate_products(
            database, ProductGenerator(text_generator), user.id, count=6
        )

        assert created == 2
        async with database.session() as session:
            page = await ProductService(session).list_products({"sortBy": "productName", "sortOrder": "asc"})
        assert [p.product_name for p in page.items] == ["Saffron Honey", "Smoked Fig Jam"]

    @pytest.mark.asyncio
    async def test_ensure_user_is_idempotent(self, database: Database) -> None:
        seed = load_seed_script()

        first = await seed.ensure_user(database, "demo", "demo@example.com")
        second = await seed.ensure_user(database, "demo", "demo@example.com")

        assert first.id == second.id
