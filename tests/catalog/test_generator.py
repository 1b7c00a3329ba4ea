"""Tests for AI product generation."""

import json
import random

import pytest

from productstore.catalog.generator import (
    ProductGenerator,
    build_prompt,
    parse_generated_product,
    strip_code_fences,
)
from productstore.domain.exceptions import UpstreamError

GENERATED = {
    "productName": "Nebula Desk Lamp",
    "category": "Electronics",
    "inStock": True,
    "price": 49.5,
    "quantity": 12,
    "description": "A lamp that projects slow-moving nebulae on the ceiling.",
}


class TestBuildPrompt:
    """Tests for build_prompt."""

    def test_lists_all_fields_and_categories(self) -> None:
        prompt = build_prompt(random.Random(1), timestamp=1700000000000)
        for field in ("productName", "category", "inStock", "price", "quantity", "description"):
            assert f'"{field}"' in prompt
        assert "Electronics|Clothing|Food" in prompt
        assert "Timestamp: 1700000000000" in prompt

    def test_same_seed_same_prompt(self) -> None:
        first = build_prompt(random.Random(7), timestamp=1)
        second = build_prompt(random.Random(7), timestamp=1)
        assert first == second


class TestParseGeneratedProduct:
    """Tests for parsing model output."""

    def test_plain_json(self) -> None:
        assert parse_generated_product(json.dumps(GENERATED)) == GENERATED

    def test_fenced_json(self) -> None:
        text = f"```json\n{json.dumps(GENERATED)}\n```"
        assert parse_generated_product(text) == GENERATED

    def test_bare_fence(self) -> None:
        assert strip_code_fences('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_empty_output(self) -> None:
        with pytest.raises(UpstreamError, match="No product generated"):
            parse_generated_product("   ")

    def test_not_json(self) -> None:
        with pytest.raises(UpstreamError, match="not valid JSON"):
            parse_generated_product("Here is a product: lamp")

    def test_not_an_object(self) -> None:
        with pytest.raises(UpstreamError, match="not a JSON object"):
            parse_generated_product("[1, 2, 3]")


class TestProductGenerator:
    """Tests for ProductGenerator."""

    @pytest.mark.asyncio
    async def test_generate_returns_parsed_product(self, fake_generator) -> None:
        fake_generator.response = f"```json\n{json.dumps(GENERATED)}\n```"
        generator = ProductGenerator(fake_generator, rng=random.Random(3))

        product = await generator.generate()

        assert product == GENERATED
        assert len(fake_generator.prompts) == 1
        assert "Output must be valid JSON" in fake_generator.prompts[0]

    @pytest.mark.asyncio
    async def test_upstream_failure_propagates(self, fake_generator) -> None:
        fake_generator.response = UpstreamError("down")
        generator = ProductGenerator(fake_generator)

        with pytest.raises(UpstreamError, match="down"):
            await generator.generate()
