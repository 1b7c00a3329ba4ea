"""AI-backed product generator.

Asks the text-generation service for a fake product listing and parses
the answer. Generated products are returned to the caller, never stored;
saving one is a separate create request.
"""

import json
import random
import re
import time
from typing import Any

import structlog

from productstore.domain.exceptions import UpstreamError
from productstore.domain.product import Category
from productstore.infrastructure.text_generation import TextGenerator

logger = structlog.get_logger()

CODE_FENCE_PATTERN = re.compile(r"^\s*```[a-zA-Z]*\s*|\s*```\s*$")

PROMPT_TEMPLATE = """
Generate a unique and realistic product as a JSON object **only** with these fields.
Make it creative and different from typical products.

Category focus: {category}
Random seed: {seed}
Timestamp: {timestamp}

Create a product that is unique and creative. Avoid generic names like "Wireless Headphones", "Smart Watch", etc.

{{
  "productName": "string (make this unique and creative)",
  "category": "{categories}",
  "inStock": true|false,
  "price": number (between 10 and 500),
  "quantity": number (between 1 and 100),
  "description": "string (detailed and unique description)"
}}

Do not include any extra text, explanation, or comments. Output must be valid JSON.
Make the product name completely unique and creative.
"""


def build_prompt(rng: random.Random | None = None, timestamp: int | None = None) -> str:
    """Build the generation prompt.

    A random category focus, seed and timestamp keep repeated calls from
    returning the same product.

    Args:
        rng: Random source, injectable for deterministic tests.
        timestamp: Milliseconds since epoch; defaults to now.

    Returns:
        Prompt text.
    """
    rng = rng or random.Random()
    categories = [category.value for category in Category]
    return PROMPT_TEMPLATE.format(
        category=rng.choice(categories),
        seed=rng.randint(0, 9999),
        timestamp=timestamp if timestamp is not None else int(time.time() * 1000),
        categories="|".join(categories),
    )


def strip_code_fences(text: str) -> str:
    """Remove a surrounding markdown code fence, e.g. ```json ... ```."""
    return CODE_FENCE_PATTERN.sub("", text).strip()


def parse_generated_product(text: str) -> dict[str, Any]:
    """Parse model output into a product object.

    Args:
        text: Raw model output, possibly wrapped in a code fence.

    Returns:
        Parsed product fields.

    Raises:
        UpstreamError: If the output is empty, not JSON, or not an object.
    """
    if not text or not text.strip():
        raise UpstreamError("No product generated")

    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning("Generated content is not valid JSON", generated_text=text)
        raise UpstreamError("Generated content is not valid JSON") from e

    if not isinstance(data, dict):
        logger.warning("Generated content is not a JSON object", generated_text=text)
        raise UpstreamError("Generated content is not a JSON object")

    return data


class ProductGenerator:
    """Generates product listings through a text generator.

    Example usage:
        generator = ProductGenerator(GeminiTextGenerator(api_key))
        product = await generator.generate()
    """

    def __init__(self, text_generator: TextGenerator, rng: random.Random | None = None) -> None:
        """Initialize generator.

        Args:
            text_generator: Prompt-in, text-out collaborator.
            rng: Random source for prompt variation.
        """
        self.text_generator = text_generator
        self.rng = rng or random.Random()

    async def generate(self) -> dict[str, Any]:
        """Generate one product listing.

        Returns:
            Product fields as returned by the model.

        Raises:
            UpstreamError: If the service fails or returns unusable output.
        """
        prompt = build_prompt(self.rng)
        text = await self.text_generator.generate(prompt)
        product = parse_generated_product(text)
        logger.info("Product generated", product_name=product.get("productName"))
        return product
