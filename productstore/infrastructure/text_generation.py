"""Text generation client.

Wraps Google Gemini behind a one-method interface: prompt in, text out.
"""

from typing import Protocol

import google.generativeai as genai
import structlog
from google.api_core.exceptions import GoogleAPIError

from productstore.domain.exceptions import UpstreamError

logger = structlog.get_logger()


class TextGenerator(Protocol):
    """Anything that turns a prompt into free text."""

    async def generate(self, prompt: str) -> str:
        """Generate text for a prompt."""
        ...


class GeminiTextGenerator:
    """Text generator backed by a Gemini model.

    The call is made once, with no retry and no timeout override.
    """

    def __init__(
        self,
        api_key: str | None,
        model_name: str = "gemini-1.5-flash",
        temperature: float = 0.9,
        top_p: float = 0.8,
        top_k: int = 40,
    ) -> None:
        """Initialize generator.

        Args:
            api_key: Gemini API key. Without one every call fails.
            model_name: Gemini model to use.
            temperature: Sampling temperature.
            top_p: Nucleus sampling threshold.
            top_k: Top-k sampling cutoff.
        """
        self.api_key = api_key
        self.model_name = model_name
        self._model: genai.GenerativeModel | None = None

        if api_key:
            genai.configure(api_key=api_key)
            self._model = genai.GenerativeModel(
                model_name=model_name,
                generation_config=genai.GenerationConfig(
                    temperature=temperature,
                    top_p=top_p,
                    top_k=top_k,
                ),
            )

    async def generate(self, prompt: str) -> str:
        """Send a prompt to Gemini and return the response text.

        Raises:
            UpstreamError: If the key is missing or the call fails.
        """
        if self._model is None:
            raise UpstreamError("GEMINI_API_KEY environment variable is not set")

        try:
            response = await self._model.generate_content_async(prompt)
            # .text raises ValueError when the response was blocked
            return response.text
        except (GoogleAPIError, ValueError) as e:
            logger.error("Gemini request failed", model=self.model_name, error=str(e))
            raise UpstreamError(
                "Text generation service failed",
                details={"model": self.model_name},
            ) from e
