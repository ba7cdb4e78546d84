"""
Text generation handle backed by Google Gemini.

Wraps a google-genai client bound to one model for the lifetime of the process.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from google import genai

from ..enums import UpstreamService
from ..errors import GenerationError
from ..telemetry import upstream_duration_histogram, upstream_span

if TYPE_CHECKING:
    from ..config import GatewaySettings


logger = logging.getLogger(__name__)


class TextGenerator:
    """
    Generates completions for a prompt string.

    The model identifier is fixed at construction; requests cannot change it.
    """

    def __init__(self, client: Any, model_name: str) -> None:
        self._client = client
        self.model_name = model_name

    @classmethod
    def from_settings(cls, settings: GatewaySettings) -> TextGenerator:
        """Build a generator with a real google-genai client."""
        client = genai.Client(api_key=settings.google_gemini_api_key)
        logger.info("Google Gemini client initialized (model: %s)", settings.gemini_model)
        return cls(client, settings.gemini_model)

    async def generate(self, prompt: str) -> str:
        """
        Send a prompt to the model and return the completion text.

        Args:
            prompt: Prompt forwarded verbatim

        Returns:
            The generated text

        Raises:
            GenerationError: If the model returned no text
        """
        start_time = time.time()
        try:
            with upstream_span(UpstreamService.GEMINI.value, "generate_content") as span:
                span.set_attribute("gateway.prompt_chars", len(prompt))
                response = await self._client.aio.models.generate_content(
                    model=self.model_name,
                    contents=prompt,
                )
        finally:
            upstream_duration_histogram.labels(service=UpstreamService.GEMINI.value).observe(
                time.time() - start_time
            )

        text = response.text
        if not text:
            raise GenerationError(f"Model {self.model_name} returned an empty response")

        logger.debug("Generated %d characters with %s", len(text), self.model_name)
        return text
