"""Generative model client."""

from typing import Any, Protocol

import structlog
from google import genai
from google.genai import types

logger = structlog.get_logger(__name__)


class GenerativeClientProtocol(Protocol):
    """Protocol for text generation backends."""

    async def generate(
        self,
        prompt: str,
        *,
        model: str,
        system_instruction: str | None = None,
        response_schema: dict[str, Any] | None = None,
        json_output: bool = False,
    ) -> str:
        """Generate text for a prompt; JSON text when ``json_output`` is set."""
        ...


class GeminiClient:
    """
    Gemini client using the google-genai async API.

    Usage:
        client = GeminiClient(api_key="...")
        text = await client.generate("Hello", model="gemini-flash-lite-latest")
    """

    def __init__(self, api_key: str):
        self._client = genai.Client(api_key=api_key)

    async def generate(
        self,
        prompt: str,
        *,
        model: str,
        system_instruction: str | None = None,
        response_schema: dict[str, Any] | None = None,
        json_output: bool = False,
    ) -> str:
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json" if json_output or response_schema else None,
            response_schema=response_schema,
        )
        response = await self._client.aio.models.generate_content(
            model=model,
            contents=prompt,
            config=config,
        )
        text = response.text or ""
        logger.debug("Model response received", model=model, length=len(text))
        return text
