"""
Gemini API client module.

Sends the story prompt to the generateContent endpoint and returns the
generated text. Every failure is raised as one of the
StoryGenerationError subclasses; nothing is retried.

Wire format:
    POST {api_base}/models/{model}:generateContent?key={api_key}
    request:  {"contents": [{"parts": [{"text": "<prompt>"}]}]}
    response: {"candidates": [{"content": {"parts": [{"text": "<story>"}]}}]}
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from .config import GeminiConfig
from .errors import ApiStatusFailure, ShapeFailure, TransportFailure

logger = logging.getLogger("memory_keeper")


def build_request_body(prompt: str) -> Dict[str, Any]:
    """Build the generateContent request body for a single text prompt."""
    return {"contents": [{"parts": [{"text": prompt}]}]}


def extract_story_text(data: Any) -> Optional[str]:
    """
    Extract candidates[0].content.parts[0].text from a response body.

    Returns:
        The text, or None if any level of the path is missing, has the
        wrong type, or the text is empty
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None

    if not isinstance(text, str) or not text:
        return None
    return text


class GeminiClient:
    """
    Async client for the Gemini generateContent endpoint.

    The API key travels as the "key" query parameter and is never
    written to logs.
    """

    def __init__(
        self,
        config: GeminiConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            config: Endpoint settings
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.config = config
        self._transport = transport

    @property
    def model(self) -> str:
        return self.config.model

    async def generate_content(self, prompt: str) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: Full prompt text

        Returns:
            Generated story text

        Raises:
            TransportFailure: Network error, timeout, or malformed JSON body
            ApiStatusFailure: Status outside 200-299
            ShapeFailure: No text at candidates[0].content.parts[0].text
        """
        timeout = self.config.timeout
        logger.info(f"[Gemini] Generating with {self.model} (prompt {len(prompt)} chars)")

        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
                # httpx times each read separately; wait_for caps the whole request
                response = await asyncio.wait_for(
                    client.post(
                        self.config.endpoint_url,
                        params={"key": self.config.api_key},
                        json=build_request_body(prompt),
                        headers={"Content-Type": "application/json"},
                    ),
                    timeout=timeout,
                )
        except (httpx.TimeoutException, asyncio.TimeoutError):
            logger.error(f"[Gemini] Timeout after {timeout}s")
            raise TransportFailure(f"Request timed out after {timeout}s")
        except httpx.RequestError as e:
            logger.error(f"[Gemini] Request error: {type(e).__name__}")
            raise TransportFailure(f"Request error: {e}")

        if not (200 <= response.status_code < 300):
            logger.error(f"[Gemini] HTTP {response.status_code} {response.reason_phrase}")
            raise ApiStatusFailure(response.status_code, response.reason_phrase)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"[Gemini] Malformed response body: {e}")
            raise TransportFailure(f"Malformed response body: {e}")

        text = extract_story_text(data)
        if text is None:
            logger.error("[Gemini] Story text missing from response")
            raise ShapeFailure()

        logger.info(f"[Gemini] Generated {len(text)} chars")
        return text
