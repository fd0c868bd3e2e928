"""
Story generation invoker.

Holds the current GenerationResult of one session and moves it through

    IDLE / SUCCESS / FAILURE --generate--> PENDING --resolve--> SUCCESS | FAILURE

Only one generation may be in flight; a second call while PENDING raises
GenerationInProgressError and leaves the running call alone.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from .api_client import GeminiClient
from .config import load_gemini_config
from .errors import ConfigurationError, GenerationInProgressError, StoryGenerationError
from .prompt_formatter import build_story_prompt
from .script import ConversationScript, DEFAULT_SCRIPT
from .transcript import Turn

logger = logging.getLogger("memory_keeper")


class GenerationState(str, Enum):
    """
    Generation status values.

    - IDLE: Nothing generated yet
    - PENDING: Request in flight
    - SUCCESS: Story available
    - FAILURE: Last attempt failed, error message available
    """

    IDLE = "IDLE"
    PENDING = "PENDING"
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


@dataclass(frozen=True)
class GenerationResult:
    """Current outcome of story generation. Replaced on every transition."""
    state: GenerationState
    story: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def idle(cls) -> "GenerationResult":
        return cls(GenerationState.IDLE)

    @classmethod
    def pending(cls) -> "GenerationResult":
        return cls(GenerationState.PENDING)

    @classmethod
    def success(cls, story: str) -> "GenerationResult":
        return cls(GenerationState.SUCCESS, story=story)

    @classmethod
    def failure(cls, error: str) -> "GenerationResult":
        return cls(GenerationState.FAILURE, error=error)

    @property
    def is_pending(self) -> bool:
        return self.state is GenerationState.PENDING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "story": self.story,
            "error": self.error,
        }


class StoryGenerator:
    """
    Turns a transcript into a story through the Gemini client.

    When no client is given, one is built from the environment on each
    call and a missing API key becomes a FAILURE result.
    """

    def __init__(
        self,
        client: Optional[GeminiClient] = None,
        script: ConversationScript = DEFAULT_SCRIPT
    ):
        self._client = client
        self.script = script
        self._result = GenerationResult.idle()

    @property
    def result(self) -> GenerationResult:
        return self._result

    def _get_client(self) -> GeminiClient:
        if self._client is not None:
            return self._client
        return GeminiClient(load_gemini_config())

    async def generate(self, turns: Iterable[Turn]) -> GenerationResult:
        """
        Generate a story from the given turns.

        Args:
            turns: Transcript turns in order

        Returns:
            The settled result, SUCCESS or FAILURE

        Raises:
            GenerationInProgressError: If a generation is already pending
        """
        # Check and set with no await in between
        if self._result.is_pending:
            raise GenerationInProgressError()
        self._result = GenerationResult.pending()

        try:
            prompt = build_story_prompt(turns, self.script)
            client = self._get_client()
            story = await client.generate_content(prompt)
            self._result = GenerationResult.success(story)
            logger.info(f"[Generator] Story generated by {client.model} ({len(story)} chars)")

        except (StoryGenerationError, ConfigurationError) as e:
            logger.warning(f"[Generator] Generation failed: {e}")
            self._result = GenerationResult.failure(str(e))

        except asyncio.CancelledError:
            logger.warning("[Generator] Generation cancelled")
            self._result = GenerationResult.failure("Generation cancelled")
            raise

        except Exception as e:
            logger.error(f"[Generator] Unexpected generation error: {e}", exc_info=True)
            self._result = GenerationResult.failure(str(e) or type(e).__name__)

        finally:
            if self._result.is_pending:
                self._result = GenerationResult.failure("Generation did not complete")

        return self._result
