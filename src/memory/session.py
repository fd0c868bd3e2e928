"""
Memory session - the public surface used by the API and the CLI.

A session owns one transcript and one story generator. Nothing is
persisted; the session is discarded when its owner drops it.
"""

import logging
import uuid
from datetime import datetime
from typing import Optional, Tuple

from .generator import GenerationResult, StoryGenerator
from .script import ConversationScript, load_script
from .transcript import Transcript, Turn

logger = logging.getLogger("memory_keeper")


def generate_session_id() -> str:
    """Generate a new session id."""
    return str(uuid.uuid4())


class MemorySession:
    """One conversation and its generated story."""

    def __init__(
        self,
        script: Optional[ConversationScript] = None,
        generator: Optional[StoryGenerator] = None,
        session_id: Optional[str] = None
    ):
        """
        Args:
            script: Conversation script (None loads the configured one)
            generator: Story generator (None builds one for the script)
            session_id: Explicit id (None generates a UUID)
        """
        if script is None:
            script = load_script()

        self.session_id = session_id or generate_session_id()
        self.created_at = datetime.now().isoformat()
        self.script = script
        self.transcript = Transcript(script)
        self.generator = generator or StoryGenerator(script=script)

    def get_transcript(self) -> Tuple[Turn, ...]:
        """Ordered snapshot of the conversation."""
        return self.transcript.turns()

    def update_input(self, text: str) -> None:
        """Replace the text being typed, before it is submitted."""
        self.transcript.update_input(text)

    def submit(self, text: Optional[str] = None) -> bool:
        """
        Record a memory. Blank text is ignored.

        Args:
            text: Memory text (None submits the text set by update_input)

        Returns:
            True if the transcript grew
        """
        return self.transcript.submit(text)

    @property
    def can_generate(self) -> bool:
        """True when a memory has been shared and no generation is pending."""
        return self.transcript.has_responses and not self.generator.result.is_pending

    async def generate(self) -> GenerationResult:
        """
        Generate a story from the current transcript.

        Raises:
            GenerationInProgressError: If a generation is already pending
        """
        logger.info(f"[Session] {self.session_id}: generating story from {len(self.transcript)} turns")
        return await self.generator.generate(self.transcript.turns())

    def current_result(self) -> GenerationResult:
        return self.generator.result
