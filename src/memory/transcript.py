"""
Transcript of one memory-collection conversation.

The transcript starts with the script's opening line and grows by two
turns per submission: the person's text, then the scripted follow-up.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from .script import ConversationScript, DEFAULT_SCRIPT

logger = logging.getLogger("memory_keeper")


class Role(str, Enum):
    """
    Speaker of a turn.

    - ASKER: the scripted interviewer
    - RESPONDER: the person whose memory is being recorded
    """

    ASKER = "asker"
    RESPONDER = "responder"


@dataclass(frozen=True)
class Turn:
    """One utterance in the conversation."""
    speaker: Role
    text: str

    def to_dict(self) -> dict:
        return {"speaker": self.speaker.value, "text": self.text}


class Transcript:
    """
    Append-only, ordered list of turns plus the pending input buffer.

    The first turn is always the opening ASKER turn.
    """

    def __init__(self, script: ConversationScript = DEFAULT_SCRIPT):
        self.script = script
        self._turns: List[Turn] = [Turn(Role.ASKER, script.opening)]
        self.pending_input = ""

    def update_input(self, text: str) -> None:
        """Replace the pending input buffer."""
        self.pending_input = text

    def submit(self, text: Optional[str] = None) -> bool:
        """
        Record a memory from the person.

        Blank or whitespace-only text is ignored. Otherwise the text is
        appended as a RESPONDER turn followed by the scripted ASKER
        follow-up, and the pending input buffer is cleared.

        Args:
            text: Text to submit. None submits the pending input buffer.

        Returns:
            True if the transcript grew, False if the text was ignored
        """
        if text is None:
            text = self.pending_input

        if not text.strip():
            return False

        self._turns.append(Turn(Role.RESPONDER, text))
        self._turns.append(Turn(Role.ASKER, self.script.follow_up))
        self.pending_input = ""

        logger.debug(f"[Transcript] Recorded memory ({len(text)} chars), {len(self._turns)} turns")
        return True

    def turns(self) -> Tuple[Turn, ...]:
        """Snapshot of all turns in insertion order."""
        return tuple(self._turns)

    @property
    def has_responses(self) -> bool:
        """True once the person has shared at least one memory."""
        return any(turn.speaker is Role.RESPONDER for turn in self._turns)

    def __len__(self) -> int:
        return len(self._turns)
