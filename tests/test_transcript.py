"""
Tests for transcript module.
"""

import dataclasses

import pytest

from src.memory.script import ConversationScript, DEFAULT_FOLLOW_UP, DEFAULT_OPENING
from src.memory.transcript import Role, Transcript, Turn


class TestTranscriptSeed:
    """Tests for the initial transcript state."""

    def test_starts_with_opening_asker_turn(self):
        """Should seed exactly one ASKER turn with the opening line."""
        transcript = Transcript()

        turns = transcript.turns()

        assert len(turns) == 1
        assert turns[0] == Turn(Role.ASKER, DEFAULT_OPENING)

    def test_uses_custom_script_opening(self):
        """Should seed with the script's opening line."""
        script = ConversationScript(opening="Tell me about your childhood.")

        transcript = Transcript(script)

        assert transcript.turns()[0].text == "Tell me about your childhood."

    def test_no_responses_initially(self):
        """Should report no responses before any submission."""
        assert Transcript().has_responses is False


class TestSubmit:
    """Tests for Transcript.submit."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t  \n"])
    def test_blank_text_is_ignored(self, text):
        """Should leave the transcript unchanged for blank text."""
        transcript = Transcript()

        accepted = transcript.submit(text)

        assert accepted is False
        assert len(transcript) == 1

    def test_appends_responder_then_follow_up(self):
        """Should append exactly two turns: the memory, then the follow-up."""
        transcript = Transcript()

        accepted = transcript.submit("I grew up on a farm")

        turns = transcript.turns()
        assert accepted is True
        assert len(turns) == 3
        assert turns[1] == Turn(Role.RESPONDER, "I grew up on a farm")
        assert turns[2] == Turn(Role.ASKER, DEFAULT_FOLLOW_UP)

    def test_text_is_stored_as_typed(self):
        """Should not trim the submitted text."""
        transcript = Transcript()

        transcript.submit("  the old barn  ")

        assert transcript.turns()[1].text == "  the old barn  "

    def test_uses_custom_follow_up(self):
        """Should append the script's follow-up line."""
        transcript = Transcript(ConversationScript(follow_up="Go on..."))

        transcript.submit("We had cows")

        assert transcript.turns()[-1].text == "Go on..."

    def test_consecutive_submissions_keep_order(self):
        """Should grow by two turns per submission in insertion order."""
        transcript = Transcript()

        transcript.submit("first")
        transcript.submit("second")

        texts = [turn.text for turn in transcript.turns()]
        assert len(texts) == 5
        assert texts[1] == "first"
        assert texts[3] == "second"

    def test_has_responses_after_submit(self):
        """Should report responses once a memory is shared."""
        transcript = Transcript()
        transcript.submit("We had cows")

        assert transcript.has_responses is True


class TestPendingInput:
    """Tests for the pending input buffer."""

    def test_submit_without_text_uses_buffer(self):
        """Should submit the buffered text when called without arguments."""
        transcript = Transcript()
        transcript.update_input("Summer at the lake")

        accepted = transcript.submit()

        assert accepted is True
        assert transcript.turns()[1].text == "Summer at the lake"

    def test_submit_clears_buffer(self):
        """Should clear the buffer after a successful submission."""
        transcript = Transcript()
        transcript.update_input("Summer at the lake")

        transcript.submit()

        assert transcript.pending_input == ""

    def test_blank_submit_keeps_buffer(self):
        """Should leave the buffer alone when the submission is ignored."""
        transcript = Transcript()
        transcript.update_input("   ")

        transcript.submit()

        assert transcript.pending_input == "   "
        assert len(transcript) == 1


class TestTurnsSnapshot:
    """Tests for the read-only snapshot."""

    def test_snapshot_is_a_tuple(self):
        """Should return an immutable sequence."""
        assert isinstance(Transcript().turns(), tuple)

    def test_snapshot_does_not_change_after_submit(self):
        """Should not reflect later submissions."""
        transcript = Transcript()
        snapshot = transcript.turns()

        transcript.submit("later memory")

        assert len(snapshot) == 1

    def test_turn_is_immutable(self):
        """Should not allow a turn to be modified."""
        turn = Turn(Role.RESPONDER, "text")

        with pytest.raises(dataclasses.FrozenInstanceError):
            turn.text = "changed"

    def test_turn_to_dict(self):
        """Should serialize speaker as its value."""
        assert Turn(Role.RESPONDER, "hi").to_dict() == {"speaker": "responder", "text": "hi"}
