"""
Tests for prompt_formatter module.
"""

from src.memory.prompt_formatter import (
    build_story_prompt,
    format_conversation,
    role_label,
)
from src.memory.script import ConversationScript
from src.memory.transcript import Role, Transcript, Turn


class TestFormatConversation:
    """Tests for format_conversation."""

    def test_labels_each_turn(self):
        """Should render '<Label>: <text>' lines joined by newlines."""
        turns = [
            Turn(Role.ASKER, "Hello!"),
            Turn(Role.RESPONDER, "I grew up on a farm"),
        ]

        result = format_conversation(turns)

        assert result == "Interviewer: Hello!\nPerson: I grew up on a farm"

    def test_uses_display_labels_not_role_names(self):
        """Should never expose internal role values."""
        result = format_conversation([Turn(Role.RESPONDER, "x")])

        assert "responder" not in result
        assert result.startswith("Person: ")

    def test_custom_labels(self):
        """Should use the script's labels."""
        script = ConversationScript(asker_label="Q", responder_label="A")

        result = format_conversation([Turn(Role.ASKER, "why?"), Turn(Role.RESPONDER, "because")], script)

        assert result == "Q: why?\nA: because"

    def test_empty_turns(self):
        """Should return an empty string for no turns."""
        assert format_conversation([]) == ""

    def test_role_label(self):
        """Should map roles to labels."""
        assert role_label(Role.ASKER) == "Interviewer"
        assert role_label(Role.RESPONDER) == "Person"


class TestBuildStoryPrompt:
    """Tests for build_story_prompt."""

    def test_end_to_end_example(self):
        """Should include every labelled line after a submission."""
        transcript = Transcript()
        transcript.submit("I grew up on a farm")

        prompt = build_story_prompt(transcript.turns())

        assert len(transcript) == 3
        assert "Person: I grew up on a farm" in prompt
        assert "Interviewer: Hello! Please tell me a memory" in prompt
        assert f"Interviewer: {transcript.script.follow_up}" in prompt

    def test_instructs_first_person_story(self):
        """Should ask for a first-person story without the interviewer's lines."""
        prompt = build_story_prompt([Turn(Role.ASKER, "Hello!")])

        assert "first-person story" in prompt
        assert "compassionate biographer" in prompt
        assert 'Do not include the "Interviewer" parts' in prompt

    def test_exclusion_uses_custom_label(self):
        """Should name the custom interviewer label in the exclusion."""
        script = ConversationScript(asker_label="Grandchild")

        prompt = build_story_prompt([Turn(Role.ASKER, "Hi")], script)

        assert 'Do not include the "Grandchild" parts' in prompt

    def test_conversation_is_delimited(self):
        """Should place the conversation between --- markers."""
        prompt = build_story_prompt([Turn(Role.RESPONDER, "We had cows")])

        assert "---\nPerson: We had cows\n---" in prompt

    def test_deterministic(self):
        """Should return identical output for identical input."""
        turns = Transcript().turns() + (Turn(Role.RESPONDER, "memory"),)

        first = build_story_prompt(turns)
        second = build_story_prompt(turns)
        third = build_story_prompt(list(turns))

        assert first == second == third

    def test_braces_in_text_are_kept(self):
        """Should not treat braces in memories as placeholders."""
        prompt = build_story_prompt([Turn(Role.RESPONDER, "we wrote {names} on the wall")])

        assert "Person: we wrote {names} on the wall" in prompt
