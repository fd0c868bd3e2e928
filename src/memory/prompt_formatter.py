"""
Prompt Formatter - transcript to story prompt.

Both functions are pure: the same turns and script always produce the
same string.
"""

from typing import Iterable

from .script import ConversationScript, DEFAULT_SCRIPT
from .transcript import Role, Turn

STORY_PROMPT_TEMPLATE = """
You are a compassionate biographer. Your task is to take the following interview conversation and transform it into a beautiful, short, first-person story.
Capture the emotions and details shared by the person. Write it as if they are telling the story themselves.
Do not include the "{asker_label}" parts in the final story.

Here is the conversation:
---
{conversation}
---

Now, please write the story:
"""


def role_label(role: Role, script: ConversationScript = DEFAULT_SCRIPT) -> str:
    """Display label for a role."""
    if role is Role.RESPONDER:
        return script.responder_label
    return script.asker_label


def format_conversation(
    turns: Iterable[Turn],
    script: ConversationScript = DEFAULT_SCRIPT
) -> str:
    """
    Render turns as "<Label>: <text>" lines joined with newlines.

    Args:
        turns: Transcript turns in order
        script: Script providing the role labels

    Returns:
        Conversation text
    """
    return "\n".join(f"{role_label(turn.speaker, script)}: {turn.text}" for turn in turns)


def build_story_prompt(
    turns: Iterable[Turn],
    script: ConversationScript = DEFAULT_SCRIPT
) -> str:
    """
    Build the full instruction prompt for story generation.

    Args:
        turns: Transcript turns in order
        script: Script providing the role labels

    Returns:
        Prompt asking for a first-person story that leaves out the
        interviewer's lines
    """
    return STORY_PROMPT_TEMPLATE.format(
        asker_label=script.asker_label,
        conversation=format_conversation(turns, script),
    )
