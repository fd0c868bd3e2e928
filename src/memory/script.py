"""
Conversation script loading.

The interviewer's lines and the role labels used in the formatted
transcript are data, not code. A deployment can swap the script by
pointing MEMORY_KEEPER_SCRIPT_PATH at a JSON file:

    {
        "opening": "Hello! Please tell me a memory you would like to save.",
        "follow_up": "That memory is interesting! Can you tell me more, or share another memory?",
        "asker_label": "Interviewer",
        "responder_label": "Person"
    }

Keys that are missing fall back to the defaults.
"""

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .config import get_script_path
from .errors import ScriptLoadError

logger = logging.getLogger("memory_keeper")

DEFAULT_OPENING = "Hello! Please tell me a memory you would like to save."
DEFAULT_FOLLOW_UP = "That memory is interesting! Can you tell me more, or share another memory?"
DEFAULT_ASKER_LABEL = "Interviewer"
DEFAULT_RESPONDER_LABEL = "Person"


@dataclass(frozen=True)
class ConversationScript:
    """Scripted interviewer lines and display labels."""
    opening: str = DEFAULT_OPENING
    follow_up: str = DEFAULT_FOLLOW_UP
    asker_label: str = DEFAULT_ASKER_LABEL
    responder_label: str = DEFAULT_RESPONDER_LABEL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConversationScript":
        """
        Build a script from a mapping, ignoring unknown keys.

        Raises:
            ValueError: If a known key holds a non-string or blank value
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                logger.debug(f"[Script] Ignoring unknown key: {key}")
                continue
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"'{key}' must be a non-empty string")
            values[key] = value
        return cls(**values)


DEFAULT_SCRIPT = ConversationScript()


def load_script(path: Optional[Union[str, Path]] = None) -> ConversationScript:
    """
    Load the conversation script.

    Args:
        path: JSON file to read. None uses MEMORY_KEEPER_SCRIPT_PATH,
              and the built-in script when that is unset too.

    Returns:
        ConversationScript

    Raises:
        ScriptLoadError: If the file is missing, unreadable, or malformed
    """
    if path is None:
        path = get_script_path()
    if path is None:
        return DEFAULT_SCRIPT

    script_path = Path(path)
    try:
        with open(script_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ScriptLoadError(str(script_path), str(e))
    except json.JSONDecodeError as e:
        raise ScriptLoadError(str(script_path), f"invalid JSON: {e}")

    if not isinstance(data, dict):
        raise ScriptLoadError(str(script_path), "top-level value must be an object")

    try:
        script = ConversationScript.from_dict(data)
    except ValueError as e:
        raise ScriptLoadError(str(script_path), str(e))

    logger.info(f"[Script] Loaded conversation script from {script_path}")
    return script
