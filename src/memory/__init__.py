"""
Memory module - conversation transcript and story generation.

- Conversation script (interviewer lines and labels)
- Transcript of turns
- Prompt formatting
- Gemini API client
- Story generator with single-flight guard
- Session facade used by the API and CLI
"""

from .errors import (
    MemoryKeeperError,
    ConfigurationError,
    ScriptLoadError,
    StoryGenerationError,
    TransportFailure,
    ApiStatusFailure,
    ShapeFailure,
    GenerationInProgressError,
    SessionNotFoundError,
    SessionLimitError,
)

from .script import (
    ConversationScript,
    DEFAULT_SCRIPT,
    load_script,
)

from .transcript import (
    Role,
    Turn,
    Transcript,
)

from .prompt_formatter import (
    format_conversation,
    build_story_prompt,
)

from .api_client import GeminiClient

from .generator import (
    GenerationState,
    GenerationResult,
    StoryGenerator,
)

from .session import MemorySession

__all__ = [
    # errors
    "MemoryKeeperError",
    "ConfigurationError",
    "ScriptLoadError",
    "StoryGenerationError",
    "TransportFailure",
    "ApiStatusFailure",
    "ShapeFailure",
    "GenerationInProgressError",
    "SessionNotFoundError",
    "SessionLimitError",
    # script
    "ConversationScript",
    "DEFAULT_SCRIPT",
    "load_script",
    # transcript
    "Role",
    "Turn",
    "Transcript",
    # prompt_formatter
    "format_conversation",
    "build_story_prompt",
    # api_client
    "GeminiClient",
    # generator
    "GenerationState",
    "GenerationResult",
    "StoryGenerator",
    # session
    "MemorySession",
]
