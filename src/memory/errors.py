"""
Memory Keeper exceptions.

Generation failures fall into three terminal kinds:
- TransportFailure: endpoint unreachable, timed out, or body not valid JSON
- ApiStatusFailure: endpoint reachable but returned a non-2xx status
- ShapeFailure: 2xx response without the expected story text

None of them are retried. Callers surface str(error) to the user.
"""


class MemoryKeeperError(Exception):
    """Base exception for all Memory Keeper errors."""
    pass


class ConfigurationError(MemoryKeeperError):
    """Raised when required configuration (e.g. GEMINI_API_KEY) is missing or invalid."""
    pass


class ScriptLoadError(MemoryKeeperError):
    """Raised when a conversation script file cannot be read or parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load conversation script {path}: {reason}")


class StoryGenerationError(MemoryKeeperError):
    """Base exception for a failed story generation call."""
    pass


class TransportFailure(StoryGenerationError):
    """Raised when the generation endpoint could not be reached or its body could not be parsed."""
    pass


class ApiStatusFailure(StoryGenerationError):
    """Raised when the generation endpoint answers with a status outside 200-299."""

    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"API Error: {status_code} {reason}".rstrip())


class ShapeFailure(StoryGenerationError):
    """Raised when a successful response carries no story text."""

    def __init__(self, message: str = "Couldn't find story text in the API response."):
        super().__init__(message)


class GenerationInProgressError(MemoryKeeperError):
    """
    Raised when generate() is called while a previous call is still pending.

    The pending call is left untouched.
    """

    def __init__(self):
        super().__init__("A story is already being generated for this session")


class SessionNotFoundError(MemoryKeeperError):
    """Raised when a requested session does not exist."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class SessionLimitError(MemoryKeeperError):
    """Raised when the session store is full."""

    def __init__(self, max_sessions: int):
        self.max_sessions = max_sessions
        super().__init__(f"Session limit reached ({max_sessions})")
