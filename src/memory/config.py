"""
Configuration for Memory Keeper.

Values come from the environment. Entry points call load_dotenv() first,
so a local .env file works the same way.

Environment:
- GEMINI_API_KEY: API key for the generation endpoint (required for generation)
- GEMINI_MODEL: Model identifier
- GEMINI_API_BASE: Base URL of the Generative Language API
- GENERATION_TIMEOUT_SECONDS: Timeout for the generation request
- MEMORY_KEEPER_SCRIPT_PATH: Optional JSON file overriding the conversation script
- MAX_SESSIONS: Maximum concurrent sessions kept by the API
- SESSION_IDLE_TIMEOUT_SECONDS: Idle lifetime of an API session (0 disables expiry)
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from .errors import ConfigurationError

# Defaults
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash-preview-05-20"
DEFAULT_GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_MAX_SESSIONS = 1000
DEFAULT_SESSION_IDLE_TIMEOUT_SECONDS = 3600

GENERATE_CONTENT_PATH = "/models/{model}:generateContent"


@dataclass(frozen=True)
class GeminiConfig:
    """Settings for the text-generation endpoint."""
    api_key: str = field(repr=False)
    model: str = DEFAULT_GEMINI_MODEL
    api_base: str = DEFAULT_GEMINI_API_BASE
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def endpoint_url(self) -> str:
        """generateContent URL for the configured model, without the key."""
        return self.api_base.rstrip("/") + GENERATE_CONTENT_PATH.format(model=self.model)


def _read_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def load_gemini_config() -> GeminiConfig:
    """
    Build GeminiConfig from the environment.

    Raises:
        ConfigurationError: If GEMINI_API_KEY is not set or a numeric value is invalid
    """
    api_key = os.getenv("GEMINI_API_KEY", "").strip()
    if not api_key:
        raise ConfigurationError(
            "GEMINI_API_KEY environment variable is required for story generation. "
            "Set it in .env or environment."
        )

    return GeminiConfig(
        api_key=api_key,
        model=os.getenv("GEMINI_MODEL", "").strip() or DEFAULT_GEMINI_MODEL,
        api_base=os.getenv("GEMINI_API_BASE", "").strip() or DEFAULT_GEMINI_API_BASE,
        timeout=_read_float("GENERATION_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
    )


def get_script_path() -> Optional[str]:
    """Path of a custom conversation script, if configured."""
    return os.getenv("MEMORY_KEEPER_SCRIPT_PATH") or None


def get_max_sessions() -> int:
    raw = os.getenv("MAX_SESSIONS", str(DEFAULT_MAX_SESSIONS))
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"MAX_SESSIONS must be an integer, got {raw!r}")
    if value < 1:
        raise ConfigurationError(f"MAX_SESSIONS must be at least 1, got {raw!r}")
    return value


def get_session_idle_timeout() -> int:
    """Seconds an API session may sit idle before it is discarded (0 disables expiry)."""
    raw = os.getenv("SESSION_IDLE_TIMEOUT_SECONDS", str(DEFAULT_SESSION_IDLE_TIMEOUT_SECONDS))
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"SESSION_IDLE_TIMEOUT_SECONDS must be an integer, got {raw!r}")
    if value < 0:
        raise ConfigurationError(f"SESSION_IDLE_TIMEOUT_SECONDS must not be negative, got {raw!r}")
    return value
