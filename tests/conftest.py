"""
Pytest configuration and shared fixtures.
"""

import logging

import httpx
import pytest

from src.memory.api_client import GeminiClient
from src.memory.config import GeminiConfig

CONFIG_ENV_VARS = (
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_API_BASE",
    "GENERATION_TIMEOUT_SECONDS",
    "MEMORY_KEEPER_SCRIPT_PATH",
    "MAX_SESSIONS",
    "SESSION_IDLE_TIMEOUT_SECONDS",
    "LOG_LEVEL",
)

TEST_API_KEY = "test-secret-key-123"


@pytest.fixture(autouse=True, scope="function")
def clean_environment(monkeypatch):
    """
    Start every test without Memory Keeper configuration in the environment.

    Tests that need a value set it with monkeypatch.
    """
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture(autouse=True, scope="function")
def reset_memory_keeper_logger():
    """
    Undo setup_logging() between tests so caplog sees records again.
    """
    yield
    logger = logging.getLogger("memory_keeper")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def gemini_config():
    """GeminiConfig pointing at a fake endpoint."""
    return GeminiConfig(
        api_key=TEST_API_KEY,
        model="gemini-test",
        api_base="https://gemini.test/v1beta",
        timeout=5.0,
    )


def story_response(text="Once upon a time on the farm..."):
    """Successful generateContent response body."""
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


@pytest.fixture
def make_client(gemini_config):
    """
    Build a GeminiClient whose requests go to the given handler.

    The handler receives an httpx.Request and returns an httpx.Response
    (or raises an httpx exception). Async handlers are supported.
    """
    def _make(handler):
        return GeminiClient(gemini_config, transport=httpx.MockTransport(handler))
    return _make
