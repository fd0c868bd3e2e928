"""
API Schemas package.

Pydantic models for request/response validation.
"""

from .session import (
    TurnItem,
    TranscriptResponse,
    SessionCreateResponse,
    MessageRequest,
    MessageResponse,
    StoryResponse,
)

__all__ = [
    "TurnItem",
    "TranscriptResponse",
    "SessionCreateResponse",
    "MessageRequest",
    "MessageResponse",
    "StoryResponse",
]
