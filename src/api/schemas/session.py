"""
Memory session schemas.

Request/response models for the session endpoints.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class TurnItem(BaseModel):
    """Single turn of the conversation."""

    speaker: Literal["asker", "responder"]
    label: str = Field(description="Display label, e.g. 'Interviewer' or 'Person'")
    text: str


class TranscriptResponse(BaseModel):
    """Ordered conversation of one session."""

    session_id: str
    turns: List[TurnItem] = Field(default=[])
    can_generate: bool = Field(
        default=False,
        description="Whether a memory has been shared and no story is being generated"
    )


class SessionCreateResponse(TranscriptResponse):
    """Response from session creation."""

    created_at: str


class MessageRequest(BaseModel):
    """A memory shared by the person."""

    text: str = Field(
        description="Memory text. Blank or whitespace-only text is ignored.",
        json_schema_extra={"examples": ["I grew up on a farm"]}
    )


class MessageResponse(TranscriptResponse):
    """Transcript after a submission."""

    accepted: bool = Field(description="False when the text was blank and ignored")


class StoryResponse(BaseModel):
    """Current story generation result."""

    session_id: str
    state: Literal["IDLE", "PENDING", "SUCCESS", "FAILURE"]
    story: Optional[str] = None
    error: Optional[str] = None
