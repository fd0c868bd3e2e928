"""
Session router for memory collection and story generation.

Endpoints:
- POST /sessions - Start a session with the opening prompt
- GET /sessions/{session_id}/transcript - Get the conversation
- POST /sessions/{session_id}/messages - Share a memory
- POST /sessions/{session_id}/story - Generate the story (blocking)
- GET /sessions/{session_id}/story - Get the current story result
- DELETE /sessions/{session_id} - End the session
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from src.memory.errors import GenerationInProgressError, SessionLimitError, SessionNotFoundError
from src.memory.generator import GenerationResult
from src.memory.prompt_formatter import role_label
from src.memory.session import MemorySession

from ..schemas.session import (
    MessageRequest,
    MessageResponse,
    SessionCreateResponse,
    StoryResponse,
    TranscriptResponse,
    TurnItem,
)
from ..services.session_manager import SessionManager, get_session_manager

logger = logging.getLogger("memory_keeper")

router = APIRouter()


def _turn_items(session: MemorySession) -> list:
    return [
        TurnItem(label=role_label(turn.speaker, session.script), **turn.to_dict())
        for turn in session.get_transcript()
    ]


def _story_response(session: MemorySession, result: GenerationResult) -> StoryResponse:
    return StoryResponse(session_id=session.session_id, **result.to_dict())


def _get_session(manager: SessionManager, session_id: str) -> MemorySession:
    try:
        return manager.get(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=SessionCreateResponse, status_code=201)
async def create_session(manager: SessionManager = Depends(get_session_manager)):
    """
    Start a new session.

    The transcript starts with the interviewer's opening prompt.
    """
    try:
        session = manager.create()
    except SessionLimitError as e:
        raise HTTPException(status_code=503, detail=str(e))

    return SessionCreateResponse(
        session_id=session.session_id,
        created_at=session.created_at,
        turns=_turn_items(session),
        can_generate=session.can_generate,
    )


@router.get("/{session_id}/transcript", response_model=TranscriptResponse)
async def get_transcript(session_id: str, manager: SessionManager = Depends(get_session_manager)):
    """Get the conversation in order."""
    session = _get_session(manager, session_id)
    return TranscriptResponse(
        session_id=session.session_id,
        turns=_turn_items(session),
        can_generate=session.can_generate,
    )


@router.post("/{session_id}/messages", response_model=MessageResponse)
async def post_message(
    session_id: str,
    request: MessageRequest,
    manager: SessionManager = Depends(get_session_manager)
):
    """
    Share a memory.

    Appends the memory and the interviewer's follow-up. Blank text is
    ignored and the transcript is returned unchanged.
    """
    session = _get_session(manager, session_id)
    accepted = session.submit(request.text)

    return MessageResponse(
        session_id=session.session_id,
        turns=_turn_items(session),
        can_generate=session.can_generate,
        accepted=accepted,
    )


@router.post("/{session_id}/story", response_model=StoryResponse)
async def generate_story(session_id: str, manager: SessionManager = Depends(get_session_manager)):
    """
    Generate the story (blocking).

    Generation failures are returned as state FAILURE with the error
    message; the session stays usable and generation can be retried.
    """
    session = _get_session(manager, session_id)

    if not session.transcript.has_responses:
        raise HTTPException(status_code=409, detail="Share at least one memory before creating a story")

    try:
        result = await session.generate()
    except GenerationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return _story_response(session, result)


@router.get("/{session_id}/story", response_model=StoryResponse)
async def get_story(session_id: str, manager: SessionManager = Depends(get_session_manager)):
    """Get the current story result without triggering generation."""
    session = _get_session(manager, session_id)
    return _story_response(session, session.current_result())


@router.delete("/{session_id}", status_code=204)
async def end_session(session_id: str, manager: SessionManager = Depends(get_session_manager)):
    """End the session and discard its transcript."""
    try:
        manager.end(session_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
