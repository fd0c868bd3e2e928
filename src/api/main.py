"""
FastAPI application entry point.

Hosts in-memory memory sessions and story generation.
"""

# Load environment variables BEFORE importing modules that read them
from dotenv import load_dotenv
load_dotenv()

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from src import __version__
from src.infra.logging_config import setup_logging
from .routers import sessions
from .services.session_manager import (
    startup_session_manager,
    shutdown_session_manager,
    get_session_manager,
    SessionManager,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Starts the session store (idle expiry) and drops all sessions on shutdown.
    """
    setup_logging(log_to_file=False)
    await startup_session_manager()

    yield

    await shutdown_session_manager()

# Tag metadata for Swagger UI
tags_metadata = [
    {
        "name": "sessions",
        "description": "Memory collection - share memories with the interviewer and turn them into a first-person story",
    },
]

app = FastAPI(
    title="Memory Keeper API",
    lifespan=lifespan,
    description="""
## Memory Keeper API

Share your memories, and they are turned into a short first-person story.

### Flow
1. `POST /sessions` starts a conversation with the interviewer's opening prompt
2. `POST /sessions/{id}/messages` shares a memory; the interviewer asks for more
3. `POST /sessions/{id}/story` generates the story with Gemini

Sessions live in memory only and are discarded when ended, when idle too
long, or when the server stops.

### Usage
```bash
# Start server
uvicorn src.api.main:app --host 127.0.0.1 --port 8000

curl -X POST http://localhost:8000/sessions
curl -X POST http://localhost:8000/sessions/<id>/messages \\
  -H "Content-Type: application/json" \\
  -d '{"text": "I grew up on a farm"}'
curl -X POST http://localhost:8000/sessions/<id>/story
```
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


@app.get("/sessions/status")
async def sessions_status(manager: SessionManager = Depends(get_session_manager)):
    """Session store status (count, cap, idle timeout)."""
    return manager.get_status()


app.include_router(sessions.router, prefix="/sessions", tags=["sessions"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
