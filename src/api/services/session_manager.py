"""
In-memory session store for the API.

Features:
- Create, look up, and end memory sessions by id
- Cap on concurrent sessions (MAX_SESSIONS)
- Idle expiry: sessions untouched for SESSION_IDLE_TIMEOUT_SECONDS are discarded
- Everything is dropped on server shutdown (no persistence)

Configuration:
- SESSION_IDLE_TIMEOUT_SECONDS: default 3600, 0 disables expiry
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional

from src.memory.config import get_max_sessions, get_session_idle_timeout
from src.memory.errors import SessionLimitError, SessionNotFoundError
from src.memory.session import MemorySession

logger = logging.getLogger("memory_keeper")

CLEANUP_INTERVAL_SECONDS = 60


class SessionManager:
    """
    Holds live sessions and their last activity time.
    """

    def __init__(
        self,
        max_sessions: Optional[int] = None,
        idle_timeout: Optional[int] = None,
        session_factory: Callable[[], MemorySession] = MemorySession
    ):
        """
        Args:
            max_sessions: Session cap (None reads MAX_SESSIONS)
            idle_timeout: Seconds before an idle session is discarded, 0 to disable (None reads SESSION_IDLE_TIMEOUT_SECONDS)
            session_factory: Builds new sessions
        """
        self.session_factory = session_factory
        self.max_sessions = max_sessions if max_sessions is not None else get_max_sessions()
        self.idle_timeout = idle_timeout if idle_timeout is not None else get_session_idle_timeout()

        self._sessions: Dict[str, MemorySession] = {}
        self._last_active: Dict[str, datetime] = {}
        self._cleanup_task: Optional[asyncio.Task] = None
        self._running = False

    async def start(self) -> None:
        """Start the idle cleanup task."""
        if self._running:
            return

        self._running = True

        if self.idle_timeout > 0:
            self._cleanup_task = asyncio.create_task(self._idle_cleanup_loop())
            logger.info(f"[Sessions] Started with idle timeout: {self.idle_timeout}s")
        else:
            logger.info("[Sessions] Started (idle expiry disabled)")

    async def stop(self) -> None:
        """Stop the cleanup task and drop every session."""
        self._running = False

        if self._cleanup_task:
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
            self._cleanup_task = None

        count = len(self._sessions)
        self._sessions.clear()
        self._last_active.clear()
        logger.info(f"[Sessions] Shutdown complete, discarded {count} sessions")

    def create(self) -> MemorySession:
        """
        Create a new session.

        Raises:
            SessionLimitError: If max_sessions are already live
        """
        if len(self._sessions) >= self.max_sessions:
            raise SessionLimitError(self.max_sessions)

        session = self.session_factory()
        self._sessions[session.session_id] = session
        self._last_active[session.session_id] = datetime.now()
        logger.info(f"[Sessions] Created {session.session_id}")
        return session

    def get(self, session_id: str) -> MemorySession:
        """
        Look up a session and mark it active.

        Raises:
            SessionNotFoundError: If no such session exists
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        self._last_active[session_id] = datetime.now()
        return session

    def end(self, session_id: str) -> None:
        """
        Discard a session.

        Raises:
            SessionNotFoundError: If no such session exists
        """
        if session_id not in self._sessions:
            raise SessionNotFoundError(session_id)
        del self._sessions[session_id]
        self._last_active.pop(session_id, None)
        logger.info(f"[Sessions] Ended {session_id}")

    async def _idle_cleanup_loop(self) -> None:
        """Background loop discarding idle sessions."""
        while self._running:
            try:
                await asyncio.sleep(CLEANUP_INTERVAL_SECONDS)

                if not self._running:
                    break

                self.expire_idle()

            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"[Sessions] Cleanup loop error: {e}")

    def expire_idle(self, now: Optional[datetime] = None) -> int:
        """
        Discard sessions idle longer than idle_timeout.

        Sessions with a pending generation are kept.

        Returns:
            Number of sessions discarded
        """
        if self.idle_timeout <= 0:
            return 0

        now = now or datetime.now()
        threshold = timedelta(seconds=self.idle_timeout)

        expired = [
            session_id
            for session_id, last_active in list(self._last_active.items())
            if now - last_active > threshold
            and not self._sessions[session_id].current_result().is_pending
        ]
        for session_id in expired:
            del self._sessions[session_id]
            del self._last_active[session_id]
            logger.info(f"[Sessions] Expired idle session {session_id}")

        return len(expired)

    def get_status(self) -> dict:
        """Get session store status."""
        return {
            "running": self._running,
            "session_count": len(self._sessions),
            "max_sessions": self.max_sessions,
            "idle_timeout_seconds": self.idle_timeout,
        }


# Global session manager instance
_session_manager: Optional[SessionManager] = None


def get_session_manager() -> SessionManager:
    """
    Get or create global session manager instance.

    Returns:
        SessionManager instance
    """
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager()
    return _session_manager


async def startup_session_manager() -> None:
    """Start the session manager. Called on FastAPI startup."""
    manager = get_session_manager()
    await manager.start()


async def shutdown_session_manager() -> None:
    """Stop the session manager. Called on FastAPI shutdown."""
    global _session_manager
    if _session_manager is not None:
        await _session_manager.stop()
        _session_manager = None
