"""In-memory draft session management."""

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Optional

from counterpick.errors import SessionNotFoundError
from counterpick.services.draft_state_machine import DraftStateMachine
from counterpick.services.scoring_logger import ScoringLogger

logger = logging.getLogger(__name__)

SESSION_CLEANUP_INTERVAL_SECONDS = 60


@dataclass
class DraftSession:
    """One isolated draft: its state machine, lock and bookkeeping."""

    id: str
    machine: DraftStateMachine
    lock: threading.Lock = field(default_factory=threading.Lock)
    created_at: float = field(default_factory=time.time)
    last_access: float = field(default_factory=time.time)
    # Set after a SequenceDesyncFault; cleared by reset
    invalidated: bool = False
    scoring_logger: Optional[ScoringLogger] = None


class SessionManager:
    """Thread-safe registry of live draft sessions with idle expiry."""

    def __init__(self, ttl_seconds: int = 60 * 60, cleanup_interval: int = SESSION_CLEANUP_INTERVAL_SECONDS):
        self.ttl_seconds = ttl_seconds
        self.cleanup_interval = cleanup_interval
        self.sessions: dict[str, DraftSession] = {}
        self._sessions_lock = threading.Lock()
        self._cleanup_lock = threading.Lock()
        self._last_cleanup = 0.0

    def create_session(
        self, machine: DraftStateMachine, scoring_logger: Optional[ScoringLogger] = None
    ) -> DraftSession:
        self.prune_expired()
        with self._sessions_lock:
            session_id = str(uuid.uuid4())[:8]  # Short ID for URLs
            while session_id in self.sessions:
                session_id = str(uuid.uuid4())[:8]
            session = DraftSession(id=session_id, machine=machine, scoring_logger=scoring_logger)
            self.sessions[session_id] = session
        logger.info(f"Created draft session {session_id}")
        return session

    def get_session(self, session_id: str) -> DraftSession:
        """Look up a live session and refresh its idle timer.

        Raises:
            SessionNotFoundError: no live session has this id
        """
        self.prune_expired()
        with self._sessions_lock:
            session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Draft session {session_id} not found")
        session.last_access = time.time()
        return session

    def remove_session(self, session_id: str, suffix: str = "_removed") -> bool:
        with self._sessions_lock:
            session = self.sessions.pop(session_id, None)
        if session is None:
            return False
        if session.scoring_logger:
            session.scoring_logger.save(suffix=suffix)
        logger.info(f"Removed draft session {session_id}")
        return True

    def is_expired(self, session: DraftSession, now: float) -> bool:
        return (now - session.last_access) >= self.ttl_seconds

    def prune_expired(self, now: Optional[float] = None, force: bool = False) -> list[str]:
        """Remove expired sessions opportunistically; busy sessions are skipped."""
        now = now or time.time()
        if not force and now - self._last_cleanup < self.cleanup_interval:
            return []

        with self._cleanup_lock:
            if not force and now - self._last_cleanup < self.cleanup_interval:
                return []

            with self._sessions_lock:
                expired = [
                    session_id
                    for session_id, session in self.sessions.items()
                    if not session.lock.locked() and self.is_expired(session, now)
                ]
            for session_id in expired:
                self.remove_session(session_id, suffix="_expired")
            if expired:
                logger.info(f"Pruned {len(expired)} expired draft sessions")

            self._last_cleanup = now
        return expired

    def list_sessions(self) -> list[dict]:
        """List all active sessions (for debugging)."""
        with self._sessions_lock:
            sessions = list(self.sessions.values())
        return [
            {
                "id": s.id,
                "action_count": s.machine.cursor,
                "is_complete": s.machine.is_complete,
                "invalidated": s.invalidated,
            }
            for s in sessions
        ]

    def __len__(self) -> int:
        return len(self.sessions)
