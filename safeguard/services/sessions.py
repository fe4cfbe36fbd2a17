"""In-memory store for per-user dashboard sessions."""
from __future__ import annotations

from uuid import UUID

from ..core.errors import SessionNotFoundError
from ..models import AnalysisSession


class SessionStore:
    """Keeps dashboard sessions in memory until they are discarded."""

    def __init__(self) -> None:
        self._sessions: dict[UUID, AnalysisSession] = {}

    def create(self) -> AnalysisSession:
        session = AnalysisSession()
        self._sessions[session.id] = session
        return session

    def get(self, session_id: UUID) -> AnalysisSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError() from None

    def discard(self, session_id: UUID) -> None:
        """Drop a finished session so its items can be reclaimed."""
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError()

    def __len__(self) -> int:
        return len(self._sessions)


_store_instance: SessionStore | None = None


def get_session_store() -> SessionStore:
    global _store_instance  # noqa: PLW0603
    if _store_instance is None:
        _store_instance = SessionStore()
    return _store_instance
