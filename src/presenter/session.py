"""
Request-scoped session binding for the presenter package.

This module provides:
- Session data container with expiry
- In-memory session store
- Mapping interface handed to request handlers
- Context-local binding of the current request's session

FlashStore falls back to the bound session when it is constructed without
an explicit storage mapping.
"""

import logging
import time
import uuid
from collections.abc import MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class SessionData:
    """Session data container"""
    session_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    data: Dict[str, Any] = field(default_factory=dict)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)
    expires_at: Optional[float] = None

    def is_expired(self) -> bool:
        """Check if session is expired"""
        if self.expires_at is None:
            return False
        return time.time() > self.expires_at

    def touch(self) -> None:
        """Update last activity timestamp"""
        self.updated_at = time.time()


class MemorySessionStore:
    """In-memory session store"""

    def __init__(self, max_age: Optional[int] = None):
        self.max_age = max_age
        self.sessions: Dict[str, SessionData] = {}

    def get(self, session_id: str) -> Optional[SessionData]:
        session = self.sessions.get(session_id)
        if session and session.is_expired():
            self.delete(session_id)
            return None
        return session

    def create(self) -> SessionData:
        session = SessionData()
        if self.max_age:
            session.expires_at = time.time() + self.max_age
        self.sessions[session.session_id] = session
        logger.debug(f"Created session {session.session_id}")
        return session

    def set(self, session: SessionData) -> None:
        self.sessions[session.session_id] = session

    def delete(self, session_id: str) -> None:
        self.sessions.pop(session_id, None)

    def cleanup(self) -> int:
        """Drop expired sessions, returning how many were removed"""
        expired: List[str] = [sid for sid, s in self.sessions.items() if s.is_expired()]
        for session_id in expired:
            self.delete(session_id)
        return len(expired)


class SessionInterface(MutableMapping):
    """Mapping view over one session's data, tracking modification"""

    def __init__(self, session: SessionData, store: MemorySessionStore):
        self._session = session
        self._store = store
        self._modified = False

    def __getitem__(self, key: str) -> Any:
        return self._session.data[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._session.data[key] = value
        self._modified = True

    def __delitem__(self, key: str) -> None:
        del self._session.data[key]
        self._modified = True

    def __iter__(self) -> Iterator[str]:
        return iter(self._session.data)

    def __len__(self) -> int:
        return len(self._session.data)

    @property
    def session_id(self) -> str:
        return self._session.session_id

    @property
    def modified(self) -> bool:
        return self._modified

    def save(self) -> None:
        """Persist the session if it changed"""
        if self._modified:
            self._session.touch()
            self._store.set(self._session)
            self._modified = False
            logger.debug(f"Saved session {self._session.session_id}")


_current_session: ContextVar[Optional[MutableMapping]] = ContextVar(
    "presenter_session", default=None
)


def bind_session(session: MutableMapping) -> Token:
    """Bind a session mapping to the current request context"""
    return _current_session.set(session)


def unbind_session(token: Token) -> None:
    _current_session.reset(token)


def get_current_session() -> Optional[MutableMapping]:
    """Return the session bound to the current request, if any"""
    return _current_session.get()


@contextmanager
def session_scope(store: MemorySessionStore, session_id: Optional[str] = None) -> Iterator[SessionInterface]:
    """Load or create a session, bind it for the block and save it afterwards"""
    session = store.get(session_id) if session_id else None
    if session is None:
        session = store.create()

    interface = SessionInterface(session, store)
    token = bind_session(interface)
    try:
        yield interface
    finally:
        unbind_session(token)
        interface.save()


__all__ = [
    'SessionData', 'MemorySessionStore', 'SessionInterface',
    'bind_session', 'unbind_session', 'get_current_session', 'session_scope'
]
