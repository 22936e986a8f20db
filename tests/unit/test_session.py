"""
Unit tests for request-scoped sessions
"""
import time

import pytest

from presenter import MemorySessionStore, get_current_session, session_scope
from presenter.session import SessionData, SessionInterface, bind_session, unbind_session


class TestMemorySessionStore:
    """Test MemorySessionStore"""

    def test_create_and_get(self, session_store):
        """Test creating and loading a session"""
        session = session_store.create()
        assert session_store.get(session.session_id) is session

    def test_expired_session_dropped(self):
        """Test expired sessions are not returned"""
        store = MemorySessionStore()
        session = SessionData(expires_at=time.time() - 1)
        store.set(session)
        assert store.get(session.session_id) is None
        assert session.session_id not in store.sessions

    def test_cleanup(self):
        """Test cleanup removes expired sessions only"""
        store = MemorySessionStore()
        store.set(SessionData(expires_at=time.time() - 1))
        live = store.create()
        assert store.cleanup() == 1
        assert list(store.sessions) == [live.session_id]

    def test_max_age(self):
        """Test sessions get an expiry from max_age"""
        store = MemorySessionStore(max_age=60)
        assert store.create().expires_at is not None


class TestSessionInterface:
    """Test the session mapping"""

    def test_mapping_behaviour(self, session_store):
        """Test mapping operations mark the session modified"""
        interface = SessionInterface(session_store.create(), session_store)
        assert not interface.modified

        interface["user"] = "ann"
        assert interface.modified
        assert interface["user"] == "ann"
        assert "user" in interface
        assert len(interface) == 1

        del interface["user"]
        with pytest.raises(KeyError):
            interface["user"]

    def test_save(self, session_store):
        """Test saving resets the modified flag"""
        interface = SessionInterface(session_store.create(), session_store)
        interface["x"] = 1
        interface.save()
        assert not interface.modified


class TestSessionScope:
    """Test session binding"""

    def test_no_session_outside_scope(self):
        """Test nothing is bound by default"""
        assert get_current_session() is None

    def test_scope_binds_and_unbinds(self, session_store):
        """Test the session is bound only inside the block"""
        with session_scope(session_store) as session:
            assert get_current_session() is session
        assert get_current_session() is None

    def test_scope_reuses_session(self, session_store):
        """Test an existing session id is loaded"""
        with session_scope(session_store) as first:
            first["count"] = 1
            session_id = first.session_id

        with session_scope(session_store, session_id) as second:
            assert second.session_id == session_id
            assert second["count"] == 1

    def test_unknown_session_id(self, session_store):
        """Test an unknown id starts a new session"""
        with session_scope(session_store, "missing") as session:
            assert session.session_id != "missing"

    def test_bind_plain_mapping(self):
        """Test any mutable mapping can be bound"""
        token = bind_session({})
        try:
            assert get_current_session() == {}
        finally:
            unbind_session(token)
