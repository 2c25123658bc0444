"""Unit tests for auth/sessions.py -- the in-process session registry."""

from datetime import timedelta
from types import SimpleNamespace

from auth.sessions import ANONYMOUS, SessionRegistry

ALICE = SimpleNamespace(id=1, username="alice", is_admin=True)
BOB = SimpleNamespace(id=2, username="bob", is_admin=False)


def _registry(lifetime=timedelta(hours=1)) -> SessionRegistry:
    return SessionRegistry(lifetime)


def test_create_returns_authenticated_session_with_token():
    registry = _registry()
    session = registry.create(ALICE)
    assert session.authenticated
    assert session.user_id == 1
    assert session.username == "alice"
    assert session.is_admin is True
    assert session.session_id


def test_tokens_are_unique():
    registry = _registry()
    tokens = {registry.create(BOB).session_id for _ in range(50)}
    assert len(tokens) == 50
    assert len(registry) == 50


def test_lookup_finds_created_session():
    registry = _registry()
    session = registry.create(BOB)
    assert registry.lookup(session.session_id) == session


def test_lookup_unknown_or_missing_token_is_anonymous():
    registry = _registry()
    registry.create(BOB)
    for token in (None, "", "nope"):
        found = registry.lookup(token)
        assert found is ANONYMOUS
        assert found.authenticated is False
        assert found.user_id is None


def test_destroy_is_idempotent():
    registry = _registry()
    session = registry.create(BOB)
    assert registry.destroy(session.session_id) is True
    assert registry.destroy(session.session_id) is False
    assert registry.destroy(None) is False
    assert registry.lookup(session.session_id) is ANONYMOUS


def test_expired_session_resolves_to_anonymous_and_is_dropped():
    registry = _registry(lifetime=timedelta(seconds=-1))
    session = registry.create(BOB)
    assert registry.lookup(session.session_id) is ANONYMOUS
    assert len(registry) == 0


def test_destroy_user_drops_only_that_users_sessions():
    registry = _registry()
    a1 = registry.create(ALICE)
    a2 = registry.create(ALICE)
    b = registry.create(BOB)

    assert registry.destroy_user(ALICE.id) == 2
    assert registry.lookup(a1.session_id) is ANONYMOUS
    assert registry.lookup(a2.session_id) is ANONYMOUS
    assert registry.lookup(b.session_id) == b


def test_update_admin_rewrites_open_sessions_of_that_user_only():
    registry = _registry()
    a = registry.create(ALICE)
    b = registry.create(BOB)

    assert registry.update_admin(ALICE.id, False) == 1
    assert registry.lookup(a.session_id).is_admin is False
    assert registry.lookup(a.session_id).authenticated
    assert registry.lookup(b.session_id) == b


def test_create_sweeps_abandoned_expired_sessions():
    registry = _registry(lifetime=timedelta(seconds=-1))
    for _ in range(3):
        registry.create(BOB)
    # Each create drops the already-expired ones before adding its own
    assert len(registry) == 1
