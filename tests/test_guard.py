"""Unit tests for auth/guard.py -- the Access Guard decision table."""

import pytest

from auth.guard import check_access
from auth.sessions import ANONYMOUS, AuthSession
from core.errors import Forbidden, Unauthorized

USER = AuthSession(session_id="u", user_id=2, username="bob", is_admin=False, authenticated=True)
ADMIN = AuthSession(session_id="a", user_id=1, username="alice", is_admin=True, authenticated=True)


def test_visitor_rejected_by_default():
    with pytest.raises(Unauthorized):
        check_access(ANONYMOUS)


def test_visitor_rejected_on_admin_route_with_unauthorized_not_forbidden():
    with pytest.raises(Unauthorized):
        check_access(ANONYMOUS, require_admin=True)


def test_visitor_allowed_when_configured():
    assert check_access(ANONYMOUS, allow_visitor=True) is ANONYMOUS


def test_authenticated_user_passes_session_guard():
    assert check_access(USER) is USER


def test_non_admin_forbidden_on_admin_guard():
    with pytest.raises(Forbidden):
        check_access(USER, require_admin=True)


def test_admin_passes_admin_guard():
    assert check_access(ADMIN, require_admin=True) is ADMIN


@pytest.mark.parametrize("session", [USER, ADMIN])
def test_visitor_only_guard_refuses_logged_in_sessions(session):
    with pytest.raises(Forbidden):
        check_access(session, allow_visitor=True, allow_authenticated=False)


def test_visitor_only_guard_lets_visitors_through():
    assert check_access(ANONYMOUS, allow_visitor=True, allow_authenticated=False) is ANONYMOUS
