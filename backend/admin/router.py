# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Admin endpoints – user lifecycle management.

Every endpoint in this router is guarded by ``require_session(require_admin=True)``.
A visitor gets 401 and a logged-in non-admin gets 403 before any business
logic runs.
"""

from fastapi import APIRouter, Depends

from admin.schemas import UpdateUserRequest
from auth.directory import UserDirectory
from auth.schemas import StatusResponse, UserRow
from auth.sessions import AuthSession
from core.security import get_auth_service, get_directory, require_session

router = APIRouter(prefix="/admin", tags=["admin"])

_require_admin = require_session(require_admin=True)


# ---------------------------------------------------------------------------
# GET /admin/users  – list all users
# ---------------------------------------------------------------------------


@router.get("/users", response_model=list[UserRow])
def list_users(
    admin: AuthSession = Depends(_require_admin),
    service=Depends(get_auth_service),
    directory: UserDirectory = Depends(get_directory),
):
    """Return every user ordered by id (no password data – handled by the schema)."""
    return service.list_users(directory)


# ---------------------------------------------------------------------------
# PUT /admin/users/{id}  – promote / demote, optionally reset the password
# ---------------------------------------------------------------------------


@router.put("/users/{user_id}", response_model=UserRow)
def update_user(
    user_id: int,
    body: UpdateUserRequest,
    admin: AuthSession = Depends(_require_admin),
    service=Depends(get_auth_service),
    directory: UserDirectory = Depends(get_directory),
):
    """
    Change another account's admin flag and/or password.  A new admin flag
    also applies to sessions the user already holds.
    """
    return service.set_admin_status(directory, user_id, is_admin=body.is_admin, password=body.password)


# ---------------------------------------------------------------------------
# DELETE /admin/users/{id}
# ---------------------------------------------------------------------------


@router.delete("/users/{user_id}", response_model=StatusResponse)
def delete_user(
    user_id: int,
    admin: AuthSession = Depends(_require_admin),
    service=Depends(get_auth_service),
    directory: UserDirectory = Depends(get_directory),
):
    """
    Remove an account and its settings.

    Guard: an admin cannot delete their own account here (400); the
    self-service ``DELETE /auth/me`` exists for that.
    """
    service.delete_user(directory, admin.user_id, user_id)
    return StatusResponse(status="OK")
