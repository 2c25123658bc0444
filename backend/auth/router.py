# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Auth endpoints – registration, login/logout, password change, current-user
info and the caller's own start-page settings.

Security notes
--------------
* Login returns the *same* error message whether the username doesn't exist
  or the password is wrong.  This prevents user-enumeration attacks.
* The session token only ever travels in an HTTP-only cookie; JavaScript on
  the page cannot read it.
* change-password verifies the current password before accepting the new
  one, so a hijacked session alone cannot take over the account.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from auth.directory import UserDirectory
from auth.schemas import (
    AnonymousMe,
    AuthenticatedMe,
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    MeSettingsResponse,
    RegisterRequest,
    StatusResponse,
    UpdateSettingsRequest,
    UserRow,
)
from auth.sessions import AuthSession
from core.config import settings
from core.security import (
    get_auth_service,
    get_directory,
    require_session,
    require_visitor,
)
from models.user_settings import SETTINGS_FIELDS

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_expire_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def _clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def _settings_payload(session: AuthSession, row) -> dict:
    payload = {"id": session.user_id, "username": session.username, "is_admin": session.is_admin}
    if row is not None:
        payload.update({name: getattr(row, name) for name in SETTINGS_FIELDS})
    return payload


# ---------------------------------------------------------------------------
# POST /auth/register
# ---------------------------------------------------------------------------


@router.post("/register", response_model=UserRow, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    service=Depends(get_auth_service),
    directory: UserDirectory = Depends(get_directory),
):
    """
    Create an account.  The first account ever created while no admin
    exists is made admin; all later ones are plain users.
    """
    return service.register(directory, body.username, body.password)


# ---------------------------------------------------------------------------
# POST /auth/login
# ---------------------------------------------------------------------------


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    _visitor: AuthSession = Depends(require_visitor()),
    service=Depends(get_auth_service),
    directory: UserDirectory = Depends(get_directory),
):
    """Check the credentials, open a session and hand its token over in a cookie."""
    session = service.login(directory, body.username, body.password)
    _set_session_cookie(response, session.session_id)
    return session


# ---------------------------------------------------------------------------
# POST /auth/logout
# ---------------------------------------------------------------------------


@router.post("/logout", response_model=LogoutResponse)
def logout(request: Request, response: Response, service=Depends(get_auth_service)):
    """Close the current session.  Calling it without one is not an error."""
    # No guard: visitors and logged-in users may both call it
    removed = service.logout(request.cookies.get(settings.session_cookie_name))
    _clear_session_cookie(response)
    return LogoutResponse(status=removed)


# ---------------------------------------------------------------------------
# GET /auth/me
# ---------------------------------------------------------------------------


@router.get("/me", response_model=AuthenticatedMe | AnonymousMe)
def me(session: AuthSession = Depends(require_session(allow_visitor=True))):
    """Who is calling.  Visitors get the anonymous shape instead of a 401."""
    if not session.authenticated:
        return AnonymousMe()
    return AuthenticatedMe(id=session.user_id, username=session.username, is_admin=session.is_admin)


# ---------------------------------------------------------------------------
# GET / PUT /auth/me/settings
# ---------------------------------------------------------------------------


@router.get("/me/settings", response_model=MeSettingsResponse, response_model_exclude_none=True)
def my_settings(
    session: AuthSession = Depends(require_session()),
    service=Depends(get_auth_service),
    directory: UserDirectory = Depends(get_directory),
):
    """The caller's identity merged with their saved start-page settings."""
    return _settings_payload(session, service.load_settings(directory, session.user_id))


@router.put("/me/settings", response_model=MeSettingsResponse, response_model_exclude_none=True)
def update_my_settings(
    body: UpdateSettingsRequest,
    session: AuthSession = Depends(require_session()),
    service=Depends(get_auth_service),
    directory: UserDirectory = Depends(get_directory),
):
    """Store the fields present in the body; omitted fields keep their value."""
    fields = body.model_dump(exclude_unset=True)
    return _settings_payload(session, service.save_settings(directory, session.user_id, fields))


# ---------------------------------------------------------------------------
# PUT /auth/change-password
# ---------------------------------------------------------------------------


@router.put("/change-password", response_model=bool)
def change_password(
    body: ChangePasswordRequest,
    session: AuthSession = Depends(require_session()),
    service=Depends(get_auth_service),
    directory: UserDirectory = Depends(get_directory),
):
    """Rotate the caller's password after checking the current one."""
    service.change_password(directory, session.user_id, body.current_password, body.new_password)
    return True


# ---------------------------------------------------------------------------
# DELETE /auth/me
# ---------------------------------------------------------------------------


@router.delete("/me", response_model=StatusResponse)
def delete_me(
    response: Response,
    session: AuthSession = Depends(require_session()),
    service=Depends(get_auth_service),
    directory: UserDirectory = Depends(get_directory),
):
    """Delete the caller's own account and end their session."""
    service.delete_own_account(directory, session.user_id)
    _clear_session_cookie(response)
    return StatusResponse(status="OK")
