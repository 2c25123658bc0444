# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Error kinds raised by the account layer.

Services raise these instead of ``HTTPException`` so they stay usable outside
a request.  ``main.py`` installs one handler that turns any ``AuthError`` into
a ``{"detail": ...}`` JSON body with the class's status code – the same shape
FastAPI uses for its own HTTP errors.
"""

from fastapi import status


class AuthError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Bad request"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class RegistrationDisabled(AuthError):
    status_code = status.HTTP_406_NOT_ACCEPTABLE
    detail = "User registration disabled"


class UsernameTaken(AuthError):
    status_code = status.HTTP_406_NOT_ACCEPTABLE
    detail = "This username already exists"


class InvalidCredentials(AuthError):
    # Same text whether the username or the password was wrong
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Username or password is incorrect"


class Unauthorized(AuthError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not logged in"


class Forbidden(AuthError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Access denied"


class SelfDeleteForbidden(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Cannot delete yourself"


class NotFound(AuthError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "User not found"


class StorageUnavailable(AuthError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "User store unavailable"
