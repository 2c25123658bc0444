# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Auth Service – registration, login/logout, password rotation and user
administration.

One instance lives on ``app.state`` for the life of the process and owns
the session registry and the bootstrap-admin flags.  Every operation gets
the request's ``UserDirectory`` passed in explicitly.

Concurrency
-----------
Endpoints run on FastAPI's worker threads.  Anything that changes who is a
user or who is an admin (insert, delete, admin flag) runs together with the
flag recompute under ``_write_lock``, so no request ever sees a half-updated
flag pair and two first registrants cannot both become admin.  Password
hashing is done before taking the lock.
"""

import threading

from auth.bootstrap import BootstrapTracker
from auth.directory import UserDirectory
from auth.sessions import AuthSession, SessionRegistry
from core.errors import (
    InvalidCredentials,
    NotFound,
    RegistrationDisabled,
    SelfDeleteForbidden,
    UsernameTaken,
)
from core.logger import logger
from core.security import hash_password, verify_password
from models.user import User
from models.user_settings import UserSettings

_CURRENT_PASSWORD_WRONG = "Current password is incorrect"


class AuthService:
    def __init__(
        self,
        sessions: SessionRegistry,
        tracker: BootstrapTracker | None = None,
        registration_enabled: bool = True,
    ):
        self.sessions = sessions
        self.tracker = tracker or BootstrapTracker()
        self.registration_enabled = registration_enabled
        self._write_lock = threading.Lock()

    def _recompute(self, directory: UserDirectory) -> None:
        self.tracker.recompute(directory)

    # -- visitors ---------------------------------------------------------

    def register(self, directory: UserDirectory, username: str, password: str) -> User:
        """
        Create an account.  The first account created while no admin exists
        becomes the admin; every later one is a plain user.
        """
        if not self.registration_enabled:
            raise RegistrationDisabled()
        if directory.exists_by_username(username):
            raise UsernameTaken()

        password_hash = hash_password(password)

        with self._write_lock:
            if not self.tracker.primed:
                self._recompute(directory)
            is_admin = not self.tracker.has_admin_user
            user = directory.insert(username, password_hash, is_admin)
            self._recompute(directory)

        if is_admin:
            logger.info("user registered: id=%d username=%s (bootstrap admin)", user.id, user.username)
        else:
            logger.info("user registered: id=%d username=%s", user.id, user.username)
        return user

    def login(self, directory: UserDirectory, username: str, password: str) -> AuthSession:
        user = directory.get_by_username(username)

        # Unified failure path – no information leaks about whether the user exists
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("failed login for username=%s", username)
            raise InvalidCredentials()

        session = self.sessions.create(user)
        logger.info("user logged in: id=%d username=%s", user.id, user.username)
        return session

    # -- session holders --------------------------------------------------

    def logout(self, token: str | None) -> bool:
        removed = self.sessions.destroy(token)
        if removed:
            logger.info("session closed")
        return removed

    def change_password(
        self,
        directory: UserDirectory,
        user_id: int,
        current_password: str,
        new_password: str,
    ) -> None:
        """
        Verify the current password, then store a hash of the new one.

        Other sessions of the same user stay open.
        """
        user = directory.get_by_id(user_id)
        if user is None:
            raise NotFound()
        if not verify_password(current_password, user.password_hash):
            logger.warning("password change refused for id=%d: wrong current password", user_id)
            raise InvalidCredentials(_CURRENT_PASSWORD_WRONG)

        directory.update_password_hash(user_id, hash_password(new_password))
        logger.info("password changed: id=%d", user_id)

    def load_settings(self, directory: UserDirectory, user_id: int) -> UserSettings | None:
        return directory.load_settings(user_id)

    def save_settings(self, directory: UserDirectory, user_id: int, fields: dict) -> UserSettings:
        if directory.get_by_id(user_id) is None:
            raise NotFound()
        return directory.save_settings(user_id, **fields)

    def delete_own_account(self, directory: UserDirectory, user_id: int) -> None:
        """Self-service delete, keyed by the caller's session."""
        with self._write_lock:
            if not directory.delete_by_id(user_id):
                raise NotFound()
            self._recompute(directory)
        self.sessions.destroy_user(user_id)
        logger.info("account deleted by its owner: id=%d", user_id)

    # -- admins -----------------------------------------------------------

    def list_users(self, directory: UserDirectory) -> list[User]:
        return directory.get_all()

    def set_admin_status(
        self,
        directory: UserDirectory,
        target_id: int,
        is_admin: bool | None = None,
        password: str | None = None,
    ) -> User:
        """
        Update the admin flag and/or the password of another account.
        Either field may be omitted.
        """
        password_hash = hash_password(password) if password else None

        with self._write_lock:
            if directory.get_by_id(target_id) is None:
                raise NotFound()
            if password_hash is not None:
                directory.update_password_hash(target_id, password_hash)
            if is_admin is not None:
                directory.update_is_admin(target_id, is_admin)
                self._recompute(directory)
                self.sessions.update_admin(target_id, is_admin)
            user = directory.get_by_id(target_id)

        logger.info(
            "user updated by admin: id=%d is_admin=%s password_reset=%s",
            target_id,
            user.is_admin,
            password_hash is not None,
        )
        return user

    def delete_user(self, directory: UserDirectory, caller_id: int, target_id: int) -> None:
        """Admin delete by id.  An admin may not remove their own account here."""
        if target_id == caller_id:
            raise SelfDeleteForbidden()

        with self._write_lock:
            if not directory.delete_by_id(target_id):
                raise NotFound()
            self._recompute(directory)
        self.sessions.destroy_user(target_id)
        logger.info("user deleted by admin id=%d: id=%d", caller_id, target_id)
