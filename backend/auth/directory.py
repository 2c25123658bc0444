# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
User Directory – the only code that queries the ``users`` and
``user_settings`` tables.

One instance wraps one request-scoped SQLAlchemy session.  Each write method
commits its own unit of work.  Database failures are rolled back and
surfaced as ``StorageUnavailable`` so callers see a single error kind.
"""

import functools

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import StorageUnavailable, UsernameTaken
from core.logger import logger
from models.user import User
from models.user_settings import SETTINGS_FIELDS, UserSettings


def _storage_call(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("user store: %s failed: %s", method.__name__, exc)
            raise StorageUnavailable() from exc

    return wrapper


class UserDirectory:
    def __init__(self, db: Session):
        self.db = db

    # -- queries ----------------------------------------------------------

    @_storage_call
    def exists_by_username(self, username: str) -> bool:
        return self.db.query(User.id).filter(User.username == username).first() is not None

    @_storage_call
    def get_by_username(self, username: str) -> User | None:
        return self.db.query(User).filter(User.username == username).first()

    @_storage_call
    def get_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    @_storage_call
    def get_all(self) -> list[User]:
        return self.db.query(User).order_by(User.id).all()

    @_storage_call
    def count_all(self) -> int:
        return self.db.query(User).count()

    @_storage_call
    def count_admins(self) -> int:
        return self.db.query(User).filter(User.is_admin.is_(True)).count()

    @_storage_call
    def load_settings(self, user_id: int) -> UserSettings | None:
        return self.db.query(UserSettings).filter(UserSettings.user_id == user_id).first()

    # -- writes -----------------------------------------------------------

    @_storage_call
    def insert(self, username: str, password_hash: str, is_admin: bool) -> User:
        user = User(username=username, password_hash=password_hash, is_admin=is_admin)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # Lost a race against a concurrent registration of the same name
            self.db.rollback()
            raise UsernameTaken() from exc
        self.db.refresh(user)
        return user

    @_storage_call
    def update_password_hash(self, user_id: int, password_hash: str) -> bool:
        updated = (
            self.db.query(User)
            .filter(User.id == user_id)
            .update({User.password_hash: password_hash}, synchronize_session="fetch")
        )
        self.db.commit()
        return updated > 0

    @_storage_call
    def update_is_admin(self, user_id: int, is_admin: bool) -> bool:
        updated = (
            self.db.query(User)
            .filter(User.id == user_id)
            .update({User.is_admin: is_admin}, synchronize_session="fetch")
        )
        self.db.commit()
        return updated > 0

    @_storage_call
    def delete_by_id(self, user_id: int) -> bool:
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            return False
        # ORM delete so the settings row goes with it (cascade on the relationship)
        self.db.delete(user)
        self.db.commit()
        return True

    @_storage_call
    def save_settings(self, user_id: int, **fields) -> UserSettings:
        """Create or update the settings row; only known columns are written."""
        row = self.load_settings(user_id)
        if row is None:
            row = UserSettings(user_id=user_id)
            self.db.add(row)
        for name, value in fields.items():
            if name in SETTINGS_FIELDS:
                setattr(row, name, value)
        self.db.commit()
        self.db.refresh(row)
        return row
