from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    name: str
    email: str
    is_admin: bool

    def to_dict(self) -> dict:
        return {"id": self.user_id, "name": self.name, "email": self.email, "isAdmin": self.is_admin}


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = require_non_empty(email, "email").lower()
        user = self._users.get_by_email(email)
        if not user:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.info("Rejected login for %s", email)
            raise AuthenticationError("Invalid credentials")

        return self.session_user(user.user_id)

    def session_user(self, user_id: int) -> SessionUser:
        user = self._users.get_by_id(user_id)
        if not user:
            raise AuthenticationError("Authentication required")
        return SessionUser(user_id=user.user_id, name=user.name, email=user.email, is_admin=user.is_admin)
