from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    email: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = require_non_empty(email, "Email").lower()
        user = self._users.get_by_email(email)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            logger.warning("Unreadable password hash for user %s", user.user_id)
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=user.user_id, full_name=user.full_name, email=user.email, role=user.role)


class UserAdminService:
    """Use case: admin-managed accounts (no self sign-up)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self, *, current_role: Role) -> list[dict]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Unauthorized: Admin access required")
        return [
            {"user_id": u.user_id, "full_name": u.full_name, "email": u.email, "role": u.role, "is_active": u.is_active}
            for u in self._users.list_all()
        ]

    def create_user(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        email: str,
        password: str,
        full_name: str,
        role: str = Role.CONSULTANT.value,
    ) -> SessionUser:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Unauthorized: Admin access required")

        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email is not valid")
        full_name = require_non_empty(full_name, "Full name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        try:
            new_role = Role(str(role or Role.CONSULTANT.value).strip().lower())
        except ValueError:
            raise ValidationError("Role must be super_admin or consultant")

        if self._users.get_by_email(email):
            raise ValidationError("A user with this email already exists")

        user_id = self._users.create(
            full_name=full_name,
            email=email,
            password_hash=generate_password_hash(password),
            role=new_role,
        )
        logger.info("Admin %s created %s account %s (%s)", admin_user_id, new_role.value, user_id, email)
        return SessionUser(user_id=user_id, full_name=full_name, email=email, role=new_role)
