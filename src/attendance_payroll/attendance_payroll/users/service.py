from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import ErrorCode, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import EmployeeProfile, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    full_name: str
    role: Role


class AuthService:
    """Use case: authenticate users and resolve session identities."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid username or password", code=ErrorCode.INVALID_USER)

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password", code=ErrorCode.INVALID_USER)

        logger.info("User %s logged in", user.user_id)
        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)

    def resolve(self, user_id: Optional[Any]) -> User:
        """Map a session user id to an active user, failing closed."""
        if user_id is None:
            raise AuthenticationError("Unauthorized", code=ErrorCode.NO_AUTH)

        try:
            user = self._users.get_by_id(int(user_id))
        except (TypeError, ValueError):
            user = None
        if not user or not user.is_active:
            raise AuthenticationError("Unauthorized", code=ErrorCode.INVALID_USER)
        return user

    def require_privileged(self, user_id: Optional[Any]) -> User:
        user = self.resolve(user_id)
        if not user.role.is_privileged:
            raise AuthorizationError("You do not have permission for this action")
        return user

    def get_profile(self, user_id: int) -> EmployeeProfile:
        profile = self._users.get_profile(int(user_id))
        if not profile:
            raise NotFoundError("Profile not found", code=ErrorCode.NO_PROFILE)
        return profile


class UserService:
    """Use case: manage employee accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def provision_employee(
        self,
        *,
        current_role: Role,
        username: str,
        password: str,
        profile: EmployeeProfile,
        role: Role = Role.EMPLOYEE,
        email: Optional[str] = None,
    ) -> int:
        """Create the identity and its employee profile atomically."""
        if not current_role.is_privileged:
            raise AuthorizationError("You do not have permission for this action")

        username = require_non_empty(username, "Username")
        full_name = require_non_empty(profile.full_name, "Full name")
        require_min_length(password, "Password", 6)

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")
        if profile.base_salary < 0:
            raise ValidationError("Base salary cannot be negative")

        user_id = self._users.create_user_with_profile(
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            email=email,
            profile=replace(profile, full_name=full_name),
        )
        logger.info("Provisioned %s account %s", role.value, user_id)
        return user_id

    def update_profile(self, *, current_role: Role, profile: EmployeeProfile) -> None:
        """Idempotent: repeating the same update leaves the same profile."""
        if not current_role.is_privileged:
            raise AuthorizationError("You do not have permission for this action")
        if not self._users.get_by_id(profile.user_id):
            raise NotFoundError("User not found")
        if profile.base_salary < 0:
            raise ValidationError("Base salary cannot be negative")

        self._users.upsert_profile(profile)
