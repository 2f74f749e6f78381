from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import EmployeeProfile, User


class UserRepository(Protocol):
    """Repository interface for users and their employee profiles.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def get_profile(self, user_id: int) -> Optional[EmployeeProfile]:
        raise NotImplementedError

    def list_active_profiles(self, user_ids: Optional[Sequence[int]] = None) -> Sequence[EmployeeProfile]:
        raise NotImplementedError

    def create_user_with_profile(
        self,
        *,
        username: str,
        password_hash: str,
        role: Role,
        email: Optional[str],
        profile: EmployeeProfile,
    ) -> int:
        """Insert identity and profile in one transaction. Returns user_id."""

        raise NotImplementedError

    def upsert_profile(self, profile: EmployeeProfile) -> None:
        """Create or replace the profile keyed by ``profile.user_id``."""

        raise NotImplementedError
