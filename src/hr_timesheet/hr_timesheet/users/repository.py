from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    def create(
        self,
        *,
        full_name: str,
        email: str,
        password_hash: str,
        role: Role,
        team_id: Optional[int],
        shift_id: Optional[int],
    ) -> int:
        raise NotImplementedError

    def update_assignment(
        self,
        *,
        user_id: int,
        role: Role,
        team_id: Optional[int],
        shift_id: Optional[int],
        is_active: bool,
    ) -> bool:
        raise NotImplementedError
