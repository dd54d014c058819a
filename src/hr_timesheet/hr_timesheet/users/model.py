from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: employee profile.

    Plain data object; team_id selects the office geofence, shift_id the
    default shift.
    """

    user_id: int
    full_name: str
    email: str
    password_hash: str
    role: Role
    team_id: Optional[int]
    shift_id: Optional[int]
    is_active: bool = True
