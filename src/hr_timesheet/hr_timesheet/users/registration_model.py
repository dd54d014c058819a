from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import RequestStatus, Role


@dataclass(frozen=True)
class Registration:
    """Self sign-up waiting for an admin; becomes a User only when approved."""

    registration_id: int
    email: str
    full_name: str
    password_hash: str
    status: RequestStatus
    created_at: datetime
    assigned_role: Optional[Role] = None
    rejection_reason: Optional[str] = None
    decided_at: Optional[datetime] = None
