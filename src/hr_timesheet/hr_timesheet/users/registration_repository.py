from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus, Role
from .registration_model import Registration


class RegistrationRepository(Protocol):
    def create(self, *, email: str, full_name: str, password_hash: str) -> int:
        raise NotImplementedError

    def get_by_id(self, registration_id: int) -> Optional[Registration]:
        raise NotImplementedError

    def get_pending_by_email(self, email: str) -> Optional[Registration]:
        raise NotImplementedError

    def list_by_status(self, status: Optional[RequestStatus] = None) -> Sequence[Registration]:
        """Newest first; all statuses when None."""
        raise NotImplementedError

    def decide(
        self,
        *,
        registration_id: int,
        status: RequestStatus,
        assigned_role: Optional[Role] = None,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """Close a pending registration; False when it is no longer pending."""
        raise NotImplementedError
