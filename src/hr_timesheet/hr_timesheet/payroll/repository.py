from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import SalaryRecord


class SalaryRepository(Protocol):
    def upsert(self, record: SalaryRecord) -> None:
        """Insert or update on (user_id, month)."""
        raise NotImplementedError

    def get_for_user_and_month(self, user_id: int, month: date) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def list_since(self, since: Optional[date] = None) -> Sequence[SalaryRecord]:
        """Records with month >= since (all when None), newest month first."""
        raise NotImplementedError
