from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import RequestStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .registration_model import Registration
from .registration_repository import RegistrationRepository

_COLUMNS = (
    "registration_id, email, full_name, password_hash, status, created_at, "
    "assigned_role, rejection_reason, decided_at"
)


def _to_registration(r: Dict[str, Any]) -> Registration:
    return Registration(
        registration_id=int(r["registration_id"]),
        email=r["email"],
        full_name=r["full_name"],
        password_hash=r["password_hash"],
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        assigned_role=Role(r["assigned_role"]) if r.get("assigned_role") else None,
        rejection_reason=r.get("rejection_reason"),
        decided_at=r.get("decided_at"),
    )


class MySQLRegistrationRepository(RegistrationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, email: str, full_name: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO user_registrations(email, full_name, password_hash, status)
                VALUES(%s,%s,%s,%s)
                """,
                (email, full_name, password_hash, RequestStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, registration_id: int) -> Optional[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM user_registrations WHERE registration_id=%s",
                (int(registration_id),),
            )
            r = fetchone(cur)
            return _to_registration(r) if r else None

    def get_pending_by_email(self, email: str) -> Optional[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM user_registrations WHERE email=%s AND status=%s LIMIT 1",
                (email, RequestStatus.PENDING.value),
            )
            r = fetchone(cur)
            return _to_registration(r) if r else None

    def list_by_status(self, status: Optional[RequestStatus] = None) -> Sequence[Registration]:
        with db_cursor(self._conn_factory) as (_, cur):
            if status is None:
                cur.execute(f"SELECT {_COLUMNS} FROM user_registrations ORDER BY created_at DESC, registration_id DESC")
            else:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM user_registrations
                    WHERE status=%s
                    ORDER BY created_at DESC, registration_id DESC
                    """,
                    (status.value,),
                )
            return [_to_registration(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        registration_id: int,
        status: RequestStatus,
        assigned_role: Optional[Role] = None,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE user_registrations
                SET status=%s, assigned_role=%s, rejection_reason=%s, decided_at=NOW()
                WHERE registration_id=%s AND status=%s
                """,
                (
                    status.value,
                    assigned_role.value if assigned_role else None,
                    rejection_reason,
                    int(registration_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0
