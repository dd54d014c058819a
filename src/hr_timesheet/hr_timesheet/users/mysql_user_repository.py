from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, full_name, email, password_hash, role, team_id, shift_id, is_active"


def _to_user(r: Dict[str, Any]) -> User:
    return User(
        user_id=int(r["user_id"]),
        full_name=r["full_name"],
        email=r["email"],
        password_hash=r["password_hash"],
        role=Role(r["role"]),
        team_id=int(r["team_id"]) if r.get("team_id") is not None else None,
        shift_id=int(r["shift_id"]) if r.get("shift_id") is not None else None,
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return _to_user(r) if r else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            r = fetchone(cur)
            return _to_user(r) if r else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY full_name, user_id")
            return [_to_user(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(full_name, email, password_hash, role, team_id, shift_id, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,1)
                """,
                (full_name, email, password_hash, role.value, team_id, shift_id),
            )
            return int(cur.lastrowid)

    def update_assignment(
        self,
        *,
        user_id: int,
        role: Role,
        team_id: Optional[int],
        shift_id: Optional[int],
        is_active: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET role=%s, team_id=%s, shift_id=%s, is_active=%s
                WHERE user_id=%s
                """,
                (role.value, team_id, shift_id, 1 if is_active else 0, int(user_id)),
            )
            return cur.rowcount > 0
