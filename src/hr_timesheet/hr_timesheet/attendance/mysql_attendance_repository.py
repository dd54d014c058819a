from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceEvent
from .repository import AttendanceRepository

_COLUMNS = "event_id, user_id, `timestamp`, `type`, location, notes"


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user_between(self, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE user_id=%s AND `timestamp` >= %s AND `timestamp` < %s
                ORDER BY `timestamp`, event_id
                """,
                (int(user_id), start, end),
            )
            return [AttendanceEvent.from_row(r) for r in fetchall(cur)]

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE user_id=%s
                ORDER BY `timestamp` DESC, event_id DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [AttendanceEvent.from_row(r) for r in fetchall(cur)]

    def list_recent(self, limit: int) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                ORDER BY `timestamp` DESC, event_id DESC
                LIMIT %s
                """,
                (int(limit),),
            )
            return [AttendanceEvent.from_row(r) for r in fetchall(cur)]

    def create_event(
        self,
        *,
        user_id: int,
        timestamp: datetime,
        event_type: EventType,
        location: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(user_id, `timestamp`, `type`, location, notes)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), timestamp, event_type.value, location, notes),
            )
            return int(cur.lastrowid)
