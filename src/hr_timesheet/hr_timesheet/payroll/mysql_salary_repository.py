from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SalaryRecord
from .repository import SalaryRepository

_COLUMNS = (
    "salary_id, user_id, month, base_salary, bonus, deductions, "
    "hours_worked, total_salary, notes, created_at"
)


def _to_record(r: Dict[str, Any]) -> SalaryRecord:
    return SalaryRecord(
        salary_id=int(r["salary_id"]),
        user_id=int(r["user_id"]),
        month=r["month"],
        base_salary=float(r["base_salary"] or 0),
        bonus=float(r["bonus"] or 0),
        deductions=float(r["deductions"] or 0),
        hours_worked=float(r["hours_worked"] or 0),
        total_salary=float(r["total_salary"] or 0),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, record: SalaryRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salaries(user_id, month, base_salary, bonus, deductions, hours_worked, total_salary, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    base_salary=VALUES(base_salary),
                    bonus=VALUES(bonus),
                    deductions=VALUES(deductions),
                    hours_worked=VALUES(hours_worked),
                    total_salary=VALUES(total_salary),
                    notes=VALUES(notes)
                """,
                (
                    record.user_id,
                    record.month,
                    record.base_salary,
                    record.bonus,
                    record.deductions,
                    record.hours_worked,
                    record.total_salary,
                    record.notes,
                ),
            )

    def get_for_user_and_month(self, user_id: int, month: date) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM salaries WHERE user_id=%s AND month=%s",
                (int(user_id), month),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_since(self, since: Optional[date] = None) -> Sequence[SalaryRecord]:
        clauses = []
        params: list[object] = []
        if since is not None:
            clauses.append("month >= %s")
            params.append(since)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM salaries
                {where}
                ORDER BY month DESC, user_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]
