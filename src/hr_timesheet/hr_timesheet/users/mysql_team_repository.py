from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .team_model import Team
from .team_repository import TeamRepository


def _to_team(r: Dict[str, Any]) -> Team:
    return Team(team_id=int(r["team_id"]), team_name=r["team_name"], description=r.get("description"))


class MySQLTeamRepository(TeamRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT team_id, team_name, description FROM teams ORDER BY team_name")
            return [_to_team(r) for r in fetchall(cur)]

    def get_by_id(self, team_id: int) -> Optional[Team]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT team_id, team_name, description FROM teams WHERE team_id=%s", (int(team_id),))
            r = fetchone(cur)
            return _to_team(r) if r else None

    def create(self, *, team_name: str, description: Optional[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO teams(team_name, description) VALUES(%s,%s)", (team_name, description))
            return int(cur.lastrowid)

    def update(self, *, team_id: int, team_name: str, description: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE teams SET team_name=%s, description=%s WHERE team_id=%s",
                (team_name, description, int(team_id)),
            )
            return cur.rowcount > 0

    def delete(self, team_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM teams WHERE team_id=%s", (int(team_id),))
            return cur.rowcount > 0
