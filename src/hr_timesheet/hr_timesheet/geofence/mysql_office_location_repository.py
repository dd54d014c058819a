from __future__ import annotations

from typing import Optional

from ..common.validators import to_float
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import OfficeLocationSetting
from .repository import OfficeLocationRepository


class MySQLOfficeLocationRepository(OfficeLocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_team(self, team_id: int) -> Optional[OfficeLocationSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT team_id, latitude, longitude, radius_meters
                FROM office_locations
                WHERE team_id=%s
                """,
                (int(team_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return OfficeLocationSetting(
                team_id=int(r["team_id"]),
                latitude=to_float(r["latitude"], "latitude"),
                longitude=to_float(r["longitude"], "longitude"),
                radius_meters=to_float(r["radius_meters"], "radius_meters"),
            )

    def upsert(self, setting: OfficeLocationSetting) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO office_locations(team_id, latitude, longitude, radius_meters)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    latitude=VALUES(latitude),
                    longitude=VALUES(longitude),
                    radius_meters=VALUES(radius_meters)
                """,
                (setting.team_id, setting.latitude, setting.longitude, setting.radius_meters),
            )
