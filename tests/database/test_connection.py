from __future__ import annotations

import mysql.connector
from mysql.connector.constants import ClientFlag

from src.hr_timesheet.hr_timesheet.database.connection import DBConfig, DatabaseConnection


def test_config_from_settings_mapping_fills_defaults():
    cfg = DBConfig.from_mapping({"host": "db", "port": "3307", "password": None})

    assert cfg == DBConfig(host="db", port=3307, user="root", password="", database="hr_timesheet")


def test_connect_reports_matched_rows(monkeypatch):
    seen = {}
    monkeypatch.setattr(mysql.connector, "connect", lambda **kwargs: seen.update(kwargs) or "conn")
    cfg = DBConfig.from_mapping({"database": "hr_test"})

    conn = DatabaseConnection.get_instance(cfg).connect()

    assert conn == "conn"
    assert seen["database"] == "hr_test"
    assert seen["client_flags"] == [ClientFlag.FOUND_ROWS]
    assert DatabaseConnection.get_instance(cfg) is DatabaseConnection.get_instance(DBConfig.from_mapping({"database": "hr_test"}))
