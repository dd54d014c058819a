from __future__ import annotations

from datetime import date
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.validators import require_in_range
from ..common.web import admin_required, current_user_id, json_body, login_required, write_csv, write_xlsx
from ..container import Container
from ..core.constants import ATTENDANCE_EXPORT_LIMIT, DEFAULT_HISTORY_LIMIT, HOURS_PRECISION
from ..core.enums import EventType
from ..geofence.model import GeoPoint
from .model import AttendanceEvent

EXPORT_FIELDS = ["Employee", "Email", "Type", "Date", "Time", "Location", "Notes"]


def _position_from(data: dict) -> Optional[GeoPoint]:
    """Device position from the request body; None when the client could not get one."""
    lat = data.get("latitude")
    lng = data.get("longitude")
    if lat in (None, "") or lng in (None, ""):
        return None
    return GeoPoint(
        latitude=require_in_range(lat, "latitude", -90.0, 90.0),
        longitude=require_in_range(lng, "longitude", -180.0, 180.0),
    )


def _event_json(e: AttendanceEvent) -> dict:
    return {
        "event_id": e.event_id,
        "user_id": e.user_id,
        "timestamp": e.timestamp.isoformat(),
        "type": e.event_type.value,
        "location": e.location,
        "notes": e.notes,
    }


def register(app: Flask, container: Container) -> None:
    def _punch(event_type: EventType):
        data = json_body()
        svc = container.attendance_service
        punch = svc.check_in if event_type == EventType.CHECK_IN else svc.check_out
        result = punch(current_user_id(), position=_position_from(data), notes=data.get("notes"))
        return jsonify(
            {
                "success": True,
                "event_id": result.event_id,
                "type": result.event_type.value,
                "timestamp": result.timestamp.isoformat(),
                "distance_meters": round(result.distance_meters, 1) if result.distance_meters is not None else None,
            }
        ), 201

    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="check_in")
    @login_required
    def check_in():
        return _punch(EventType.CHECK_IN)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="check_out")
    @login_required
    def check_out():
        return _punch(EventType.CHECK_OUT)

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        limit = request.args.get("limit", DEFAULT_HISTORY_LIMIT, type=int)
        events = container.attendance_service.history(current_user_id(), limit=max(1, min(limit, 200)))
        return jsonify([_event_json(e) for e in events])

    @app.route("/api/attendance/hours", methods=["GET"], endpoint="attendance_hours")
    @login_required
    def attendance_hours():
        today = date.today()
        start = parse_iso_date(request.args.get("start") or today.replace(day=1).strftime("%Y-%m-%d"))
        end = parse_iso_date(request.args.get("end") or today.strftime("%Y-%m-%d"))

        report = container.attendance_service.daily_hours(current_user_id(), start=start, end=end)
        return jsonify(
            {
                "start": start.isoformat(),
                "end": end.isoformat(),
                "days": [
                    {"date": d.isoformat(), "hours": round(h, HOURS_PRECISION)}
                    for d, h in sorted(report.hours_by_day.items())
                ],
                "total_hours": round(report.total_hours, HOURS_PRECISION),
                "issues": [
                    {"date": i.work_date.isoformat(), "kind": i.kind.value, "detail": i.detail}
                    for i in report.issues
                ],
            }
        )

    def _export_rows() -> list[dict]:
        names = container.user_service.display_names()
        emails = container.user_service.emails()
        events = container.attendance_service.recent_events(limit=ATTENDANCE_EXPORT_LIMIT)
        return [
            {
                "Employee": names.get(e.user_id, "Unknown"),
                "Email": emails.get(e.user_id, ""),
                "Type": "Check In" if e.event_type == EventType.CHECK_IN else "Check Out",
                "Date": e.timestamp.strftime("%Y-%m-%d"),
                "Time": e.timestamp.strftime("%H:%M:%S"),
                "Location": e.location or "N/A",
                "Notes": e.notes or "",
            }
            for e in events
        ]

    @app.route("/api/attendance/export.csv", methods=["GET"], endpoint="attendance_export_csv")
    @admin_required
    def attendance_export_csv():
        filename = f"attendance_{date.today().strftime('%Y-%m-%d')}.csv"
        return write_csv(app, rows=_export_rows(), fieldnames=EXPORT_FIELDS, filename=filename)

    @app.route("/api/attendance/export.xlsx", methods=["GET"], endpoint="attendance_export_xlsx")
    @admin_required
    def attendance_export_xlsx():
        return write_xlsx(
            rows=_export_rows(),
            fieldnames=EXPORT_FIELDS,
            sheet_name="Attendance",
            filename=f"attendance_{date.today().strftime('%Y-%m-%d')}.xlsx",
            column_widths=[20, 25, 12, 12, 10, 25, 30],
        )
