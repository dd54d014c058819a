from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify

from ..common.web import admin_required, current_role, json_body, login_required
from ..container import Container
from ..core.exceptions import NotFoundError
from .model import OfficeLocationSetting


def _setting_json(s: Optional[OfficeLocationSetting]) -> Optional[dict]:
    if s is None:
        return None
    return {
        "team_id": s.team_id,
        "latitude": s.latitude,
        "longitude": s.longitude,
        "radius_meters": s.radius_meters,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/teams/office-locations", methods=["GET"], endpoint="list_office_locations")
    @admin_required
    def list_office_locations():
        return jsonify(
            [
                {"team_id": v.team_id, "team_name": v.team_name, "office_location": _setting_json(v.setting)}
                for v in container.office_location_service.list_team_settings()
            ]
        )

    @app.route("/api/teams/<int:team_id>/office-location", methods=["GET"], endpoint="get_office_location")
    @login_required
    def get_office_location(team_id: int):
        setting = container.office_location_service.get_for_team(team_id)
        if setting is None:
            raise NotFoundError("No office location configured for this team")
        return jsonify(_setting_json(setting))

    @app.route("/api/teams/<int:team_id>/office-location", methods=["PUT"], endpoint="save_office_location")
    @admin_required
    def save_office_location(team_id: int):
        data = json_body()
        setting = container.office_location_service.save_for_team(
            current_role=current_role(),
            team_id=team_id,
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            radius_meters=data.get("radius_meters"),
        )
        return jsonify(_setting_json(setting))
