from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify

from ..common.web import admin_required, current_role, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/shifts", methods=["GET"], endpoint="list_shifts")
    @login_required
    def list_shifts():
        return jsonify([asdict(s) for s in container.shift_service.list_shifts()])

    @app.route("/api/shifts/<int:shift_id>", methods=["GET"], endpoint="get_shift")
    @login_required
    def get_shift(shift_id: int):
        return jsonify(asdict(container.shift_service.get_shift(shift_id)))

    @app.route("/api/shifts", methods=["POST"], endpoint="create_shift")
    @admin_required
    def create_shift():
        data = json_body()
        shift_id = container.shift_service.create_shift(
            current_role=current_role(),
            name=data.get("name", ""),
            start=data.get("start_time", ""),
            end=data.get("end_time", ""),
        )
        return jsonify(asdict(container.shift_service.get_shift(shift_id))), 201

    @app.route("/api/shifts/<int:shift_id>", methods=["PUT"], endpoint="update_shift")
    @admin_required
    def update_shift(shift_id: int):
        data = json_body()
        container.shift_service.update_shift(
            current_role=current_role(),
            shift_id=shift_id,
            name=data.get("name", ""),
            start=data.get("start_time", ""),
            end=data.get("end_time", ""),
        )
        return jsonify(asdict(container.shift_service.get_shift(shift_id)))

    @app.route("/api/shifts/<int:shift_id>", methods=["DELETE"], endpoint="delete_shift")
    @admin_required
    def delete_shift(shift_id: int):
        container.shift_service.delete_shift(current_role=current_role(), shift_id=shift_id)
        return jsonify({"success": True})
