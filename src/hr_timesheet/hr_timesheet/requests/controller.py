from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import admin_required, current_role, current_user_id, json_body, login_required
from ..container import Container
from ..core.enums import RequestStatus
from ..core.exceptions import ValidationError
from .model import LeaveRequest


def _leave_json(r: LeaveRequest, names: dict[int, str]) -> dict:
    return {
        "request_id": r.request_id,
        "user_id": r.user_id,
        "full_name": names.get(r.user_id, "Unknown"),
        "leave_type": r.leave_type.value,
        "day_part": r.day_part.value,
        "start_date": r.start_date.isoformat(),
        "end_date": r.end_date.isoformat(),
        "days": r.days,
        "reason": r.reason,
        "status": r.status.value,
        "created_at": r.created_at.isoformat() if r.created_at else None,
        "decided_at": r.decided_at.isoformat() if r.decided_at else None,
        "admin_note": r.admin_note or "",
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["POST"], endpoint="create_leave")
    @login_required
    def create_leave():
        data = json_body()
        svc = container.leave_request_service
        request_id = svc.create_leave(
            user_id=current_user_id(),
            leave_type=data.get("leave_type", ""),
            day_part=data.get("day_part"),
            start_date=parse_iso_date(data.get("start_date") or ""),
            end_date=parse_iso_date(data.get("end_date") or ""),
            reason=data.get("reason", ""),
        )
        names = container.user_service.display_names()
        return jsonify(_leave_json(svc.get_leave(request_id), names)), 201

    @app.route("/api/leaves/mine", methods=["GET"], endpoint="my_leaves")
    @login_required
    def my_leaves():
        names = container.user_service.display_names()
        rows = container.leave_request_service.list_my_requests(user_id=current_user_id())
        return jsonify([_leave_json(r, names) for r in rows])

    @app.route("/api/leaves", methods=["GET"], endpoint="list_leaves")
    @admin_required
    def list_leaves():
        raw = request.args.get("status", RequestStatus.PENDING.value)
        try:
            status = None if raw == "all" else RequestStatus(raw)
        except ValueError as exc:
            raise ValidationError(f"Invalid status: {raw!r}") from exc

        names = container.user_service.display_names()
        return jsonify([_leave_json(r, names) for r in container.leave_request_service.list_requests(status=status)])

    def _decide(request_id: int, approve: bool):
        svc = container.leave_request_service
        decide = svc.approve_leave if approve else svc.reject_leave
        decide(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            request_id=request_id,
            admin_note=json_body().get("admin_note", ""),
        )
        return jsonify(_leave_json(svc.get_leave(request_id), container.user_service.display_names()))

    @app.route("/api/leaves/<int:request_id>/approve", methods=["POST"], endpoint="approve_leave")
    @admin_required
    def approve_leave(request_id: int):
        return _decide(request_id, True)

    @app.route("/api/leaves/<int:request_id>/reject", methods=["POST"], endpoint="reject_leave")
    @admin_required
    def reject_leave(request_id: int):
        return _decide(request_id, False)
