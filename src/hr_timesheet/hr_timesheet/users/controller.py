from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request, session

from ..common.web import admin_required, current_role, current_user_id, json_body, login_required
from ..container import Container
from ..core.enums import RequestStatus
from ..core.exceptions import ValidationError
from .model import User
from .registration_model import Registration
from .team_model import Team


def _user_json(u: User) -> dict:
    return {
        "user_id": u.user_id,
        "full_name": u.full_name,
        "email": u.email,
        "role": u.role.value,
        "team_id": u.team_id,
        "shift_id": u.shift_id,
        "is_active": u.is_active,
    }


def _team_json(t: Team) -> dict:
    return {"team_id": t.team_id, "team_name": t.team_name, "description": t.description or ""}


def _registration_json(r: Registration) -> dict:
    return {
        "registration_id": r.registration_id,
        "email": r.email,
        "full_name": r.full_name,
        "status": r.status.value,
        "created_at": r.created_at.isoformat() if r.created_at else None,
        "assigned_role": r.assigned_role.value if r.assigned_role else None,
        "rejection_reason": r.rejection_reason or "",
        "decided_at": r.decided_at.isoformat() if r.decided_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))

        session.clear()
        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=7)

        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        session["team_id"] = s_user.team_id
        session["shift_id"] = s_user.shift_id

        return jsonify(
            {
                "success": True,
                "user": {
                    "user_id": s_user.user_id,
                    "full_name": s_user.full_name,
                    "role": s_user.role.value,
                    "team_id": s_user.team_id,
                    "shift_id": s_user.shift_id,
                },
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(
            {
                "user_id": session["user_id"],
                "full_name": session.get("name"),
                "role": session.get("role"),
                "team_id": session.get("team_id"),
                "shift_id": session.get("shift_id"),
            }
        )

    @app.route("/api/auth/register", methods=["POST"], endpoint="register_account")
    def register_account():
        data = json_body()
        registration_id = container.registration_service.register(
            email=data.get("email", ""),
            full_name=data.get("full_name", ""),
            password=data.get("password", ""),
        )
        return jsonify({"success": True, "registration_id": registration_id, "status": RequestStatus.PENDING.value}), 201

    # ---- teams ----
    @app.route("/api/teams", methods=["GET"], endpoint="list_teams")
    @login_required
    def list_teams():
        return jsonify([_team_json(t) for t in container.team_service.list_teams()])

    @app.route("/api/teams", methods=["POST"], endpoint="create_team")
    @admin_required
    def create_team():
        data = json_body()
        svc = container.team_service
        team_id = svc.create_team(
            current_role=current_role(), name=data.get("team_name", ""), description=data.get("description")
        )
        return jsonify(_team_json(svc.get_team(team_id))), 201

    @app.route("/api/teams/<int:team_id>", methods=["PUT"], endpoint="update_team")
    @admin_required
    def update_team(team_id: int):
        data = json_body()
        svc = container.team_service
        svc.update_team(
            current_role=current_role(),
            team_id=team_id,
            name=data.get("team_name", ""),
            description=data.get("description"),
        )
        return jsonify(_team_json(svc.get_team(team_id)))

    @app.route("/api/teams/<int:team_id>", methods=["DELETE"], endpoint="delete_team")
    @admin_required
    def delete_team(team_id: int):
        container.team_service.delete_team(current_role=current_role(), team_id=team_id)
        return jsonify({"success": True})

    # ---- employees ----
    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_required
    def list_users():
        rows = container.user_service.list_users(request.args.get("search"))
        return jsonify([_user_json(u) for u in rows])

    @app.route("/api/users/<int:user_id>", methods=["PUT"], endpoint="update_user")
    @admin_required
    def update_user(user_id: int):
        data = json_body()
        user = container.user_service.update_user(
            current_role=current_role(),
            current_user_id=current_user_id(),
            user_id=user_id,
            role=data.get("role"),
            team_id=data.get("team_id"),
            shift_id=data.get("shift_id"),
            is_active=data.get("is_active"),
        )
        return jsonify(_user_json(user))

    # ---- registrations ----
    @app.route("/api/registrations", methods=["GET"], endpoint="list_registrations")
    @admin_required
    def list_registrations():
        raw = request.args.get("status", RequestStatus.PENDING.value)
        try:
            status = None if raw == "all" else RequestStatus(raw)
        except ValueError as exc:
            raise ValidationError(f"Invalid status: {raw!r}") from exc
        rows = container.registration_service.list_registrations(current_role=current_role(), status=status)
        return jsonify([_registration_json(r) for r in rows])

    @app.route("/api/registrations/<int:registration_id>/approve", methods=["POST"], endpoint="approve_registration")
    @admin_required
    def approve_registration(registration_id: int):
        data = json_body()
        user_id = container.registration_service.approve(
            current_role=current_role(),
            registration_id=registration_id,
            role=data.get("role"),
            team_id=data.get("team_id"),
            shift_id=data.get("shift_id"),
        )
        return jsonify(_user_json(container.user_service.get_user(user_id)))

    @app.route("/api/registrations/<int:registration_id>/reject", methods=["POST"], endpoint="reject_registration")
    @admin_required
    def reject_registration(registration_id: int):
        container.registration_service.reject(
            current_role=current_role(),
            registration_id=registration_id,
            reason=json_body().get("reason", ""),
        )
        return jsonify({"success": True})
