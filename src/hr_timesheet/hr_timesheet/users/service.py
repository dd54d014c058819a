from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import RequestStatus, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..shifts.repository import ShiftRepository
from .model import User
from .registration_model import Registration
from .registration_repository import RegistrationRepository
from .repository import UserRepository
from .team_model import Team
from .team_repository import TeamRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    role: Role
    team_id: Optional[int]
    shift_id: Optional[int]


def _require_admin(current_role: Role, action: str) -> None:
    if current_role != Role.ADMIN:
        raise AuthorizationError(f"Only admins can {action}")


def _optional_id(value) -> Optional[int]:
    if value in (None, "", "none"):
        return None
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid id: {value!r}") from exc


def _parse_role(value) -> Role:
    try:
        return Role(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid role: {value!r}") from exc


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        email = require_non_empty(email, "Email").lower()
        user = self._users.get_by_email(email)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder hashes like 'CHANGE_ME' are not a supported method
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(
            user_id=user.user_id,
            full_name=user.full_name,
            role=user.role,
            team_id=user.team_id,
            shift_id=user.shift_id,
        )


class UserService:
    """Use case: employee directory and admin assignment of role, team and shift."""

    def __init__(self, users: UserRepository, teams: TeamRepository, shifts: ShiftRepository):
        self._users = users
        self._teams = teams
        self._shifts = shifts

    def display_names(self) -> dict[int, str]:
        return {u.user_id: u.full_name.strip() or u.email for u in self._users.list_all()}

    def emails(self) -> dict[int, str]:
        return {u.user_id: u.email for u in self._users.list_all()}

    def list_users(self, search: Optional[str] = None) -> list[User]:
        """Case-insensitive match on name or email."""
        users = list(self._users.list_all())
        term = (search or "").strip().lower()
        if term:
            users = [u for u in users if term in u.full_name.lower() or term in u.email.lower()]
        return users

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Employee not found")
        return user

    def validate_assignment(self, team_id, shift_id) -> tuple[Optional[int], Optional[int]]:
        team = _optional_id(team_id)
        shift = _optional_id(shift_id)
        if team is not None and not self._teams.get_by_id(team):
            raise ValidationError("Team does not exist")
        if shift is not None and not self._shifts.get_by_id(shift):
            raise ValidationError("Shift does not exist")
        return team, shift

    def update_user(
        self,
        *,
        current_role: Role,
        current_user_id: int,
        user_id: int,
        role=None,
        team_id=None,
        shift_id=None,
        is_active=None,
    ) -> User:
        _require_admin(current_role, "manage employees")
        user = self.get_user(user_id)

        new_role = user.role if role in (None, "") else _parse_role(role)
        active = user.is_active if is_active is None else bool(is_active)
        if user.user_id == int(current_user_id) and (new_role != Role.ADMIN or not active):
            raise ValidationError("Admins cannot demote or deactivate themselves")
        team, shift = self.validate_assignment(team_id, shift_id)

        self._users.update_assignment(
            user_id=user.user_id,
            role=new_role,
            team_id=team,
            shift_id=shift,
            is_active=active,
        )
        logger.info(
            "User %s updated: role=%s team=%s shift=%s active=%s",
            user.user_id, new_role.value, team, shift, active,
        )
        return self.get_user(user.user_id)


class TeamService:
    """Use case: admins create, rename and delete teams."""

    def __init__(self, teams: TeamRepository):
        self._teams = teams

    def list_teams(self) -> list[Team]:
        return list(self._teams.list_all())

    def get_team(self, team_id: int) -> Team:
        team = self._teams.get_by_id(int(team_id))
        if not team:
            raise NotFoundError("Team not found")
        return team

    def _validate(self, name: Optional[str], team_id: Optional[int] = None) -> str:
        team_name = require_non_empty(name, "Team name")
        for t in self._teams.list_all():
            if t.team_name.lower() == team_name.lower() and t.team_id != team_id:
                raise ValidationError(f"Team '{team_name}' already exists")
        return team_name

    def create_team(self, *, current_role: Role, name: str, description: Optional[str] = None) -> int:
        _require_admin(current_role, "manage teams")
        team_name = self._validate(name)
        team_id = self._teams.create(team_name=team_name, description=(description or "").strip() or None)
        logger.info("Team %s created: %s", team_id, team_name)
        return team_id

    def update_team(self, *, current_role: Role, team_id: int, name: str, description: Optional[str] = None) -> None:
        _require_admin(current_role, "manage teams")
        team_name = self._validate(name, int(team_id))
        ok = self._teams.update(team_id=int(team_id), team_name=team_name, description=(description or "").strip() or None)
        if not ok:
            raise NotFoundError("Team not found")

    def delete_team(self, *, current_role: Role, team_id: int) -> None:
        _require_admin(current_role, "manage teams")
        if not self._teams.delete(int(team_id)):
            raise NotFoundError("Team not found")
        logger.info("Team %s deleted", team_id)


class RegistrationService:
    """Use case: self sign-up held as pending until an admin approves or rejects it."""

    def __init__(self, registrations: RegistrationRepository, users: UserRepository, user_service: UserService):
        self._registrations = registrations
        self._users = users
        self._user_service = user_service

    def register(self, *, email: str, full_name: str, password: str) -> int:
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Invalid email")
        name = require_non_empty(full_name, "Full name")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email) or self._registrations.get_pending_by_email(email):
            raise ValidationError("This email is already registered")

        registration_id = self._registrations.create(
            email=email, full_name=name, password_hash=generate_password_hash(password)
        )
        logger.info("Registration %s received for %s", registration_id, email)
        return registration_id

    def list_registrations(self, *, current_role: Role, status: Optional[RequestStatus] = None) -> list[Registration]:
        _require_admin(current_role, "review registrations")
        return list(self._registrations.list_by_status(status))

    def _pending(self, registration_id: int) -> Registration:
        reg = self._registrations.get_by_id(int(registration_id))
        if not reg:
            raise NotFoundError("Registration not found")
        if reg.status != RequestStatus.PENDING:
            raise ValidationError(f"Registration is already {reg.status.value}")
        return reg

    def approve(
        self,
        *,
        current_role: Role,
        registration_id: int,
        role=Role.STAFF,
        team_id=None,
        shift_id=None,
    ) -> int:
        """Create the account from the registration; returns the new user_id."""
        _require_admin(current_role, "review registrations")
        reg = self._pending(registration_id)
        assigned = _parse_role(role or Role.STAFF)
        team, shift = self._user_service.validate_assignment(team_id, shift_id)
        if self._users.get_by_email(reg.email):
            raise ValidationError("This email is already registered")

        if not self._registrations.decide(
            registration_id=reg.registration_id, status=RequestStatus.APPROVED, assigned_role=assigned
        ):
            raise ValidationError("Registration was decided concurrently")
        user_id = self._users.create(
            full_name=reg.full_name,
            email=reg.email,
            password_hash=reg.password_hash,
            role=assigned,
            team_id=team,
            shift_id=shift,
        )
        logger.info("Registration %s approved as user %s (%s)", reg.registration_id, user_id, assigned.value)
        return user_id

    def reject(self, *, current_role: Role, registration_id: int, reason: str) -> None:
        _require_admin(current_role, "review registrations")
        reg = self._pending(registration_id)
        if not self._registrations.decide(
            registration_id=reg.registration_id,
            status=RequestStatus.REJECTED,
            rejection_reason=require_non_empty(reason, "Rejection reason"),
        ):
            raise ValidationError("Registration was decided concurrently")
        logger.info("Registration %s rejected", reg.registration_id)
