from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_GEOFENCE_RADIUS_METERS
from .core.enums import PairingOrder
from .database.connection import DBConfig, DatabaseConnection
from .geofence.mysql_office_location_repository import MySQLOfficeLocationRepository
from .geofence.service import OfficeLocationService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.service import SalaryService
from .payroll.statistics import SalaryStatisticsService
from .requests.mysql_request_repository import MySQLLeaveRequestRepository
from .requests.service import LeaveRequestService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.service import ShiftService
from .users.mysql_registration_repository import MySQLRegistrationRepository
from .users.mysql_team_repository import MySQLTeamRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, RegistrationService, TeamService, UserService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    teams_repo: MySQLTeamRepository
    shifts_repo: MySQLShiftRepository
    attendance_repo: MySQLAttendanceRepository
    office_locations_repo: MySQLOfficeLocationRepository
    salaries_repo: MySQLSalaryRepository
    leave_requests_repo: MySQLLeaveRequestRepository
    registrations_repo: MySQLRegistrationRepository

    auth_service: AuthService
    user_service: UserService
    team_service: TeamService
    registration_service: RegistrationService
    shift_service: ShiftService
    office_location_service: OfficeLocationService
    attendance_service: AttendanceService
    salary_service: SalaryService
    salary_statistics_service: SalaryStatisticsService
    leave_request_service: LeaveRequestService


def build_container(
    *,
    db_config: dict,
    default_radius: float = DEFAULT_GEOFENCE_RADIUS_METERS,
    pairing_order: PairingOrder = PairingOrder.TIMESTAMP,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    users_repo = MySQLUserRepository(conn)
    teams_repo = MySQLTeamRepository(conn)
    shifts_repo = MySQLShiftRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    office_locations_repo = MySQLOfficeLocationRepository(conn)
    salaries_repo = MySQLSalaryRepository(conn)
    leave_requests_repo = MySQLLeaveRequestRepository(conn)
    registrations_repo = MySQLRegistrationRepository(conn)

    auth_service = AuthService(users_repo)
    user_service = UserService(users_repo, teams_repo, shifts_repo)
    team_service = TeamService(teams_repo)
    registration_service = RegistrationService(registrations_repo, users_repo, user_service)
    shift_service = ShiftService(shifts_repo)
    office_location_service = OfficeLocationService(office_locations_repo, teams_repo, default_radius=default_radius)
    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        office_location_service,
        pairing_order=pairing_order,
    )
    salary_service = SalaryService(
        salaries_repo,
        attendance_repo,
        users_repo,
        calculator=StandardPayrollCalculator(order=pairing_order),
    )
    salary_statistics_service = SalaryStatisticsService(salaries_repo, users_repo)
    leave_request_service = LeaveRequestService(leave_requests_repo, users_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        teams_repo=teams_repo,
        shifts_repo=shifts_repo,
        attendance_repo=attendance_repo,
        office_locations_repo=office_locations_repo,
        salaries_repo=salaries_repo,
        leave_requests_repo=leave_requests_repo,
        registrations_repo=registrations_repo,
        auth_service=auth_service,
        user_service=user_service,
        team_service=team_service,
        registration_service=registration_service,
        shift_service=shift_service,
        office_location_service=office_location_service,
        attendance_service=attendance_service,
        salary_service=salary_service,
        salary_statistics_service=salary_statistics_service,
        leave_request_service=leave_request_service,
    )
