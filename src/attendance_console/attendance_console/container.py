from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .accounts.mysql_admin_user_repository import MySQLAdminUserRepository
from .accounts.service import AccountService, AuthService
from .attendance.exporter import AttendanceExporter
from .attendance.factory import AttendanceStrategyFactory
from .attendance.importer import AttendanceImporter
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_EXPORT_DATE_FORMAT, DEFAULT_PAGE_SIZE, DEFAULT_SESSION_HOURS
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .leave.mysql_leave_repository import MySQLLeavePlanRepository
from .leave.service import LeaveService
from .roster.mysql_roster_repository import MySQLRosterRepository
from .roster.service import RosterService
from .shifts.mysql_shift_repository import MySQLShiftRepository, MySQLShiftTypeRepository
from .shifts.service import ShiftService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    account_service: AccountService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    attendance_importer: AttendanceImporter
    attendance_exporter: AttendanceExporter
    shift_service: ShiftService
    roster_service: RosterService
    leave_service: LeaveService
    dashboard_service: DashboardService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    users_repo,
    employees_repo,
    attendance_repo,
    shifts_repo,
    shift_types_repo,
    roster_repo,
    leave_repo,
    session_hours: int = DEFAULT_SESSION_HOURS,
    page_size: int = DEFAULT_PAGE_SIZE,
    export_date_format: str = DEFAULT_EXPORT_DATE_FORMAT,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any set of repositories (MySQL in the app, fakes in tests)."""

    roster_service = RosterService(roster_repo, employees_repo, shifts_repo, shift_types_repo)
    return Container(
        auth_service=AuthService(users_repo, session_hours=session_hours),
        account_service=AccountService(users_repo),
        employee_service=EmployeeService(employees_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            employees_repo,
            strategy_factory=AttendanceStrategyFactory(),
            page_size=page_size,
        ),
        attendance_importer=AttendanceImporter(employees_repo, attendance_repo),
        attendance_exporter=AttendanceExporter(date_format=export_date_format),
        shift_service=ShiftService(shifts_repo, shift_types_repo),
        roster_service=roster_service,
        leave_service=LeaveService(leave_repo, employees_repo),
        dashboard_service=DashboardService(employees_repo, leave_repo, roster_service),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    session_hours: int = DEFAULT_SESSION_HOURS,
    page_size: int = DEFAULT_PAGE_SIZE,
    export_date_format: str = DEFAULT_EXPORT_DATE_FORMAT,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        users_repo=MySQLAdminUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        shift_types_repo=MySQLShiftTypeRepository(conn),
        roster_repo=MySQLRosterRepository(conn),
        leave_repo=MySQLLeavePlanRepository(conn),
        session_hours=session_hours,
        page_size=page_size,
        export_date_format=export_date_format,
        conn=conn,
    )
