from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .attendance.sweep import AbsenceSweepService
from .auth.tokens import TokenService
from .core.constants import DEFAULT_BACKFILL_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .shifts.mysql_shift_repository import MySQLShiftScheduleRepository
from .shifts.repository import ShiftScheduleRepository
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService
from .tenants.mysql_tenant_repository import MySQLTenantRepository
from .tenants.repository import TenantRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository
    employees_repo: EmployeeRepository
    tenants_repo: TenantRepository
    shifts_repo: ShiftScheduleRepository
    tasks_repo: TaskRepository

    tokens: TokenService
    attendance_service: AttendanceService
    sweep_service: AbsenceSweepService
    task_service: TaskService


def assemble(
    *,
    conn: Optional[DatabaseConnection],
    attendance_repo: AttendanceRepository,
    employees_repo: EmployeeRepository,
    tenants_repo: TenantRepository,
    shifts_repo: ShiftScheduleRepository,
    tasks_repo: TaskRepository,
    tokens: TokenService,
    backfill_days: int = DEFAULT_BACKFILL_DAYS,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""
    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        tenants_repo=tenants_repo,
        shifts_repo=shifts_repo,
        tasks_repo=tasks_repo,
        tokens=tokens,
        attendance_service=AttendanceService(attendance_repo, employees_repo, shifts_repo),
        sweep_service=AbsenceSweepService(
            attendance_repo,
            employees_repo,
            tenants_repo,
            shifts_repo,
            backfill_days=backfill_days,
        ),
        task_service=TaskService(tasks_repo),
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    jwt_algorithm: str = "HS256",
    backfill_days: int = DEFAULT_BACKFILL_DAYS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble(
        conn=conn,
        attendance_repo=MySQLAttendanceRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        tenants_repo=MySQLTenantRepository(conn),
        shifts_repo=MySQLShiftScheduleRepository(conn),
        tasks_repo=MySQLTaskRepository(conn),
        tokens=TokenService(jwt_secret, algorithm=jwt_algorithm),
        backfill_days=backfill_days,
    )
