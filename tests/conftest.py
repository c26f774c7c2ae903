from __future__ import annotations

from datetime import date, datetime
from typing import Optional

import pytest
from flask import Flask

from src.hr_attendance.hr_attendance.attendance.controller import register as register_attendance
from src.hr_attendance.hr_attendance.attendance.model import AttendanceRecord
from src.hr_attendance.hr_attendance.auth.tokens import TokenService
from src.hr_attendance.hr_attendance.container import assemble
from src.hr_attendance.hr_attendance.core.enums import OPEN_TASK_STATUSES, AttendanceStatus, Role, TaskStatus
from src.hr_attendance.hr_attendance.core.exceptions import DuplicateRecordError
from src.hr_attendance.hr_attendance.employees.model import Employee
from src.hr_attendance.hr_attendance.shifts.model import ShiftSchedule
from src.hr_attendance.hr_attendance.tasks.model import Task
from src.hr_attendance.hr_attendance.tenants.model import Tenant

JWT_SECRET = "test-jwt-secret"


class InMemoryAttendance:
    """Record store fake enforcing the (employee, tenant, day) unique key."""

    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}
        self.failing_employee_ids: set[int] = set()
        self._id = 0

    def _key_taken(self, record: AttendanceRecord) -> bool:
        return any(
            (r.employee_id, r.tenant_code, r.calendar_date)
            == (record.employee_id, record.tenant_code, record.calendar_date)
            for r in self.records.values()
        )

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        return self.records.get(record_id)

    def get_for_employee_and_date(self, employee_id: int, tenant_code: str, day: date) -> Optional[AttendanceRecord]:
        for r in self.records.values():
            if (r.employee_id, r.tenant_code, r.calendar_date) == (employee_id, tenant_code, day):
                return r
        return None

    def _in_range(self, r: AttendanceRecord, start, end) -> bool:
        return (start is None or r.calendar_date >= start) and (end is None or r.calendar_date <= end)

    def list_for_employee(self, employee_id: int, tenant_code: str, *, start=None, end=None):
        items = [
            r for r in self.records.values()
            if r.employee_id == employee_id and r.tenant_code == tenant_code and self._in_range(r, start, end)
        ]
        return sorted(items, key=lambda r: r.calendar_date, reverse=True)

    def list_for_tenant(self, tenant_code: str, *, start=None, end=None):
        items = [r for r in self.records.values() if r.tenant_code == tenant_code and self._in_range(r, start, end)]
        return sorted(items, key=lambda r: (r.calendar_date, r.employee_id), reverse=True)

    def employee_ids_recorded_on(self, tenant_code: str, day: date) -> set[int]:
        return {r.employee_id for r in self.records.values() if r.tenant_code == tenant_code and r.calendar_date == day}

    def insert(self, record: AttendanceRecord) -> int:
        if record.employee_id in self.failing_employee_ids:
            raise RuntimeError("store unavailable")
        if self._key_taken(record):
            raise DuplicateRecordError("duplicate")
        self._id += 1
        self.records[self._id] = record.with_changes(record_id=self._id)
        return self._id

    def save(self, record: AttendanceRecord) -> bool:
        if record.record_id not in self.records:
            return False
        self.records[record.record_id] = record
        return True

    def update_clock_out(self, record: AttendanceRecord) -> bool:
        stored = self.records.get(record.record_id)
        if not stored or stored.clock_out_time is not None:
            return False
        self.records[record.record_id] = record
        return True

    def delete_by_id(self, record_id: int) -> bool:
        return self.records.pop(record_id, None) is not None

    def count_by_status(self, tenant_code: str, *, start=None, end=None) -> dict[AttendanceStatus, int]:
        counts: dict[AttendanceStatus, int] = {}
        for r in self.list_for_tenant(tenant_code, start=start, end=end):
            counts[r.status] = counts.get(r.status, 0) + 1
        return counts


class InMemoryEmployees:
    def __init__(self, employees: list[Employee]):
        self.by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.by_id.get(employee_id)

    def list_active(self, tenant_code: str):
        return [e for e in self.by_id.values() if e.tenant_code == tenant_code and e.is_active]


class InMemoryTenants:
    def __init__(self, tenants: list[Tenant]):
        self.by_code = {t.tenant_code: t for t in tenants}

    def get(self, tenant_code: str) -> Optional[Tenant]:
        return self.by_code.get(tenant_code)

    def list_active(self):
        return [t for t in self.by_code.values() if t.is_active]


class InMemoryShifts:
    def __init__(self, schedules: Optional[dict[str, ShiftSchedule]] = None):
        self.schedules = schedules or {}

    def get_for_tenant(self, tenant_code: str) -> Optional[ShiftSchedule]:
        return self.schedules.get(tenant_code)


class InMemoryTasks:
    def __init__(self, tasks: Optional[list[Task]] = None):
        self.by_id = {t.task_id: t for t in tasks or []}
        self.failing_task_ids: set[int] = set()

    def list_overdue_candidates(self, now: datetime):
        return [
            t for t in self.by_id.values()
            if t.is_active and t.due_at is not None and t.due_at < now and t.status in OPEN_TASK_STATUSES
        ]

    def mark_overdue(self, task_id: int, marked_at: datetime) -> bool:
        if task_id in self.failing_task_ids:
            raise RuntimeError("store unavailable")
        task = self.by_id[task_id]
        if task.status not in OPEN_TASK_STATUSES:
            return False
        self.by_id[task_id] = Task(
            task_id=task.task_id,
            tenant_code=task.tenant_code,
            title=task.title,
            due_at=task.due_at,
            status=TaskStatus.OVERDUE,
            is_active=task.is_active,
            marked_overdue_at=marked_at,
        )
        return True


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday, after the 10:30 sweep
    return datetime(2025, 3, 12, 10, 30, 0)


@pytest.fixture
def shift() -> ShiftSchedule:
    return ShiftSchedule.default("ACME")


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees([
        Employee(employee_id=1, tenant_code="ACME", full_name="Admin Demo", email="admin@acme.test", role=Role.ADMIN),
        Employee(employee_id=2, tenant_code="ACME", full_name="Jane Doe", email="jane@acme.test"),
        Employee(employee_id=3, tenant_code="ACME", full_name="John Roe", email="john@acme.test"),
        Employee(employee_id=4, tenant_code="ACME", full_name="Old Timer", email=None, is_active=False),
        Employee(employee_id=10, tenant_code="GLOBEX", full_name="Omar Staff", email="omar@globex.test"),
    ])


@pytest.fixture
def tenants_repo() -> InMemoryTenants:
    return InMemoryTenants([
        Tenant(tenant_code="ACME", name="Acme Corp"),
        Tenant(tenant_code="GLOBEX", name="Globex Ltd"),
        Tenant(tenant_code="DEFUNCT", name="Defunct Inc", is_active=False),
    ])


@pytest.fixture
def shifts_repo() -> InMemoryShifts:
    return InMemoryShifts()


@pytest.fixture
def tasks_repo() -> InMemoryTasks:
    return InMemoryTasks()


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(JWT_SECRET)


@pytest.fixture
def container(attendance_repo, employees_repo, tenants_repo, shifts_repo, tasks_repo, tokens):
    return assemble(
        conn=None,
        attendance_repo=attendance_repo,
        employees_repo=employees_repo,
        tenants_repo=tenants_repo,
        shifts_repo=shifts_repo,
        tasks_repo=tasks_repo,
        tokens=tokens,
    )


@pytest.fixture
def client(container):
    app = Flask(__name__)
    app.testing = True
    register_attendance(app, container)
    return app.test_client()
