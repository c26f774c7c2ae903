from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Mapping, Optional

from ..common.datetime_utils import is_weekend, iter_days, month_bounds, now_local, parse_clock_time, parse_iso_date
from ..common.validators import PlaceholderId, parse_record_id, placeholder_id, require_duration, require_int
from ..core.constants import MANUAL_ABSENT_NOTE, ZERO_DURATION
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    DuplicateRecordError,
    NotFoundError,
    ValidationError,
)
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..shifts.model import ShiftSchedule
from ..shifts.repository import ShiftScheduleRepository, resolve_shift
from .engine import compute_clock_in_status, compute_clock_out_status
from .model import AttendanceRecord, AttendanceStats, MonthRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_DURATION_FIELDS = ("late_by", "over_time", "early_leave", "total_time")


@dataclass(frozen=True)
class TodayStatus:
    calendar_date: date
    status: Optional[AttendanceStatus]
    record: Optional[AttendanceRecord] = None

    def to_dict(self) -> dict:
        return {
            "date": self.calendar_date.isoformat(),
            "status": self.status.value if self.status else None,
            "is_clocked_in": bool(self.record and self.record.is_clocked_in),
            "record": self.record.to_dict() if self.record else None,
        }


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        shifts: ShiftScheduleRepository,
    ):
        self._attendance = attendance
        self._employees = employees
        self._shifts = shifts

    def shift_for(self, tenant_code: str) -> ShiftSchedule:
        return resolve_shift(self._shifts, tenant_code)

    def _employee_in_tenant(self, employee_id: int, tenant_code: str, *, require_active: bool = True) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        if employee.tenant_code != tenant_code:
            raise AuthorizationError("Employee belongs to another company")
        if require_active and not employee.is_active:
            raise AuthorizationError("Employee is not active")
        return employee

    def _record_in_tenant(self, record_id: int, tenant_code: str) -> AttendanceRecord:
        record = self._attendance.get_by_id(record_id)
        if not record:
            raise NotFoundError("Attendance record not found")
        if record.tenant_code != tenant_code:
            raise AuthorizationError("Attendance record belongs to another company")
        return record

    # Self service

    def clock_in(self, employee_id: int, tenant_code: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()
        self._employee_in_tenant(employee_id, tenant_code)

        # Any record blocks a clock-in, including an ABSENT one written by the sweep.
        if self._attendance.get_for_employee_and_date(employee_id, tenant_code, today):
            raise ConflictError("Attendance already logged for today")

        result = compute_clock_in_status(now, self.shift_for(tenant_code))
        record = AttendanceRecord(
            record_id=None,
            employee_id=employee_id,
            tenant_code=tenant_code,
            calendar_date=today,
            clock_in_time=now,
            status=result.status,
            late_by=result.late_by,
            is_clocked_in=True,
        )
        try:
            record_id = self._attendance.insert(record)
        except DuplicateRecordError as exc:
            raise ConflictError("Attendance already logged for today") from exc

        logger.info("Clock-in employee=%s tenant=%s status=%s", employee_id, tenant_code, result.status.value)
        return record.with_changes(record_id=record_id)

    def clock_out(self, employee_id: int, tenant_code: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        self._employee_in_tenant(employee_id, tenant_code)

        record = self._attendance.get_for_employee_and_date(employee_id, tenant_code, now.date())
        if not record or record.clock_in_time is None:
            raise ConflictError("You have not clocked in today")
        if record.clock_out_time is not None:
            raise ConflictError("You have already clocked out today")
        if now < record.clock_in_time:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

        result = compute_clock_out_status(record.clock_in_time, now, self.shift_for(tenant_code))
        updated = record.with_changes(
            clock_out_time=now,
            status=result.status,
            total_time=result.total_time,
            over_time=result.over_time,
            early_leave=result.early_leave,
            is_clocked_in=False,
        )
        if not self._attendance.update_clock_out(updated):
            raise ConflictError("You have already clocked out today")

        logger.info("Clock-out employee=%s tenant=%s status=%s", employee_id, tenant_code, result.status.value)
        return updated

    def today_status(self, employee_id: int, tenant_code: str, *, now: datetime | None = None) -> TodayStatus:
        now = now or now_local()
        today = now.date()
        record = self._attendance.get_for_employee_and_date(employee_id, tenant_code, today)
        if record:
            return TodayStatus(calendar_date=today, status=record.status, record=record)
        if now >= self.shift_for(tenant_code).on(today).half_day_cutoff:
            return TodayStatus(calendar_date=today, status=AttendanceStatus.ABSENT)
        return TodayStatus(calendar_date=today, status=None)

    def month_records(
        self,
        employee_id: int,
        tenant_code: str,
        *,
        year: int | None = None,
        month: int | None = None,
        now: datetime | None = None,
    ) -> list[MonthRow]:
        """Month view up to today, newest first.

        Days without a record become placeholders: WEEKEND on Saturday and
        Sunday, ABSENT otherwise. Today only gets a placeholder once the
        half-day cutoff has passed.
        """
        now = now or now_local()
        today = now.date()
        start, last = month_bounds(
            today.year if year is None else year,
            today.month if month is None else month,
        )
        if start > today:
            return []
        end = min(last, today)

        by_date = {
            r.calendar_date: r
            for r in self._attendance.list_for_employee(employee_id, tenant_code, start=start, end=end)
        }
        cutoff = self.shift_for(tenant_code).on(today).half_day_cutoff

        rows: list[MonthRow] = []
        for day in iter_days(start, end + timedelta(days=1)):
            record = by_date.get(day)
            if record:
                rows.append(MonthRow(row_id=record.record_id, calendar_date=day, status=record.status, record=record))
                continue
            if day == today and now < cutoff:
                continue
            status = AttendanceStatus.WEEKEND if is_weekend(day) else AttendanceStatus.ABSENT
            rows.append(MonthRow(row_id=placeholder_id(employee_id, day), calendar_date=day, status=status))
        rows.reverse()
        return rows

    # Admin

    def records_for_tenant(self, tenant_code: str, *, day: date | None = None) -> list[dict]:
        records = self._attendance.list_for_tenant(tenant_code, start=day, end=day)
        employees: dict[int, Optional[Employee]] = {}
        rows = []
        for r in records:
            if r.employee_id not in employees:
                employees[r.employee_id] = self._employees.get_by_id(r.employee_id)
            employee = employees[r.employee_id]
            rows.append(r.to_dict(employee=employee.summary() if employee else None))
        return rows

    def records_for_employee(
        self,
        tenant_code: str,
        employee_id: int,
        *,
        day: date | None = None,
    ) -> list[AttendanceRecord]:
        self._employee_in_tenant(employee_id, tenant_code, require_active=False)
        return list(self._attendance.list_for_employee(employee_id, tenant_code, start=day, end=day))

    def create_manual(
        self,
        tenant_code: str,
        payload: Mapping[str, Any],
    ) -> AttendanceRecord:
        """Create a record for an employee and date, or update the one already there."""
        if not payload.get("employee_id"):
            raise ValidationError("employee_id is required")
        if not payload.get("date"):
            raise ValidationError("date is required")
        employee_id = require_int(payload["employee_id"], "employee_id")
        day = parse_iso_date(str(payload["date"]))
        self._employee_in_tenant(employee_id, tenant_code, require_active=False)

        shift = self.shift_for(tenant_code)
        existing = self._attendance.get_for_employee_and_date(employee_id, tenant_code, day)
        if existing:
            updated = self._apply_changes(existing, payload, shift)
            self._attendance.save(updated)
            logger.info("Manual attendance updated record=%s tenant=%s", existing.record_id, tenant_code)
            return updated

        base = AttendanceRecord(
            record_id=None,
            employee_id=employee_id,
            tenant_code=tenant_code,
            calendar_date=day,
            status=AttendanceStatus.ABSENT,
        )
        record = self._apply_changes(base, payload, shift)
        try:
            record_id = self._attendance.insert(record)
        except DuplicateRecordError as exc:
            raise ConflictError("Attendance already exists for this employee and date") from exc
        logger.info("Manual attendance created record=%s tenant=%s", record_id, tenant_code)
        return record.with_changes(record_id=record_id)

    def update_record(
        self,
        tenant_code: str,
        record_id: int | str,
        changes: Mapping[str, Any],
    ) -> AttendanceRecord:
        parsed = parse_record_id(record_id)
        if isinstance(parsed, PlaceholderId):
            record = self._materialize_placeholder(tenant_code, parsed)
        else:
            record = self._record_in_tenant(parsed, tenant_code)

        if changes.get("date") and parse_iso_date(str(changes["date"])) != record.calendar_date:
            raise ValidationError("The date of an attendance record cannot be changed")

        updated = self._apply_changes(record, changes, self.shift_for(tenant_code))
        self._attendance.save(updated)
        logger.info("Attendance record=%s updated tenant=%s status=%s", record.record_id, tenant_code, updated.status.value)
        return updated

    def delete_record(self, tenant_code: str, record_id: int | str) -> None:
        parsed = parse_record_id(record_id)
        if isinstance(parsed, PlaceholderId):
            raise ValidationError("Cannot delete a day without a stored attendance record")
        record = self._record_in_tenant(parsed, tenant_code)
        if not self._attendance.delete_by_id(record.record_id):
            raise NotFoundError("Attendance record not found")
        logger.info("Attendance record=%s deleted tenant=%s", record.record_id, tenant_code)

    def stats(self, tenant_code: str, *, start: date | None = None, end: date | None = None) -> AttendanceStats:
        if start and end and start > end:
            raise ValidationError("start_date must not be after end_date")
        counts = self._attendance.count_by_status(tenant_code, start=start, end=end)
        return AttendanceStats(
            total=sum(counts.values()),
            present=counts.get(AttendanceStatus.PRESENT, 0),
            late=counts.get(AttendanceStatus.LATE, 0),
            half_day=counts.get(AttendanceStatus.HALFDAY, 0),
            absent=counts.get(AttendanceStatus.ABSENT, 0),
        )

    def _materialize_placeholder(self, tenant_code: str, placeholder: PlaceholderId) -> AttendanceRecord:
        self._employee_in_tenant(placeholder.employee_id, tenant_code, require_active=False)
        existing = self._attendance.get_for_employee_and_date(
            placeholder.employee_id, tenant_code, placeholder.calendar_date
        )
        if existing:
            return existing

        record = AttendanceRecord(
            record_id=None,
            employee_id=placeholder.employee_id,
            tenant_code=tenant_code,
            calendar_date=placeholder.calendar_date,
            status=AttendanceStatus.ABSENT,
            note=MANUAL_ABSENT_NOTE,
        )
        try:
            return record.with_changes(record_id=self._attendance.insert(record))
        except DuplicateRecordError:
            # Created concurrently (e.g. by the sweep); edit that one instead.
            existing = self._attendance.get_for_employee_and_date(
                placeholder.employee_id, tenant_code, placeholder.calendar_date
            )
            if not existing:
                raise
            return existing

    def _apply_changes(
        self,
        record: AttendanceRecord,
        changes: Mapping[str, Any],
        shift: ShiftSchedule,
    ) -> AttendanceRecord:
        clock_in = record.clock_in_time
        clock_out = record.clock_out_time
        times_changed = False
        if "clock_in_time" in changes:
            clock_in = parse_clock_time(changes["clock_in_time"], record.calendar_date)
            times_changed = True
        if "clock_out_time" in changes:
            clock_out = parse_clock_time(changes["clock_out_time"], record.calendar_date)
            times_changed = True

        if clock_in is not None and clock_in.date() != record.calendar_date:
            raise ValidationError("Clock-in must fall on the record's date")
        if clock_out is not None and clock_in is None:
            raise ValidationError("Clock-out requires a clock-in time")
        if clock_in is not None and clock_out is not None and clock_out < clock_in:
            raise ValidationError("Clock-out cannot be earlier than clock-in")

        fields: dict[str, Any] = {}
        if times_changed:
            fields.update(
                status=AttendanceStatus.ABSENT,
                late_by=ZERO_DURATION,
                over_time=ZERO_DURATION,
                early_leave=ZERO_DURATION,
                total_time=ZERO_DURATION,
                is_clocked_in=False,
            )
            if clock_in is not None:
                arrival = compute_clock_in_status(clock_in, shift)
                fields.update(status=arrival.status, late_by=arrival.late_by, is_clocked_in=clock_out is None)
            if clock_in is not None and clock_out is not None:
                departure = compute_clock_out_status(clock_in, clock_out, shift)
                fields.update(
                    status=departure.status,
                    total_time=departure.total_time,
                    over_time=departure.over_time,
                    early_leave=departure.early_leave,
                )

        # Explicit values override whatever was derived.
        if changes.get("status"):
            try:
                fields["status"] = AttendanceStatus(str(changes["status"]).strip().upper())
            except ValueError as exc:
                raise ValidationError(f"Invalid status: {changes['status']!r}") from exc
        for name in _DURATION_FIELDS:
            if changes.get(name):
                fields[name] = require_duration(str(changes[name]), name)
        if "note" in changes:
            fields["note"] = str(changes["note"]).strip() if changes["note"] else None

        return record.with_changes(clock_in_time=clock_in, clock_out_time=clock_out, **fields)
