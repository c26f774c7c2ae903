from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Optional, Union

from ..core.constants import ZERO_DURATION
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per (employee, tenant, calendar day).

    `record_id` is None until the store assigns it. Duration fields are
    HH:MM:SS strings derived by the status engine.
    """

    record_id: Optional[int]
    employee_id: int
    tenant_code: str
    calendar_date: date
    status: AttendanceStatus
    clock_in_time: Optional[datetime] = None
    clock_out_time: Optional[datetime] = None
    late_by: str = ZERO_DURATION
    over_time: str = ZERO_DURATION
    early_leave: str = ZERO_DURATION
    total_time: str = ZERO_DURATION
    is_clocked_in: bool = False
    note: Optional[str] = None

    def with_changes(self, **changes: Any) -> "AttendanceRecord":
        return replace(self, **changes)

    def to_dict(self, *, employee: Optional[dict] = None) -> dict:
        data = {
            "id": self.record_id,
            "employee_id": self.employee_id,
            "tenant_code": self.tenant_code,
            "date": self.calendar_date.isoformat(),
            "clock_in_time": self.clock_in_time.isoformat() if self.clock_in_time else None,
            "clock_out_time": self.clock_out_time.isoformat() if self.clock_out_time else None,
            "login": self.clock_in_time.strftime("%H:%M") if self.clock_in_time else "-",
            "logout": self.clock_out_time.strftime("%H:%M") if self.clock_out_time else "-",
            "status": self.status.value,
            "late_by": self.late_by,
            "over_time": self.over_time,
            "early_leave": self.early_leave,
            "total_time": self.total_time,
            "is_clocked_in": self.is_clocked_in,
            "note": self.note,
        }
        if employee is not None:
            data["employee"] = employee
        return data


@dataclass(frozen=True)
class MonthRow:
    """Read-model for the month view: a stored record or a placeholder day."""

    row_id: Union[int, str]
    calendar_date: date
    status: AttendanceStatus
    record: Optional[AttendanceRecord] = None

    @property
    def is_placeholder(self) -> bool:
        return self.record is None

    def to_dict(self) -> dict:
        if self.record is not None:
            return self.record.to_dict()
        return {
            "id": self.row_id,
            "date": self.calendar_date.isoformat(),
            "clock_in_time": None,
            "clock_out_time": None,
            "login": "-",
            "logout": "-",
            "status": self.status.value,
            "late_by": ZERO_DURATION,
            "over_time": ZERO_DURATION,
            "early_leave": ZERO_DURATION,
            "total_time": ZERO_DURATION,
            "is_clocked_in": False,
            "note": None,
            "placeholder": True,
        }


@dataclass(frozen=True)
class AttendanceStats:
    total: int = 0
    present: int = 0
    late: int = 0
    half_day: int = 0
    absent: int = 0

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "late": self.late,
            "half_day": self.half_day,
            "absent": self.absent,
        }
