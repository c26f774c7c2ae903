from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Protocol, Sequence, Set

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Record store interface.

    Every query filters on tenant_code. The store enforces uniqueness of
    (employee_id, tenant_code, calendar_date); `insert` surfaces a violation
    as DuplicateRecordError.
    """

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: int, tenant_code: str, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_employee(
        self,
        employee_id: int,
        tenant_code: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_tenant(
        self,
        tenant_code: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def employee_ids_recorded_on(self, tenant_code: str, day: date) -> Set[int]:
        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> int:
        raise NotImplementedError

    def save(self, record: AttendanceRecord) -> bool:
        """Overwrite every mutable field of a stored record (admin edits)."""

        raise NotImplementedError

    def update_clock_out(self, record: AttendanceRecord) -> bool:
        """Set clock-out fields only if the stored record has no clock-out yet."""

        raise NotImplementedError

    def delete_by_id(self, record_id: int) -> bool:
        raise NotImplementedError

    def count_by_status(
        self,
        tenant_code: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Dict[AttendanceStatus, int]:
        raise NotImplementedError
