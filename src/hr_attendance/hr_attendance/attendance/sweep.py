"""Daily absence sweep.

Inserts an ABSENT record for every active employee of every active tenant
who has nothing recorded for a working day. Safe to run repeatedly and
concurrently: the record store's unique key turns a second insert into a
DuplicateRecordError, which counts as already covered.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import is_weekend, iter_days, now_local
from ..core.constants import AUTO_ABSENT_NOTE, AUTO_BACKFILL_NOTE, DEFAULT_BACKFILL_DAYS
from ..core.enums import AttendanceStatus, SweepScope
from ..core.exceptions import DuplicateRecordError, NotFoundError
from ..employees.repository import EmployeeRepository
from ..shifts.repository import ShiftScheduleRepository, resolve_shift
from ..tenants.model import Tenant
from ..tenants.repository import TenantRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass
class SweepResult:
    reference_date: date
    scope: SweepScope
    inserted: int = 0
    already_covered: int = 0
    failed: int = 0
    tenants_not_due: list[str] = field(default_factory=list)
    tenants_failed: list[str] = field(default_factory=list)
    skipped_reason: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None

    def to_dict(self) -> dict:
        return {
            "date": self.reference_date.isoformat(),
            "scope": self.scope.value,
            "inserted": self.inserted,
            "already_covered": self.already_covered,
            "failed": self.failed,
            "tenants_not_due": list(self.tenants_not_due),
            "tenants_failed": list(self.tenants_failed),
            "skipped_reason": self.skipped_reason,
        }


class AbsenceSweepService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        tenants: TenantRepository,
        shifts: ShiftScheduleRepository,
        *,
        backfill_days: int = DEFAULT_BACKFILL_DAYS,
    ):
        self._attendance = attendance
        self._employees = employees
        self._tenants = tenants
        self._shifts = shifts
        self._backfill_days = int(backfill_days)

    def sweep_today(self, *, now: datetime | None = None, tenant_code: str | None = None) -> SweepResult:
        now = now or now_local()
        return self.sweep_absences(now.date(), SweepScope.SAME_DAY, now=now, tenant_code=tenant_code)

    def backfill(self, *, now: datetime | None = None, days: int | None = None) -> list[SweepResult]:
        """Sweep each day of [today - days, today), oldest first."""
        now = now or now_local()
        today = now.date()
        days = self._backfill_days if days is None else int(days)
        results = [
            self.sweep_absences(day, SweepScope.BACKFILL, now=now)
            for day in iter_days(today - timedelta(days=days), today)
        ]
        logger.info(
            "Absence backfill done days=%s inserted=%s failed=%s",
            days,
            sum(r.inserted for r in results),
            sum(r.failed for r in results),
        )
        return results

    def sweep_absences(
        self,
        reference_date: date,
        scope: SweepScope,
        *,
        now: datetime | None = None,
        tenant_code: str | None = None,
    ) -> SweepResult:
        now = now or now_local()
        today = now.date()
        result = SweepResult(reference_date=reference_date, scope=scope)

        if is_weekend(reference_date):
            result.skipped_reason = "weekend"
            return result
        if scope == SweepScope.SAME_DAY and reference_date != today:
            result.skipped_reason = "same-day sweep only runs for today"
            return result
        if scope == SweepScope.BACKFILL and not (today - timedelta(days=self._backfill_days) <= reference_date < today):
            result.skipped_reason = "outside backfill window"
            return result

        for tenant in self._target_tenants(tenant_code):
            shift = resolve_shift(self._shifts, tenant.tenant_code)
            if scope == SweepScope.SAME_DAY and now < shift.on(reference_date).half_day_cutoff:
                result.tenants_not_due.append(tenant.tenant_code)
                continue
            try:
                self._sweep_tenant(tenant, reference_date, scope, result)
            except Exception:
                logger.exception("Absence sweep failed for tenant=%s date=%s", tenant.tenant_code, reference_date)
                result.tenants_failed.append(tenant.tenant_code)

        if result.inserted or result.failed:
            logger.info(
                "Absence sweep %s date=%s inserted=%s covered=%s failed=%s",
                scope.value,
                reference_date,
                result.inserted,
                result.already_covered,
                result.failed,
            )
        return result

    def _target_tenants(self, tenant_code: str | None) -> Sequence[Tenant]:
        if tenant_code is None:
            return self._tenants.list_active()
        tenant = self._tenants.get(tenant_code)
        if not tenant:
            raise NotFoundError(f"Unknown tenant: {tenant_code}")
        return [tenant] if tenant.is_active else []

    def _sweep_tenant(self, tenant: Tenant, day: date, scope: SweepScope, result: SweepResult) -> None:
        recorded = self._attendance.employee_ids_recorded_on(tenant.tenant_code, day)
        note = AUTO_ABSENT_NOTE if scope == SweepScope.SAME_DAY else AUTO_BACKFILL_NOTE

        for employee in self._employees.list_active(tenant.tenant_code):
            if employee.employee_id in recorded:
                result.already_covered += 1
                continue
            record = AttendanceRecord(
                record_id=None,
                employee_id=employee.employee_id,
                tenant_code=tenant.tenant_code,
                calendar_date=day,
                status=AttendanceStatus.ABSENT,
                is_clocked_in=False,
                note=note,
            )
            try:
                self._attendance.insert(record)
            except DuplicateRecordError:
                result.already_covered += 1
            except Exception:
                logger.exception(
                    "Failed to mark employee=%s absent tenant=%s date=%s",
                    employee.employee_id,
                    tenant.tenant_code,
                    day,
                )
                result.failed += 1
            else:
                result.inserted += 1
