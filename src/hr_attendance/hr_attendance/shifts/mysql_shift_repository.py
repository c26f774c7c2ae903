from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import ShiftSchedule
from .repository import ShiftScheduleRepository


class MySQLShiftScheduleRepository(ShiftScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_tenant(self, tenant_code: str) -> Optional[ShiftSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT tenant_code, shift_start, grace_end, late_end, half_day_cutoff, shift_end,
                       full_day_hours, half_day_hours
                FROM shift_schedules
                WHERE tenant_code=%s
                """,
                (tenant_code,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ShiftSchedule(
                tenant_code=r["tenant_code"],
                shift_start=normalize_mysql_time(r["shift_start"]),
                grace_end=normalize_mysql_time(r["grace_end"]),
                late_end=normalize_mysql_time(r["late_end"]),
                half_day_cutoff=normalize_mysql_time(r["half_day_cutoff"]),
                shift_end=normalize_mysql_time(r["shift_end"]),
                full_day_hours=float(r["full_day_hours"]),
                half_day_hours=float(r["half_day_hours"]),
            )
