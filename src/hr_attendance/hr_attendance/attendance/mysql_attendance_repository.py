from __future__ import annotations

from datetime import date
from typing import Dict, Optional, Sequence, Set

from mysql.connector.errors import IntegrityError

from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateRecordError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    record_id, employee_id, tenant_code, calendar_date, clock_in_time, clock_out_time, status,
    late_by, over_time, early_leave, total_time, is_clocked_in, note
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        employee_id=int(r["employee_id"]),
        tenant_code=r["tenant_code"],
        calendar_date=r["calendar_date"],
        clock_in_time=r.get("clock_in_time"),
        clock_out_time=r.get("clock_out_time"),
        status=AttendanceStatus(r["status"]),
        late_by=r["late_by"],
        over_time=r["over_time"],
        early_leave=r["early_leave"],
        total_time=r["total_time"],
        is_clocked_in=bool(r["is_clocked_in"]),
        note=r.get("note"),
    )


def _date_range(start: Optional[date], end: Optional[date]) -> tuple[str, list]:
    where = ""
    params: list = []
    if start is not None:
        where += " AND calendar_date>=%s"
        params.append(start)
    if end is not None:
        where += " AND calendar_date<=%s"
        params.append(end)
    return where, params


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_employee_and_date(self, employee_id: int, tenant_code: str, day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND tenant_code=%s AND calendar_date=%s
                """,
                (employee_id, tenant_code, day),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_employee(
        self,
        employee_id: int,
        tenant_code: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        where, params = _date_range(start, end)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND tenant_code=%s{where}
                ORDER BY calendar_date DESC
                """,
                (employee_id, tenant_code, *params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_tenant(
        self,
        tenant_code: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        where, params = _date_range(start, end)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE tenant_code=%s{where}
                ORDER BY calendar_date DESC, employee_id
                """,
                (tenant_code, *params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def employee_ids_recorded_on(self, tenant_code: str, day: date) -> Set[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT employee_id FROM attendance_records WHERE tenant_code=%s AND calendar_date=%s",
                (tenant_code, day),
            )
            return {int(r["employee_id"]) for r in fetchall(cur)}

    def insert(self, record: AttendanceRecord) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        employee_id, tenant_code, calendar_date, clock_in_time, clock_out_time, status,
                        late_by, over_time, early_leave, total_time, is_clocked_in, note
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.employee_id,
                        record.tenant_code,
                        record.calendar_date,
                        record.clock_in_time,
                        record.clock_out_time,
                        record.status.value,
                        record.late_by,
                        record.over_time,
                        record.early_leave,
                        record.total_time,
                        int(record.is_clocked_in),
                        record.note,
                    ),
                )
                return int(cur.lastrowid)
        except IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateRecordError(
                    f"Attendance already recorded for employee {record.employee_id} on {record.calendar_date}"
                ) from exc
            raise

    def save(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_in_time=%s, clock_out_time=%s, status=%s, late_by=%s, over_time=%s,
                    early_leave=%s, total_time=%s, is_clocked_in=%s, note=%s
                WHERE record_id=%s AND tenant_code=%s
                """,
                (
                    record.clock_in_time,
                    record.clock_out_time,
                    record.status.value,
                    record.late_by,
                    record.over_time,
                    record.early_leave,
                    record.total_time,
                    int(record.is_clocked_in),
                    record.note,
                    int(record.record_id),
                    record.tenant_code,
                ),
            )
            return cur.rowcount > 0

    def update_clock_out(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_out_time=%s, status=%s, over_time=%s, early_leave=%s, total_time=%s, is_clocked_in=0
                WHERE record_id=%s AND clock_out_time IS NULL
                """,
                (
                    record.clock_out_time,
                    record.status.value,
                    record.over_time,
                    record.early_leave,
                    record.total_time,
                    int(record.record_id),
                ),
            )
            return cur.rowcount > 0

    def delete_by_id(self, record_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE record_id=%s", (int(record_id),))
            return cur.rowcount > 0

    def count_by_status(
        self,
        tenant_code: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Dict[AttendanceStatus, int]:
        where, params = _date_range(start, end)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT status, COUNT(*) AS cnt
                FROM attendance_records
                WHERE tenant_code=%s{where}
                GROUP BY status
                """,
                (tenant_code, *params),
            )
            return {AttendanceStatus(r["status"]): int(r["cnt"]) for r in fetchall(cur)}
