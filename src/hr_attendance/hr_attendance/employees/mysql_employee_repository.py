from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository


def _to_employee(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        tenant_code=r["tenant_code"],
        full_name=r["full_name"],
        email=r.get("email"),
        role=Role(r["role"]),
        is_active=bool(r["is_active"]),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, tenant_code, full_name, email, role, is_active
                FROM employees
                WHERE employee_id=%s
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_active(self, tenant_code: str) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, tenant_code, full_name, email, role, is_active
                FROM employees
                WHERE tenant_code=%s AND is_active=1
                ORDER BY employee_id
                """,
                (tenant_code,),
            )
            return [_to_employee(r) for r in fetchall(cur)]
