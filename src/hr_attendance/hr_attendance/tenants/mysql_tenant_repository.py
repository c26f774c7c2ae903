from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Tenant
from .repository import TenantRepository


class MySQLTenantRepository(TenantRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, tenant_code: str) -> Optional[Tenant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT tenant_code, name, is_active FROM tenants WHERE tenant_code=%s", (tenant_code,))
            r = fetchone(cur)
            if not r:
                return None
            return Tenant(tenant_code=r["tenant_code"], name=r["name"], is_active=bool(r["is_active"]))

    def list_active(self) -> Sequence[Tenant]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT tenant_code, name, is_active FROM tenants WHERE is_active=1 ORDER BY tenant_code")
            return [
                Tenant(tenant_code=r["tenant_code"], name=r["name"], is_active=bool(r["is_active"]))
                for r in fetchall(cur)
            ]
