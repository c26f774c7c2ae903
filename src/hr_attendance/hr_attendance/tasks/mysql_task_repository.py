from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..core.enums import OPEN_TASK_STATUSES, TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Task
from .repository import TaskRepository

_OPEN = tuple(s.value for s in OPEN_TASK_STATUSES)
_OPEN_PLACEHOLDERS = ",".join(["%s"] * len(_OPEN))


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_overdue_candidates(self, now: datetime) -> Sequence[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT task_id, tenant_code, title, due_at, status, is_active, marked_overdue_at
                FROM tasks
                WHERE is_active=1 AND due_at IS NOT NULL AND due_at<%s AND status IN ({_OPEN_PLACEHOLDERS})
                ORDER BY due_at
                """,
                (now, *_OPEN),
            )
            return [
                Task(
                    task_id=int(r["task_id"]),
                    tenant_code=r["tenant_code"],
                    title=r["title"],
                    due_at=r.get("due_at"),
                    status=TaskStatus(r["status"]),
                    is_active=bool(r["is_active"]),
                    marked_overdue_at=r.get("marked_overdue_at"),
                )
                for r in fetchall(cur)
            ]

    def mark_overdue(self, task_id: int, marked_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE tasks
                SET status=%s, marked_overdue_at=%s
                WHERE task_id=%s AND status IN ({_OPEN_PLACEHOLDERS})
                """,
                (TaskStatus.OVERDUE.value, marked_at, int(task_id), *_OPEN),
            )
            return cur.rowcount > 0
