from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import TaskStatus


@dataclass(frozen=True)
class Task:
    """Domain entity: the slice of a task needed for overdue checks."""

    task_id: int
    tenant_code: str
    title: str
    due_at: Optional[datetime]
    status: TaskStatus
    is_active: bool = True
    marked_overdue_at: Optional[datetime] = None
