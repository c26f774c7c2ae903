from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import now_local
from .repository import TaskRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverdueResult:
    checked: int
    marked: int
    failed: int

    def to_dict(self) -> dict:
        return {"checked": self.checked, "marked": self.marked, "failed": self.failed}


class TaskService:
    def __init__(self, tasks: TaskRepository):
        self._tasks = tasks

    def mark_overdue_tasks(self, *, now: datetime | None = None) -> OverdueResult:
        now = now or now_local()
        candidates = self._tasks.list_overdue_candidates(now)
        marked = failed = 0
        for task in candidates:
            try:
                if self._tasks.mark_overdue(task.task_id, now):
                    marked += 1
            except Exception:
                logger.exception("Failed to mark task=%s overdue", task.task_id)
                failed += 1

        if candidates:
            logger.info("Overdue check: checked=%s marked=%s failed=%s", len(candidates), marked, failed)
        return OverdueResult(checked=len(candidates), marked=marked, failed=failed)
