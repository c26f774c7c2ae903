from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import Task


class TaskRepository(Protocol):
    def list_overdue_candidates(self, now: datetime) -> Sequence[Task]:
        """Active tasks due before `now` whose status is still open."""

        raise NotImplementedError

    def mark_overdue(self, task_id: int, marked_at: datetime) -> bool:
        """Flip an open task to overdue; False when it was no longer open."""

        raise NotImplementedError
