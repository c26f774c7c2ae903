from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles carried in the bearer token."""

    ADMIN = "admin"
    HR = "hr"
    MANAGER = "manager"
    EMPLOYEE = "employee"


ADMIN_ROLES = frozenset({Role.ADMIN, Role.HR})


class AttendanceStatus(str, Enum):
    """Normalized attendance status stored in the database."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    HALFDAY = "HALFDAY"
    ABSENT = "ABSENT"
    WEEKEND = "WEEKEND"


class SweepScope(str, Enum):
    SAME_DAY = "SAME_DAY"
    BACKFILL = "BACKFILL"


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    REOPEN = "reopen"
    ONHOLD = "onhold"
    COMPLETED = "completed"
    OVERDUE = "overdue"


OPEN_TASK_STATUSES = (TaskStatus.PENDING, TaskStatus.IN_PROGRESS, TaskStatus.REOPEN, TaskStatus.ONHOLD)
