from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.constants import (
    DEFAULT_FULL_DAY_HOURS,
    DEFAULT_GRACE_END,
    DEFAULT_HALF_DAY_CUTOFF,
    DEFAULT_HALF_DAY_HOURS,
    DEFAULT_LATE_END,
    DEFAULT_SHIFT_END,
    DEFAULT_SHIFT_START,
)
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class ShiftWindow:
    """Shift boundaries resolved onto one calendar day."""

    day: date
    shift_start: datetime
    grace_end: datetime
    late_end: datetime
    half_day_cutoff: datetime
    shift_end: datetime


@dataclass(frozen=True)
class ShiftSchedule:
    """Domain entity: a tenant's working-day boundaries.

    Boundaries must satisfy start <= grace_end <= late_end <= half_day_cutoff < shift_end.
    """

    tenant_code: Optional[str] = None
    shift_start: time = DEFAULT_SHIFT_START
    grace_end: time = DEFAULT_GRACE_END
    late_end: time = DEFAULT_LATE_END
    half_day_cutoff: time = DEFAULT_HALF_DAY_CUTOFF
    shift_end: time = DEFAULT_SHIFT_END
    full_day_hours: float = DEFAULT_FULL_DAY_HOURS
    half_day_hours: float = DEFAULT_HALF_DAY_HOURS

    def __post_init__(self) -> None:
        if not (self.shift_start <= self.grace_end <= self.late_end <= self.half_day_cutoff < self.shift_end):
            raise ValidationError("Shift boundaries must be ordered start <= grace <= late <= cutoff < end")
        if not 0 < self.half_day_hours <= self.full_day_hours:
            raise ValidationError("Half-day hours must be positive and not exceed full-day hours")

    @classmethod
    def default(cls, tenant_code: Optional[str] = None) -> "ShiftSchedule":
        return cls(tenant_code=tenant_code)

    def on(self, day: date) -> ShiftWindow:
        return ShiftWindow(
            day=day,
            shift_start=datetime.combine(day, self.shift_start),
            grace_end=datetime.combine(day, self.grace_end),
            late_end=datetime.combine(day, self.late_end),
            half_day_cutoff=datetime.combine(day, self.half_day_cutoff),
            shift_end=datetime.combine(day, self.shift_end),
        )
