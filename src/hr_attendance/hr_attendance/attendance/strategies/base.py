from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftSchedule


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: how one arrival window turns into a status.

    The window is picked from the clock-in time; clock-out only gates the
    result by hours worked.
    """

    @abstractmethod
    def decide_clock_in(self) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_clock_out(self, *, total_hours: float, shift: ShiftSchedule) -> StatusDecision:
        raise NotImplementedError


def gate_by_hours(
    total_hours: float,
    shift: ShiftSchedule,
    *,
    full_day: AttendanceStatus,
    half_day: AttendanceStatus = AttendanceStatus.HALFDAY,
    short_day: AttendanceStatus = AttendanceStatus.ABSENT,
) -> StatusDecision:
    if total_hours >= shift.full_day_hours:
        return StatusDecision(status=full_day)
    if total_hours >= shift.half_day_hours:
        return StatusDecision(status=half_day)
    return StatusDecision(status=short_day)
