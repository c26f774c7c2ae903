from __future__ import annotations

from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftSchedule
from .base import AttendanceStrategy, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    """Arrival at or after the half-day cutoff: HALFDAY whatever the hours."""

    def decide_clock_in(self) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALFDAY)

    def decide_clock_out(self, *, total_hours: float, shift: ShiftSchedule) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALFDAY)
