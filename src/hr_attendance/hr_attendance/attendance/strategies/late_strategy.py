from __future__ import annotations

from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftSchedule
from .base import AttendanceStrategy, StatusDecision, gate_by_hours


class LateStrategy(AttendanceStrategy):
    """Arrival inside the late window (grace end to late end, both inclusive)."""

    def decide_clock_in(self) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)

    def decide_clock_out(self, *, total_hours: float, shift: ShiftSchedule) -> StatusDecision:
        return gate_by_hours(total_hours, shift, full_day=AttendanceStatus.LATE)
