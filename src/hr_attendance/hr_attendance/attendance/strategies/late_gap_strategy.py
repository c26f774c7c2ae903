from __future__ import annotations

from ...core.enums import AttendanceStatus
from ...shifts.model import ShiftSchedule
from .base import AttendanceStrategy, StatusDecision, gate_by_hours


class LateGapStrategy(AttendanceStrategy):
    """Arrival after the late window but before the half-day cutoff.

    A full day worked from this window still yields HALFDAY, same as a
    half day. Both branches are kept distinct so the rule can be changed
    per branch.
    """

    def decide_clock_in(self) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALFDAY)

    def decide_clock_out(self, *, total_hours: float, shift: ShiftSchedule) -> StatusDecision:
        return gate_by_hours(total_hours, shift, full_day=AttendanceStatus.HALFDAY)
