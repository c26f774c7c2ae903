from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..shifts.model import ShiftWindow
from .strategies.base import AttendanceStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_gap_strategy import LateGapStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the strategy of the arrival window, first match wins."""

    def for_arrival(self, *, clock_in: datetime, window: ShiftWindow) -> AttendanceStrategy:
        if clock_in >= window.half_day_cutoff:
            return HalfDayStrategy()
        if window.grace_end <= clock_in <= window.late_end:
            return LateStrategy()
        if window.late_end < clock_in < window.half_day_cutoff:
            return LateGapStrategy()
        return OnTimeStrategy()
