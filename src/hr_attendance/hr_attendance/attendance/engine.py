"""Attendance status engine.

Pure functions: no I/O, no clock. Callers pass `now` and the tenant's
`ShiftSchedule` explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Union

from ..core.constants import ZERO_DURATION
from ..core.enums import AttendanceStatus
from ..shifts.model import ShiftSchedule
from .factory import AttendanceStrategyFactory

_factory = AttendanceStrategyFactory()


@dataclass(frozen=True)
class ClockInResult:
    status: AttendanceStatus
    late_by: str


@dataclass(frozen=True)
class ClockOutResult:
    status: AttendanceStatus
    total_time: str
    over_time: str
    early_leave: str


def format_duration(milliseconds: Union[int, float]) -> str:
    """Render milliseconds as zero-padded HH:MM:SS.

    Hours do not wrap at 24, fractions of a second are floored and
    negative input renders as zero.
    """
    total_seconds = max(0, int(milliseconds // 1000))
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_timedelta(delta: timedelta) -> str:
    return format_duration(delta // timedelta(milliseconds=1))


def derive_status(
    clock_in: datetime,
    clock_out: Optional[datetime] = None,
    *,
    shift: ShiftSchedule,
) -> AttendanceStatus:
    """Single status rule for both the clock-in and the clock-out path."""
    window = shift.on(clock_in.date())
    strategy = _factory.for_arrival(clock_in=clock_in, window=window)
    if clock_out is None:
        return strategy.decide_clock_in().status
    total_hours = (clock_out - clock_in) / timedelta(hours=1)
    return strategy.decide_clock_out(total_hours=total_hours, shift=shift).status


def compute_clock_in_status(now: datetime, shift: ShiftSchedule) -> ClockInResult:
    window = shift.on(now.date())
    status = derive_status(now, shift=shift)
    # Arrivals inside the grace window are not late at all.
    late_by = format_timedelta(now - window.shift_start) if now >= window.grace_end else ZERO_DURATION
    return ClockInResult(status=status, late_by=late_by)


def compute_clock_out_status(clock_in: datetime, clock_out: datetime, shift: ShiftSchedule) -> ClockOutResult:
    # Shift end is taken on the clock-out day.
    shift_end = shift.on(clock_out.date()).shift_end
    zero = timedelta(0)
    return ClockOutResult(
        status=derive_status(clock_in, clock_out, shift=shift),
        total_time=format_timedelta(clock_out - clock_in),
        over_time=format_timedelta(max(zero, clock_out - shift_end)),
        early_leave=format_timedelta(max(zero, shift_end - clock_out)),
    )
