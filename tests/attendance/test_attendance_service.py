from __future__ import annotations

from datetime import date, datetime

import pytest

from src.hr_attendance.hr_attendance.attendance.model import AttendanceRecord
from src.hr_attendance.hr_attendance.attendance.service import AttendanceService
from src.hr_attendance.hr_attendance.core.enums import AttendanceStatus
from src.hr_attendance.hr_attendance.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


@pytest.fixture
def svc(attendance_repo, employees_repo, shifts_repo) -> AttendanceService:
    return AttendanceService(attendance_repo, employees_repo, shifts_repo)


def at(hour: int, minute: int, day: int = 12) -> datetime:
    return datetime(2025, 3, day, hour, minute)


def absent(employee_id: int, day: date, tenant_code: str = "ACME") -> AttendanceRecord:
    return AttendanceRecord(
        record_id=None,
        employee_id=employee_id,
        tenant_code=tenant_code,
        calendar_date=day,
        status=AttendanceStatus.ABSENT,
    )


def test_clock_in_creates_open_record(svc, attendance_repo):
    record = svc.clock_in(2, "ACME", now=at(9, 5))

    stored = attendance_repo.get_by_id(record.record_id)
    assert stored.status == AttendanceStatus.PRESENT
    assert stored.late_by == "00:00:00"
    assert stored.is_clocked_in is True
    assert stored.clock_in_time == at(9, 5)
    assert stored.calendar_date == date(2025, 3, 12)


def test_second_clock_in_same_day_is_rejected(svc, attendance_repo):
    svc.clock_in(2, "ACME", now=at(9, 5))

    with pytest.raises(ConflictError):
        svc.clock_in(2, "ACME", now=at(11, 0))
    assert len(attendance_repo.records) == 1


def test_clock_out_fills_durations(svc, attendance_repo):
    record = svc.clock_in(2, "ACME", now=at(9, 5))

    out = svc.clock_out(2, "ACME", now=at(18, 30))

    stored = attendance_repo.get_by_id(record.record_id)
    assert stored == out
    assert stored.status == AttendanceStatus.PRESENT
    assert stored.total_time == "09:25:00"
    assert stored.over_time == "00:00:00"
    assert stored.early_leave == "00:30:00"
    assert stored.is_clocked_in is False


def test_clock_out_twice_is_rejected(svc):
    svc.clock_in(2, "ACME", now=at(9, 5))
    svc.clock_out(2, "ACME", now=at(18, 30))

    with pytest.raises(ConflictError):
        svc.clock_out(2, "ACME", now=at(19, 0))


def test_clock_out_without_clock_in_is_rejected(svc):
    with pytest.raises(ConflictError):
        svc.clock_out(2, "ACME", now=at(18, 0))


def test_sweep_absent_record_blocks_later_clock_in(svc, attendance_repo):
    # A late arrival after the sweep cannot clock in; an admin has to edit the ABSENT record.
    attendance_repo.insert(absent(2, date(2025, 3, 12)))

    with pytest.raises(ConflictError):
        svc.clock_in(2, "ACME", now=at(10, 45))


def test_clock_in_checks_employee(svc):
    with pytest.raises(NotFoundError):
        svc.clock_in(99, "ACME", now=at(9, 0))
    with pytest.raises(AuthorizationError):
        svc.clock_in(10, "ACME", now=at(9, 0))
    with pytest.raises(AuthorizationError):
        svc.clock_in(4, "ACME", now=at(9, 0))


def test_today_status(svc):
    assert svc.today_status(2, "ACME", now=at(9, 30)).status is None
    assert svc.today_status(2, "ACME", now=at(10, 0)).status == AttendanceStatus.ABSENT

    svc.clock_in(3, "ACME", now=at(9, 20))
    status = svc.today_status(3, "ACME", now=at(12, 0))
    assert status.status == AttendanceStatus.LATE
    assert status.to_dict()["is_clocked_in"] is True


def test_month_records_fills_missing_days(svc, attendance_repo):
    attendance_repo.insert(
        absent(2, date(2025, 3, 10)).with_changes(status=AttendanceStatus.PRESENT, clock_in_time=at(9, 0, day=10))
    )

    rows = svc.month_records(2, "ACME", year=2025, month=3, now=at(10, 30))

    assert [r.calendar_date.day for r in rows] == list(range(12, 0, -1))
    by_day = {r.calendar_date.day: r for r in rows}
    assert by_day[10].record is not None
    assert by_day[10].status == AttendanceStatus.PRESENT
    assert by_day[1].status == AttendanceStatus.WEEKEND
    assert by_day[9].status == AttendanceStatus.WEEKEND
    assert by_day[11].status == AttendanceStatus.ABSENT
    assert by_day[11].row_id == "absent_2_2025-03-11"
    assert by_day[12].status == AttendanceStatus.ABSENT


def test_month_records_skips_today_before_cutoff(svc):
    rows = svc.month_records(2, "ACME", year=2025, month=3, now=at(9, 0))

    assert rows[0].calendar_date == date(2025, 3, 11)


def test_month_records_for_past_and_future_months(svc):
    assert len(svc.month_records(2, "ACME", year=2025, month=2, now=at(10, 30))) == 28
    assert svc.month_records(2, "ACME", year=2025, month=4, now=at(10, 30)) == []

    with pytest.raises(ValidationError):
        svc.month_records(2, "ACME", year=2025, month=13, now=at(10, 30))


def test_update_placeholder_creates_and_recomputes(svc, attendance_repo):
    record = svc.update_record(
        "ACME",
        "absent_2_2025-03-11",
        {"clock_in_time": "09:20", "clock_out_time": "18:30"},
    )

    stored = attendance_repo.get_by_id(record.record_id)
    assert stored.calendar_date == date(2025, 3, 11)
    assert stored.status == AttendanceStatus.LATE
    assert stored.late_by == "00:20:00"
    assert stored.total_time == "09:10:00"
    assert stored.early_leave == "00:30:00"
    assert stored.is_clocked_in is False


def test_update_explicit_values_override_derived_ones(svc, attendance_repo):
    record_id = attendance_repo.insert(absent(2, date(2025, 3, 11)))

    record = svc.update_record(
        "ACME",
        str(record_id),
        {"clock_in_time": "09:45", "status": "present", "late_by": "00:00:00", "note": "Client visit"},
    )

    assert record.status == AttendanceStatus.PRESENT
    assert record.late_by == "00:00:00"
    assert record.note == "Client visit"
    assert record.is_clocked_in is True


def test_update_rejects_bad_changes(svc, attendance_repo):
    record_id = attendance_repo.insert(absent(2, date(2025, 3, 11)))

    with pytest.raises(ValidationError):
        svc.update_record("ACME", record_id, {"date": "2025-03-10"})
    with pytest.raises(ValidationError):
        svc.update_record("ACME", record_id, {"clock_in_time": "18:00", "clock_out_time": "09:00"})
    with pytest.raises(ValidationError):
        svc.update_record("ACME", record_id, {"status": "ON_LEAVE"})
    with pytest.raises(ValidationError):
        svc.update_record("ACME", record_id, {"late_by": "5 minutes"})
    with pytest.raises(ValidationError):
        svc.update_record("ACME", "not-an-id", {})


def test_update_record_of_other_tenant_is_forbidden(svc, attendance_repo):
    record_id = attendance_repo.insert(absent(10, date(2025, 3, 11), tenant_code="GLOBEX"))

    with pytest.raises(AuthorizationError):
        svc.update_record("ACME", record_id, {"status": "PRESENT"})
    with pytest.raises(NotFoundError):
        svc.update_record("ACME", 999, {"status": "PRESENT"})


def test_create_manual_defaults_to_absent(svc):
    record = svc.create_manual("ACME", {"employee_id": 3, "date": "2025-03-11", "note": "No show"})

    assert record.record_id is not None
    assert record.status == AttendanceStatus.ABSENT
    assert record.note == "No show"


def test_create_manual_updates_existing_record(svc, attendance_repo):
    existing_id = attendance_repo.insert(absent(3, date(2025, 3, 11)))

    record = svc.create_manual(
        "ACME",
        {"employee_id": "3", "date": "2025-03-11", "clock_in_time": "2025-03-11T08:50:00", "clock_out_time": "18:00"},
    )

    assert record.record_id == existing_id
    assert len(attendance_repo.records) == 1
    assert attendance_repo.get_by_id(existing_id).status == AttendanceStatus.PRESENT


def test_create_manual_validates_employee(svc):
    with pytest.raises(ValidationError):
        svc.create_manual("ACME", {"date": "2025-03-11"})
    with pytest.raises(ValidationError):
        svc.create_manual("ACME", {"employee_id": 3})
    with pytest.raises(NotFoundError):
        svc.create_manual("ACME", {"employee_id": 99, "date": "2025-03-11"})
    with pytest.raises(AuthorizationError):
        svc.create_manual("ACME", {"employee_id": 10, "date": "2025-03-11"})


def test_delete_record(svc, attendance_repo):
    record_id = attendance_repo.insert(absent(2, date(2025, 3, 11)))

    with pytest.raises(ValidationError):
        svc.delete_record("ACME", "absent_2_2025-03-11")

    svc.delete_record("ACME", str(record_id))
    assert attendance_repo.get_by_id(record_id) is None

    with pytest.raises(NotFoundError):
        svc.delete_record("ACME", record_id)


def test_stats_counts_tenant_records(svc, attendance_repo):
    day = date(2025, 3, 11)
    attendance_repo.insert(absent(1, day).with_changes(status=AttendanceStatus.PRESENT))
    attendance_repo.insert(absent(2, day).with_changes(status=AttendanceStatus.LATE))
    attendance_repo.insert(absent(3, day))
    attendance_repo.insert(absent(3, date(2025, 3, 10)).with_changes(status=AttendanceStatus.HALFDAY))
    attendance_repo.insert(absent(10, day, tenant_code="GLOBEX"))

    stats = svc.stats("ACME")
    assert stats.to_dict() == {"total": 4, "present": 1, "late": 1, "half_day": 1, "absent": 1}

    assert svc.stats("ACME", start=day, end=day).total == 3
    with pytest.raises(ValidationError):
        svc.stats("ACME", start=day, end=date(2025, 3, 1))


def test_tenant_listing_is_isolated(svc, attendance_repo):
    day = date(2025, 3, 11)
    attendance_repo.insert(absent(2, day))
    attendance_repo.insert(absent(10, day, tenant_code="GLOBEX"))

    rows = svc.records_for_tenant("ACME", day=day)

    assert [r["employee_id"] for r in rows] == [2]
    assert rows[0]["employee"]["name"] == "Jane Doe"
    with pytest.raises(AuthorizationError):
        svc.records_for_employee("ACME", 10)


@pytest.mark.parametrize("year, month", [(-1, 3), (10000, 3), (2025, 0)])
def test_month_records_rejects_out_of_range_year_and_month(svc, year, month):
    with pytest.raises(ValidationError):
        svc.month_records(2, "ACME", year=year, month=month, now=at(10, 30))


def test_concurrent_clock_in_is_a_conflict(svc, attendance_repo, monkeypatch):
    svc.clock_in(2, "ACME", now=at(9, 5))
    # Second writer read before the first one committed.
    monkeypatch.setattr(attendance_repo, "get_for_employee_and_date", lambda employee_id, tenant_code, day: None)

    with pytest.raises(ConflictError):
        svc.clock_in(2, "ACME", now=at(9, 6))
    assert len(attendance_repo.records) == 1


def test_concurrent_clock_out_is_a_conflict(svc, attendance_repo, monkeypatch):
    record = svc.clock_in(2, "ACME", now=at(9, 5))
    svc.clock_out(2, "ACME", now=at(18, 30))
    # Second writer still sees the record without a clock-out.
    monkeypatch.setattr(attendance_repo, "get_for_employee_and_date", lambda employee_id, tenant_code, day: record)

    with pytest.raises(ConflictError):
        svc.clock_out(2, "ACME", now=at(19, 0))
    assert len(attendance_repo.records) == 1
    assert attendance_repo.get_by_id(record.record_id).clock_out_time == at(18, 30)


def test_update_rejects_oversized_duration(svc, attendance_repo):
    record_id = attendance_repo.insert(absent(2, date(2025, 3, 11)))

    with pytest.raises(ValidationError):
        svc.update_record("ACME", record_id, {"over_time": "99999999999999:00:00"})

    record = svc.update_record("ACME", record_id, {"over_time": "120:00:00"})
    assert record.over_time == "120:00:00"
