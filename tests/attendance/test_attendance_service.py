from __future__ import annotations

import asyncio
from datetime import date, datetime

import pytest

from rfid_attendance.attendance.service import AttendanceService
from rfid_attendance.cards.model import Card
from rfid_attendance.core.enums import AttendanceStatus, AttendanceView, ScanAction
from rfid_attendance.core.exceptions import StorageError, ValidationError


@pytest.fixture
def service(state, make_employee, fixed_now):
    asyncio.run(state.save_employees([make_employee("e1", name="Asha"), make_employee("e2", name="Ravi", branch_id="b2")]))
    asyncio.run(
        state.save_cards(
            [
                Card(card_id="c1", uid="AB12", employee_id="e1"),
                Card(card_id="c2", uid="CD34", employee_id="e2", blocked=True),
            ]
        )
    )
    return AttendanceService(state, clock=lambda: fixed_now)


def test_in_then_out_updates_one_record(service, state):
    first = asyncio.run(service.scan(" ab12 ", now=datetime(2026, 1, 6, 9, 5)))
    second = asyncio.run(service.scan("AB12", now=datetime(2026, 1, 6, 18, 5)))
    third = asyncio.run(service.scan("AB12", now=datetime(2026, 1, 6, 18, 10)))

    assert first.action == ScanAction.CLOCK_IN
    assert second.action == ScanAction.CLOCK_OUT
    assert third.action == ScanAction.REJECTED

    assert len(state.attendance) == 1
    record = state.attendance[0]
    assert record.record_id == first.record.record_id
    assert record.hours_worked == 9.0
    assert record.status == AttendanceStatus.PRESENT


def test_scan_is_persisted_to_storage(service, storage):
    asyncio.run(service.scan("AB12", now=datetime(2026, 1, 6, 9, 30)))

    stored = asyncio.run(storage.get("srf:attendance"))
    assert len(stored) == 1
    assert stored[0]["employeeId"] == "e1"
    assert stored[0]["status"] == "late"
    assert stored[0]["date"] == "2026-01-06"
    assert stored[0]["outTime"] is None


def test_failed_write_raises_and_keeps_state(service, state, storage):
    storage.fail_writes = True

    with pytest.raises(StorageError):
        asyncio.run(service.scan("AB12", now=datetime(2026, 1, 6, 9, 0)))

    assert state.attendance == []
    assert service.scan_log == []


def test_next_day_starts_a_new_record(service, state):
    asyncio.run(service.scan("AB12", now=datetime(2026, 1, 6, 9, 0)))
    asyncio.run(service.scan("AB12", now=datetime(2026, 1, 7, 9, 0)))

    assert [r.work_date for r in state.attendance] == [date(2026, 1, 6), date(2026, 1, 7)]
    assert all(r.is_open for r in state.attendance)


def test_blocked_card_does_not_touch_attendance(service, state):
    result = asyncio.run(service.scan("CD34"))

    assert not result.accepted
    assert state.attendance == []
    assert service.scan_log[0].message == "Card is BLOCKED"


def test_blank_scan_is_a_validation_error(service):
    with pytest.raises(ValidationError):
        asyncio.run(service.scan("   "))


def test_scan_log_is_newest_first_and_bounded(state, fixed_now):
    service = AttendanceService(state, clock=lambda: fixed_now, scan_log_limit=3)

    for i in range(5):
        asyncio.run(service.scan(f"U{i}"))

    assert [e.message for e in service.scan_log] == ["Unknown card: U4", "Unknown card: U3", "Unknown card: U2"]


def test_scan_log_marks_late_clock_in(service):
    asyncio.run(service.scan("AB12", now=datetime(2026, 1, 6, 9, 40)))

    entry = service.scan_log[0]
    assert entry.late is True
    assert entry.message == "Asha clocked in (late)"
    assert entry.note == "after 09:00 +15m"


def test_manual_entry_is_added_even_when_a_record_exists(service, state):
    asyncio.run(service.scan("AB12", now=datetime(2026, 1, 6, 9, 0)))

    record = asyncio.run(
        service.add_manual_entry(employee_id="e1", work_date="2026-01-06", in_time="09:00", out_time="18:00")
    )

    assert len(state.attendance) == 2
    assert record.manual is True
    assert record.status == AttendanceStatus.PRESENT
    assert record.hours_worked == 9.0
    assert record.overtime_hours == 0.0


def test_manual_entry_requires_known_employee(service):
    with pytest.raises(ValidationError):
        asyncio.run(service.add_manual_entry(employee_id="nobody", work_date="2026-01-06", in_time="09:00", out_time="18:00"))


def test_manual_entry_rejects_bad_date(service):
    with pytest.raises(ValidationError):
        asyncio.run(service.add_manual_entry(employee_id="e1", work_date="06/01/2026", in_time="09:00", out_time="18:00"))


def _manual(service, employee_id, day, in_time="09:00"):
    return asyncio.run(service.add_manual_entry(employee_id=employee_id, work_date=day, in_time=in_time, out_time="18:00"))


def test_weekly_view_uses_sunday_start_week(service):
    for day in ("2026-01-03", "2026-01-04", "2026-01-06", "2026-01-10", "2026-01-11"):
        _manual(service, "e1", day)

    rows = service.list_records(view=AttendanceView.WEEKLY, selected_date=date(2026, 1, 6))

    assert [r.work_date.isoformat() for r in rows] == ["2026-01-10", "2026-01-06", "2026-01-04"]


def test_listing_sorts_same_day_by_in_time_desc_and_filters(service):
    _manual(service, "e1", "2026-01-06", in_time="08:00")
    _manual(service, "e1", "2026-01-06", in_time="10:00")
    _manual(service, "e2", "2026-01-06")
    _manual(service, "e1", "2026-02-02")

    daily = service.list_records(view=AttendanceView.DAILY, selected_date=date(2026, 1, 6))
    assert [(r.employee_id, r.in_time.hour) for r in daily][:2] == [("e1", 10), ("e2", 9)]

    monthly_branch = service.list_records(view=AttendanceView.MONTHLY, selected_date=date(2026, 1, 20), branch_id="b2")
    assert {r.employee_id for r in monthly_branch} == {"e2"}

    own = service.list_records(view=AttendanceView.MONTHLY, selected_date=date(2026, 1, 6), own_employee_id="e1")
    assert {r.employee_id for r in own} == {"e1"}
    assert len(own) == 2


def test_dashboard_counts_today(service, fixed_now):
    asyncio.run(service.scan("AB12", now=datetime(2026, 1, 6, 9, 45)))

    summary = service.dashboard(today=fixed_now.date())

    assert summary.total_employees == 2
    assert summary.present == 1
    assert summary.absent == 1
    assert summary.late == 1
    assert summary.overtime_hours == 0


def test_employee_summary_counts_month_to_date(service, state, fixed_now):
    _manual(service, "e1", "2026-01-05")
    _manual(service, "e1", "2026-01-06")

    summary = service.employee_summary(state.find_employee("e1"), today=fixed_now.date())

    # January 2026 has 4 Sundays
    assert summary.present == 2
    assert summary.absent == 27 - 2
    assert summary.month == "2026-01"
