from datetime import date, datetime, timedelta

import pytest

from rfid_attendance.attendance.model import AttendanceRecord
from rfid_attendance.common.datetime_utils import iter_month_days, js_weekday
from rfid_attendance.core.enums import AttendanceStatus, SalaryType
from rfid_attendance.employees.model import Employee
from rfid_attendance.holidays.model import Holiday
from rfid_attendance.payroll.calculator.standard_calculator import StandardPayrollCalculator, count_working_days
from rfid_attendance.settings.model import AttendanceSettings

WEEKDAYS_ONLY = AttendanceSettings(weekly_off=(0, 6))


def _record(day: date, status=AttendanceStatus.PRESENT, hours=8.0, overtime=0.0, employee_id="e1", n=0):
    start = datetime.combine(day, datetime.min.time()) + timedelta(hours=9)
    return AttendanceRecord(
        record_id=f"{day.isoformat()}-{n}",
        employee_id=employee_id,
        work_date=day,
        in_time=start,
        out_time=start + timedelta(hours=hours),
        status=status,
        hours_worked=hours,
        overtime_hours=overtime,
    )


def _employee(**kwargs):
    return Employee(employee_id="e1", name="Asha", emp_code="EMP001", **kwargs)


def test_working_days_skip_sundays_and_holidays():
    # June 2026: 30 days, 4 Sundays, holiday on Tuesday 2 June
    assert count_working_days(2026, 6, weekly_off=(0,), holiday_dates={date(2026, 6, 2)}) == 30 - 4 - 1


def test_holiday_on_weekly_off_is_not_counted_twice():
    assert count_working_days(2026, 6, weekly_off=(0,), holiday_dates={date(2026, 6, 7)}) == 26


def test_fixed_salary_deducts_inferred_absence():
    holidays = [Holiday("h1", date(2026, 6, 2), "A"), Holiday("h2", date(2026, 6, 3), "B")]
    working = [
        d for d in iter_month_days(2026, 6)
        if js_weekday(d) not in (0, 6) and d not in {h.holiday_date for h in holidays}
    ]
    records = [_record(d) for d in working[:18]]

    result = StandardPayrollCalculator().compute(_employee(salary=30000), "2026-06", records, holidays, WEEKDAYS_ONLY)

    assert result.total_working_days == 20
    assert result.present_days == 18
    assert result.absent_days == 2
    assert result.absent_deduction == 3000
    assert result.net_salary == 27000


def test_payroll_is_idempotent():
    records = [_record(date(2026, 6, 1), overtime=1.5), _record(date(2026, 6, 2), status=AttendanceStatus.LATE)]
    calc = StandardPayrollCalculator()
    employee = _employee()

    first = calc.compute(employee, "2026-06", records, [], AttendanceSettings())
    second = calc.compute(employee, "2026-06", records, [], AttendanceSettings())

    assert first == second


def test_hourly_salary_uses_hours_worked():
    # 22 weekdays in June 2026 -> 1000/day, 40h week -> 125/hour
    employee = _employee(salary=22000, salary_type=SalaryType.HOURLY, weekly_hours=40)
    records = [_record(date(2026, 6, 1)), _record(date(2026, 6, 2))]

    result = StandardPayrollCalculator().compute(employee, "2026-06", records, [], WEEKDAYS_ONLY)

    assert result.gross_salary == 2000
    assert result.absent_deduction == 0
    assert result.net_salary == 2000


def test_hourly_rate_defaults_to_eight_hour_day():
    employee = _employee(salary=22000, salary_type=SalaryType.HOURLY, weekly_hours=None)
    records = [_record(date(2026, 6, 1), hours=4.0)]

    result = StandardPayrollCalculator().compute(employee, "2026-06", records, [], WEEKDAYS_ONLY)

    assert result.gross_salary == 500


def test_daily_salary_counts_half_days_as_half():
    employee = _employee(salary=22000, salary_type=SalaryType.DAILY)
    records = [
        _record(date(2026, 6, 1)),
        _record(date(2026, 6, 2)),
        _record(date(2026, 6, 3), status=AttendanceStatus.HALF_DAY, hours=3.0),
    ]

    result = StandardPayrollCalculator().compute(employee, "2026-06", records, [], WEEKDAYS_ONLY)

    assert result.present_days == 2
    assert result.half_days == 1
    assert result.gross_salary == 2500
    assert result.half_day_deduction == 0


def test_late_penalty_applies_to_every_salary_type():
    employee = _employee(salary=22000, salary_type=SalaryType.DAILY)
    records = [
        _record(date(2026, 6, 1), status=AttendanceStatus.LATE),
        _record(date(2026, 6, 2), status=AttendanceStatus.LATE_HALF),
    ]

    result = StandardPayrollCalculator().compute(employee, "2026-06", records, [], WEEKDAYS_ONLY)

    assert result.late_days == 2
    assert result.present_days == 1
    assert result.late_penalty == 880
    assert result.net_salary == 1000 - 880


def test_overtime_pay_uses_employee_rate():
    employee = _employee(salary=22000, overtime_rate=300)
    records = [_record(date(2026, 6, d), overtime=0.5) for d in (1, 2, 3, 4)]

    result = StandardPayrollCalculator().compute(employee, "2026-06", records, [], WEEKDAYS_ONLY)

    assert result.total_overtime_hours == 2.0
    assert result.overtime_pay == 600


def test_net_salary_can_go_negative():
    employee = _employee(salary=22000)
    records = [_record(date(2026, 6, 1), status=AttendanceStatus.LATE_HALF)]

    result = StandardPayrollCalculator().compute(employee, "2026-06", records, [], WEEKDAYS_ONLY)

    assert result.absent_days == 22
    assert result.net_salary == -440


def test_no_working_days_means_no_per_day_figures():
    settings = AttendanceSettings(weekly_off=(0, 1, 2, 3, 4, 5, 6))

    result = StandardPayrollCalculator().compute(_employee(salary=30000), "2026-06", [], [], settings)

    assert result.total_working_days == 0
    assert result.absent_deduction == 0
    assert result.net_salary == 30000


def test_only_the_employees_records_in_the_month_count():
    records = [
        _record(date(2026, 6, 1)),
        _record(date(2026, 5, 29)),
        _record(date(2026, 6, 2), employee_id="someone-else"),
    ]

    result = StandardPayrollCalculator().compute(_employee(), "2026-06", records, [], WEEKDAYS_ONLY)

    assert result.present_days == 1


def test_earnings_split_is_display_only():
    result = StandardPayrollCalculator().compute(_employee(salary=20000), "2026-06", [], [], WEEKDAYS_ONLY)

    assert (result.basic, result.hra, result.allowances) == pytest.approx((10000, 4000, 6000))
