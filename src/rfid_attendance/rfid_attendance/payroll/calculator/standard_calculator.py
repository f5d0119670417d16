from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import iter_month_days, js_weekday, month_key, parse_month
from ...core.constants import DEFAULT_DAILY_HOURS, DEFAULT_OVERTIME_RATE, DEFAULT_SALARY
from ...core.enums import AttendanceStatus, SalaryType
from ...employees.model import Employee
from ...holidays.model import Holiday
from ...settings.model import AttendanceSettings, with_defaults
from ..model import PayrollResult
from .base import PayrollCalculator

_PRESENT = {AttendanceStatus.PRESENT, AttendanceStatus.LATE}
_LATE = {AttendanceStatus.LATE, AttendanceStatus.LATE_HALF}


def count_working_days(year: int, month: int, *, weekly_off: Iterable[int], holiday_dates: set[date]) -> int:
    """Days of the month that are neither a weekly off (0=Sunday) nor a holiday."""
    off = set(weekly_off)
    return sum(1 for d in iter_month_days(year, month) if js_weekday(d) not in off and d not in holiday_dates)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: fixed, hourly or daily gross, less absence and late deductions, plus overtime.

    Absence is inferred (working days minus attended days); there are no
    absence records. Net salary is not clamped and can be negative.
    """

    def compute(
        self,
        employee: Employee,
        month: str,
        records: Iterable[AttendanceRecord],
        holidays: Iterable[Holiday],
        settings: Optional[AttendanceSettings],
    ) -> PayrollResult:
        settings = with_defaults(settings)
        year, mon = parse_month(month)
        key = f"{year:04d}-{mon:02d}"

        month_records = [r for r in records if r.employee_id == employee.employee_id and month_key(r.work_date) == key]
        working_days = count_working_days(
            year,
            mon,
            weekly_off=settings.weekly_off,
            holiday_dates={h.holiday_date for h in holidays},
        )

        present = sum(1 for r in month_records if r.in_time is not None and r.status in _PRESENT)
        half = sum(1 for r in month_records if r.status == AttendanceStatus.HALF_DAY)
        late = sum(1 for r in month_records if r.status in _LATE)
        absent = max(0, working_days - present - half)
        total_ot = sum(r.overtime_hours or 0.0 for r in month_records)
        total_hours = sum(r.hours_worked or 0.0 for r in month_records)

        salary = float(employee.salary or DEFAULT_SALARY)
        per_day = salary / working_days if working_days else 0.0
        daily_hours = employee.weekly_hours / 5 if employee.weekly_hours else DEFAULT_DAILY_HOURS
        per_hour = per_day / daily_hours

        salary_type = employee.salary_type or SalaryType.FIXED
        if salary_type == SalaryType.HOURLY:
            gross = total_hours * per_hour
        elif salary_type == SalaryType.DAILY:
            gross = (present + half * 0.5) * per_day
        else:
            gross = salary

        fixed = salary_type == SalaryType.FIXED
        absent_deduction = absent * per_day if fixed else 0.0
        half_day_deduction = half * per_day * 0.5 if fixed else 0.0
        late_penalty = late * (salary * float(settings.late_penalty_percent) / 100)
        overtime_pay = total_ot * float(employee.overtime_rate or DEFAULT_OVERTIME_RATE)

        total_deductions = absent_deduction + half_day_deduction + late_penalty
        return PayrollResult(
            employee=employee,
            month=key,
            total_working_days=working_days,
            present_days=present,
            half_days=half,
            absent_days=absent,
            late_days=late,
            total_overtime_hours=total_ot,
            total_hours_worked=total_hours,
            gross_salary=gross,
            basic=gross * 0.5,
            hra=gross * 0.2,
            allowances=gross * 0.3,
            absent_deduction=absent_deduction,
            half_day_deduction=half_day_deduction,
            late_penalty=late_penalty,
            overtime_pay=overtime_pay,
            total_deductions=total_deductions,
            net_salary=gross - total_deductions + overtime_pay,
        )
