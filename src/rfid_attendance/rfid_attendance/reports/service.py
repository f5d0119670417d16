from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.datetime_utils import month_key, parse_month
from ..common.formatting import currency, fmt_date, fmt_hours, fmt_time
from ..core.constants import DEFAULT_OVERTIME_RATE
from ..core.enums import AttendanceStatus, ReportType
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..payroll.service import PayrollService
from ..state import AppState
from .model import Report

logger = logging.getLogger(__name__)

DAILY_COLUMNS = ["Name", "Emp ID", "Department", "In Time", "Out Time", "Hours", "Status"]
MONTHLY_COLUMNS = ["Name", "Emp ID", "Present", "Half Days", "Late", "Total Hours", "OT Hours"]
LATE_COLUMNS = ["Name", "Emp ID", "Late Days", "Dates"]
OVERTIME_COLUMNS = ["Name", "Emp ID", "OT Hours", "OT Pay"]
PAYROLL_COLUMNS = ["Name", "Emp ID", "Salary", "Present", "Absent", "Deductions", "OT Pay", "Net Pay"]


class ReportService:
    """Builds report tables from the loaded state. Pure reads."""

    def __init__(self, state: AppState, payroll: PayrollService):
        self._state = state
        self._payroll = payroll

    def generate(
        self,
        report_type: ReportType | str,
        *,
        selected_date: Optional[date] = None,
        month: Optional[str] = None,
        branch_id: Optional[str] = None,
    ) -> Report:
        try:
            report_type = ReportType(report_type)
        except ValueError:
            raise ValidationError(f"Unknown report type: {report_type!r}")

        employees = self._employees(branch_id)
        if report_type == ReportType.DAILY_ATTENDANCE:
            if selected_date is None:
                raise ValidationError("Date is required")
            report = self.daily_attendance(employees, selected_date)
        else:
            if not month:
                raise ValidationError("Month is required")
            year, mon = parse_month(month)
            month = f"{year:04d}-{mon:02d}"
            builder = {
                ReportType.MONTHLY_ATTENDANCE: self.monthly_attendance,
                ReportType.LATE_REPORT: self.late_report,
                ReportType.OVERTIME_REPORT: self.overtime_report,
                ReportType.PAYROLL_REPORT: self.payroll_report,
            }[report_type]
            report = builder(employees, month)

        logger.info("[report] %s rows=%s", report.title, len(report.rows))
        return report

    def _employees(self, branch_id: Optional[str]) -> list[Employee]:
        if branch_id and branch_id != "all":
            return [e for e in self._state.employees if e.branch_id == branch_id]
        return list(self._state.employees)

    def _month_records(self, employee: Employee, month: str):
        return [
            a for a in self._state.attendance
            if a.employee_id == employee.employee_id and month_key(a.work_date) == month
        ]

    def daily_attendance(self, employees: list[Employee], day: date) -> Report:
        rows = []
        for emp in employees:
            att = self._state.find_record(emp.employee_id, day)
            rows.append(
                {
                    "Name": emp.name,
                    "Emp ID": emp.emp_code,
                    "Department": emp.department,
                    "In Time": fmt_time(att.in_time) if att and att.in_time else "Absent",
                    "Out Time": fmt_time(att.out_time) if att and att.out_time else "-",
                    "Hours": fmt_hours(att.hours_worked) if att else "-",
                    "Status": att.status.value if att else AttendanceStatus.ABSENT.value,
                }
            )
        return Report(title=f"Daily Attendance Report - {fmt_date(day)}", columns=DAILY_COLUMNS, rows=rows)

    def monthly_attendance(self, employees: list[Employee], month: str) -> Report:
        rows = []
        for emp in employees:
            recs = self._month_records(emp, month)
            rows.append(
                {
                    "Name": emp.name,
                    "Emp ID": emp.emp_code,
                    "Present": sum(1 for a in recs if a.status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE)),
                    "Half Days": sum(1 for a in recs if a.status == AttendanceStatus.HALF_DAY),
                    "Late": sum(1 for a in recs if a.status == AttendanceStatus.LATE),
                    "Total Hours": fmt_hours(sum(a.hours_worked or 0 for a in recs)),
                    "OT Hours": fmt_hours(sum(a.overtime_hours or 0 for a in recs)),
                }
            )
        return Report(title=f"Monthly Attendance Report - {month}", columns=MONTHLY_COLUMNS, rows=rows)

    def late_report(self, employees: list[Employee], month: str) -> Report:
        rows = []
        for emp in employees:
            late = [
                a for a in self._month_records(emp, month)
                if a.status in (AttendanceStatus.LATE, AttendanceStatus.LATE_HALF)
            ]
            if not late:
                continue
            rows.append(
                {
                    "Name": emp.name,
                    "Emp ID": emp.emp_code,
                    "Late Days": len(late),
                    "Dates": ", ".join(fmt_date(a.work_date) for a in late),
                }
            )
        return Report(title=f"Late Report - {month}", columns=LATE_COLUMNS, rows=rows)

    def overtime_report(self, employees: list[Employee], month: str) -> Report:
        rows = []
        for emp in employees:
            total_ot = sum(a.overtime_hours or 0 for a in self._month_records(emp, month))
            # compared at the 1dp shown in the row
            if float(fmt_hours(total_ot)) <= 0:
                continue
            rows.append(
                {
                    "Name": emp.name,
                    "Emp ID": emp.emp_code,
                    "OT Hours": fmt_hours(total_ot),
                    "OT Pay": currency(total_ot * float(emp.overtime_rate or DEFAULT_OVERTIME_RATE)),
                }
            )
        return Report(title=f"Overtime Report - {month}", columns=OVERTIME_COLUMNS, rows=rows)

    def payroll_report(self, employees: list[Employee], month: str) -> Report:
        rows = []
        for emp in employees:
            p = self._payroll.compute(emp, month)
            rows.append(
                {
                    "Name": emp.name,
                    "Emp ID": emp.emp_code,
                    "Salary": currency(emp.salary),
                    "Present": p.present_days,
                    "Absent": p.absent_days,
                    "Deductions": currency(p.total_deductions),
                    "OT Pay": currency(p.overtime_pay),
                    "Net Pay": currency(p.net_salary),
                }
            )
        return Report(title=f"Payroll Report - {month}", columns=PAYROLL_COLUMNS, rows=rows)
