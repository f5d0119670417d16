from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.formatting import currency, fmt_hours
from ..common.validators import require_non_empty
from ..core.enums import SalaryType
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..state import AppState
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollRun:
    month: str
    results: list[PayrollResult]

    @property
    def total_expense(self) -> float:
        return sum(r.net_salary for r in self.results)


class PayrollService:
    """Read-side payroll over the loaded state; never mutates it."""

    def __init__(self, state: AppState, *, calculator: Optional[PayrollCalculator] = None):
        self._state = state
        self._calculator = calculator or StandardPayrollCalculator()

    def compute(self, employee: Employee, month: str) -> PayrollResult:
        return self._calculator.compute(
            employee,
            month,
            self._state.attendance,
            self._state.holidays,
            self._state.settings,
        )

    def run_month(self, month: str, *, branch_id: Optional[str] = None) -> PayrollRun:
        month = require_non_empty(month, "Month")
        employees = self._state.employees
        if branch_id and branch_id != "all":
            employees = [e for e in employees if e.branch_id == branch_id]
        results = [self.compute(e, month) for e in employees]
        logger.info("[payroll] %s computed for %s employees", month, len(results))
        return PayrollRun(month=results[0].month if results else month, results=results)

    def payslip(self, employee_id: str, month: str) -> PayrollResult:
        employee = self._state.find_employee(employee_id)
        if employee is None:
            raise ValidationError("Employee not found")
        return self.compute(employee, month)

    @staticmethod
    def to_ui(r: PayrollResult) -> dict:
        e = r.employee
        return {
            "employee_id": e.employee_id,
            "name": e.name,
            "emp_code": e.emp_code,
            "working_days": r.total_working_days,
            "present": r.present_days,
            "half_days": r.half_days,
            "absent": r.absent_days,
            "late": r.late_days,
            "overtime_hours": fmt_hours(r.total_overtime_hours),
            "deductions": currency(r.total_deductions),
            "overtime_pay": currency(r.overtime_pay),
            "net_salary": currency(r.net_salary),
        }

    @staticmethod
    def payslip_ui(r: PayrollResult) -> dict:
        e = r.employee
        return {
            "employee": {
                "name": e.name,
                "emp_code": e.emp_code,
                "department": e.department,
                "designation": e.designation,
                "salary_type": (e.salary_type or SalaryType.FIXED).value,
            },
            "month": r.month,
            "attendance": {
                "Total Working Days": r.total_working_days,
                "Present Days": r.present_days,
                "Half Days": r.half_days,
                "Absent Days": r.absent_days,
                "Late Days": r.late_days,
                "Overtime Hours": fmt_hours(r.total_overtime_hours),
                "Total Hours Worked": fmt_hours(r.total_hours_worked),
            },
            "earnings": {
                "Basic": currency(r.basic),
                "HRA": currency(r.hra),
                "Allowances": currency(r.allowances),
                "Overtime Pay": currency(r.overtime_pay),
            },
            "deductions": {
                "Absent Deduction": currency(r.absent_deduction),
                "Half Day Deduction": currency(r.half_day_deduction),
                "Late Penalty": currency(r.late_penalty),
            },
            "gross_salary": currency(r.gross_salary),
            "total_deductions": currency(r.total_deductions),
            "net_salary": currency(r.net_salary),
        }
