from __future__ import annotations

from dataclasses import dataclass

from ..employees.model import Employee


@dataclass(frozen=True)
class PayrollResult:
    """Monthly payroll figures for one employee. Derived, never stored."""

    employee: Employee
    month: str
    total_working_days: int
    present_days: int
    half_days: int
    absent_days: int
    late_days: int
    total_overtime_hours: float
    total_hours_worked: float
    gross_salary: float
    basic: float
    hra: float
    allowances: float
    absent_deduction: float
    half_day_deduction: float
    late_penalty: float
    overtime_pay: float
    total_deductions: float
    net_salary: float
