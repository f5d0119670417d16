from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import (
    DEFAULT_LEAVE_COUNT,
    DEFAULT_OVERTIME_RATE,
    DEFAULT_SALARY,
    DEFAULT_SHIFT_END,
    DEFAULT_SHIFT_START,
    DEFAULT_WEEKLY_HOURS,
)
from ..core.enums import SalaryType


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object; cards, attendance and payroll refer to it by `employee_id`.
    """

    employee_id: str
    name: str
    emp_code: str
    branch_id: Optional[str] = None
    department: str = ""
    designation: str = ""
    phone: str = ""
    email: str = ""
    salary: float = DEFAULT_SALARY
    salary_type: SalaryType = SalaryType.FIXED
    overtime_rate: float = DEFAULT_OVERTIME_RATE
    weekly_hours: Optional[float] = DEFAULT_WEEKLY_HOURS
    shift_start: str = DEFAULT_SHIFT_START
    shift_end: str = DEFAULT_SHIFT_END
    joining_date: Optional[date] = None
    leave_count: int = DEFAULT_LEAVE_COUNT
    user_id: Optional[str] = None
