from __future__ import annotations

from ..common.datetime_utils import parse_iso_date
from ..core.constants import (
    DEFAULT_LEAVE_COUNT,
    DEFAULT_OVERTIME_RATE,
    DEFAULT_SALARY,
    DEFAULT_SHIFT_END,
    DEFAULT_SHIFT_START,
    STORAGE_KEYS,
)
from ..core.enums import SalaryType
from ..storage.collection import KVCollectionRepository
from .model import Employee


class KVEmployeeRepository(KVCollectionRepository[Employee]):
    key = STORAGE_KEYS["employees"]

    def _to_dict(self, item: Employee) -> dict:
        return {
            "id": item.employee_id,
            "name": item.name,
            "empId": item.emp_code,
            "phone": item.phone,
            "email": item.email,
            "branchId": item.branch_id,
            "department": item.department,
            "designation": item.designation,
            "salary": item.salary,
            "salaryType": item.salary_type.value,
            "overtimeRate": item.overtime_rate,
            "workingHoursPerWeek": item.weekly_hours,
            "shiftStart": item.shift_start,
            "shiftEnd": item.shift_end,
            "joiningDate": item.joining_date.isoformat() if item.joining_date else None,
            "leaveCount": item.leave_count,
            "userId": item.user_id,
        }

    def _from_dict(self, data: dict) -> Employee:
        joining = data.get("joiningDate")
        weekly = data.get("workingHoursPerWeek")
        return Employee(
            employee_id=str(data["id"]),
            name=str(data.get("name") or ""),
            emp_code=str(data.get("empId") or ""),
            branch_id=data.get("branchId") or None,
            department=str(data.get("department") or ""),
            designation=str(data.get("designation") or ""),
            phone=str(data.get("phone") or ""),
            email=str(data.get("email") or ""),
            salary=float(data.get("salary") or DEFAULT_SALARY),
            salary_type=SalaryType(data.get("salaryType") or SalaryType.FIXED.value),
            overtime_rate=float(data.get("overtimeRate") or DEFAULT_OVERTIME_RATE),
            weekly_hours=float(weekly) if weekly else None,
            shift_start=str(data.get("shiftStart") or DEFAULT_SHIFT_START),
            shift_end=str(data.get("shiftEnd") or DEFAULT_SHIFT_END),
            joining_date=parse_iso_date(joining) if joining else None,
            leave_count=int(data.get("leaveCount") if data.get("leaveCount") is not None else DEFAULT_LEAVE_COUNT),
            user_id=data.get("userId") or None,
        )
