from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..cards.model import Card, normalize_uid
from ..common.datetime_utils import now_local, parse_clock_time, parse_iso_date
from ..common.ids import new_id
from ..common.validators import require_non_empty, require_number
from ..core.constants import (
    DEFAULT_EMPLOYEE_PASSWORD,
    DEFAULT_LEAVE_COUNT,
    DEFAULT_OVERTIME_RATE,
    DEFAULT_SALARY,
    DEFAULT_SHIFT_END,
    DEFAULT_SHIFT_START,
    DEFAULT_WEEKLY_HOURS,
)
from ..core.enums import Role, SalaryType
from ..core.exceptions import StorageError, ValidationError
from ..state import AppState
from ..users.model import User
from .model import Employee

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmployeeForm:
    """Validated employee input, as posted by the admin form."""

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
    rfid_uid: str = ""

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "EmployeeForm":
        def text(key: str) -> str:
            return str(data.get(key) or "").strip()

        try:
            salary_type = SalaryType(data.get("salaryType") or SalaryType.FIXED.value)
        except ValueError:
            raise ValidationError("Invalid salary type")

        shift_start = text("shiftStart") or DEFAULT_SHIFT_START
        shift_end = text("shiftEnd") or DEFAULT_SHIFT_END
        parse_clock_time(shift_start)
        parse_clock_time(shift_end)

        joining = text("joiningDate")
        try:
            joining_date = parse_iso_date(joining) if joining else None
        except ValueError:
            raise ValidationError(f"Invalid joining date: {joining!r}")

        weekly = data.get("workingHoursPerWeek")
        return cls(
            name=require_non_empty(data.get("name"), "Name"),
            emp_code=require_non_empty(data.get("empId"), "Employee ID"),
            branch_id=text("branchId") or None,
            department=text("department"),
            designation=text("designation"),
            phone=text("phone"),
            email=text("email"),
            salary=require_number(data.get("salary", DEFAULT_SALARY), "Salary", minimum=0),
            salary_type=salary_type,
            overtime_rate=require_number(data.get("overtimeRate", DEFAULT_OVERTIME_RATE), "Overtime rate", minimum=0),
            weekly_hours=require_number(weekly, "Working hours per week", minimum=0) if weekly not in (None, "") else None,
            shift_start=shift_start,
            shift_end=shift_end,
            joining_date=joining_date,
            leave_count=int(require_number(data.get("leaveCount", DEFAULT_LEAVE_COUNT), "Leave count", minimum=0)),
            rfid_uid=normalize_uid(text("rfidUid")),
        )


class EmployeeService:
    """Use case: manage employees together with their login account and cards."""

    def __init__(self, state: AppState):
        self._state = state

    def list_employees(self, *, search: str = "", branch_id: Optional[str] = None) -> list[Employee]:
        data = list(self._state.employees)
        if branch_id and branch_id != "all":
            data = [e for e in data if e.branch_id == branch_id]
        needle = (search or "").strip().lower()
        if needle:
            data = [
                e for e in data
                if needle in e.name.lower() or needle in e.emp_code.lower() or needle in e.department.lower()
            ]
        return data

    def get(self, employee_id: str) -> Employee:
        employee = self._state.find_employee(employee_id)
        if employee is None:
            raise ValidationError("Employee not found")
        return employee

    def for_user(self, user_id: str) -> Optional[Employee]:
        return next((e for e in self._state.employees if e.user_id == user_id), None)

    async def create(self, form: EmployeeForm) -> Employee:
        if any(e.emp_code.lower() == form.emp_code.lower() for e in self._state.employees):
            raise ValidationError("Employee ID already exists")
        username = form.emp_code.lower()
        if any(u.username == username for u in self._state.users):
            raise ValidationError("Username already exists")
        if form.rfid_uid and self._state.find_card(form.rfid_uid) is not None:
            raise ValidationError("Card already registered")

        user = User(
            user_id=new_id(),
            username=username,
            password=DEFAULT_EMPLOYEE_PASSWORD,
            name=form.name,
            role=Role.EMPLOYEE,
            branch_id=form.branch_id,
        )
        employee = self._build(new_id(), form, user_id=user.user_id)

        previous_users = list(self._state.users)
        previous_employees = list(self._state.employees)
        await self._state.save_users([*previous_users, user])
        try:
            await self._state.save_employees([*previous_employees, employee])
            if form.rfid_uid:
                await self._add_card(form.rfid_uid, employee.employee_id)
        except StorageError:
            # a failed create leaves neither the login nor the employee behind
            await self._restore(users=previous_users, employees=previous_employees)
            raise

        logger.info("[employees] created %s (%s) login=%s", employee.emp_code, employee.employee_id, username)
        return employee

    async def update(self, employee_id: str, form: EmployeeForm) -> Employee:
        current = self.get(employee_id)
        if any(
            e.emp_code.lower() == form.emp_code.lower() and e.employee_id != employee_id
            for e in self._state.employees
        ):
            raise ValidationError("Employee ID already exists")

        employee = self._build(employee_id, form, user_id=current.user_id)
        await self._state.save_employees([employee if e.employee_id == employee_id else e for e in self._state.employees])

        if form.rfid_uid:
            existing = self._state.find_card(form.rfid_uid)
            if existing is None:
                await self._add_card(form.rfid_uid, employee_id)
            elif existing.employee_id != employee_id:
                logger.warning("[employees] card %s already belongs to %s; not remapped", form.rfid_uid, existing.employee_id)
        return employee

    async def delete(self, employee_id: str) -> None:
        """Remove the employee, their cards and their login account. Attendance is kept."""
        employee = self.get(employee_id)
        await self._state.save_employees([e for e in self._state.employees if e.employee_id != employee_id])
        await self._state.save_cards([c for c in self._state.cards if c.employee_id != employee_id])
        if employee.user_id:
            await self._state.save_users([u for u in self._state.users if u.user_id != employee.user_id])
        logger.info("[employees] deleted %s (%s)", employee.emp_code, employee_id)

    async def _restore(self, *, users: list[User], employees: list[Employee]) -> None:
        try:
            if self._state.employees != employees:
                await self._state.save_employees(employees)
            await self._state.save_users(users)
        except StorageError:
            logger.exception("[employees] rollback after failed create did not complete")

    async def _add_card(self, uid: str, employee_id: str) -> None:
        card = Card(card_id=new_id(), uid=uid, employee_id=employee_id, blocked=False, registered_at=now_local())
        await self._state.save_cards([*self._state.cards, card])

    @staticmethod
    def _build(employee_id: str, form: EmployeeForm, *, user_id: Optional[str]) -> Employee:
        return Employee(
            employee_id=employee_id,
            name=form.name,
            emp_code=form.emp_code,
            branch_id=form.branch_id,
            department=form.department,
            designation=form.designation,
            phone=form.phone,
            email=form.email,
            salary=form.salary,
            salary_type=form.salary_type,
            overtime_rate=form.overtime_rate,
            weekly_hours=form.weekly_hours,
            shift_start=form.shift_start,
            shift_end=form.shift_end,
            joining_date=form.joining_date,
            leave_count=form.leave_count,
            user_id=user_id,
        )

    def to_ui(self, e: Employee) -> dict:
        cards = [c.uid for c in self._state.cards if c.employee_id == e.employee_id]
        branch = next((b for b in self._state.branches if b.branch_id == e.branch_id), None)
        return {
            "id": e.employee_id,
            "name": e.name,
            "empId": e.emp_code,
            "phone": e.phone,
            "email": e.email,
            "branchId": e.branch_id,
            "branch": branch.name if branch else None,
            "department": e.department,
            "designation": e.designation,
            "salary": e.salary,
            "salaryType": e.salary_type.value,
            "overtimeRate": e.overtime_rate,
            "workingHoursPerWeek": e.weekly_hours,
            "shiftStart": e.shift_start,
            "shiftEnd": e.shift_end,
            "joiningDate": e.joining_date.isoformat() if e.joining_date else None,
            "leaveCount": e.leave_count,
            "cards": cards,
        }
