from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import month_key, now_local, parse_iso_date, week_bounds
from ..common.formatting import fmt_date, fmt_hours, fmt_time
from ..common.validators import require_non_empty
from ..cards.model import normalize_uid
from ..core.constants import SCAN_LOG_LIMIT
from ..core.enums import AttendanceStatus, AttendanceView, ScanAction, ScanRejection
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..payroll.calculator.standard_calculator import count_working_days
from ..settings.model import with_defaults
from ..state import AppState
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, ScanLogEntry, ScanResult
from .processor import build_manual_record, process_scan

logger = logging.getLogger(__name__)

_LATE_STATUSES = {AttendanceStatus.LATE, AttendanceStatus.LATE_HALF}


@dataclass(frozen=True)
class DashboardSummary:
    day: date
    total_employees: int
    present: int
    absent: int
    late: int
    overtime_hours: float


@dataclass(frozen=True)
class EmployeeSummary:
    month: str
    present: int
    absent: int
    leaves_remaining: int
    salary: float


class AttendanceService:
    def __init__(
        self,
        state: AppState,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        clock: Callable[[], datetime] = now_local,
        scan_log_limit: int = SCAN_LOG_LIMIT,
    ):
        self._state = state
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._clock = clock
        self._scan_log_limit = int(scan_log_limit)
        self._scan_log: list[ScanLogEntry] = []

    @property
    def scan_log(self) -> list[ScanLogEntry]:
        """Latest scan outcomes, newest first."""
        return list(self._scan_log)

    async def scan(self, card_uid: str, *, now: datetime | None = None) -> ScanResult:
        uid = normalize_uid(card_uid)
        if not uid:
            raise ValidationError("Card UID is required")
        now = now or self._clock()

        card = self._state.find_card(uid)
        employee_id = card.employee_id if card else None
        existing = self._state.find_record(employee_id, now.date()) if employee_id else None

        result = process_scan(
            uid,
            now,
            self._state.cards,
            self._state.employees,
            existing,
            self._state.settings,
            factory=self._factory,
        )

        if result.accepted and result.record is not None:
            await self._upsert(result.record)
            logger.info(
                "[scan] %s uid=%s employee=%s status=%s",
                result.action.value, uid, result.employee_id, result.record.status.value,
            )
        else:
            logger.info("[scan] rejected uid=%s reason=%s", uid, result.reason.value if result.reason else None)

        self._remember(result)
        return result

    async def _upsert(self, record: AttendanceRecord) -> None:
        items = list(self._state.attendance)
        for i, r in enumerate(items):
            if r.record_id == record.record_id:
                items[i] = record
                break
        else:
            items.append(record)
        await self._state.save_attendance(items)

    def _remember(self, result: ScanResult) -> None:
        employee = self._state.find_employee(result.employee_id)
        name = employee.name if employee else result.employee_id
        record = result.record
        late = False
        hours = None

        if result.action == ScanAction.CLOCK_IN:
            late = record is not None and record.status == AttendanceStatus.LATE
            message = f"{name} clocked in" + (" (late)" if late else "")
        elif result.action == ScanAction.CLOCK_OUT:
            hours = record.hours_worked if record else None
            message = f"{name} clocked out ({fmt_hours(hours or 0)}h)"
        elif result.reason == ScanRejection.UNKNOWN_CARD:
            message = f"Unknown card: {result.card_uid}"
        elif result.reason == ScanRejection.BLOCKED_CARD:
            message = "Card is BLOCKED"
        elif result.reason == ScanRejection.UNMAPPED_CARD:
            message = "Card not mapped to employee"
        else:
            message = f"{name} already clocked in & out today"

        entry = ScanLogEntry(
            action=result.action,
            at=result.at,
            message=message,
            employee_id=result.employee_id,
            late=late,
            hours=hours,
            note=result.note,
        )
        self._scan_log = [entry, *self._scan_log][: self._scan_log_limit]

    async def add_manual_entry(
        self,
        *,
        employee_id: str,
        work_date: str | date,
        in_time: str,
        out_time: str,
    ) -> AttendanceRecord:
        employee_id = require_non_empty(employee_id, "Employee")
        if isinstance(work_date, str):
            try:
                work_date = parse_iso_date(require_non_empty(work_date, "Date"))
            except ValueError:
                raise ValidationError(f"Invalid date (YYYY-MM-DD): {work_date!r}")
        if work_date is None:
            raise ValidationError("Date is required")
        if self._state.find_employee(employee_id) is None:
            raise ValidationError("Employee not found")

        record = build_manual_record(
            employee_id=employee_id,
            work_date=work_date,
            in_hhmm=in_time,
            out_hhmm=out_time,
            settings=self._state.settings,
        )
        if self._state.find_record(employee_id, work_date) is not None:
            # Manual entry is not deduplicated; reports count both records.
            logger.warning("[attendance] manual entry adds a second record for %s on %s", employee_id, work_date)

        await self._state.save_attendance([*self._state.attendance, record])
        logger.info("[attendance] manual entry %s for %s on %s", record.record_id, employee_id, work_date)
        return record

    def list_records(
        self,
        *,
        view: AttendanceView = AttendanceView.DAILY,
        selected_date: date,
        branch_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        own_employee_id: Optional[str] = None,
    ) -> list[AttendanceRecord]:
        """Filtered attendance, newest day first.

        `own_employee_id` restricts an employee to their own records.
        """
        data = list(self._state.attendance)
        if own_employee_id is not None:
            data = [a for a in data if a.employee_id == own_employee_id]
        if branch_id and branch_id != "all":
            branch_emps = {e.employee_id for e in self._state.employees if e.branch_id == branch_id}
            data = [a for a in data if a.employee_id in branch_emps]
        if employee_id and employee_id != "all":
            data = [a for a in data if a.employee_id == employee_id]

        if view == AttendanceView.DAILY:
            data = [a for a in data if a.work_date == selected_date]
        elif view == AttendanceView.WEEKLY:
            start, end = week_bounds(selected_date)
            data = [a for a in data if start <= a.work_date <= end]
        elif view == AttendanceView.MONTHLY:
            month = month_key(selected_date)
            data = [a for a in data if month_key(a.work_date) == month]

        data.sort(key=lambda a: (a.work_date, a.in_time or datetime.min), reverse=True)
        return data

    def dashboard(self, *, today: date | None = None) -> DashboardSummary:
        today = today or self._clock().date()
        todays = [a for a in self._state.attendance if a.work_date == today]
        present = [a for a in todays if a.in_time is not None]
        total = len(self._state.employees)
        return DashboardSummary(
            day=today,
            total_employees=total,
            present=len(present),
            absent=max(0, total - len(present)),
            late=sum(1 for a in todays if a.status in _LATE_STATUSES),
            overtime_hours=sum(a.overtime_hours or 0 for a in todays),
        )

    def employee_summary(self, employee: Employee, *, today: date | None = None) -> EmployeeSummary:
        """Month-to-date figures for an employee looking at their own dashboard."""
        today = today or self._clock().date()
        month = month_key(today)
        present = sum(
            1 for a in self._state.attendance
            if a.employee_id == employee.employee_id and month_key(a.work_date) == month and a.in_time is not None
        )
        settings = with_defaults(self._state.settings)
        working = count_working_days(
            today.year,
            today.month,
            weekly_off=settings.weekly_off,
            holiday_dates={h.holiday_date for h in self._state.holidays},
        )
        return EmployeeSummary(
            month=month,
            present=present,
            absent=max(0, working - present),
            leaves_remaining=employee.leave_count,
            salary=employee.salary,
        )

    def to_ui(self, r: AttendanceRecord) -> dict:
        employee = self._state.find_employee(r.employee_id)
        return {
            "id": r.record_id,
            "employee_id": r.employee_id,
            "employee": employee.name if employee else "Unknown",
            "emp_code": employee.emp_code if employee else "",
            "date": r.work_date.isoformat(),
            "date_label": fmt_date(r.work_date),
            "in_time": fmt_time(r.in_time),
            "out_time": fmt_time(r.out_time),
            "hours": fmt_hours(r.hours_worked) if r.hours_worked else "-",
            "overtime": fmt_hours(r.overtime_hours) if r.overtime_hours else "-",
            "status": r.status.value,
            "manual": r.manual,
        }
