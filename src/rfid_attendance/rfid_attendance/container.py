from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.service import AttendanceService
from .branches.service import BranchService
from .cards.service import CardService
from .database.connection import DBConfig, DatabaseConnection
from .employees.service import EmployeeService
from .holidays.service import HolidayService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayrollService
from .reports.service import ReportService
from .settings.service import SettingsService
from .state import AppState
from .storage.kv import KeyValueStorage
from .storage.memory import InMemoryKeyValueStorage
from .storage.mysql_kv import MySQLKeyValueStorage
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    storage: KeyValueStorage
    state: AppState

    auth_service: AuthService
    user_service: UserService
    employee_service: EmployeeService
    card_service: CardService
    attendance_service: AttendanceService
    holiday_service: HolidayService
    branch_service: BranchService
    settings_service: SettingsService
    payroll_service: PayrollService
    report_service: ReportService


def build_storage(*, backend: str, db_config: Optional[dict] = None) -> KeyValueStorage:
    backend = (backend or "memory").strip().lower()
    if backend == "memory":
        return InMemoryKeyValueStorage()
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        return MySQLKeyValueStorage(conn)
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")


def build_container(*, storage: KeyValueStorage) -> Container:
    """Wire services around one shared state. Call `await container.state.load()` before serving."""
    state = AppState(storage)

    payroll_service = PayrollService(state, calculator=StandardPayrollCalculator())

    return Container(
        storage=storage,
        state=state,
        auth_service=AuthService(state),
        user_service=UserService(state),
        employee_service=EmployeeService(state),
        card_service=CardService(state),
        attendance_service=AttendanceService(state, strategy_factory=AttendanceStrategyFactory()),
        holiday_service=HolidayService(state),
        branch_service=BranchService(state),
        settings_service=SettingsService(state),
        payroll_service=payroll_service,
        report_service=ReportService(state, payroll_service),
    )
