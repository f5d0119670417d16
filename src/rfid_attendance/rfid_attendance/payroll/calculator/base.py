from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from ...attendance.model import AttendanceRecord
from ...employees.model import Employee
from ...holidays.model import Holiday
from ...settings.model import AttendanceSettings
from ..model import PayrollResult


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute(
        self,
        employee: Employee,
        month: str,
        records: Iterable[AttendanceRecord],
        holidays: Iterable[Holiday],
        settings: Optional[AttendanceSettings],
    ) -> PayrollResult:
        raise NotImplementedError
