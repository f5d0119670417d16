from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, ScanAction, ScanRejection


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    record_id: str
    employee_id: str
    work_date: date
    in_time: Optional[datetime]
    out_time: Optional[datetime]
    status: AttendanceStatus
    hours_worked: float = 0.0
    overtime_hours: float = 0.0
    manual: bool = False


@dataclass(frozen=True)
class ScanResult:
    """Classified outcome of one card scan.

    `record` is the record to upsert for CLOCK_IN/CLOCK_OUT; `employee_id`
    is set whenever the card resolved to an employee. `note` is the reason
    behind a late or half-day status.
    """

    action: ScanAction
    card_uid: str
    at: datetime
    record: Optional[AttendanceRecord] = None
    reason: Optional[ScanRejection] = None
    employee_id: Optional[str] = None
    note: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.action != ScanAction.REJECTED


@dataclass(frozen=True)
class ScanLogEntry:
    action: ScanAction
    at: datetime
    message: str
    employee_id: Optional[str] = None
    late: bool = False
    hours: Optional[float] = None
    note: Optional[str] = None
