from __future__ import annotations

from ..common.datetime_utils import format_timestamp, parse_iso_date, parse_timestamp
from ..core.constants import STORAGE_KEYS
from ..core.enums import AttendanceStatus
from ..storage.collection import KVCollectionRepository
from .model import AttendanceRecord


class KVAttendanceRepository(KVCollectionRepository[AttendanceRecord]):
    key = STORAGE_KEYS["attendance"]

    def _to_dict(self, item: AttendanceRecord) -> dict:
        data = {
            "id": item.record_id,
            "employeeId": item.employee_id,
            "date": item.work_date.isoformat(),
            "inTime": format_timestamp(item.in_time),
            "outTime": format_timestamp(item.out_time),
            "status": item.status.value,
            "hoursWorked": item.hours_worked,
            "overtimeHours": item.overtime_hours,
        }
        if item.manual:
            data["manual"] = True
        return data

    def _from_dict(self, data: dict) -> AttendanceRecord:
        return AttendanceRecord(
            record_id=str(data["id"]),
            employee_id=str(data["employeeId"]),
            work_date=parse_iso_date(data["date"]),
            in_time=parse_timestamp(data.get("inTime")),
            out_time=parse_timestamp(data.get("outTime")),
            status=AttendanceStatus(data.get("status") or AttendanceStatus.PRESENT.value),
            hours_worked=float(data.get("hoursWorked") or 0),
            overtime_hours=float(data.get("overtimeHours") or 0),
            manual=bool(data.get("manual", False)),
        )
