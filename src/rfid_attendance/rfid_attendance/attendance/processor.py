from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Iterable, Optional

from ..cards.model import Card, normalize_uid
from ..common.datetime_utils import at_clock_time
from ..common.formatting import round2
from ..common.ids import new_id
from ..core.enums import AttendanceStatus, ScanAction, ScanRejection
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..settings.model import AttendanceSettings, with_defaults
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, ScanResult


def _hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def process_scan(
    card_uid: str,
    now: datetime,
    cards: Iterable[Card],
    employees: Iterable[Employee],
    existing_record: Optional[AttendanceRecord],
    settings: Optional[AttendanceSettings],
    *,
    factory: Optional[AttendanceStrategyFactory] = None,
    id_factory: Callable[[], str] = new_id,
) -> ScanResult:
    """Classify one scan and build the record it produces.

    Pure: nothing is persisted here. `existing_record` is the employee's
    record for the local date of `now`, if any.

    - no record, or a record without inTime -> CLOCK_IN (present/late)
    - record with inTime and no outTime -> CLOCK_OUT (hours, overtime, status)
    - complete record -> REJECTED(ALREADY_COMPLETE), record unchanged
    """
    uid = normalize_uid(card_uid)
    card = next((c for c in cards if c.uid == uid), None)
    if card is None:
        return ScanResult(action=ScanAction.REJECTED, card_uid=uid, at=now, reason=ScanRejection.UNKNOWN_CARD)
    if card.blocked:
        return ScanResult(
            action=ScanAction.REJECTED,
            card_uid=uid,
            at=now,
            reason=ScanRejection.BLOCKED_CARD,
            employee_id=card.employee_id,
        )

    employee = next((e for e in employees if card.employee_id and e.employee_id == card.employee_id), None)
    if employee is None:
        return ScanResult(action=ScanAction.REJECTED, card_uid=uid, at=now, reason=ScanRejection.UNMAPPED_CARD)

    settings = with_defaults(settings)
    factory = factory or AttendanceStrategyFactory()
    today = now.date()

    if existing_record is None or existing_record.in_time is None:
        strategy = factory.for_checkin(now=now, today=today, settings=settings)
        decision = strategy.decide_checkin(now=now, today=today, settings=settings)
        if existing_record is None:
            record = AttendanceRecord(
                record_id=id_factory(),
                employee_id=employee.employee_id,
                work_date=today,
                in_time=now,
                out_time=None,
                status=decision.status,
            )
        else:
            record = replace(
                existing_record,
                employee_id=employee.employee_id,
                work_date=today,
                in_time=now,
                out_time=None,
                status=decision.status,
                hours_worked=0.0,
                overtime_hours=0.0,
            )
        return ScanResult(
            action=ScanAction.CLOCK_IN,
            card_uid=uid,
            at=now,
            record=record,
            employee_id=employee.employee_id,
            note=decision.note,
        )

    if existing_record.out_time is None:
        hours = _hours_between(existing_record.in_time, now)
        strategy = factory.for_checkout(hours=hours, current_status=existing_record.status, settings=settings)
        decision = strategy.decide_checkout(hours=hours, current=existing_record.status, settings=settings)
        record = replace(
            existing_record,
            out_time=now,
            hours_worked=round2(hours),
            overtime_hours=round2(max(0.0, hours - float(settings.overtime_after))),
            status=decision.status,
        )
        return ScanResult(
            action=ScanAction.CLOCK_OUT,
            card_uid=uid,
            at=now,
            record=record,
            employee_id=employee.employee_id,
            note=decision.note,
        )

    return ScanResult(
        action=ScanAction.REJECTED,
        card_uid=uid,
        at=now,
        record=existing_record,
        reason=ScanRejection.ALREADY_COMPLETE,
        employee_id=employee.employee_id,
    )


def build_manual_record(
    *,
    employee_id: str,
    work_date: date,
    in_hhmm: str,
    out_hhmm: str,
    settings: Optional[AttendanceSettings],
    id_factory: Callable[[], str] = new_id,
) -> AttendanceRecord:
    """Administrator-entered record; always two-sided and `present`."""
    settings = with_defaults(settings)
    in_time = at_clock_time(work_date, in_hhmm)
    out_time = at_clock_time(work_date, out_hhmm)
    if out_time < in_time:
        raise ValidationError("Out time must not be before in time")

    hours = _hours_between(in_time, out_time)
    return AttendanceRecord(
        record_id=id_factory(),
        employee_id=employee_id,
        work_date=work_date,
        in_time=in_time,
        out_time=out_time,
        status=AttendanceStatus.PRESENT,
        hours_worked=round2(hours),
        overtime_hours=max(0.0, round2(hours - float(settings.overtime_after))),
        manual=True,
    )
