from datetime import date, datetime

import pytest

from rfid_attendance.attendance.factory import AttendanceStrategyFactory
from rfid_attendance.attendance.strategies.half_day_strategy import HalfDayStrategy
from rfid_attendance.attendance.strategies.late_strategy import LateStrategy
from rfid_attendance.attendance.strategies.normal_strategy import NormalStrategy
from rfid_attendance.core.enums import AttendanceStatus
from rfid_attendance.settings.model import AttendanceSettings


def test_factory_checkin_on_time_within_grace():
    today = date(2026, 1, 6)
    now = datetime(2026, 1, 6, 9, 10, 0)

    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(now=now, today=today, settings=AttendanceSettings())

    assert isinstance(strategy, NormalStrategy)


def test_factory_checkin_late_after_grace():
    today = date(2026, 1, 6)
    now = datetime(2026, 1, 6, 9, 20, 0)

    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(now=now, today=today, settings=AttendanceSettings())

    assert isinstance(strategy, LateStrategy)


def test_factory_checkin_exactly_at_deadline_is_on_time():
    today = date(2026, 1, 6)
    now = datetime(2026, 1, 6, 9, 15, 0)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, today=today, settings=AttendanceSettings())

    assert isinstance(strategy, NormalStrategy)


def test_factory_grace_rolls_minutes_into_next_hour():
    settings = AttendanceSettings(shift_start="09:50", grace_period=15)
    today = date(2026, 1, 6)
    factory = AttendanceStrategyFactory()

    assert isinstance(factory.for_checkin(now=datetime(2026, 1, 6, 10, 4), today=today, settings=settings), NormalStrategy)
    assert isinstance(factory.for_checkin(now=datetime(2026, 1, 6, 10, 6), today=today, settings=settings), LateStrategy)


def test_factory_checkout_short_day_is_half_day_even_when_late():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkout(hours=3.0, current_status=AttendanceStatus.LATE, settings=AttendanceSettings())

    assert isinstance(strategy, HalfDayStrategy)
    decision = strategy.decide_checkout(hours=3.0, current=AttendanceStatus.LATE, settings=AttendanceSettings())
    assert decision.status == AttendanceStatus.HALF_DAY


def test_factory_checkout_keeps_late_mark():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkout(hours=8.0, current_status=AttendanceStatus.LATE, settings=AttendanceSettings())

    decision = strategy.decide_checkout(hours=8.0, current=AttendanceStatus.LATE, settings=AttendanceSettings())
    assert decision.status == AttendanceStatus.LATE


def test_normal_checkout_resets_other_statuses_to_present():
    decision = NormalStrategy().decide_checkout(
        hours=8.0, current=AttendanceStatus.LATE_HALF, settings=AttendanceSettings()
    )
    assert decision.status == AttendanceStatus.PRESENT


def test_half_day_strategy_only_decides_clock_outs():
    with pytest.raises(NotImplementedError):
        HalfDayStrategy().decide_checkin(now=datetime(2026, 1, 6, 9, 0), today=date(2026, 1, 6), settings=AttendanceSettings())
