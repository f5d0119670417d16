from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..common.datetime_utils import at_offset
from ..core.enums import AttendanceStatus
from ..settings.model import AttendanceSettings
from .strategies.base import AttendanceStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, today: date, settings: AttendanceSettings) -> AttendanceStrategy:
        deadline = at_offset(today, settings.shift_start, extra_minutes=int(settings.grace_period))
        if now > deadline:
            return LateStrategy()
        return NormalStrategy()

    def for_checkout(self, *, hours: float, current_status: AttendanceStatus, settings: AttendanceSettings) -> AttendanceStrategy:
        if hours < float(settings.half_day_hours):
            return HalfDayStrategy()
        if current_status == AttendanceStatus.LATE:
            return LateStrategy()
        return NormalStrategy()
