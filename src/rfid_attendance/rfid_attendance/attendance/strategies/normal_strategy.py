from __future__ import annotations

from datetime import date, datetime

from ...core.enums import AttendanceStatus
from ...settings.model import AttendanceSettings
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """On-time clock-in; clock-out keeps a late mark, anything else is present."""

    def decide_checkin(self, *, now: datetime, today: date, settings: AttendanceSettings) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(self, *, hours: float, current: AttendanceStatus, settings: AttendanceSettings) -> StatusDecision:
        if current == AttendanceStatus.LATE:
            return StatusDecision(status=AttendanceStatus.LATE)
        return StatusDecision(status=AttendanceStatus.PRESENT)
