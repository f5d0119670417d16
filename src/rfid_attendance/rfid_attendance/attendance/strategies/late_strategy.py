from __future__ import annotations

from datetime import date, datetime

from ...core.enums import AttendanceStatus
from ...settings.model import AttendanceSettings
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Clock-in after shift start plus grace."""

    def decide_checkin(self, *, now: datetime, today: date, settings: AttendanceSettings) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, note=f"after {settings.shift_start} +{settings.grace_period}m")

    def decide_checkout(self, *, hours: float, current: AttendanceStatus, settings: AttendanceSettings) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)
