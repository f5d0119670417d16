from __future__ import annotations

from ...core.enums import AttendanceStatus
from ...settings.model import AttendanceSettings
from .base import AttendanceStrategy, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    """Clock-out below the half-day threshold; wins over a late mark."""

    def decide_checkout(self, *, hours: float, current: AttendanceStatus, settings: AttendanceSettings) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY, note=f"{hours:.2f}h < {settings.half_day_hours:g}h")
