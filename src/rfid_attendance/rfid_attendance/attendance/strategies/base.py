from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...settings.model import AttendanceSettings


@dataclass(frozen=True)
class StatusDecision:
    """Status for a record plus an optional human-readable reason."""

    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    def decide_checkin(self, *, now: datetime, today: date, settings: AttendanceSettings) -> StatusDecision:
        raise NotImplementedError(f"{type(self).__name__} only decides clock-outs")

    @abstractmethod
    def decide_checkout(self, *, hours: float, current: AttendanceStatus, settings: AttendanceSettings) -> StatusDecision:
        raise NotImplementedError
