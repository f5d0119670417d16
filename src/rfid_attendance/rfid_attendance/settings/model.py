from __future__ import annotations

from dataclasses import dataclass, field, fields, replace

from ..core.constants import (
    DEFAULT_COMPANY_ADDRESS,
    DEFAULT_COMPANY_NAME,
    DEFAULT_FULL_DAY_HOURS,
    DEFAULT_GRACE_PERIOD_MINUTES,
    DEFAULT_HALF_DAY_HOURS,
    DEFAULT_LATE_PENALTY_PERCENT,
    DEFAULT_OVERTIME_AFTER_HOURS,
    DEFAULT_SHIFT_END,
    DEFAULT_SHIFT_START,
    DEFAULT_WEEKLY_OFF,
)


@dataclass(frozen=True)
class AttendanceSettings:
    """Global attendance/payroll parameters.

    `full_day_hours` is kept as a labelled constant; nothing computes with it.
    """

    grace_period: int = DEFAULT_GRACE_PERIOD_MINUTES
    shift_start: str = DEFAULT_SHIFT_START
    shift_end: str = DEFAULT_SHIFT_END
    half_day_hours: float = DEFAULT_HALF_DAY_HOURS
    full_day_hours: float = DEFAULT_FULL_DAY_HOURS
    overtime_after: float = DEFAULT_OVERTIME_AFTER_HOURS
    late_penalty_percent: float = DEFAULT_LATE_PENALTY_PERCENT
    weekly_off: tuple[int, ...] = DEFAULT_WEEKLY_OFF


@dataclass(frozen=True)
class CompanyInfo:
    name: str = DEFAULT_COMPANY_NAME
    address: str = DEFAULT_COMPANY_ADDRESS
    logo: str = ""


@dataclass(frozen=True)
class EmailConfig:
    """Report mail settings. Stored for the operator; nothing sends mail."""

    smtp: str = "smtp.gmail.com"
    port: int = 587
    email: str = ""
    password: str = ""
    recipients: tuple[str, ...] = field(default_factory=tuple)
    schedule: str = "daily"
    time: str = "21:00"


def with_defaults(settings: AttendanceSettings | None) -> AttendanceSettings:
    """Replace missing (None) settings with their defaults."""
    if settings is None:
        return AttendanceSettings()
    defaults = AttendanceSettings()
    missing = {f.name: getattr(defaults, f.name) for f in fields(settings) if getattr(settings, f.name) is None}
    return replace(settings, **missing) if missing else settings
