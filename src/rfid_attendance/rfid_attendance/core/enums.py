from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role of the acting user."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Status stored on an attendance record."""

    PRESENT = "present"
    LATE = "late"
    HALF_DAY = "half-day"
    ABSENT = "absent"
    LATE_HALF = "late-half"


class SalaryType(str, Enum):
    FIXED = "Fixed"
    HOURLY = "Hourly"
    DAILY = "Daily"


class ScanAction(str, Enum):
    CLOCK_IN = "in"
    CLOCK_OUT = "out"
    REJECTED = "rejected"


class ScanRejection(str, Enum):
    """Why a scan did not produce a clock-in or clock-out.

    ALREADY_COMPLETE is informational: the day is already closed.
    """

    UNKNOWN_CARD = "UnknownCard"
    BLOCKED_CARD = "BlockedCard"
    UNMAPPED_CARD = "UnmappedCard"
    ALREADY_COMPLETE = "AlreadyComplete"


class ReportType(str, Enum):
    DAILY_ATTENDANCE = "daily-attendance"
    MONTHLY_ATTENDANCE = "monthly-attendance"
    LATE_REPORT = "late-report"
    OVERTIME_REPORT = "overtime-report"
    PAYROLL_REPORT = "payroll-report"


class AttendanceView(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
