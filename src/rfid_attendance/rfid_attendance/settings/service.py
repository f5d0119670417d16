from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable

from ..common.datetime_utils import parse_clock_time
from ..common.validators import require_non_empty, require_number
from ..core.exceptions import ValidationError
from ..state import AppState
from .model import AttendanceSettings, CompanyInfo, EmailConfig

logger = logging.getLogger(__name__)

WEEK_DAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def _weekly_off(values: Iterable[Any]) -> tuple[int, ...]:
    days = []
    for v in values:
        day = int(require_number(v, "Weekly off day", minimum=0))
        if day > 6:
            raise ValidationError("Weekly off day must be 0 (Sunday) .. 6 (Saturday)")
        if day not in days:
            days.append(day)
    return tuple(days)


class SettingsService:
    """Use case: company info, attendance rules, mail setup and full reset (super admin)."""

    def __init__(self, state: AppState):
        self._state = state

    @property
    def settings(self) -> AttendanceSettings:
        return self._state.settings

    @property
    def company(self) -> CompanyInfo:
        return self._state.company

    @property
    def email_config(self) -> EmailConfig:
        return self._state.email_config

    async def save_settings(self, data: dict[str, Any]) -> AttendanceSettings:
        """Merge posted fields (camelCase, as stored) into the current settings."""
        current = self._state.settings
        shift_start = str(data.get("shiftStart") or current.shift_start).strip()
        shift_end = str(data.get("shiftEnd") or current.shift_end).strip()
        parse_clock_time(shift_start)
        parse_clock_time(shift_end)

        def number(key: str, default: float, label: str) -> float:
            value = data.get(key)
            return default if value in (None, "") else require_number(value, label, minimum=0)

        weekly = data.get("weeklyOff")
        settings = AttendanceSettings(
            grace_period=int(number("gracePeriod", current.grace_period, "Grace period")),
            shift_start=shift_start,
            shift_end=shift_end,
            half_day_hours=number("halfDayHours", current.half_day_hours, "Half day hours"),
            full_day_hours=number("fullDayHours", current.full_day_hours, "Full day hours"),
            overtime_after=number("overtimeAfter", current.overtime_after, "Overtime after"),
            late_penalty_percent=number("latePenaltyPercent", current.late_penalty_percent, "Late penalty percent"),
            weekly_off=_weekly_off(weekly) if weekly is not None else current.weekly_off,
        )
        await self._state.save_settings(settings)
        logger.info("[settings] saved shift=%s-%s grace=%s", settings.shift_start, settings.shift_end, settings.grace_period)
        return settings

    async def toggle_weekly_off(self, day: int) -> AttendanceSettings:
        day = _weekly_off([day])[0]
        offs = self._state.settings.weekly_off
        updated = tuple(d for d in offs if d != day) if day in offs else (*offs, day)
        settings = replace(self._state.settings, weekly_off=updated)
        await self._state.save_settings(settings)
        return settings

    async def save_company(self, *, name: str, address: str = "", logo: str = "") -> CompanyInfo:
        company = CompanyInfo(name=require_non_empty(name, "Company name"), address=(address or "").strip(), logo=logo or "")
        await self._state.save_company(company)
        return company

    async def save_email_config(self, data: dict[str, Any]) -> EmailConfig:
        current = self._state.email_config
        recipients: list[str] = []
        for r in data.get("recipients", current.recipients) or ():
            r = str(r).strip()
            if r and r not in recipients:
                recipients.append(r)

        port = data.get("port")
        config = EmailConfig(
            smtp=str(data.get("smtp") or current.smtp).strip(),
            port=int(require_number(port, "Port", minimum=1)) if port not in (None, "") else current.port,
            email=str(data.get("email", current.email) or "").strip(),
            password=str(data.get("password", current.password) or ""),
            recipients=tuple(recipients),
            schedule=str(data.get("schedule") or current.schedule),
            time=str(data.get("time") or current.time),
        )
        parse_clock_time(config.time)
        await self._state.save_email_config(config)
        return config

    async def reset_all(self) -> None:
        logger.warning("[settings] full reset requested")
        await self._state.reset()

    @staticmethod
    def settings_to_ui(s: AttendanceSettings) -> dict:
        return {
            "gracePeriod": s.grace_period,
            "shiftStart": s.shift_start,
            "shiftEnd": s.shift_end,
            "halfDayHours": s.half_day_hours,
            "fullDayHours": s.full_day_hours,
            "overtimeAfter": s.overtime_after,
            "latePenaltyPercent": s.late_penalty_percent,
            "weeklyOff": list(s.weekly_off),
            "weeklyOffNames": [WEEK_DAYS[d] for d in s.weekly_off if 0 <= d <= 6],
        }

    @staticmethod
    def email_to_ui(c: EmailConfig) -> dict:
        return {
            "smtp": c.smtp,
            "port": c.port,
            "email": c.email,
            "recipients": list(c.recipients),
            "schedule": c.schedule,
            "time": c.time,
        }
