from __future__ import annotations

from ..core.constants import DEFAULT_COMPANY_NAME, STORAGE_KEYS
from ..storage.collection import KVDocumentRepository
from .model import AttendanceSettings, CompanyInfo, EmailConfig

_DEFAULTS = AttendanceSettings()


def _or_default(data: dict, key: str, default):
    value = data.get(key)
    return default if value is None else value


class KVSettingsRepository(KVDocumentRepository[AttendanceSettings]):
    key = STORAGE_KEYS["settings"]

    def _to_dict(self, item: AttendanceSettings) -> dict:
        return {
            "gracePeriod": item.grace_period,
            "weeklyOff": list(item.weekly_off),
            "shiftStart": item.shift_start,
            "shiftEnd": item.shift_end,
            "halfDayHours": item.half_day_hours,
            "fullDayHours": item.full_day_hours,
            "overtimeAfter": item.overtime_after,
            "latePenaltyPercent": item.late_penalty_percent,
        }

    def _from_dict(self, data: dict) -> AttendanceSettings:
        return AttendanceSettings(
            grace_period=int(_or_default(data, "gracePeriod", _DEFAULTS.grace_period)),
            shift_start=str(_or_default(data, "shiftStart", _DEFAULTS.shift_start)),
            shift_end=str(_or_default(data, "shiftEnd", _DEFAULTS.shift_end)),
            half_day_hours=float(_or_default(data, "halfDayHours", _DEFAULTS.half_day_hours)),
            full_day_hours=float(_or_default(data, "fullDayHours", _DEFAULTS.full_day_hours)),
            overtime_after=float(_or_default(data, "overtimeAfter", _DEFAULTS.overtime_after)),
            late_penalty_percent=float(_or_default(data, "latePenaltyPercent", _DEFAULTS.late_penalty_percent)),
            weekly_off=tuple(int(d) for d in _or_default(data, "weeklyOff", _DEFAULTS.weekly_off)),
        )


class KVCompanyRepository(KVDocumentRepository[CompanyInfo]):
    key = STORAGE_KEYS["company"]

    def _to_dict(self, item: CompanyInfo) -> dict:
        return {"name": item.name, "address": item.address, "logo": item.logo}

    def _from_dict(self, data: dict) -> CompanyInfo:
        return CompanyInfo(
            name=str(data.get("name") or DEFAULT_COMPANY_NAME),
            address=str(data.get("address") or ""),
            logo=str(data.get("logo") or ""),
        )


class KVEmailConfigRepository(KVDocumentRepository[EmailConfig]):
    key = STORAGE_KEYS["email_config"]

    def _to_dict(self, item: EmailConfig) -> dict:
        return {
            "smtp": item.smtp,
            "port": item.port,
            "email": item.email,
            "password": item.password,
            "recipients": list(item.recipients),
            "schedule": item.schedule,
            "time": item.time,
        }

    def _from_dict(self, data: dict) -> EmailConfig:
        defaults = EmailConfig()
        return EmailConfig(
            smtp=str(data.get("smtp") or defaults.smtp),
            port=int(data.get("port") or defaults.port),
            email=str(data.get("email") or ""),
            password=str(data.get("password") or ""),
            recipients=tuple(str(r) for r in data.get("recipients") or ()),
            schedule=str(data.get("schedule") or defaults.schedule),
            time=str(data.get("time") or defaults.time),
        )
