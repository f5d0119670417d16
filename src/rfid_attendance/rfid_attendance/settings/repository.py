from __future__ import annotations

from typing import Optional, Protocol

from .model import AttendanceSettings, CompanyInfo, EmailConfig


class SettingsRepository(Protocol):
    async def load(self) -> Optional[AttendanceSettings]:
        raise NotImplementedError

    async def save(self, item: AttendanceSettings) -> None:
        raise NotImplementedError


class CompanyRepository(Protocol):
    async def load(self) -> Optional[CompanyInfo]:
        raise NotImplementedError

    async def save(self, item: CompanyInfo) -> None:
        raise NotImplementedError


class EmailConfigRepository(Protocol):
    async def load(self) -> Optional[EmailConfig]:
        raise NotImplementedError

    async def save(self, item: EmailConfig) -> None:
        raise NotImplementedError
