from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from .attendance.kv_attendance_repository import KVAttendanceRepository
from .attendance.model import AttendanceRecord
from .attendance.repository import AttendanceRepository
from .branches.kv_branch_repository import KVBranchRepository
from .branches.model import Branch
from .branches.repository import BranchRepository
from .cards.kv_card_repository import KVCardRepository
from .cards.model import Card
from .cards.repository import CardRepository
from .core.constants import (
    DEFAULT_ADMIN_ID,
    DEFAULT_ADMIN_NAME,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USERNAME,
    DEFAULT_BRANCH_ADDRESS,
    DEFAULT_BRANCH_ID,
    DEFAULT_BRANCH_NAME,
    STORAGE_KEYS,
)
from .core.enums import Role
from .core.exceptions import StorageError
from .employees.kv_employee_repository import KVEmployeeRepository
from .employees.model import Employee
from .employees.repository import EmployeeRepository
from .holidays.kv_holiday_repository import KVHolidayRepository
from .holidays.model import Holiday
from .holidays.repository import HolidayRepository
from .settings.kv_settings_repository import KVCompanyRepository, KVEmailConfigRepository, KVSettingsRepository
from .settings.model import AttendanceSettings, CompanyInfo, EmailConfig
from .settings.repository import CompanyRepository, EmailConfigRepository, SettingsRepository
from .storage.kv import KeyValueStorage
from .users.kv_user_repository import KVUserRepository
from .users.model import User
from .users.repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repositories:
    users: UserRepository
    employees: EmployeeRepository
    branches: BranchRepository
    cards: CardRepository
    attendance: AttendanceRepository
    holidays: HolidayRepository
    settings: SettingsRepository
    company: CompanyRepository
    email_config: EmailConfigRepository


def build_repositories(storage: KeyValueStorage) -> Repositories:
    return Repositories(
        users=KVUserRepository(storage),
        employees=KVEmployeeRepository(storage),
        branches=KVBranchRepository(storage),
        cards=KVCardRepository(storage),
        attendance=KVAttendanceRepository(storage),
        holidays=KVHolidayRepository(storage),
        settings=KVSettingsRepository(storage),
        company=KVCompanyRepository(storage),
        email_config=KVEmailConfigRepository(storage),
    )


class AppState:
    """In-memory snapshot of every stored collection.

    Loaded once with `load()`. Each `save_*` writes the whole collection
    first and replaces the snapshot only after the write succeeded, so a
    failed write (StorageError) leaves memory matching the last good state.
    """

    def __init__(self, storage: KeyValueStorage, repos: Optional[Repositories] = None):
        self._storage = storage
        self._repos = repos or build_repositories(storage)
        self._clear()

    def _clear(self) -> None:
        self.users: list[User] = []
        self.employees: list[Employee] = []
        self.branches: list[Branch] = []
        self.cards: list[Card] = []
        self.attendance: list[AttendanceRecord] = []
        self.holidays: list[Holiday] = []
        self.settings = AttendanceSettings()
        self.company = CompanyInfo()
        self.email_config = EmailConfig()
        self.loaded = False

    async def load(self) -> None:
        r = self._repos
        (
            users,
            employees,
            branches,
            cards,
            attendance,
            holidays,
            settings,
            company,
            email_config,
        ) = await asyncio.gather(
            r.users.load_all(),
            r.employees.load_all(),
            r.branches.load_all(),
            r.cards.load_all(),
            r.attendance.load_all(),
            r.holidays.load_all(),
            r.settings.load(),
            r.company.load(),
            r.email_config.load(),
        )
        self.employees = employees
        self.cards = cards
        self.attendance = attendance
        self.holidays = holidays
        self.settings = settings or AttendanceSettings()
        self.company = company or CompanyInfo()
        self.email_config = email_config or EmailConfig()

        if not users:
            users = [
                User(
                    user_id=DEFAULT_ADMIN_ID,
                    username=DEFAULT_ADMIN_USERNAME,
                    password=DEFAULT_ADMIN_PASSWORD,
                    name=DEFAULT_ADMIN_NAME,
                    role=Role.SUPER_ADMIN,
                    branch_id=DEFAULT_BRANCH_ID,
                )
            ]
            await r.users.save_all(users)
            logger.info("[state] seeded default super admin %r", DEFAULT_ADMIN_USERNAME)
        self.users = users

        if not branches:
            branches = [Branch(branch_id=DEFAULT_BRANCH_ID, name=DEFAULT_BRANCH_NAME, address=DEFAULT_BRANCH_ADDRESS)]
            await r.branches.save_all(branches)
        self.branches = branches

        self.loaded = True
        logger.info(
            "[state] loaded employees=%s cards=%s attendance=%s holidays=%s",
            len(self.employees), len(self.cards), len(self.attendance), len(self.holidays),
        )

    async def save_users(self, items: Iterable[User]) -> None:
        items = list(items)
        await self._repos.users.save_all(items)
        self.users = items

    async def save_employees(self, items: Iterable[Employee]) -> None:
        items = list(items)
        await self._repos.employees.save_all(items)
        self.employees = items

    async def save_branches(self, items: Iterable[Branch]) -> None:
        items = list(items)
        await self._repos.branches.save_all(items)
        self.branches = items

    async def save_cards(self, items: Iterable[Card]) -> None:
        items = list(items)
        await self._repos.cards.save_all(items)
        self.cards = items

    async def save_attendance(self, items: Iterable[AttendanceRecord]) -> None:
        items = list(items)
        await self._repos.attendance.save_all(items)
        self.attendance = items

    async def save_holidays(self, items: Iterable[Holiday]) -> None:
        items = list(items)
        await self._repos.holidays.save_all(items)
        self.holidays = items

    async def save_settings(self, item: AttendanceSettings) -> None:
        await self._repos.settings.save(item)
        self.settings = item

    async def save_company(self, item: CompanyInfo) -> None:
        await self._repos.company.save(item)
        self.company = item

    async def save_email_config(self, item: EmailConfig) -> None:
        await self._repos.email_config.save(item)
        self.email_config = item

    async def reset(self) -> None:
        """Delete every stored key and reload defaults.

        Every key is attempted. Memory is reloaded from whatever storage now
        holds, then StorageError is raised if any delete failed.
        """
        failed = [key for key in STORAGE_KEYS.values() if not await self._storage.delete(key)]
        self._clear()
        await self.load()
        if failed:
            raise StorageError(f"Failed to delete {', '.join(failed)}")
        logger.warning("[state] all stored data deleted")

    # lookups

    def find_employee(self, employee_id: Optional[str]) -> Optional[Employee]:
        return next((e for e in self.employees if e.employee_id == employee_id), None)

    def find_card(self, uid: str) -> Optional[Card]:
        return next((c for c in self.cards if c.uid == uid), None)

    def find_record(self, employee_id: str, work_date) -> Optional[AttendanceRecord]:
        return next(
            (a for a in self.attendance if a.employee_id == employee_id and a.work_date == work_date),
            None,
        )
