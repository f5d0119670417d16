from __future__ import annotations

import asyncio
from datetime import datetime

import pytest

from rfid_attendance.employees.model import Employee
from rfid_attendance.state import AppState
from rfid_attendance.storage.memory import InMemoryKeyValueStorage


class FlakyStorage(InMemoryKeyValueStorage):
    """In-memory store whose writes and deletes can be switched off.

    `fail_writes` fails every write; `fail_keys` fails writes to those keys only.
    """

    def __init__(self, initial=None):
        super().__init__(initial)
        self.fail_writes = False
        self.fail_keys: set[str] = set()
        self.fail_deletes: set[str] = set()

    async def _write(self, key: str, text: str) -> None:
        if self.fail_writes or key in self.fail_keys:
            raise OSError("storage offline")
        await super()._write(key, text)

    async def _remove(self, key: str) -> None:
        if key in self.fail_deletes:
            raise OSError("storage offline")
        await super()._remove(key)


@pytest.fixture
def fixed_now():
    # Tuesday
    return datetime(2026, 1, 6, 9, 0, 0)


@pytest.fixture
def storage():
    return FlakyStorage()


@pytest.fixture
def state(storage):
    s = AppState(storage)
    asyncio.run(s.load())
    return s


def _make_employee(employee_id: str = "e1", **kwargs) -> Employee:
    defaults = dict(name=f"Emp {employee_id}", emp_code=f"EMP{employee_id.upper()}", branch_id="main")
    defaults.update(kwargs)
    return Employee(employee_id=employee_id, **defaults)


@pytest.fixture
def make_employee():
    return _make_employee
