from __future__ import annotations

from typing import Iterable, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    async def load_all(self) -> list[Employee]:
        raise NotImplementedError

    async def save_all(self, items: Iterable[Employee]) -> None:
        raise NotImplementedError
