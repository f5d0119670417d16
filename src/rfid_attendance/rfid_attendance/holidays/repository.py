from __future__ import annotations

from typing import Iterable, Protocol

from .model import Holiday


class HolidayRepository(Protocol):
    async def load_all(self) -> list[Holiday]:
        raise NotImplementedError

    async def save_all(self, items: Iterable[Holiday]) -> None:
        raise NotImplementedError
