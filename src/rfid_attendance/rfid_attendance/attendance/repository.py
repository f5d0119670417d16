from __future__ import annotations

from typing import Iterable, Protocol

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    async def load_all(self) -> list[AttendanceRecord]:
        raise NotImplementedError

    async def save_all(self, items: Iterable[AttendanceRecord]) -> None:
        """Overwrites the whole attendance collection."""

        raise NotImplementedError
