from __future__ import annotations

from typing import Iterable, Protocol

from .model import Branch


class BranchRepository(Protocol):
    async def load_all(self) -> list[Branch]:
        raise NotImplementedError

    async def save_all(self, items: Iterable[Branch]) -> None:
        raise NotImplementedError
