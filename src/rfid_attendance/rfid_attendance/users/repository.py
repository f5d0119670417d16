from __future__ import annotations

from typing import Iterable, Protocol

from .model import User


class UserRepository(Protocol):
    async def load_all(self) -> list[User]:
        raise NotImplementedError

    async def save_all(self, items: Iterable[User]) -> None:
        raise NotImplementedError
