from __future__ import annotations

from typing import Iterable, Protocol

from .model import Card


class CardRepository(Protocol):
    async def load_all(self) -> list[Card]:
        raise NotImplementedError

    async def save_all(self, items: Iterable[Card]) -> None:
        raise NotImplementedError
