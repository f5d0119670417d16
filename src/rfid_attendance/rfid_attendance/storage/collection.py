from __future__ import annotations

import logging
from typing import Any, Generic, Iterable, Optional, TypeVar

from ..core.exceptions import StorageError
from .kv import KeyValueStorage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KVCollectionRepository(Generic[T]):
    """One storage key holding a whole list; rewritten wholesale on save.

    Subclasses set `key` and map between entities and stored dicts. A
    compare-and-swap variant can replace this class without touching services.
    """

    key: str = ""

    def __init__(self, storage: KeyValueStorage):
        self._storage = storage

    def _to_dict(self, item: T) -> dict:
        raise NotImplementedError

    def _from_dict(self, data: dict) -> T:
        raise NotImplementedError

    async def load_all(self) -> list[T]:
        raw = await self._storage.get(self.key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise StorageError(f"Unexpected value under {self.key}: {type(raw).__name__}")
        try:
            return [self._from_dict(r) for r in raw]
        except (KeyError, TypeError, ValueError) as ex:
            raise StorageError(f"Corrupt record under {self.key}: {ex}") from ex

    async def save_all(self, items: Iterable[T]) -> None:
        payload = [self._to_dict(i) for i in items]
        if not await self._storage.set(self.key, payload):
            raise StorageError(f"Failed to save {self.key}")
        logger.debug("[storage] saved %s (%s items)", self.key, len(payload))


class KVDocumentRepository(Generic[T]):
    """One storage key holding a single document (settings, company, ...)."""

    key: str = ""

    def __init__(self, storage: KeyValueStorage):
        self._storage = storage

    def _to_dict(self, item: T) -> dict:
        raise NotImplementedError

    def _from_dict(self, data: dict) -> T:
        raise NotImplementedError

    async def load(self) -> Optional[T]:
        raw: Any = await self._storage.get(self.key)
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise StorageError(f"Unexpected value under {self.key}: {type(raw).__name__}")
        try:
            return self._from_dict(raw)
        except (KeyError, TypeError, ValueError) as ex:
            raise StorageError(f"Corrupt document under {self.key}: {ex}") from ex

    async def save(self, item: T) -> None:
        if not await self._storage.set(self.key, self._to_dict(item)):
            raise StorageError(f"Failed to save {self.key}")
