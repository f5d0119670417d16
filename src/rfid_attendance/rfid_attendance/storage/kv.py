from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Asynchronous whole-value key-value store.

    `get` returns None both when the key is absent and when the read fails;
    `set` overwrites the entire value and `delete` removes it, both reporting
    success as a bool.
    """

    async def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    async def set(self, key: str, value: Any) -> bool:
        raise NotImplementedError

    async def delete(self, key: str) -> bool:
        raise NotImplementedError


class JsonKeyValueStorage(ABC):
    """Stores values as JSON text; backends only move strings around."""

    @abstractmethod
    async def _read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    async def _write(self, key: str, text: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def _remove(self, key: str) -> None:
        raise NotImplementedError

    async def get(self, key: str) -> Optional[Any]:
        try:
            text = await self._read(key)
            return json.loads(text) if text is not None else None
        except Exception as ex:
            logger.warning("[storage] get %s failed: %s", key, ex)
            return None

    async def set(self, key: str, value: Any) -> bool:
        try:
            await self._write(key, json.dumps(value, ensure_ascii=False))
            return True
        except Exception as ex:
            logger.warning("[storage] set %s failed: %s", key, ex)
            return False

    async def delete(self, key: str) -> bool:
        try:
            await self._remove(key)
            return True
        except Exception as ex:
            logger.warning("[storage] delete %s failed: %s", key, ex)
            return False
