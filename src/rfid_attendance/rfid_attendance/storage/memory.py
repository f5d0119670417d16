from __future__ import annotations

from typing import Optional

from .kv import JsonKeyValueStorage


class InMemoryKeyValueStorage(JsonKeyValueStorage):
    """Process-local store used for tests and `STORAGE_BACKEND=memory`."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    async def _read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def _write(self, key: str, text: str) -> None:
        self._data[key] = text

    async def _remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)
