from __future__ import annotations

import asyncio
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .kv import JsonKeyValueStorage


class MySQLKeyValueStorage(JsonKeyValueStorage):
    """Key-value store on a single `kv_store` table.

    mysql-connector is blocking, so every call runs in a worker thread.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _select(self, key: str) -> Optional[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT store_value FROM kv_store WHERE store_key=%s", (key,))
            row = fetchone(cur)
            return row["store_value"] if row else None

    def _upsert(self, key: str, text: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO kv_store(store_key, store_value)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE store_value=VALUES(store_value)
                """,
                (key, text),
            )

    def _delete(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM kv_store WHERE store_key=%s", (key,))

    async def _read(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._select, key)

    async def _write(self, key: str, text: str) -> None:
        await asyncio.to_thread(self._upsert, key, text)

    async def _remove(self, key: str) -> None:
        await asyncio.to_thread(self._delete, key)
