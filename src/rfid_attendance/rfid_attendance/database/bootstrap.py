from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall

SCHEMA_PATH = Path(__file__).resolve().parents[4] / "database" / "schema.sql"


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # schema.sql holds plain DDL, no ';' inside literals.
    for chunk in sql.split(";"):
        lines = [ln for ln in chunk.splitlines() if not ln.strip().startswith("--")]
        stmt = "\n".join(lines).strip()
        if stmt:
            yield stmt


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    name = conn_factory.config.database
    with db_cursor(conn_factory, dictionary=False, with_database=False) as (_, cur):
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{name}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(conn_factory)
    sql = Path(schema_path).read_text(encoding="utf-8")
    with db_cursor(conn_factory, dictionary=False) as (_, cur):
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)


def list_keys(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory) as (_, cur):
        cur.execute("SELECT store_key FROM kv_store ORDER BY store_key")
        return [r["store_key"] for r in fetchall(cur)]
