"""Dump every storage key to backups/srf_<timestamp>.json.

Reads through the configured storage backend, so it works for MySQL and
(trivially) for the in-memory store.
"""

from __future__ import annotations

import asyncio
import importlib
import json
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "rfid_attendance"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from dotenv import load_dotenv

from config import get_settings_module

from rfid_attendance.container import build_storage
from rfid_attendance.core.constants import STORAGE_KEYS
from rfid_attendance.storage.kv import KeyValueStorage


async def dump(storage: KeyValueStorage) -> dict:
    values = await asyncio.gather(*(storage.get(k) for k in STORAGE_KEYS.values()))
    return {k: v for k, v in zip(STORAGE_KEYS.values(), values) if v is not None}


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    storage = build_storage(backend=settings.STORAGE_BACKEND, db_config=dict(settings.DB_CONFIG))

    data = asyncio.run(dump(storage))

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"srf_{ts}.json"
    out_file.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"OK: Backup created: {out_file} ({len(data)} keys)")


if __name__ == "__main__":
    main()
