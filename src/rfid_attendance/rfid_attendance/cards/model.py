from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Card:
    """Domain entity: RFID card registered to an employee."""

    card_id: str
    uid: str
    employee_id: Optional[str]
    blocked: bool = False
    registered_at: Optional[datetime] = None


def normalize_uid(value: str) -> str:
    return (value or "").strip().upper()
