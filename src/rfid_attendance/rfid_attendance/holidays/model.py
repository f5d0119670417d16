from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Holiday:
    holiday_id: str
    holiday_date: date
    name: str
