from __future__ import annotations

from ..common.datetime_utils import parse_iso_date
from ..core.constants import STORAGE_KEYS
from ..storage.collection import KVCollectionRepository
from .model import Holiday


class KVHolidayRepository(KVCollectionRepository[Holiday]):
    key = STORAGE_KEYS["holidays"]

    def _to_dict(self, item: Holiday) -> dict:
        return {"id": item.holiday_id, "date": item.holiday_date.isoformat(), "name": item.name}

    def _from_dict(self, data: dict) -> Holiday:
        return Holiday(
            holiday_id=str(data["id"]),
            holiday_date=parse_iso_date(data["date"]),
            name=str(data.get("name") or ""),
        )
