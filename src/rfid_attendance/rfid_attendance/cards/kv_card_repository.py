from __future__ import annotations

from ..common.datetime_utils import format_timestamp, parse_timestamp
from ..core.constants import STORAGE_KEYS
from ..storage.collection import KVCollectionRepository
from .model import Card, normalize_uid


class KVCardRepository(KVCollectionRepository[Card]):
    key = STORAGE_KEYS["cards"]

    def _to_dict(self, item: Card) -> dict:
        return {
            "id": item.card_id,
            "uid": item.uid,
            "employeeId": item.employee_id,
            "blocked": item.blocked,
            "registeredAt": format_timestamp(item.registered_at),
        }

    def _from_dict(self, data: dict) -> Card:
        return Card(
            card_id=str(data["id"]),
            uid=normalize_uid(str(data["uid"])),
            employee_id=data.get("employeeId") or None,
            blocked=bool(data.get("blocked", False)),
            registered_at=parse_timestamp(data.get("registeredAt")),
        )
