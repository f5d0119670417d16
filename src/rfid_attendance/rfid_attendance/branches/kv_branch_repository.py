from __future__ import annotations

from ..core.constants import STORAGE_KEYS
from ..storage.collection import KVCollectionRepository
from .model import Branch


class KVBranchRepository(KVCollectionRepository[Branch]):
    key = STORAGE_KEYS["branches"]

    def _to_dict(self, item: Branch) -> dict:
        return {"id": item.branch_id, "name": item.name, "address": item.address}

    def _from_dict(self, data: dict) -> Branch:
        return Branch(
            branch_id=str(data["id"]),
            name=str(data.get("name") or ""),
            address=str(data.get("address") or ""),
        )
