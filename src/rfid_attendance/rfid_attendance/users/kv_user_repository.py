from __future__ import annotations

from ..core.constants import STORAGE_KEYS
from ..core.enums import Role
from ..storage.collection import KVCollectionRepository
from .model import User


class KVUserRepository(KVCollectionRepository[User]):
    key = STORAGE_KEYS["users"]

    def _to_dict(self, item: User) -> dict:
        return {
            "id": item.user_id,
            "username": item.username,
            "password": item.password,
            "name": item.name,
            "role": item.role.value,
            "branchId": item.branch_id,
        }

    def _from_dict(self, data: dict) -> User:
        return User(
            user_id=str(data["id"]),
            username=str(data["username"]),
            password=str(data.get("password") or ""),
            name=str(data.get("name") or ""),
            role=Role(data.get("role") or Role.EMPLOYEE.value),
            branch_id=data.get("branchId") or None,
        )
