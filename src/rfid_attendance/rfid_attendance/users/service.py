from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from ..state import AppState
from .model import User

logger = logging.getLogger(__name__)

ADMIN_ROLES = frozenset({Role.SUPER_ADMIN, Role.ADMIN})


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: str
    name: str
    role: Role
    branch_id: Optional[str]
    employee_id: Optional[str]


class AuthService:
    """Use case: authenticate user (login).

    Credentials are compared as stored; the result only tells the HTTP layer
    who is acting and with which role.
    """

    def __init__(self, state: AppState):
        self._state = state

    def authenticate(self, username: str, password: str) -> SessionUser:
        username = (username or "").strip()
        user = next(
            (u for u in self._state.users if u.username == username and u.password == (password or "")),
            None,
        )
        if user is None:
            logger.info("[auth] failed login for %r", username)
            raise AuthenticationError("Invalid credentials")

        employee = next((e for e in self._state.employees if e.user_id == user.user_id), None)
        return SessionUser(
            user_id=user.user_id,
            name=user.name,
            role=user.role,
            branch_id=user.branch_id,
            employee_id=employee.employee_id if employee else None,
        )


class UserService:
    """Use case: manage admin accounts (super admin)."""

    def __init__(self, state: AppState):
        self._state = state

    def list_admin_view(self) -> list[User]:
        return [u for u in self._state.users if u.role != Role.EMPLOYEE]

    async def save_admin(
        self,
        *,
        current_role: Role,
        name: str,
        username: str,
        password: str,
        role: Role = Role.ADMIN,
        branch_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> User:
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a super admin can manage users")

        name = require_non_empty(name, "Name")
        username = require_non_empty(username, "Username")
        password = require_non_empty(password, "Password")
        if role not in ADMIN_ROLES:
            raise ValidationError("Role must be admin or super admin")
        if any(u.username == username and u.user_id != user_id for u in self._state.users):
            raise ValidationError("Username already exists")

        if user_id:
            current = next((u for u in self._state.users if u.user_id == user_id), None)
            if current is None:
                raise ValidationError("User not found")
            if current.role == Role.SUPER_ADMIN and role != Role.SUPER_ADMIN and self._super_admin_count() <= 1:
                raise ValidationError("Cannot demote the last super admin")
            user = User(user_id=user_id, username=username, password=password, name=name, role=role, branch_id=branch_id or None)
            items = [user if u.user_id == user_id else u for u in self._state.users]
        else:
            user = User(user_id=new_id(), username=username, password=password, name=name, role=role, branch_id=branch_id or None)
            items = [*self._state.users, user]

        await self._state.save_users(items)
        logger.info("[users] saved %s (%s)", username, role.value)
        return user

    async def delete_user(self, *, current_role: Role, user_id: str) -> None:
        if current_role != Role.SUPER_ADMIN:
            raise AuthorizationError("Only a super admin can manage users")

        user = next((u for u in self._state.users if u.user_id == user_id), None)
        if user is None:
            raise ValidationError("User not found")
        if user.role == Role.SUPER_ADMIN and self._super_admin_count() <= 1:
            raise ValidationError("Cannot delete the last super admin")

        await self._state.save_users([u for u in self._state.users if u.user_id != user_id])
        logger.info("[users] deleted %s", user.username)

    def _super_admin_count(self) -> int:
        return sum(1 for u in self._state.users if u.role == Role.SUPER_ADMIN)

    @staticmethod
    def to_ui(u: User) -> dict:
        return {"id": u.user_id, "name": u.name, "username": u.username, "role": u.role.value, "branchId": u.branch_id}
