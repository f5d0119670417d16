from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: login account.

    The password is stored and compared as plain text; the account only
    establishes who is acting and with which role.
    """

    user_id: str
    username: str
    password: str
    name: str
    role: Role
    branch_id: Optional[str] = None
