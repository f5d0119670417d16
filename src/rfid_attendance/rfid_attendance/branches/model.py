from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Branch:
    """Domain entity: office branch employees and admins belong to."""

    branch_id: str
    name: str
    address: str = ""
