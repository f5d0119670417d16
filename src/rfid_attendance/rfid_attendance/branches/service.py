from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from ..state import AppState
from .model import Branch


class BranchService:
    """Use case: manage branches (super admin)."""

    def __init__(self, state: AppState):
        self._state = state

    def list_branches(self) -> list[Branch]:
        return list(self._state.branches)

    async def save(self, *, name: str, address: str = "", branch_id: Optional[str] = None) -> Branch:
        name = require_non_empty(name, "Branch name")
        address = (address or "").strip()

        if branch_id:
            if not any(b.branch_id == branch_id for b in self._state.branches):
                raise ValidationError("Branch not found")
            branch = Branch(branch_id=branch_id, name=name, address=address)
            items = [branch if b.branch_id == branch_id else b for b in self._state.branches]
        else:
            branch = Branch(branch_id=new_id(), name=name, address=address)
            items = [*self._state.branches, branch]

        await self._state.save_branches(items)
        return branch

    def to_ui(self, b: Branch, *, today: date) -> dict:
        employee_ids = {e.employee_id for e in self._state.employees if e.branch_id == b.branch_id}
        present = sum(
            1 for a in self._state.attendance
            if a.work_date == today and a.in_time is not None and a.employee_id in employee_ids
        )
        return {
            "id": b.branch_id,
            "name": b.name,
            "address": b.address,
            "employees": len(employee_ids),
            "present_today": present,
        }
