from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.exceptions import ValidationError
from ..state import AppState
from .model import Card, normalize_uid

logger = logging.getLogger(__name__)


class CardService:
    """Use case: register, block and remove RFID cards."""

    def __init__(self, state: AppState):
        self._state = state

    def list_cards(self) -> list[Card]:
        return list(self._state.cards)

    def resolve(self, uid: str) -> Optional[Card]:
        return self._state.find_card(normalize_uid(uid))

    def _get(self, card_id: str) -> Card:
        card = next((c for c in self._state.cards if c.card_id == card_id), None)
        if card is None:
            raise ValidationError("Card not found")
        return card

    async def register(self, *, uid: str, employee_id: str) -> Card:
        uid = normalize_uid(require_non_empty(uid, "Card UID"))
        employee_id = require_non_empty(employee_id, "Employee")
        if self._state.find_employee(employee_id) is None:
            raise ValidationError("Employee not found")
        if self._state.find_card(uid) is not None:
            raise ValidationError("Card already registered")

        card = Card(card_id=new_id(), uid=uid, employee_id=employee_id, blocked=False, registered_at=now_local())
        await self._state.save_cards([*self._state.cards, card])
        logger.info("[cards] registered %s for %s", uid, employee_id)
        return card

    async def toggle_block(self, card_id: str) -> Card:
        card = self._get(card_id)
        updated = replace(card, blocked=not card.blocked)
        await self._state.save_cards([updated if c.card_id == card_id else c for c in self._state.cards])
        logger.info("[cards] %s %s", card.uid, "blocked" if updated.blocked else "unblocked")
        return updated

    async def delete(self, card_id: str) -> None:
        card = self._get(card_id)
        await self._state.save_cards([c for c in self._state.cards if c.card_id != card_id])
        logger.info("[cards] removed %s", card.uid)

    def to_ui(self, c: Card) -> dict:
        employee = self._state.find_employee(c.employee_id)
        return {
            "id": c.card_id,
            "uid": c.uid,
            "employee_id": c.employee_id,
            "employee": employee.name if employee else None,
            "blocked": c.blocked,
            "registered_at": c.registered_at.isoformat() if c.registered_at else None,
        }
