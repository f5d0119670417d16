import asyncio

import pytest

from rfid_attendance.cards.service import CardService
from rfid_attendance.core.exceptions import ValidationError


@pytest.fixture
def cards(state, make_employee):
    asyncio.run(state.save_employees([make_employee("e1", name="Asha")]))
    return CardService(state)


def test_register_normalizes_uid(cards):
    card = asyncio.run(cards.register(uid="  ab12 ", employee_id="e1"))

    assert card.uid == "AB12"
    assert cards.resolve("ab12") == card
    assert cards.to_ui(card)["employee"] == "Asha"


def test_uid_is_unique(cards):
    asyncio.run(cards.register(uid="AB12", employee_id="e1"))

    with pytest.raises(ValidationError):
        asyncio.run(cards.register(uid="ab12", employee_id="e1"))


def test_register_for_unknown_employee(cards):
    with pytest.raises(ValidationError):
        asyncio.run(cards.register(uid="AB12", employee_id="ghost"))


def test_toggle_block_round_trips(cards):
    card = asyncio.run(cards.register(uid="AB12", employee_id="e1"))

    blocked = asyncio.run(cards.toggle_block(card.card_id))
    assert blocked.blocked is True
    assert cards.resolve("AB12").blocked is True

    unblocked = asyncio.run(cards.toggle_block(card.card_id))
    assert unblocked.blocked is False


def test_delete_card(cards):
    card = asyncio.run(cards.register(uid="AB12", employee_id="e1"))

    asyncio.run(cards.delete(card.card_id))

    assert cards.list_cards() == []
    with pytest.raises(ValidationError):
        asyncio.run(cards.delete(card.card_id))
