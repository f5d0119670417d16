from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.card_service

    @app.route("/api/cards", methods=["GET"], endpoint="cards")
    @admin_required
    def cards():
        return ok(cards=[service.to_ui(c) for c in service.list_cards()])

    @app.route("/api/cards", methods=["POST"], endpoint="register_card")
    @admin_required
    async def register_card():
        data = json_body()
        card = await service.register(uid=str(data.get("uid") or ""), employee_id=str(data.get("employeeId") or ""))
        return ok(201, card=service.to_ui(card))

    @app.route("/api/cards/<card_id>/toggle-block", methods=["POST"], endpoint="toggle_card")
    @admin_required
    async def toggle_card(card_id: str):
        card = await service.toggle_block(card_id)
        return ok(card=service.to_ui(card))

    @app.route("/api/cards/<card_id>", methods=["DELETE"], endpoint="delete_card")
    @admin_required
    async def delete_card(card_id: str):
        await service.delete(card_id)
        return ok()
