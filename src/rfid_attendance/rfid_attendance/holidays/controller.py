from __future__ import annotations

from flask import Flask

from ..common.web import admin_required, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.holiday_service

    @app.route("/api/holidays", methods=["GET"], endpoint="holidays")
    @admin_required
    def holidays():
        return ok(holidays=[service.to_ui(h) for h in service.list_holidays()])

    @app.route("/api/holidays", methods=["POST"], endpoint="add_holiday")
    @admin_required
    async def add_holiday():
        data = json_body()
        holiday = await service.add(holiday_date=str(data.get("date") or ""), name=str(data.get("name") or ""))
        return ok(201, holiday=service.to_ui(holiday))

    @app.route("/api/holidays/<holiday_id>", methods=["DELETE"], endpoint="delete_holiday")
    @admin_required
    async def delete_holiday(holiday_id: str):
        await service.delete(holiday_id)
        return ok()
