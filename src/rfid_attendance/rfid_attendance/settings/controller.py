from __future__ import annotations

from flask import Flask, session

from ..common.web import fail, json_body, ok, super_admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.settings_service

    @app.route("/api/company", methods=["GET"], endpoint="company")
    def company():
        # shown on the login screen
        c = service.company
        return ok(company={"name": c.name, "address": c.address, "logo": c.logo})

    @app.route("/api/company", methods=["PUT"], endpoint="save_company")
    @super_admin_required
    async def save_company():
        data = json_body()
        c = await service.save_company(
            name=str(data.get("name") or ""),
            address=str(data.get("address") or ""),
            logo=str(data.get("logo") or ""),
        )
        return ok(company={"name": c.name, "address": c.address, "logo": c.logo})

    @app.route("/api/settings", methods=["GET"], endpoint="settings")
    @super_admin_required
    def settings():
        return ok(settings=service.settings_to_ui(service.settings))

    @app.route("/api/settings", methods=["PUT"], endpoint="save_settings")
    @super_admin_required
    async def save_settings():
        s = await service.save_settings(json_body())
        return ok(settings=service.settings_to_ui(s))

    @app.route("/api/settings/weekly-off/<int:day>", methods=["POST"], endpoint="toggle_weekly_off")
    @super_admin_required
    async def toggle_weekly_off(day: int):
        s = await service.toggle_weekly_off(day)
        return ok(settings=service.settings_to_ui(s))

    @app.route("/api/email-config", methods=["GET"], endpoint="email_config")
    @super_admin_required
    def email_config():
        return ok(emailConfig=service.email_to_ui(service.email_config))

    @app.route("/api/email-config", methods=["PUT"], endpoint="save_email_config")
    @super_admin_required
    async def save_email_config():
        c = await service.save_email_config(json_body())
        return ok(emailConfig=service.email_to_ui(c))

    @app.route("/api/reset", methods=["POST"], endpoint="reset_all")
    @super_admin_required
    async def reset_all():
        data = json_body()
        if data.get("confirm") is not True:
            return fail("Confirmation required: send {\"confirm\": true}", 400)
        await service.reset_all()
        session.clear()
        return ok(reset=True)
