from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import today_local
from ..common.web import admin_required, json_body, ok, super_admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.branch_service

    @app.route("/api/branches", methods=["GET"], endpoint="branches")
    @admin_required
    def branches():
        today = today_local()
        return ok(branches=[service.to_ui(b, today=today) for b in service.list_branches()])

    @app.route("/api/branches", methods=["POST"], endpoint="add_branch")
    @super_admin_required
    async def add_branch():
        data = json_body()
        branch = await service.save(name=str(data.get("name") or ""), address=str(data.get("address") or ""))
        return ok(201, branch=service.to_ui(branch, today=today_local()))

    @app.route("/api/branches/<branch_id>", methods=["PUT"], endpoint="update_branch")
    @super_admin_required
    async def update_branch(branch_id: str):
        data = json_body()
        branch = await service.save(
            name=str(data.get("name") or ""),
            address=str(data.get("address") or ""),
            branch_id=branch_id,
        )
        return ok(branch=service.to_ui(branch, today=today_local()))
