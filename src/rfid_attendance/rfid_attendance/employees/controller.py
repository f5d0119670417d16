from __future__ import annotations

from flask import Flask, request

from ..common.web import admin_required, json_body, ok
from ..container import Container
from .service import EmployeeForm


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="employees")
    @admin_required
    def employees():
        items = service.list_employees(search=request.args.get("q", ""), branch_id=request.args.get("branch"))
        return ok(employees=[service.to_ui(e) for e in items])

    @app.route("/api/employees", methods=["POST"], endpoint="add_employee")
    @admin_required
    async def add_employee():
        employee = await service.create(EmployeeForm.from_payload(json_body()))
        return ok(201, employee=service.to_ui(employee))

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="update_employee")
    @admin_required
    async def update_employee(employee_id: str):
        employee = await service.update(employee_id, EmployeeForm.from_payload(json_body()))
        return ok(employee=service.to_ui(employee))

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @admin_required
    async def delete_employee(employee_id: str):
        await service.delete(employee_id)
        return ok()
