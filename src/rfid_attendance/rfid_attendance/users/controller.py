from __future__ import annotations

from flask import Flask, session

from ..common.web import current_role, fail, json_body, login_required, ok, super_admin_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(str(data.get("username") or ""), str(data.get("password") or ""))

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["role"] = s_user.role.value
        session["branch_id"] = s_user.branch_id
        session["employee_id"] = s_user.employee_id

        return ok(user={"id": s_user.user_id, "name": s_user.name, "role": s_user.role.value, "employeeId": s_user.employee_id})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return ok(
            user={
                "id": session["user_id"],
                "name": session.get("name"),
                "role": session.get("role"),
                "employeeId": session.get("employee_id"),
            }
        )

    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    @super_admin_required
    def admin_users():
        users = container.user_service.list_admin_view()
        return ok(users=[container.user_service.to_ui(u) for u in users])

    def _save(user_id=None):
        data = json_body()
        try:
            role = Role(data.get("role") or Role.ADMIN.value)
        except ValueError:
            raise ValidationError("Invalid role")
        return container.user_service.save_admin(
            current_role=current_role(),
            name=str(data.get("name") or ""),
            username=str(data.get("username") or ""),
            password=str(data.get("password") or ""),
            role=role,
            branch_id=data.get("branchId") or None,
            user_id=user_id,
        )

    @app.route("/api/admin/users", methods=["POST"], endpoint="add_user")
    @super_admin_required
    async def add_user():
        user = await _save()
        return ok(201, user=container.user_service.to_ui(user))

    @app.route("/api/admin/users/<user_id>", methods=["PUT"], endpoint="update_user")
    @super_admin_required
    async def update_user(user_id: str):
        user = await _save(user_id)
        return ok(user=container.user_service.to_ui(user))

    @app.route("/api/admin/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @super_admin_required
    async def delete_user(user_id: str):
        if user_id == session.get("user_id"):
            return fail("You cannot delete your own account", 400)
        await container.user_service.delete_user(current_role=current_role(), user_id=user_id)
        return ok()
