import asyncio

import pytest

from rfid_attendance.core.enums import Role
from rfid_attendance.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from rfid_attendance.users.service import AuthService, UserService


def test_default_super_admin_can_log_in(state):
    session_user = AuthService(state).authenticate(" admin ", "admin123")

    assert session_user.role == Role.SUPER_ADMIN
    assert session_user.employee_id is None


@pytest.mark.parametrize("username,password", [("admin", "wrong"), ("nobody", "admin123"), ("", "")])
def test_bad_credentials(state, username, password):
    with pytest.raises(AuthenticationError):
        AuthService(state).authenticate(username, password)


def test_only_super_admin_manages_users(state):
    users = UserService(state)

    with pytest.raises(AuthorizationError):
        asyncio.run(users.save_admin(current_role=Role.ADMIN, name="B", username="b", password="pw"))


def test_create_and_list_admins(state):
    users = UserService(state)

    created = asyncio.run(
        users.save_admin(current_role=Role.SUPER_ADMIN, name="Branch Admin", username="badmin", password="pw", branch_id="main")
    )

    assert created.role == Role.ADMIN
    assert {u.username for u in users.list_admin_view()} == {"admin", "badmin"}
    assert AuthService(state).authenticate("badmin", "pw").branch_id == "main"


def test_username_must_be_unique(state):
    with pytest.raises(ValidationError):
        asyncio.run(UserService(state).save_admin(current_role=Role.SUPER_ADMIN, name="X", username="admin", password="pw"))


def test_last_super_admin_is_protected(state):
    users = UserService(state)

    with pytest.raises(ValidationError):
        asyncio.run(users.delete_user(current_role=Role.SUPER_ADMIN, user_id="sa1"))
    with pytest.raises(ValidationError):
        asyncio.run(
            users.save_admin(
                current_role=Role.SUPER_ADMIN, name="Admin", username="admin", password="x", role=Role.ADMIN, user_id="sa1"
            )
        )


def test_employee_role_is_not_an_admin_role(state):
    with pytest.raises(ValidationError):
        asyncio.run(
            UserService(state).save_admin(
                current_role=Role.SUPER_ADMIN, name="E", username="e", password="pw", role=Role.EMPLOYEE
            )
        )
