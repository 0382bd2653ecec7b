from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from src.timesheet_system.timesheet_system.core.enums import Role
from src.timesheet_system.timesheet_system.core.exceptions import AuthorizationError, ValidationError
from src.timesheet_system.timesheet_system.users.service import AuthService, UserAdminService


@pytest.fixture
def svc(users_repo):
    return UserAdminService(users_repo)


def _create(svc, **overrides):
    kwargs = {
        "current_role": Role.ADMIN,
        "admin_user_id": 1,
        "email": " New.Person@Example.com ",
        "password": "s3cret!",
        "full_name": "New Person",
    }
    kwargs.update(overrides)
    return svc.create_user(**kwargs)


def test_admin_creates_consultant_with_hashed_password(svc, users_repo):
    created = _create(svc)

    stored = users_repo.get_by_email("new.person@example.com")
    assert created.user_id == stored.user_id == 3
    assert created.role == Role.CONSULTANT
    assert stored.password_hash != "s3cret!"
    assert check_password_hash(stored.password_hash, "s3cret!")


def test_created_user_can_log_in(svc, users_repo):
    _create(svc, role="super_admin")

    user = AuthService(users_repo).authenticate("new.person@example.com", "s3cret!")

    assert user.role == Role.ADMIN


def test_password_must_be_long_enough(svc):
    with pytest.raises(ValidationError, match="Password must be at least 6 characters"):
        _create(svc, password="12345")


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"email": "consultant@example.com"}, "already exists"),
        ({"email": "no-at-sign"}, "Email is not valid"),
        ({"full_name": "  "}, "Full name is required"),
        ({"role": "manager"}, "Role must be super_admin or consultant"),
    ],
)
def test_create_user_rejects_bad_input(svc, overrides, message):
    with pytest.raises(ValidationError, match=message):
        _create(svc, **overrides)


def test_only_admins_manage_users(svc):
    with pytest.raises(AuthorizationError):
        _create(svc, current_role=Role.CONSULTANT)
    with pytest.raises(AuthorizationError):
        svc.list_users(current_role=Role.CONSULTANT)


def test_list_users_never_exposes_password_hashes(svc):
    users = svc.list_users(current_role=Role.ADMIN)

    assert [u["email"] for u in users] == ["admin@example.com", "consultant@example.com"]
    assert all("password_hash" not in u for u in users)
