from __future__ import annotations

import pytest

from src.timesheet_system.timesheet_system.core.enums import Role
from src.timesheet_system.timesheet_system.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.timesheet_system.timesheet_system.projects.service import ProjectService


@pytest.fixture
def svc(projects_repo):
    return ProjectService(projects_repo)


def test_list_hides_inactive_projects_by_default(svc):
    assert [p.code for p in svc.list_projects()] == ["ACME-01", "INT-00"]
    assert len(svc.list_projects(active_only=False)) == 3


def test_admin_creates_project_with_upper_case_code(svc):
    project = svc.create_project(current_role=Role.ADMIN, admin_user_id=1, data={"code": " beta-7 ", "name": "Beta"})

    assert project.code == "BETA-7"
    assert project.name == "Beta"
    assert project.travel_billable is True
    assert project.is_active is True


def test_duplicate_code_is_rejected(svc):
    with pytest.raises(ValidationError, match="Project code already exists: ACME-01"):
        svc.create_project(current_role=Role.ADMIN, admin_user_id=1, data={"code": "acme-01", "name": "Again"})


@pytest.mark.parametrize(
    "data, message",
    [
        ({"name": "No code"}, "Project code is required"),
        ({"code": "X-1", "name": " "}, "Project name is required"),
        ({"code": "X-1", "name": "X", "travel_billable": "yes"}, "travel_billable must be true or false"),
    ],
)
def test_create_validates_input(svc, data, message):
    with pytest.raises(ValidationError, match=message):
        svc.create_project(current_role=Role.ADMIN, admin_user_id=1, data=data)


def test_consultant_cannot_manage_projects(svc):
    with pytest.raises(AuthorizationError):
        svc.create_project(current_role=Role.CONSULTANT, admin_user_id=2, data={"code": "X", "name": "X"})
    with pytest.raises(AuthorizationError):
        svc.update_project(current_role=Role.CONSULTANT, admin_user_id=2, project_id=1, data={"is_active": False})


def test_update_only_touches_given_fields(svc):
    project = svc.update_project(current_role=Role.ADMIN, admin_user_id=1, project_id=1, data={"is_active": False})

    assert project.is_active is False
    assert project.name == "ACME rollout"
    assert project.travel_billable is True


def test_update_unknown_project(svc):
    with pytest.raises(NotFoundError):
        svc.update_project(current_role=Role.ADMIN, admin_user_id=1, project_id=42, data={"name": "Nope"})


def test_require_bookable(svc):
    assert svc.require_bookable("1").code == "ACME-01"
    with pytest.raises(ValidationError, match="not active"):
        svc.require_bookable(3)
