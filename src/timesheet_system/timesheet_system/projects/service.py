from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import Project
from .repository import ProjectRepository

logger = logging.getLogger(__name__)


def _as_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ValidationError(f"{field_name} must be true or false")


class ProjectService:
    """Use cases: project catalogue for timesheets, admin maintenance."""

    def __init__(self, projects: ProjectRepository):
        self._projects = projects

    def list_projects(self, *, active_only: bool = True) -> Sequence[Project]:
        return self._projects.list_all(active_only=active_only)

    def require_bookable(self, project_id: Any) -> Project:
        try:
            pid = int(project_id)
        except (TypeError, ValueError):
            raise ValidationError("project_id must be an integer")
        project = self._projects.get_by_id(pid)
        if not project:
            raise NotFoundError("Project not found")
        if not project.is_active:
            raise ValidationError("Project is not active")
        return project

    def create_project(self, *, current_role: Role, admin_user_id: int, data: dict) -> Project:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Unauthorized: Admin access required")

        code = require_non_empty(data.get("code"), "Project code").upper()
        name = require_non_empty(data.get("name"), "Project name")
        travel_billable = _as_bool(data.get("travel_billable", True), "travel_billable")

        if self._projects.get_by_code(code):
            raise ValidationError(f"Project code already exists: {code}")

        project_id = self._projects.create(code=code, name=name, travel_billable=travel_billable)
        logger.info("Admin %s created project %s (%s)", admin_user_id, project_id, code)
        return self._projects.get_by_id(project_id)

    def update_project(self, *, current_role: Role, admin_user_id: int, project_id: int, data: dict) -> Project:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Unauthorized: Admin access required")
        if not self._projects.get_by_id(int(project_id)):
            raise NotFoundError("Project not found")

        name: Optional[str] = None
        if "name" in data:
            name = require_non_empty(data.get("name"), "Project name")
        travel_billable = _as_bool(data["travel_billable"], "travel_billable") if "travel_billable" in data else None
        is_active = _as_bool(data["is_active"], "is_active") if "is_active" in data else None

        if not self._projects.update(project_id=int(project_id), name=name, travel_billable=travel_billable, is_active=is_active):
            raise ValidationError("Failed to update project")

        logger.info("Admin %s updated project %s", admin_user_id, project_id)
        return self._projects.get_by_id(int(project_id))
