from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, current_role, current_user_id, handle_errors, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/projects", methods=["GET"], endpoint="list_projects")
    @login_required
    @handle_errors
    def list_projects():
        active_only = (request.args.get("all") or "").lower() not in {"1", "true"}
        return ok(list(container.project_service.list_projects(active_only=active_only)))

    @app.route("/api/admin/projects", methods=["POST"], endpoint="create_project")
    @admin_required
    @handle_errors
    def create_project():
        project = container.project_service.create_project(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            data=json_body(),
        )
        return ok(project, status=201, message="Project created")

    @app.route("/api/admin/projects/<int:project_id>", methods=["PUT"], endpoint="update_project")
    @admin_required
    @handle_errors
    def update_project(project_id: int):
        project = container.project_service.update_project(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            project_id=project_id,
            data=json_body(),
        )
        return ok(project, message="Project updated")
