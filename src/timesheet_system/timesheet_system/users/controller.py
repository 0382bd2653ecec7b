from __future__ import annotations

from datetime import timedelta

from flask import Flask, session

from ..common.http import admin_required, current_role, current_user_id, handle_errors, json_body, ok
from ..core.constants import DEFAULT_SESSION_DAYS
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    @app.route("/login", methods=["POST"], endpoint="login")
    @handle_errors
    def login():
        body = json_body()
        s_user = container.auth_service.authenticate(body.get("email") or "", body.get("password") or "")

        session.clear()
        session.permanent = bool(body.get("remember_me"))
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        return ok(s_user, message="Logged in")

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Logged out")

    @app.route("/api/admin/users", methods=["GET"], endpoint="list_users")
    @admin_required
    @handle_errors
    def list_users():
        return ok(container.user_admin_service.list_users(current_role=current_role()))

    @app.route("/api/admin/users", methods=["POST"], endpoint="create_user")
    @admin_required
    @handle_errors
    def create_user():
        body = json_body()
        user = container.user_admin_service.create_user(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            email=body.get("email") or "",
            password=body.get("password") or "",
            full_name=body.get("full_name") or "",
            role=body.get("role") or Role.CONSULTANT.value,
        )
        return ok(user, status=201, message="User created")
