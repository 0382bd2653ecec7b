from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, current_role, current_user_id, handle_errors, json_body, login_required, ok
from ..core.enums import WeekStatus
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/weeks/current", methods=["GET"], endpoint="current_week")
    @login_required
    @handle_errors
    def current_week():
        day_s = (request.args.get("date") or "").strip()
        try:
            any_day = parse_iso_date(day_s) if day_s else None
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD")
        return ok(container.week_service.get_or_create_week(user_id=current_user_id(), any_day=any_day))

    @app.route("/api/weeks/<int:week_id>/submit", methods=["POST"], endpoint="submit_week")
    @login_required
    @handle_errors
    def submit_week(week_id: int):
        week = container.week_service.submit_week(current_user_id=current_user_id(), week_id=week_id)
        return ok(week, message="Timesheet submitted")

    @app.route("/api/admin/weeks", methods=["GET"], endpoint="admin_weeks")
    @admin_required
    @handle_errors
    def admin_weeks():
        status_s = (request.args.get("status") or WeekStatus.SUBMITTED.value).strip().lower()
        if status_s == "all":
            status = None
        else:
            try:
                status = WeekStatus(status_s)
            except ValueError:
                raise ValidationError("Invalid status filter")
        return ok(list(container.week_service.list_weeks(current_role=current_role(), status=status)))

    @app.route("/api/admin/weeks/<int:week_id>/approve", methods=["POST"], endpoint="approve_week")
    @admin_required
    @handle_errors
    def approve_week(week_id: int):
        week = container.week_service.approve_week(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            week_id=week_id,
        )
        return ok(week, message="Timesheet approved")

    @app.route("/api/admin/weeks/<int:week_id>/reject", methods=["POST"], endpoint="reject_week")
    @admin_required
    @handle_errors
    def reject_week(week_id: int):
        body = request.get_json(silent=True) or {}
        week = container.week_service.reject_week(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            week_id=week_id,
            reason=body.get("reason") or "",
        )
        return ok(week, message="Timesheet rejected")

    @app.route("/api/day-entries", methods=["PUT"], endpoint="save_day_entry")
    @login_required
    @handle_errors
    def save_day_entry():
        day = container.time_entry_service.save_day(user_id=current_user_id(), data=json_body())
        return ok(day, message="Day saved")

    @app.route("/api/project-entries", methods=["POST"], endpoint="create_project_entry")
    @login_required
    @handle_errors
    def create_project_entry():
        entry = container.time_entry_service.add_project_entry(user_id=current_user_id(), data=json_body())
        return ok(entry, status=201, message="Project entry created")

    @app.route("/api/weeks/<int:week_id>/entries", methods=["GET"], endpoint="week_entries")
    @login_required
    @handle_errors
    def week_entries(week_id: int):
        data = container.time_entry_service.get_week_entries(
            current_user_id=current_user_id(),
            current_role=current_role(),
            week_id=week_id,
        )
        return ok(data)
