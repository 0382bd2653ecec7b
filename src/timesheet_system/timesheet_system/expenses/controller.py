from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, current_role, current_user_id, handle_errors, json_body, login_required, ok
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _optional_date(name: str):
        v = (request.args.get(name) or "").strip()
        if not v:
            return None
        try:
            return parse_iso_date(v)
        except ValueError:
            raise ValidationError(f"{name} must be YYYY-MM-DD")

    @app.route("/api/expenses", methods=["POST"], endpoint="create_expense")
    @login_required
    @handle_errors
    def create_expense():
        expense = container.expense_service.create_expense(user_id=current_user_id(), data=json_body())
        return ok(expense, status=201)

    @app.route("/api/expenses", methods=["GET"], endpoint="list_expenses")
    @login_required
    @handle_errors
    def list_expenses():
        rows = container.expense_service.list_for_user(
            user_id=current_user_id(),
            start=_optional_date("start"),
            end=_optional_date("end"),
        )
        return ok(list(rows))

    @app.route("/api/vat-settings", methods=["GET"], endpoint="vat_settings")
    @login_required
    @handle_errors
    def vat_settings():
        return ok(list(container.vat_settings_service.list_settings()))

    @app.route("/api/admin/vat-settings/<expense_type>", methods=["PUT"], endpoint="update_vat_setting")
    @admin_required
    @handle_errors
    def update_vat_setting(expense_type: str):
        body = json_body()
        updated = container.vat_settings_service.update_setting(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            expense_type=expense_type,
            default_vat_rate=body.get("default_vat_rate"),
            available_rates=body.get("available_rates"),
            description=body.get("description"),
        )
        return ok(updated, message=f"VAT settings updated successfully for {updated.expense_type.value}")
