from __future__ import annotations

from flask import Flask

from ..common.http import admin_required, current_role, current_user_id, handle_errors, json_body, login_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/travel-allowance/calculate", methods=["POST"], endpoint="calculate_travel_allowance")
    @login_required
    @handle_errors
    def calculate_travel_allowance():
        body = json_body()
        data = container.allowance_service.calculate_travel_allowance(
            start_datetime=body.get("startDateTime") or "",
            end_datetime=body.get("endDateTime") or "",
            destination_country=body.get("destinationCountry") or "",
        )
        return ok(data)

    @app.route("/api/country-rates", methods=["GET"], endpoint="country_rates")
    @login_required
    @handle_errors
    def country_rates():
        return ok(container.allowance_service.list_rates_for_calculation())

    @app.route("/api/admin/country-rates/<int:rate_id>", methods=["PUT"], endpoint="update_country_rates")
    @admin_required
    @handle_errors
    def update_country_rates(rate_id: int):
        body = json_body()
        updated = container.allowance_service.update_country_rates(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            rate_id=rate_id,
            partial_rate=body.get("rateA"),
            full_rate=body.get("rateB"),
        )
        return ok(updated, message="Country rates updated successfully")
