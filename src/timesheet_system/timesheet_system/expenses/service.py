from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..allowances.calculator.standard_calculator import round_money
from ..allowances.service import AllowanceService
from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..common.validators import require_between, require_fields, to_decimal
from ..core.constants import CAR_RATES_PER_KM, MAX_VAT_RATE, MIN_VAT_RATE
from ..core.enums import ExpenseType, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .model import ExpenseEntry, NewExpense, VatSetting
from .repository import ExpenseRepository, VatSettingsRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def split_gross(gross: Decimal, vat_percentage: Decimal) -> tuple[Decimal, Decimal]:
    """Split a VAT-inclusive amount into (net, vat), both rounded to cents.

    ``vat`` is derived from the rounded net so that net + vat == gross.
    """
    net = round_money(gross / (1 + vat_percentage / 100))
    return net, round_money(gross) - net


def parse_expense_type(value: Any) -> ExpenseType:
    try:
        return ExpenseType(str(value).strip().lower())
    except ValueError:
        raise ValidationError("Invalid expense type")


class ExpenseService:
    def __init__(self, expenses: ExpenseRepository, allowances: AllowanceService):
        self._expenses = expenses
        self._allowances = allowances

    def create_expense(self, *, user_id: int, data: dict) -> ExpenseEntry:
        require_fields(data, ("project_id", "expense_type", "date"))
        expense_type = parse_expense_type(data["expense_type"])

        if expense_type == ExpenseType.TRAVEL:
            fields = self._travel_fields(data)
        elif expense_type == ExpenseType.CAR:
            fields = self._car_fields(data)
        else:
            require_fields(data, ("gross_amount", "vat_percentage"))
            fields = {
                "gross_amount": to_decimal(data["gross_amount"], "gross_amount"),
                "vat_percentage": to_decimal(data["vat_percentage"], "vat_percentage"),
            }

        gross = fields["gross_amount"]
        vat_percentage = require_between(fields["vat_percentage"], "vat_percentage", MIN_VAT_RATE, MAX_VAT_RATE)
        if gross < 0:
            raise ValidationError("gross_amount must not be negative")

        net, vat_amount = split_gross(gross, vat_percentage)
        description = (data.get("description") or "").strip() or None

        new_expense = NewExpense(
            user_id=int(user_id),
            project_id=self._parse_project_id(data["project_id"]),
            expense_date=self._parse_date(data["date"]),
            expense_type=expense_type,
            description=description,
            gross_amount=round_money(gross),
            vat_percentage=round_money(vat_percentage),
            vat_amount=vat_amount,
            net_amount=net,
            distance_km=fields.get("distance_km"),
            rate_per_km=fields.get("rate_per_km"),
            start_datetime=fields.get("start_datetime"),
            end_datetime=fields.get("end_datetime"),
            destination_country=fields.get("destination_country"),
            calculated_allowance=fields.get("calculated_allowance"),
        )

        expense_id = self._expenses.create(new_expense)
        logger.info("User %s created %s expense %s (gross=%s)", user_id, expense_type.value, expense_id, new_expense.gross_amount)

        created = self._expenses.get_by_id(expense_id)
        if not created:
            raise ValidationError("Failed to create expense entry")
        return created

    def list_for_user(self, *, user_id: int, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[ExpenseEntry]:
        if start and end and start > end:
            raise ValidationError("Start date must not be after end date")
        return self._expenses.list_for_user(user_id=int(user_id), start_date=start, end_date=end)

    @staticmethod
    def _car_fields(data: dict) -> dict:
        require_fields(data, ("distance_km", "rate_per_km", "vat_percentage"))
        distance = to_decimal(data["distance_km"], "distance_km")
        rate = to_decimal(data["rate_per_km"], "rate_per_km")
        vat_percentage = to_decimal(data["vat_percentage"], "vat_percentage")

        if distance <= 0:
            raise ValidationError("Car expenses require a positive distance_km")
        if rate not in CAR_RATES_PER_KM:
            allowed = ", ".join(str(r) for r in CAR_RATES_PER_KM)
            raise ValidationError(f"Invalid rate per km. Must be one of {allowed}")
        if vat_percentage != 0:
            raise ValidationError("Car expenses must have 0% VAT")

        if data.get("gross_amount") in (None, ""):
            gross = distance * rate
        else:
            gross = to_decimal(data["gross_amount"], "gross_amount")

        return {
            "gross_amount": gross,
            "vat_percentage": vat_percentage,
            "distance_km": distance,
            "rate_per_km": rate,
        }

    def _travel_fields(self, data: dict) -> dict:
        require_fields(data, ("start_datetime", "end_datetime", "destination_country"))
        vat_percentage = ZERO
        if data.get("vat_percentage") not in (None, ""):
            vat_percentage = to_decimal(data["vat_percentage"], "vat_percentage")
            if vat_percentage != 0:
                raise ValidationError("Travel allowances must have 0% VAT")

        start = parse_iso_datetime(data["start_datetime"], "start_datetime")
        end = parse_iso_datetime(data["end_datetime"], "end_datetime")
        result, rate = self._allowances.compute_for_trip(start=start, end=end, country_code=data["destination_country"])

        return {
            "gross_amount": result.total,
            "vat_percentage": vat_percentage,
            "start_datetime": start,
            "end_datetime": end,
            "destination_country": rate.country_code,
            "calculated_allowance": result.total,
        }

    @staticmethod
    def _parse_project_id(value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValidationError("project_id must be an integer")

    @staticmethod
    def _parse_date(value: Any) -> date:
        try:
            return parse_iso_date(str(value))
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD")


class VatSettingsService:
    """Use case: admin maintenance of default VAT rates per expense type."""

    def __init__(self, settings: VatSettingsRepository):
        self._settings = settings

    def list_settings(self) -> Sequence[VatSetting]:
        return self._settings.list_all()

    def update_setting(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        expense_type: str,
        default_vat_rate: Any,
        available_rates: Optional[Sequence[Any]] = None,
        description: Optional[str] = None,
    ) -> VatSetting:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Unauthorized: Admin access required")

        if default_vat_rate is None or default_vat_rate == "":
            raise ValidationError("Missing required fields: default_vat_rate")
        kind = parse_expense_type(expense_type)
        rate = require_between(to_decimal(default_vat_rate, "VAT rate"), "VAT rate", MIN_VAT_RATE, MAX_VAT_RATE)

        rates: Optional[list[Decimal]] = None
        if available_rates is not None:
            if isinstance(available_rates, (str, bytes)) or not isinstance(available_rates, (list, tuple)):
                raise ValidationError("available_rates must be a list")
            rates = [require_between(to_decimal(r, "VAT rate"), "VAT rate", MIN_VAT_RATE, MAX_VAT_RATE) for r in available_rates]
            if rate not in rates:
                raise ValidationError("available_rates must contain the default VAT rate")

        current = self._settings.get(kind)
        if not current:
            raise NotFoundError("Expense type not found")
        if not current.is_configurable:
            raise ValidationError("This expense type is not configurable")

        ok = self._settings.update(
            expense_type=kind,
            default_vat_rate=rate,
            available_rates=rates,
            description=description,
            updated_by=int(admin_user_id),
        )
        if not ok:
            raise ValidationError("Failed to update VAT settings")

        logger.info("Admin %s set default VAT for %s to %s", admin_user_id, kind.value, rate)
        return self._settings.get(kind)
