from __future__ import annotations

from decimal import Decimal

import pytest

from src.timesheet_system.timesheet_system.core.enums import ExpenseType, Role
from src.timesheet_system.timesheet_system.core.exceptions import AuthorizationError, ValidationError
from src.timesheet_system.timesheet_system.expenses.model import VatSetting
from src.timesheet_system.timesheet_system.expenses.service import VatSettingsService


class FakeVatSettingsRepo:
    def __init__(self):
        self._rows = {
            ExpenseType.HOTEL: VatSetting(ExpenseType.HOTEL, Decimal("7"), (Decimal("0"), Decimal("7"), Decimal("19"))),
            ExpenseType.CAR: VatSetting(ExpenseType.CAR, Decimal("0"), (Decimal("0"),), is_configurable=False),
        }

    def get(self, expense_type):
        return self._rows.get(expense_type)

    def list_all(self):
        return list(self._rows.values())

    def update(self, *, expense_type, default_vat_rate, available_rates, description, updated_by):
        old = self._rows[expense_type]
        self._rows[expense_type] = VatSetting(
            expense_type=expense_type,
            default_vat_rate=default_vat_rate,
            available_rates=tuple(available_rates) if available_rates is not None else old.available_rates,
            is_configurable=old.is_configurable,
            description=description if description is not None else old.description,
            updated_by=updated_by,
        )
        return True


def _update(svc, **overrides):
    kwargs = {"current_role": Role.ADMIN, "admin_user_id": 1, "expense_type": "hotel", "default_vat_rate": 19}
    kwargs.update(overrides)
    return svc.update_setting(**kwargs)


def test_update_default_rate():
    svc = VatSettingsService(FakeVatSettingsRepo())

    updated = _update(svc)

    assert updated.default_vat_rate == Decimal("19")
    assert updated.available_rates == (Decimal("0"), Decimal("7"), Decimal("19"))
    assert updated.updated_by == 1


def test_update_with_available_rates():
    svc = VatSettingsService(FakeVatSettingsRepo())

    updated = _update(svc, default_vat_rate="10", available_rates=[0, 10], description="Reduced rate")

    assert updated.available_rates == (Decimal("0"), Decimal("10"))
    assert updated.description == "Reduced rate"


def test_default_must_be_one_of_available_rates():
    svc = VatSettingsService(FakeVatSettingsRepo())

    with pytest.raises(ValidationError, match="available_rates"):
        _update(svc, default_vat_rate=19, available_rates=[0, 7])


def test_available_rates_must_be_a_list():
    svc = VatSettingsService(FakeVatSettingsRepo())

    with pytest.raises(ValidationError, match="list"):
        _update(svc, available_rates="0,7,19")


@pytest.mark.parametrize("rate", [-1, 100.5, "abc"])
def test_rate_out_of_range_or_not_a_number(rate):
    svc = VatSettingsService(FakeVatSettingsRepo())

    with pytest.raises(ValidationError):
        _update(svc, default_vat_rate=rate)


def test_non_admin_cannot_update():
    svc = VatSettingsService(FakeVatSettingsRepo())

    with pytest.raises(AuthorizationError):
        _update(svc, current_role=Role.CONSULTANT)


def test_car_is_not_configurable():
    svc = VatSettingsService(FakeVatSettingsRepo())

    with pytest.raises(ValidationError, match="not configurable"):
        _update(svc, expense_type="car", default_vat_rate=0)
