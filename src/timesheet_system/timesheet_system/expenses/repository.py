from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import ExpenseType
from .model import ExpenseEntry, NewExpense, VatSetting


class ExpenseRepository(Protocol):
    def create(self, expense: NewExpense) -> int:
        raise NotImplementedError

    def get_by_id(self, expense_id: int) -> Optional[ExpenseEntry]:
        raise NotImplementedError

    def list_for_user(
        self,
        *,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[ExpenseEntry]:
        raise NotImplementedError


class VatSettingsRepository(Protocol):
    def get(self, expense_type: ExpenseType) -> Optional[VatSetting]:
        raise NotImplementedError

    def list_all(self) -> Sequence[VatSetting]:
        raise NotImplementedError

    def update(
        self,
        *,
        expense_type: ExpenseType,
        default_vat_rate: Decimal,
        available_rates: Optional[Sequence[Decimal]],
        description: Optional[str],
        updated_by: int,
    ) -> bool:
        """Only the non-None optional fields are written."""

        raise NotImplementedError
