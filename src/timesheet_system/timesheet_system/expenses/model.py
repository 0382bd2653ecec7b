from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import ExpenseType


@dataclass(frozen=True)
class NewExpense:
    """Validated expense, ready to be stored (amounts already rounded)."""

    user_id: int
    project_id: int
    expense_date: date
    expense_type: ExpenseType
    description: Optional[str]
    gross_amount: Decimal
    vat_percentage: Decimal
    vat_amount: Decimal
    net_amount: Decimal
    distance_km: Optional[Decimal] = None
    rate_per_km: Optional[Decimal] = None
    start_datetime: Optional[datetime] = None
    end_datetime: Optional[datetime] = None
    destination_country: Optional[str] = None
    calculated_allowance: Optional[Decimal] = None


@dataclass(frozen=True)
class ExpenseEntry(NewExpense):
    expense_id: int = 0
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class VatSetting:
    expense_type: ExpenseType
    default_vat_rate: Decimal
    available_rates: tuple[Decimal, ...] = field(default_factory=tuple)
    is_configurable: bool = True
    description: Optional[str] = None
    updated_by: Optional[int] = None
