from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import DayType


@dataclass(frozen=True)
class DayAllowance:
    """One calendar day of a trip and what it earns."""

    day: date
    classification: DayType
    hours_present: Decimal
    rate_applied: Decimal
    amount: Decimal
    description: str

    def to_dict(self) -> dict:
        return {
            "type": self.classification.value,
            "date": self.day.isoformat(),
            "hours": self.hours_present,
            "rate": self.rate_applied,
            "amount": self.amount,
            "description": self.description,
        }


@dataclass(frozen=True)
class AllowanceResult:
    total: Decimal
    breakdown: tuple[DayAllowance, ...]


@dataclass(frozen=True)
class CountryRate:
    """Daily allowance rates of a destination country.

    ``partial_rate`` is paid for a day away of at least 8 hours (rate A),
    ``full_rate`` for every full calendar day in between (rate B).
    """

    rate_id: int
    country_code: str
    country_name: str
    partial_rate: Decimal
    full_rate: Decimal
    effective_from: Optional[date] = None
    updated_at: Optional[datetime] = None
    updated_by: Optional[int] = None
