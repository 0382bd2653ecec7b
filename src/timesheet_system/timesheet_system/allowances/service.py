from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..common.datetime_utils import parse_iso_datetime
from ..common.validators import require_fields, to_decimal
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from .calculator.base import AllowanceCalculator
from .calculator.standard_calculator import StandardAllowanceCalculator
from .model import AllowanceResult, CountryRate
from .repository import CountryRateRepository

logger = logging.getLogger(__name__)


def normalize_country_code(value: str) -> str:
    return (value or "").strip().upper()


class AllowanceService:
    """Use cases around daily travel allowances and country rates."""

    def __init__(self, rates: CountryRateRepository, *, calculator: Optional[AllowanceCalculator] = None):
        self._rates = rates
        self._calculator = calculator or StandardAllowanceCalculator()

    def get_rates(self, country_code: str) -> CountryRate:
        code = normalize_country_code(country_code)
        rate = self._rates.get_by_code(code)
        if not rate:
            raise NotFoundError(f"No rates found for country code: {code}")
        return rate

    def compute_for_trip(self, *, start: datetime, end: datetime, country_code: str) -> tuple[AllowanceResult, CountryRate]:
        rate = self.get_rates(country_code)
        result = self._calculator.calculate(start, end, rate.partial_rate, rate.full_rate)
        return result, rate

    def calculate_travel_allowance(self, *, start_datetime: str, end_datetime: str, destination_country: str) -> dict:
        require_fields(
            {
                "startDateTime": start_datetime,
                "endDateTime": end_datetime,
                "destinationCountry": destination_country,
            },
            ("startDateTime", "endDateTime", "destinationCountry"),
        )
        start = parse_iso_datetime(start_datetime, "startDateTime")
        end = parse_iso_datetime(end_datetime, "endDateTime")

        result, rate = self.compute_for_trip(start=start, end=end, country_code=destination_country)
        return {
            "allowance": result.total,
            "breakdown": [d.to_dict() for d in result.breakdown],
            "rates": {
                "rateA": rate.partial_rate,
                "rateB": rate.full_rate,
                "countryName": rate.country_name,
                "countryCode": rate.country_code,
            },
        }

    def list_rates_for_calculation(self) -> list[dict]:
        return [
            {
                "id": r.rate_id,
                "country": r.country_name,
                "countryCode": r.country_code,
                "rateA": r.partial_rate,
                "rateB": r.full_rate,
            }
            for r in self._rates.list_all()
        ]

    def update_country_rates(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        rate_id: int,
        partial_rate: Any,
        full_rate: Any,
    ) -> CountryRate:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Unauthorized: Admin access required")

        rate_a = self._require_rate(partial_rate, "Rate A")
        rate_b = self._require_rate(full_rate, "Rate B")

        if not self._rates.get_by_id(int(rate_id)):
            raise NotFoundError("Country rate not found")

        if not self._rates.update_rates(rate_id=int(rate_id), partial_rate=rate_a, full_rate=rate_b, updated_by=int(admin_user_id)):
            raise ValidationError("Failed to update country rates")

        logger.info(
            "Admin %s updated country rates for rate id %s: rate A=%s, rate B=%s",
            admin_user_id,
            rate_id,
            rate_a,
            rate_b,
        )
        return self._rates.get_by_id(int(rate_id))

    @staticmethod
    def _require_rate(value: Any, field_name: str) -> Decimal:
        if value is None or value == "":
            raise ValidationError(f"Valid {field_name} is required")
        rate = to_decimal(value, field_name)
        if rate < 0:
            raise ValidationError(f"Valid {field_name} is required")
        return rate
