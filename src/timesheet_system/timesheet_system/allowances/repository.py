from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import CountryRate


class CountryRateRepository(Protocol):
    """Repository interface for per-country daily allowance rates.

    Note (DIP): the service layer depends on this interface, not on a concrete database.
    """

    def get_by_code(self, country_code: str) -> Optional[CountryRate]:
        raise NotImplementedError

    def get_by_id(self, rate_id: int) -> Optional[CountryRate]:
        raise NotImplementedError

    def list_all(self) -> Sequence[CountryRate]:
        """All countries ordered by country name."""

        raise NotImplementedError

    def update_rates(self, *, rate_id: int, partial_rate: Decimal, full_rate: Decimal, updated_by: int) -> bool:
        raise NotImplementedError
