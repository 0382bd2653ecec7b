from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal

from ..model import AllowanceResult


class AllowanceCalculator(ABC):
    """Calculator interface (Strategy Pattern for per-diem rules)."""

    @abstractmethod
    def calculate(self, start: datetime, end: datetime, partial_rate: Decimal, full_rate: Decimal) -> AllowanceResult:
        raise NotImplementedError
