from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ...common.datetime_utils import end_of_day, start_of_day
from ...common.validators import to_decimal
from ...core.constants import FULL_DAY_HOURS, MIN_PARTIAL_DAY_HOURS
from ...core.enums import DayType
from ...core.exceptions import InvalidInterval, InvalidRate, ValidationError
from ..model import AllowanceResult, DayAllowance
from .base import AllowanceCalculator

CENT = Decimal("0.01")
_SECONDS_PER_HOUR = Decimal(3600)

_LABELS = {
    DayType.SAME_DAY: "Same day travel",
    DayType.FIRST_DAY: "First day",
    DayType.LAST_DAY: "Last day",
}


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def hours_between(start: datetime, end: datetime) -> Decimal:
    """Exact elapsed hours as a Decimal (no float rounding)."""
    delta = end - start
    seconds = Decimal(delta.days * 86400 + delta.seconds) + Decimal(delta.microseconds) / Decimal(1_000_000)
    return seconds / _SECONDS_PER_HOUR


def _as_rate(value: Any, field_name: str) -> Decimal:
    try:
        rate = to_decimal(value, field_name)
    except ValidationError as e:
        raise InvalidRate(str(e)) from e
    if rate < 0:
        raise InvalidRate(f"{field_name} must not be negative")
    return rate


class StandardAllowanceCalculator(AllowanceCalculator):
    """Per-diem rule: partial rate for first/last/same days of at least
    ``min_partial_hours``, full rate for every calendar day in between.

    Intermediate days are never hour-gated: a full calendar day away is
    presumed fully present.
    """

    def __init__(self, *, min_partial_hours: Decimal = MIN_PARTIAL_DAY_HOURS):
        self._min_hours = Decimal(min_partial_hours)

    def calculate(self, start: datetime, end: datetime, partial_rate: Any, full_rate: Any) -> AllowanceResult:
        self._check_interval(start, end)
        partial = _as_rate(partial_rate, "Partial rate")
        full = _as_rate(full_rate, "Full rate")

        if start.date() == end.date():
            breakdown = [self._partial_day(DayType.SAME_DAY, start.date(), hours_between(start, end), partial)]
        else:
            # A departure in the last millisecond of the day counts as 0h, not negative.
            first_hours = max(hours_between(start, end_of_day(start.date(), tzinfo=start.tzinfo)), Decimal("0"))
            last_hours = hours_between(start_of_day(end.date(), tzinfo=end.tzinfo), end)

            breakdown = [self._partial_day(DayType.FIRST_DAY, start.date(), first_hours, partial)]
            breakdown.extend(self._full_day(d, full) for d in _days_between(start.date(), end.date()))
            breakdown.append(self._partial_day(DayType.LAST_DAY, end.date(), last_hours, partial))

        total = round_money(sum((d.amount for d in breakdown), Decimal("0")))
        return AllowanceResult(total=total, breakdown=tuple(breakdown))

    @staticmethod
    def _check_interval(start: datetime, end: datetime) -> None:
        try:
            valid = start < end
        except TypeError as e:
            raise InvalidInterval("Start and end must both be naive or both timezone-aware") from e
        if not valid:
            raise InvalidInterval("End date/time must be after start date/time")

    def _partial_day(self, kind: DayType, day: date, hours: Decimal, partial: Decimal) -> DayAllowance:
        shown = round_money(hours)
        # Compare before rounding: 7.995h must not pass as 8.00h.
        if hours >= self._min_hours:
            rate = round_money(partial)
            description = f"{_LABELS[kind]} ({shown}h ≥ {self._min_hours}h)"
        else:
            rate = round_money(Decimal("0"))
            description = f"{_LABELS[kind]} ({shown}h < {self._min_hours}h)"

        return DayAllowance(
            day=day,
            classification=kind,
            hours_present=shown,
            rate_applied=rate,
            amount=rate,
            description=description,
        )

    @staticmethod
    def _full_day(day: date, full: Decimal) -> DayAllowance:
        rate = round_money(full)
        return DayAllowance(
            day=day,
            classification=DayType.FULL_DAY,
            hours_present=FULL_DAY_HOURS,
            rate_applied=rate,
            amount=rate,
            description="Full day",
        )


def _days_between(first: date, last: date):
    """Calendar days strictly between ``first`` and ``last``."""
    day = first + timedelta(days=1)
    while day < last:
        yield day
        day += timedelta(days=1)


_default_calculator = StandardAllowanceCalculator()


def compute_allowance(start: datetime, end: datetime, partial_rate: Any, full_rate: Any) -> AllowanceResult:
    """Compute the daily travel allowance owed for a trip.

    Raises ``InvalidRate`` for a negative/non-numeric rate and
    ``InvalidInterval`` unless ``start < end``. Pure: no I/O, no state.
    """
    return _default_calculator.calculate(start, end, partial_rate, full_rate)
