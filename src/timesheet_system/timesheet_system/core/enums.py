from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "super_admin"
    CONSULTANT = "consultant"


class DayType(str, Enum):
    """How a calendar day of a trip is classified for the daily allowance."""

    SAME_DAY = "same_day"
    FIRST_DAY = "first_day"
    FULL_DAY = "full_day"
    LAST_DAY = "last_day"


class WeekStatus(str, Enum):
    """Approval workflow state of a weekly timesheet."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


class ExpenseType(str, Enum):
    TRAIN = "train"
    TAXI = "taxi"
    FLIGHT = "flight"
    RENTAL_CAR = "rental_car"
    FUEL = "fuel"
    PARKING = "parking"
    ONPV = "onpv"
    HOSPITALITY = "hospitality"
    HOTEL = "hotel"
    CAR = "car"
    OTHERS = "others"
    TRAVEL = "travel"


class DayStatus(str, Enum):
    """What a consultant did on a calendar day of a timesheet."""

    OFFICE = "office"
    TRAVEL = "travel"
    VACATION = "vacation"
    DAY_OFF = "day_off"
    WEEKEND = "weekend"
    BANK_HOLIDAY = "bank_holiday"

    @property
    def is_working(self) -> bool:
        return self in (DayStatus.OFFICE, DayStatus.TRAVEL)


class LocationType(str, Enum):
    REMOTE = "remote"
    ONSITE = "onsite"
