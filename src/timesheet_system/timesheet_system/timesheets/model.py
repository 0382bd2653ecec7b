from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from ..core.enums import DayStatus, LocationType, WeekStatus


@dataclass(frozen=True)
class Week:
    """Weekly timesheet of one consultant (week_start is a Monday)."""

    week_id: int
    user_id: int
    week_start: date
    status: WeekStatus
    submitted_at: Optional[datetime] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    rejected_by: Optional[int] = None
    rejected_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None


@dataclass(frozen=True)
class DayEntry:
    """One calendar day inside a week (times are wall-clock, no date)."""

    day_entry_id: int
    week_id: int
    entry_date: date
    status: DayStatus
    time_in: Optional[time] = None
    time_out: Optional[time] = None


@dataclass(frozen=True)
class ProjectEntry:
    """Man-days booked on a project for one day entry."""

    project_entry_id: int
    day_entry_id: int
    project_id: int
    man_days: Decimal
    location_type: LocationType = LocationType.REMOTE
    description: Optional[str] = None
    travel_chargeable: bool = False
    office: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
