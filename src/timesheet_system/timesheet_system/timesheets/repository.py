from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import DayStatus, LocationType, WeekStatus
from .model import DayEntry, ProjectEntry, Week


class WeekRepository(Protocol):
    def get_by_id(self, week_id: int) -> Optional[Week]:
        raise NotImplementedError

    def get_for_user(self, *, user_id: int, week_start: date) -> Optional[Week]:
        raise NotImplementedError

    def create(self, *, user_id: int, week_start: date) -> int:
        raise NotImplementedError

    def list_by_status(self, *, status: Optional[WeekStatus] = None, limit: int = 200) -> Sequence[dict]:
        """Weeks joined with the owner's name, newest submission first."""

        raise NotImplementedError

    def mark_submitted(self, *, week_id: int, submitted_at: datetime) -> bool:
        """DRAFT -> SUBMITTED. Returns False if the week was not a draft."""

        raise NotImplementedError

    def decide(
        self,
        *,
        week_id: int,
        status: WeekStatus,
        decided_by: int,
        decided_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """SUBMITTED -> APPROVED/REJECTED. Returns False if the week was not submitted."""

        raise NotImplementedError


class DayEntryRepository(Protocol):
    def get_day(self, *, week_id: int, entry_date: date) -> Optional[DayEntry]:
        raise NotImplementedError

    def list_days(self, *, week_id: int) -> Sequence[DayEntry]:
        """Day entries of a week ordered by date."""

        raise NotImplementedError

    def create_day(
        self,
        *,
        week_id: int,
        entry_date: date,
        status: DayStatus,
        time_in: Optional[time] = None,
        time_out: Optional[time] = None,
    ) -> int:
        raise NotImplementedError

    def update_day(self, *, day_entry_id: int, status: DayStatus, time_in: Optional[time], time_out: Optional[time]) -> bool:
        raise NotImplementedError

    def list_project_entries(self, *, day_entry_id: int) -> Sequence[ProjectEntry]:
        raise NotImplementedError

    def add_project_entry(
        self,
        *,
        day_entry_id: int,
        project_id: int,
        man_days: Decimal,
        location_type: LocationType,
        description: Optional[str],
        travel_chargeable: bool,
        office: Optional[str],
        city: Optional[str],
        country: Optional[str],
    ) -> int:
        raise NotImplementedError
