from __future__ import annotations

import logging
from datetime import date, time
from decimal import Decimal
from typing import Any, Optional

from ..common.datetime_utils import parse_clock_time, parse_iso_date
from ..common.validators import require_fields, to_decimal
from ..core.constants import MAX_MAN_DAYS_PER_DAY
from ..core.enums import DayStatus, LocationType, Role, WeekStatus
from ..core.exceptions import AuthorizationError, ValidationError
from ..projects.service import ProjectService
from .model import DayEntry, ProjectEntry, Week
from .repository import DayEntryRepository
from .service import WeekService

logger = logging.getLogger(__name__)


def default_status_for(day: date) -> DayStatus:
    return DayStatus.WEEKEND if day.weekday() >= 5 else DayStatus.OFFICE


def _optional_text(value: Any) -> Optional[str]:
    text = (str(value) if value is not None else "").strip()
    return text or None


class TimeEntryService:
    """Use cases: daily time and project bookings inside a weekly timesheet.

    Days are filed under the Monday-start week of their date; the week is
    created on first use. Only draft weeks can be edited.
    """

    def __init__(self, weeks: WeekService, days: DayEntryRepository, projects: ProjectService):
        self._weeks = weeks
        self._days = days
        self._projects = projects

    def save_day(self, *, user_id: int, data: dict) -> DayEntry:
        require_fields(data, ("date",))
        entry_date = self._parse_date(data["date"])
        status = self._parse_status(data.get("status"), entry_date)

        time_in: Optional[time] = None
        time_out: Optional[time] = None
        if status.is_working:
            if data.get("time_in"):
                time_in = parse_clock_time(data["time_in"], "time_in")
            if data.get("time_out"):
                time_out = parse_clock_time(data["time_out"], "time_out")
            if time_in and time_out and time_out <= time_in:
                raise ValidationError("time_out must be after time_in")

        week = self._editable_week(user_id, entry_date)
        day = self._days.get_day(week_id=week.week_id, entry_date=entry_date)
        if day is None:
            day_id = self._days.create_day(
                week_id=week.week_id, entry_date=entry_date, status=status, time_in=time_in, time_out=time_out
            )
        else:
            if not status.is_working and self._days.list_project_entries(day_entry_id=day.day_entry_id):
                raise ValidationError(f"Remove project entries before marking {entry_date} as {status.value}")
            self._days.update_day(day_entry_id=day.day_entry_id, status=status, time_in=time_in, time_out=time_out)
            day_id = day.day_entry_id

        logger.debug("User %s saved %s as %s (day entry %s)", user_id, entry_date, status.value, day_id)
        return self._days.get_day(week_id=week.week_id, entry_date=entry_date)

    def add_project_entry(self, *, user_id: int, data: dict) -> ProjectEntry:
        require_fields(data, ("date", "project_id", "man_days"))
        entry_date = self._parse_date(data["date"])
        project = self._projects.require_bookable(data["project_id"])

        man_days = to_decimal(data["man_days"], "man_days")
        if man_days <= 0 or man_days > MAX_MAN_DAYS_PER_DAY:
            raise ValidationError(f"man_days must be greater than 0 and at most {MAX_MAN_DAYS_PER_DAY}")

        try:
            location_type = LocationType(str(data.get("location_type") or LocationType.REMOTE.value).lower())
        except ValueError:
            raise ValidationError("location_type must be remote or onsite")

        travel_chargeable = bool(data.get("travel_chargeable", False))
        if travel_chargeable and not project.travel_billable:
            raise ValidationError(f"Travel is not billable on project {project.code}")

        week = self._editable_week(user_id, entry_date)
        day = self._days.get_day(week_id=week.week_id, entry_date=entry_date)
        if day is None:
            day_id = self._days.create_day(week_id=week.week_id, entry_date=entry_date, status=DayStatus.OFFICE)
        elif not day.status.is_working:
            raise ValidationError(f"Cannot book project time on a {day.status.value} day")
        else:
            day_id = day.day_entry_id

        booked = sum((e.man_days for e in self._days.list_project_entries(day_entry_id=day_id)), Decimal("0"))
        if booked + man_days > MAX_MAN_DAYS_PER_DAY:
            raise ValidationError(f"At most {MAX_MAN_DAYS_PER_DAY} man-day can be booked on {entry_date}")

        country = _optional_text(data.get("country"))
        entry_id = self._days.add_project_entry(
            day_entry_id=day_id,
            project_id=project.project_id,
            man_days=man_days,
            location_type=location_type,
            description=_optional_text(data.get("description")),
            travel_chargeable=travel_chargeable,
            office=_optional_text(data.get("office")),
            city=_optional_text(data.get("city")),
            country=country.upper() if country else None,
        )
        logger.info("User %s booked %s man-days on project %s for %s", user_id, man_days, project.code, entry_date)

        return next(e for e in self._days.list_project_entries(day_entry_id=day_id) if e.project_entry_id == entry_id)

    def get_week_entries(self, *, current_user_id: int, current_role: Role, week_id: int) -> dict:
        week = self._weeks.get_week(week_id)
        if current_role != Role.ADMIN and week.user_id != int(current_user_id):
            raise AuthorizationError("You can only view your own timesheet")

        days = []
        total = Decimal("0")
        for day in self._days.list_days(week_id=week.week_id):
            projects = list(self._days.list_project_entries(day_entry_id=day.day_entry_id))
            total += sum((p.man_days for p in projects), Decimal("0"))
            days.append({"day": day, "projects": projects})

        return {"week": week, "days": days, "total_man_days": total}

    def _editable_week(self, user_id: int, entry_date: date) -> Week:
        week = self._weeks.get_or_create_week(user_id=user_id, any_day=entry_date)
        if week.status != WeekStatus.DRAFT:
            raise ValidationError(f"Timesheet for week of {week.week_start} is {week.status.value} and cannot be changed")
        return week

    @staticmethod
    def _parse_date(value: Any) -> date:
        try:
            return parse_iso_date(str(value))
        except ValueError:
            raise ValidationError("date must be YYYY-MM-DD")

    @staticmethod
    def _parse_status(value: Any, entry_date: date) -> DayStatus:
        if value in (None, ""):
            return default_status_for(entry_date)
        try:
            return DayStatus(str(value).strip().lower())
        except ValueError:
            raise ValidationError("Invalid day status")
