from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from src.timesheet_system.timesheet_system.core.enums import DayStatus, LocationType, Role, WeekStatus
from src.timesheet_system.timesheet_system.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.timesheet_system.timesheet_system.projects.service import ProjectService
from src.timesheet_system.timesheet_system.timesheets.entry_service import TimeEntryService, default_status_for
from src.timesheet_system.timesheet_system.timesheets.service import WeekService

NOW = datetime(2026, 2, 10, 9, 0)  # Tuesday; week 7 (2026-02-02) of user 2 is already submitted


@pytest.fixture
def svc(weeks_repo, days_repo, projects_repo):
    weeks = WeekService(weeks_repo, days_repo, clock=lambda: NOW)
    return TimeEntryService(weeks, days_repo, ProjectService(projects_repo))


def _book(svc, **overrides):
    data = {"date": "2026-02-10", "project_id": 1, "man_days": "0.5"}
    data.update(overrides)
    return svc.add_project_entry(user_id=2, data=data)


def test_default_status_follows_the_weekday():
    assert default_status_for(date(2026, 2, 13)) == DayStatus.OFFICE
    assert default_status_for(date(2026, 2, 14)) == DayStatus.WEEKEND
    assert default_status_for(date(2026, 2, 15)) == DayStatus.WEEKEND


def test_save_day_files_the_day_under_its_monday_week(svc, weeks_repo):
    day = svc.save_day(user_id=2, data={"date": "2026-02-12", "time_in": "08:30", "time_out": "17:00"})

    week = weeks_repo.get_by_id(day.week_id)
    assert week.week_start == date(2026, 2, 9)
    assert week.status == WeekStatus.DRAFT
    assert day.status == DayStatus.OFFICE
    assert (day.time_in, day.time_out) == (time(8, 30), time(17, 0))


def test_save_day_defaults_weekend_status(svc):
    day = svc.save_day(user_id=2, data={"date": "2026-02-14"})

    assert day.status == DayStatus.WEEKEND
    assert day.time_in is None


def test_saving_again_updates_the_same_day(svc):
    first = svc.save_day(user_id=2, data={"date": "2026-02-12", "time_in": "08:30", "time_out": "17:00"})
    second = svc.save_day(user_id=2, data={"date": "2026-02-12", "status": "Vacation", "time_in": "08:30"})

    assert second.day_entry_id == first.day_entry_id
    assert second.status == DayStatus.VACATION
    assert (second.time_in, second.time_out) == (None, None)


def test_time_out_must_be_after_time_in(svc):
    with pytest.raises(ValidationError, match="time_out must be after time_in"):
        svc.save_day(user_id=2, data={"date": "2026-02-12", "time_in": "17:00", "time_out": "17:00"})


@pytest.mark.parametrize(
    "data, message",
    [
        ({}, "Missing required fields: date"),
        ({"date": "12.02.2026"}, "date must be YYYY-MM-DD"),
        ({"date": "2026-02-12", "status": "sick"}, "Invalid day status"),
        ({"date": "2026-02-12", "time_in": "8h"}, "time_in must be HH:MM"),
    ],
)
def test_save_day_rejects_bad_input(svc, data, message):
    with pytest.raises(ValidationError, match=message):
        svc.save_day(user_id=2, data=data)


def test_submitted_week_is_locked(svc):
    with pytest.raises(ValidationError, match="is submitted and cannot be changed"):
        svc.save_day(user_id=2, data={"date": "2026-02-03", "status": "office"})

    with pytest.raises(ValidationError, match="is submitted and cannot be changed"):
        _book(svc, date="2026-02-03")


def test_add_project_entry_creates_an_office_day(svc, days_repo):
    entry = _book(svc, location_type="ONSITE", travel_chargeable=True, city=" Munich ", country="de", description="Kick-off")

    day = days_repo.days[entry.day_entry_id]
    assert day.status == DayStatus.OFFICE
    assert day.entry_date == date(2026, 2, 10)
    assert entry.man_days == Decimal("0.5")
    assert entry.location_type == LocationType.ONSITE
    assert entry.travel_chargeable is True
    assert (entry.city, entry.country, entry.office) == ("Munich", "DE", None)


@pytest.mark.parametrize("man_days", ["0", "-0.25", "1.5"])
def test_man_days_must_be_within_a_day(svc, man_days):
    with pytest.raises(ValidationError, match="man_days must be greater than 0 and at most 1"):
        _book(svc, man_days=man_days)


def test_at_most_one_man_day_per_date(svc):
    _book(svc, man_days="0.5")
    _book(svc, project_id=2, man_days="0.5")

    with pytest.raises(ValidationError, match="At most 1 man-day can be booked on 2026-02-10"):
        _book(svc, man_days="0.25")

    # other dates are unaffected
    assert _book(svc, date="2026-02-11", man_days="1").man_days == Decimal("1")


def test_project_must_exist_and_be_active(svc):
    with pytest.raises(NotFoundError):
        _book(svc, project_id=99)
    with pytest.raises(ValidationError, match="not active"):
        _book(svc, project_id=3)
    with pytest.raises(ValidationError, match="project_id must be an integer"):
        _book(svc, project_id="abc")


def test_travel_not_billable_on_internal_project(svc):
    with pytest.raises(ValidationError, match="Travel is not billable on project INT-00"):
        _book(svc, project_id=2, travel_chargeable=True)


def test_bad_location_type(svc):
    with pytest.raises(ValidationError, match="remote or onsite"):
        _book(svc, location_type="hybrid")


def test_cannot_book_on_a_vacation_day(svc):
    svc.save_day(user_id=2, data={"date": "2026-02-10", "status": "vacation"})

    with pytest.raises(ValidationError, match="Cannot book project time on a vacation day"):
        _book(svc)


def test_booked_day_cannot_become_a_day_off(svc):
    _book(svc)

    with pytest.raises(ValidationError, match="Remove project entries before marking 2026-02-10 as day_off"):
        svc.save_day(user_id=2, data={"date": "2026-02-10", "status": "day_off"})

    assert svc.save_day(user_id=2, data={"date": "2026-02-10", "status": "travel"}).status == DayStatus.TRAVEL


def test_week_entries_group_projects_by_day(svc):
    first = _book(svc, date="2026-02-11", man_days="0.75")
    _book(svc, date="2026-02-10", man_days="1")
    svc.save_day(user_id=2, data={"date": "2026-02-13", "status": "bank_holiday"})
    week_id = svc.save_day(user_id=2, data={"date": "2026-02-11"}).week_id

    data = svc.get_week_entries(current_user_id=2, current_role=Role.CONSULTANT, week_id=week_id)

    assert data["week"].week_start == date(2026, 2, 9)
    assert [d["day"].entry_date for d in data["days"]] == [date(2026, 2, 10), date(2026, 2, 11), date(2026, 2, 13)]
    assert data["days"][1]["projects"] == [first]
    assert data["days"][2]["projects"] == []
    assert data["total_man_days"] == Decimal("1.75")


def test_week_entries_are_private_except_for_admins(svc):
    _book(svc)
    week_id = svc.save_day(user_id=2, data={"date": "2026-02-10"}).week_id

    with pytest.raises(AuthorizationError):
        svc.get_week_entries(current_user_id=3, current_role=Role.CONSULTANT, week_id=week_id)

    data = svc.get_week_entries(current_user_id=1, current_role=Role.ADMIN, week_id=week_id)
    assert data["total_man_days"] == Decimal("0.5")
