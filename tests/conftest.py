from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from src.timesheet_system.timesheet_system.allowances.model import CountryRate
from src.timesheet_system.timesheet_system.allowances.service import AllowanceService
from src.timesheet_system.timesheet_system.container import Container
from src.timesheet_system.timesheet_system.core.enums import Role, WeekStatus
from src.timesheet_system.timesheet_system.expenses.service import ExpenseService, VatSettingsService
from src.timesheet_system.timesheet_system.main import create_app
from src.timesheet_system.timesheet_system.projects.model import Project
from src.timesheet_system.timesheet_system.projects.service import ProjectService
from src.timesheet_system.timesheet_system.timesheets.entry_service import TimeEntryService
from src.timesheet_system.timesheet_system.timesheets.model import DayEntry, ProjectEntry, Week
from src.timesheet_system.timesheet_system.timesheets.service import WeekService
from src.timesheet_system.timesheet_system.users.model import User
from src.timesheet_system.timesheet_system.users.service import AuthService, UserAdminService


class InMemoryUsers:
    def __init__(self):
        self._users = [
            User(1, "Admin", "admin@example.com", generate_password_hash("admin123"), Role.ADMIN),
            User(2, "Consultant", "consultant@example.com", generate_password_hash("consultant123"), Role.CONSULTANT),
        ]

    def get_by_id(self, user_id):
        return next((u for u in self._users if u.user_id == user_id), None)

    def get_by_email(self, email):
        return next((u for u in self._users if u.email == email), None)

    def list_all(self):
        return sorted(self._users, key=lambda u: u.full_name)

    def create(self, *, full_name, email, password_hash, role):
        user_id = max(u.user_id for u in self._users) + 1
        self._users.append(User(user_id, full_name, email, password_hash, role))
        return user_id


class InMemoryRates:
    def __init__(self):
        self.rates = {1: CountryRate(1, "DE", "Germany", Decimal("14.00"), Decimal("28.00"))}

    def get_by_code(self, country_code):
        return next((r for r in self.rates.values() if r.country_code == country_code), None)

    def get_by_id(self, rate_id):
        return self.rates.get(rate_id)

    def list_all(self):
        return list(self.rates.values())

    def update_rates(self, *, rate_id, partial_rate, full_rate, updated_by):
        old = self.rates[rate_id]
        self.rates[rate_id] = CountryRate(
            old.rate_id, old.country_code, old.country_name, partial_rate, full_rate, updated_by=updated_by
        )
        return True


class InMemoryExpenses:
    def create(self, expense):
        raise AssertionError("not used")

    def get_by_id(self, expense_id):
        return None

    def list_for_user(self, *, user_id, start_date=None, end_date=None):
        return []


class InMemoryVatSettings:
    def get(self, expense_type):
        return None

    def list_all(self):
        return []

    def update(self, **kwargs):
        return False


class InMemoryWeeks:
    """Week 7 of user 2 starts out submitted."""

    def __init__(self):
        self.weeks = {7: Week(7, 2, date(2026, 2, 2), WeekStatus.SUBMITTED, submitted_at=datetime(2026, 2, 6, 17, 0))}
        self._next_id = 8

    def get_by_id(self, week_id):
        return self.weeks.get(int(week_id))

    def get_for_user(self, *, user_id, week_start):
        return next((w for w in self.weeks.values() if w.user_id == user_id and w.week_start == week_start), None)

    def create(self, *, user_id, week_start):
        week_id = self._next_id
        self._next_id += 1
        self.weeks[week_id] = Week(week_id, user_id, week_start, WeekStatus.DRAFT)
        return week_id

    def list_by_status(self, *, status=None, limit=200):
        return [{"week_id": w.week_id, "status": w.status} for w in self.weeks.values() if status in (None, w.status)][:limit]

    def mark_submitted(self, *, week_id, submitted_at):
        week = self.weeks.get(week_id)
        if not week or week.status != WeekStatus.DRAFT:
            return False
        self.weeks[week_id] = replace(week, status=WeekStatus.SUBMITTED, submitted_at=submitted_at)
        return True

    def decide(self, *, week_id, status, decided_by, decided_at, rejection_reason=None):
        week = self.weeks.get(week_id)
        if not week or week.status != WeekStatus.SUBMITTED:
            return False
        if status == WeekStatus.APPROVED:
            self.weeks[week_id] = replace(week, status=status, approved_by=decided_by, approved_at=decided_at)
        else:
            self.weeks[week_id] = replace(
                week, status=status, rejected_by=decided_by, rejected_at=decided_at, rejection_reason=rejection_reason
            )
        return True


class InMemoryDays:
    def __init__(self):
        self.days: dict[int, DayEntry] = {}
        self.entries: dict[int, ProjectEntry] = {}
        self._next_day_id = 1
        self._next_entry_id = 1

    def get_day(self, *, week_id, entry_date):
        return next((d for d in self.days.values() if d.week_id == week_id and d.entry_date == entry_date), None)

    def list_days(self, *, week_id):
        return sorted((d for d in self.days.values() if d.week_id == week_id), key=lambda d: d.entry_date)

    def create_day(self, *, week_id, entry_date, status, time_in=None, time_out=None):
        day_id = self._next_day_id
        self._next_day_id += 1
        self.days[day_id] = DayEntry(day_id, week_id, entry_date, status, time_in, time_out)
        return day_id

    def update_day(self, *, day_entry_id, status, time_in, time_out):
        self.days[day_entry_id] = replace(self.days[day_entry_id], status=status, time_in=time_in, time_out=time_out)
        return True

    def list_project_entries(self, *, day_entry_id):
        return [e for e in self.entries.values() if e.day_entry_id == day_entry_id]

    def add_project_entry(self, *, day_entry_id, project_id, man_days, **fields):
        entry_id = self._next_entry_id
        self._next_entry_id += 1
        self.entries[entry_id] = ProjectEntry(entry_id, day_entry_id, project_id, man_days, **fields)
        return entry_id


class InMemoryProjects:
    def __init__(self):
        self.projects = {
            1: Project(1, "ACME-01", "ACME rollout"),
            2: Project(2, "INT-00", "Internal", travel_billable=False),
            3: Project(3, "OLD-99", "Closed engagement", is_active=False),
        }

    def get_by_id(self, project_id):
        return self.projects.get(project_id)

    def get_by_code(self, code):
        return next((p for p in self.projects.values() if p.code == code), None)

    def list_all(self, *, active_only=False):
        return [p for p in self.projects.values() if p.is_active or not active_only]

    def create(self, *, code, name, travel_billable):
        project_id = max(self.projects) + 1
        self.projects[project_id] = Project(project_id, code, name, travel_billable=travel_billable)
        return project_id

    def update(self, *, project_id, name=None, travel_billable=None, is_active=None):
        changes = {"name": name, "travel_billable": travel_billable, "is_active": is_active}
        self.projects[project_id] = replace(self.projects[project_id], **{k: v for k, v in changes.items() if v is not None})
        return True


@pytest.fixture
def fixed_now():
    return datetime(2026, 2, 9, 9, 0)


@pytest.fixture
def rates_repo():
    return InMemoryRates()


@pytest.fixture
def users_repo():
    return InMemoryUsers()


@pytest.fixture
def weeks_repo():
    return InMemoryWeeks()


@pytest.fixture
def days_repo():
    return InMemoryDays()


@pytest.fixture
def projects_repo():
    return InMemoryProjects()


@pytest.fixture
def app(monkeypatch, rates_repo, users_repo, weeks_repo, days_repo, projects_repo, fixed_now):
    monkeypatch.setenv("APP_ENV", "testing")
    allowance_service = AllowanceService(rates_repo)
    project_service = ProjectService(projects_repo)
    week_service = WeekService(weeks_repo, days_repo, clock=lambda: fixed_now)
    container = Container(
        auth_service=AuthService(users_repo),
        user_admin_service=UserAdminService(users_repo),
        allowance_service=allowance_service,
        expense_service=ExpenseService(InMemoryExpenses(), allowance_service),
        vat_settings_service=VatSettingsService(InMemoryVatSettings()),
        project_service=project_service,
        week_service=week_service,
        time_entry_service=TimeEntryService(week_service, days_repo, project_service),
    )
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(user_id, role):
        with client.session_transaction() as sess:
            sess["user_id"] = user_id
            sess["role"] = role.value

    return _login
