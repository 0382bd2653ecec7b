from __future__ import annotations

from dataclasses import dataclass

from .allowances.calculator.standard_calculator import StandardAllowanceCalculator
from .allowances.mysql_country_rate_repository import MySQLCountryRateRepository
from .allowances.service import AllowanceService
from .database.connection import DBConfig, DatabaseConnection
from .expenses.mysql_expense_repository import MySQLExpenseRepository
from .expenses.mysql_vat_settings_repository import MySQLVatSettingsRepository
from .expenses.service import ExpenseService, VatSettingsService
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.service import ProjectService
from .timesheets.entry_service import TimeEntryService
from .timesheets.mysql_day_entry_repository import MySQLDayEntryRepository
from .timesheets.mysql_week_repository import MySQLWeekRepository
from .timesheets.service import WeekService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserAdminService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    user_admin_service: UserAdminService
    allowance_service: AllowanceService
    expense_service: ExpenseService
    vat_settings_service: VatSettingsService
    project_service: ProjectService
    week_service: WeekService
    time_entry_service: TimeEntryService


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    rates_repo = MySQLCountryRateRepository(conn)
    days_repo = MySQLDayEntryRepository(conn)

    allowance_service = AllowanceService(rates_repo, calculator=StandardAllowanceCalculator())
    project_service = ProjectService(MySQLProjectRepository(conn))
    week_service = WeekService(MySQLWeekRepository(conn), days_repo)

    return Container(
        auth_service=AuthService(users_repo),
        user_admin_service=UserAdminService(users_repo),
        allowance_service=allowance_service,
        expense_service=ExpenseService(MySQLExpenseRepository(conn), allowance_service),
        vat_settings_service=VatSettingsService(MySQLVatSettingsRepository(conn)),
        project_service=project_service,
        week_service=week_service,
        time_entry_service=TimeEntryService(week_service, days_repo, project_service),
    )
