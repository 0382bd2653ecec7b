from __future__ import annotations

from datetime import time, timedelta

import pytest

from config import get_settings_module
from src.timesheet_system.timesheet_system.database.mysql_base import as_time


@pytest.mark.parametrize(
    "app_env, module",
    [
        ("production", "config.production"),
        (" PROD ", "config.production"),
        ("testing", "config.testing"),
        ("test", "config.testing"),
        ("development", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_settings_module_for_app_env(monkeypatch, app_env, module):
    monkeypatch.setenv("APP_ENV", app_env)

    assert get_settings_module() == module


def test_settings_default_to_development(monkeypatch):
    monkeypatch.delenv("APP_ENV", raising=False)

    assert get_settings_module() == "config.development"


def test_mysql_time_columns_become_clock_times():
    assert as_time(None) is None
    assert as_time(timedelta(hours=8, minutes=30)) == time(8, 30)
    assert as_time(time(17, 0)) == time(17, 0)
    with pytest.raises(TypeError):
        as_time("08:30")
