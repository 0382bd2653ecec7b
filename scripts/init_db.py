"""Create the database and apply schema.sql."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from config import get_settings_module  # noqa: E402
from src.timesheet_system.timesheet_system.database.bootstrap import initialize_database  # noqa: E402

if __name__ == "__main__":
    settings = importlib.import_module(get_settings_module())
    tables = initialize_database(dict(settings.DB_CONFIG), schema=True, seed=False)
    print("OK:", ", ".join(tables))
