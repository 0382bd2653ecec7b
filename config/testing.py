import os

# Tests inject an in-memory container; DB_CONFIG only matters for manual runs.
SECRET_KEY = "test-secret"
DEBUG = False
TESTING = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("TEST_DB_NAME", "timesheet_test_db"),
}

AUTO_INIT_DB = False
AUTO_SEED_DB = False
