from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[4] / "database"

DEMO_USERS = (
    # (full_name, email, password, role)
    ("Admin Demo", "admin@example.com", "admin123", "super_admin"),
    ("Consultant Demo", "consultant@example.com", "consultant123", "consultant"),
)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_line_comments(sql: str) -> str:
    return "\n".join(line for line in sql.splitlines() if not line.lstrip().startswith("--"))


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a schema/seed file on ';' (ignores ';' inside quotes)."""
    buf: list[str] = []
    quote: str | None = None
    escape = False

    for ch in sql:
        buf.append(ch)
        if escape:
            escape = False
        elif ch == "\\":
            escape = True
        elif quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == ";":
            stmt = "".join(buf[:-1]).strip()
            buf.clear()
            if stmt:
                yield stmt

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql_file(db_config: dict, path: str | Path) -> int:
    target = DBConfig.from_dict(db_config)
    sql = _strip_line_comments(_strip_create_db_and_use(Path(path).read_text(encoding="utf-8")))

    count = 0
    with closing(_connect(target)) as conn:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    logger.info("Applied %d statements from %s", count, Path(path).name)
    return count


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    with closing(_connect(target, with_database=False)) as conn:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _exec_sql_file(db_config, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _exec_sql_file(db_config, seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Create (or reset) the demo admin and consultant accounts."""
    target = DBConfig.from_dict(db_config)

    with closing(_connect(target)) as conn:
        cur = conn.cursor(dictionary=True)
        for full_name, email, password, role in DEMO_USERS:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE email=%s", (email,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE users
                    SET full_name=%s, password_hash=%s, role=%s, is_active=1
                    WHERE email=%s
                    """,
                    (full_name, password_hash, role, email),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO users (full_name, email, password_hash, role)
                    VALUES (%s, %s, %s, %s)
                    """,
                    (full_name, email, password_hash, role),
                )
        conn.commit()


def list_tables(db_config: dict) -> list[str]:
    target = DBConfig.from_dict(db_config)
    with closing(_connect(target)) as conn:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]


def initialize_database(db_config: dict, *, schema: bool = True, seed: bool = False) -> list[str]:
    """Apply schema.sql and/or seed.sql plus demo users; returns the table names."""
    if schema:
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
    if seed:
        apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
        ensure_demo_users(db_config)

    tables = list_tables(db_config)
    logger.info(
        "database %s@%s/%s ready (schema=%s seed=%s tables=%d)",
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("database"),
        schema,
        seed,
        len(tables),
    )
    return tables
