from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def as_decimal(value: Any) -> Optional[Decimal]:
    """Normalize MySQL DECIMAL columns (Decimal, float or str depending on driver)."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def load_json_list(value: Any) -> list:
    """Normalize a MySQL JSON column into a Python list.

    mysql-connector can return JSON as:
    - str (pure Python implementation)
    - bytes / bytearray (C extension)
    - an already decoded list
    """
    if value is None:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value) if value.strip() else []
    if not isinstance(value, list):
        raise TypeError(f"Unsupported MySQL JSON value type: {type(value)!r}")
    return value


def as_time(value: Any) -> Optional[time]:
    """mysql-connector returns TIME columns as timedelta since midnight."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        return (datetime.min + value).time()
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
