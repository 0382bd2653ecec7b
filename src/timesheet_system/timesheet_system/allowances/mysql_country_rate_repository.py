from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import CountryRate
from .repository import CountryRateRepository

_COLUMNS = "rate_id, country_code, country_name, rate_a, rate_b, effective_from, updated_at, updated_by"


def _to_model(row: dict) -> CountryRate:
    return CountryRate(
        rate_id=int(row["rate_id"]),
        country_code=row["country_code"],
        country_name=row["country_name"],
        partial_rate=as_decimal(row["rate_a"]),
        full_rate=as_decimal(row["rate_b"]),
        effective_from=row.get("effective_from"),
        updated_at=row.get("updated_at"),
        updated_by=row.get("updated_by"),
    )


class MySQLCountryRateRepository(CountryRateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_code(self, country_code: str) -> Optional[CountryRate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM country_daily_rates WHERE country_code=%s", (country_code,))
            row = fetchone(cur)
            return _to_model(row) if row else None

    def get_by_id(self, rate_id: int) -> Optional[CountryRate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM country_daily_rates WHERE rate_id=%s", (int(rate_id),))
            row = fetchone(cur)
            return _to_model(row) if row else None

    def list_all(self) -> Sequence[CountryRate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM country_daily_rates ORDER BY country_name ASC")
            return [_to_model(r) for r in fetchall(cur)]

    def update_rates(self, *, rate_id: int, partial_rate: Decimal, full_rate: Decimal, updated_by: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE country_daily_rates
                SET rate_a=%s, rate_b=%s, updated_by=%s, updated_at=NOW()
                WHERE rate_id=%s
                """,
                (partial_rate, full_rate, int(updated_by), int(rate_id)),
            )
            return cur.rowcount > 0
