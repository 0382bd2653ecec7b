from __future__ import annotations

from datetime import date, time
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import DayStatus, LocationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, as_time, db_cursor, fetchall, fetchone
from .model import DayEntry, ProjectEntry
from .repository import DayEntryRepository

_SELECT_DAY = "SELECT day_entry_id, week_id, entry_date, status, time_in, time_out FROM day_entries"


def _to_day(r: dict) -> DayEntry:
    return DayEntry(
        day_entry_id=int(r["day_entry_id"]),
        week_id=int(r["week_id"]),
        entry_date=r["entry_date"],
        status=DayStatus(r["status"]),
        time_in=as_time(r.get("time_in")),
        time_out=as_time(r.get("time_out")),
    )


def _to_project_entry(r: dict) -> ProjectEntry:
    return ProjectEntry(
        project_entry_id=int(r["project_entry_id"]),
        day_entry_id=int(r["day_entry_id"]),
        project_id=int(r["project_id"]),
        man_days=as_decimal(r["man_days"]),
        location_type=LocationType(r["location_type"]),
        description=r.get("description"),
        travel_chargeable=bool(r.get("travel_chargeable")),
        office=r.get("office"),
        city=r.get("city"),
        country=r.get("country"),
    )


class MySQLDayEntryRepository(DayEntryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_day(self, *, week_id: int, entry_date: date) -> Optional[DayEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT_DAY} WHERE week_id=%s AND entry_date=%s", (int(week_id), entry_date))
            row = fetchone(cur)
            return _to_day(row) if row else None

    def list_days(self, *, week_id: int) -> Sequence[DayEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT_DAY} WHERE week_id=%s ORDER BY entry_date", (int(week_id),))
            return [_to_day(r) for r in fetchall(cur)]

    def create_day(
        self,
        *,
        week_id: int,
        entry_date: date,
        status: DayStatus,
        time_in: Optional[time] = None,
        time_out: Optional[time] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO day_entries(week_id, entry_date, status, time_in, time_out) VALUES(%s,%s,%s,%s,%s)",
                (int(week_id), entry_date, status.value, time_in, time_out),
            )
            return int(cur.lastrowid)

    def update_day(self, *, day_entry_id: int, status: DayStatus, time_in: Optional[time], time_out: Optional[time]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE day_entries SET status=%s, time_in=%s, time_out=%s WHERE day_entry_id=%s",
                (status.value, time_in, time_out, int(day_entry_id)),
            )
            return True

    def list_project_entries(self, *, day_entry_id: int) -> Sequence[ProjectEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT project_entry_id, day_entry_id, project_id, man_days, location_type,
                       description, travel_chargeable, office, city, country
                FROM project_entries
                WHERE day_entry_id=%s
                ORDER BY project_entry_id
                """,
                (int(day_entry_id),),
            )
            return [_to_project_entry(r) for r in fetchall(cur)]

    def add_project_entry(
        self,
        *,
        day_entry_id: int,
        project_id: int,
        man_days: Decimal,
        location_type: LocationType,
        description: Optional[str],
        travel_chargeable: bool,
        office: Optional[str],
        city: Optional[str],
        country: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO project_entries(
                    day_entry_id, project_id, man_days, location_type,
                    description, travel_chargeable, office, city, country
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(day_entry_id),
                    int(project_id),
                    man_days,
                    location_type.value,
                    description,
                    1 if travel_chargeable else 0,
                    office,
                    city,
                    country,
                ),
            )
            return int(cur.lastrowid)
