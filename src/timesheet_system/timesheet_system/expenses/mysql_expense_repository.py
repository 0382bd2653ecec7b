from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import ExpenseType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import ExpenseEntry, NewExpense
from .repository import ExpenseRepository

# Column names match the NewExpense field names.
_INSERT_COLUMNS = (
    "user_id",
    "project_id",
    "expense_date",
    "expense_type",
    "description",
    "gross_amount",
    "vat_percentage",
    "vat_amount",
    "net_amount",
    "distance_km",
    "rate_per_km",
    "start_datetime",
    "end_datetime",
    "destination_country",
    "calculated_allowance",
)

_SELECT = f"SELECT expense_id, created_at, {', '.join(_INSERT_COLUMNS)} FROM expense_entries"


def _to_model(r: dict) -> ExpenseEntry:
    return ExpenseEntry(
        expense_id=int(r["expense_id"]),
        user_id=int(r["user_id"]),
        project_id=int(r["project_id"]),
        expense_date=r["expense_date"],
        expense_type=ExpenseType(r["expense_type"]),
        description=r.get("description"),
        gross_amount=as_decimal(r["gross_amount"]),
        vat_percentage=as_decimal(r["vat_percentage"]),
        vat_amount=as_decimal(r["vat_amount"]),
        net_amount=as_decimal(r["net_amount"]),
        distance_km=as_decimal(r.get("distance_km")),
        rate_per_km=as_decimal(r.get("rate_per_km")),
        start_datetime=r.get("start_datetime"),
        end_datetime=r.get("end_datetime"),
        destination_country=r.get("destination_country"),
        calculated_allowance=as_decimal(r.get("calculated_allowance")),
        created_at=r.get("created_at"),
    )


class MySQLExpenseRepository(ExpenseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, expense: NewExpense) -> int:
        values = [getattr(expense, c) for c in _INSERT_COLUMNS]
        values[_INSERT_COLUMNS.index("expense_type")] = expense.expense_type.value
        placeholders = ",".join(["%s"] * len(_INSERT_COLUMNS))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO expense_entries({', '.join(_INSERT_COLUMNS)}) VALUES({placeholders})",
                tuple(values),
            )
            return int(cur.lastrowid)

    def get_by_id(self, expense_id: int) -> Optional[ExpenseEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE expense_id=%s", (int(expense_id),))
            row = fetchone(cur)
            return _to_model(row) if row else None

    def list_for_user(
        self,
        *,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[ExpenseEntry]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]

        if start_date is not None:
            clauses.append("expense_date>=%s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("expense_date<=%s")
            params.append(end_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"{_SELECT} WHERE {' AND '.join(clauses)} ORDER BY expense_date DESC, expense_id DESC",
                tuple(params),
            )
            return [_to_model(r) for r in fetchall(cur)]
