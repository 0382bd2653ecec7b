from __future__ import annotations

import json
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import ExpenseType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone, load_json_list
from .model import VatSetting
from .repository import VatSettingsRepository

_SELECT = """
    SELECT expense_type, default_vat_rate, available_rates, is_configurable, description, updated_by
    FROM vat_settings
"""


def _to_model(r: dict) -> VatSetting:
    return VatSetting(
        expense_type=ExpenseType(r["expense_type"]),
        default_vat_rate=as_decimal(r["default_vat_rate"]),
        available_rates=tuple(as_decimal(v) for v in load_json_list(r.get("available_rates"))),
        is_configurable=bool(r.get("is_configurable", True)),
        description=r.get("description"),
        updated_by=r.get("updated_by"),
    )


class MySQLVatSettingsRepository(VatSettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, expense_type: ExpenseType) -> Optional[VatSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE expense_type=%s", (expense_type.value,))
            row = fetchone(cur)
            return _to_model(row) if row else None

    def list_all(self) -> Sequence[VatSetting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} ORDER BY expense_type ASC")
            return [_to_model(r) for r in fetchall(cur)]

    def update(
        self,
        *,
        expense_type: ExpenseType,
        default_vat_rate: Decimal,
        available_rates: Optional[Sequence[Decimal]],
        description: Optional[str],
        updated_by: int,
    ) -> bool:
        sets = ["default_vat_rate=%s", "updated_by=%s", "updated_at=NOW()"]
        params: list[object] = [default_vat_rate, int(updated_by)]

        if available_rates is not None:
            sets.append("available_rates=%s")
            params.append(json.dumps([float(r) for r in available_rates]))
        if description is not None:
            sets.append("description=%s")
            params.append(description)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE vat_settings SET {', '.join(sets)} WHERE expense_type=%s",
                tuple(params + [expense_type.value]),
            )
            return cur.rowcount > 0
