from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Project
from .repository import ProjectRepository

_SELECT = "SELECT project_id, code, name, travel_billable, is_active FROM projects"


def _to_model(r: dict) -> Project:
    return Project(
        project_id=int(r["project_id"]),
        code=r["code"],
        name=r["name"],
        travel_billable=bool(r["travel_billable"]),
        is_active=bool(r["is_active"]),
    )


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, project_id: int) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE project_id=%s", (int(project_id),))
            row = fetchone(cur)
            return _to_model(row) if row else None

    def get_by_code(self, code: str) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE code=%s", (code,))
            row = fetchone(cur)
            return _to_model(row) if row else None

    def list_all(self, *, active_only: bool = False) -> Sequence[Project]:
        where = " WHERE is_active=1" if active_only else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT}{where} ORDER BY code")
            return [_to_model(r) for r in fetchall(cur)]

    def create(self, *, code: str, name: str, travel_billable: bool) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO projects(code, name, travel_billable) VALUES(%s,%s,%s)",
                (code, name, 1 if travel_billable else 0),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        project_id: int,
        name: Optional[str] = None,
        travel_billable: Optional[bool] = None,
        is_active: Optional[bool] = None,
    ) -> bool:
        sets: list[str] = []
        params: list[object] = []
        if name is not None:
            sets.append("name=%s")
            params.append(name)
        if travel_billable is not None:
            sets.append("travel_billable=%s")
            params.append(1 if travel_billable else 0)
        if is_active is not None:
            sets.append("is_active=%s")
            params.append(1 if is_active else 0)
        if not sets:
            return True

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE projects SET {', '.join(sets)} WHERE project_id=%s", tuple(params + [int(project_id)]))
            # rowcount is 0 when the values did not change
            return True
