from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import WeekStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Week
from .repository import WeekRepository

_SELECT = """
    SELECT week_id, user_id, week_start, status, submitted_at,
           approved_by, approved_at, rejected_by, rejected_at, rejection_reason
    FROM weeks
"""


def _to_model(r: dict) -> Week:
    return Week(
        week_id=int(r["week_id"]),
        user_id=int(r["user_id"]),
        week_start=r["week_start"],
        status=WeekStatus(r["status"]),
        submitted_at=r.get("submitted_at"),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        rejected_by=r.get("rejected_by"),
        rejected_at=r.get("rejected_at"),
        rejection_reason=r.get("rejection_reason"),
    )


class MySQLWeekRepository(WeekRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, week_id: int) -> Optional[Week]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE week_id=%s", (int(week_id),))
            row = fetchone(cur)
            return _to_model(row) if row else None

    def get_for_user(self, *, user_id: int, week_start: date) -> Optional[Week]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE user_id=%s AND week_start=%s", (int(user_id), week_start))
            row = fetchone(cur)
            return _to_model(row) if row else None

    def create(self, *, user_id: int, week_start: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO weeks(user_id, week_start, status) VALUES(%s,%s,%s)",
                (int(user_id), week_start, WeekStatus.DRAFT.value),
            )
            return int(cur.lastrowid)

    def list_by_status(self, *, status: Optional[WeekStatus] = None, limit: int = 200) -> Sequence[dict]:
        clauses = ["1=1"]
        params: list[object] = []
        if status is not None:
            clauses.append("w.status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT w.week_id, w.user_id, u.full_name, u.email,
                       w.week_start, w.status, w.submitted_at, w.approved_at,
                       w.rejected_at, w.rejection_reason
                FROM weeks w
                JOIN users u ON u.user_id = w.user_id
                WHERE {' AND '.join(clauses)}
                ORDER BY w.submitted_at DESC, w.week_start DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            out: list[dict] = []
            for r in fetchall(cur):
                out.append(
                    {
                        "week_id": int(r["week_id"]),
                        "user_id": int(r["user_id"]),
                        "full_name": r["full_name"],
                        "email": r["email"],
                        "week_start": r["week_start"].strftime("%Y-%m-%d"),
                        "status": r["status"],
                        "submitted_at": r["submitted_at"].strftime("%Y-%m-%d %H:%M") if r.get("submitted_at") else None,
                        "approved_at": r["approved_at"].strftime("%Y-%m-%d %H:%M") if r.get("approved_at") else None,
                        "rejected_at": r["rejected_at"].strftime("%Y-%m-%d %H:%M") if r.get("rejected_at") else None,
                        "rejection_reason": r.get("rejection_reason") or "",
                    }
                )
            return out

    def mark_submitted(self, *, week_id: int, submitted_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE weeks SET status=%s, submitted_at=%s WHERE week_id=%s AND status=%s",
                (WeekStatus.SUBMITTED.value, submitted_at, int(week_id), WeekStatus.DRAFT.value),
            )
            return cur.rowcount > 0

    def decide(
        self,
        *,
        week_id: int,
        status: WeekStatus,
        decided_by: int,
        decided_at: datetime,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        if status == WeekStatus.APPROVED:
            sql = """
                UPDATE weeks
                SET status=%s, approved_by=%s, approved_at=%s, rejection_reason=NULL
                WHERE week_id=%s AND status=%s
            """
            params = (status.value, int(decided_by), decided_at, int(week_id), WeekStatus.SUBMITTED.value)
        else:
            sql = """
                UPDATE weeks
                SET status=%s, rejected_by=%s, rejected_at=%s, rejection_reason=%s
                WHERE week_id=%s AND status=%s
            """
            params = (status.value, int(decided_by), decided_at, rejection_reason, int(week_id), WeekStatus.SUBMITTED.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return cur.rowcount > 0
