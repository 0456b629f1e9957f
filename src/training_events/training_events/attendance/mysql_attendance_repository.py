from __future__ import annotations

from typing import Any, Optional, Sequence

import mysql.connector

from ..approvals.predicates import Expr
from ..core.constants import ATTENDANCE_TABLE, EVENT_TABLE, message
from ..core.exceptions import RecordStoreError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

# Columns set_field may touch.
_SETTABLE = {
    "waitlisted": "waitlisted",
    "approved": "approved",
    "manager_ok": "manager_ok",
    "tm_ok": "tm_ok",
    "booking_notes": "booking_notes",
}

_SELECT = f"""
    SELECT tu.id, tu.userid, tu.trainingeventid, tu.companyid, tu.waitlisted,
           tu.approved, tu.manager_ok, tu.tm_ok, tu.booking_notes
    FROM {ATTENDANCE_TABLE} tu
    JOIN {EVENT_TABLE} te ON te.id = tu.trainingeventid
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        user_id=int(r["userid"]),
        event_id=int(r["trainingeventid"]),
        company_id=int(r.get("companyid") or 0),
        waitlisted=bool(r.get("waitlisted")),
        approved=bool(r.get("approved")),
        manager_ok=bool(r.get("manager_ok")),
        tm_ok=bool(r.get("tm_ok")),
        booking_notes=r.get("booking_notes") or "",
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(
        self,
        *,
        attendance_id: int,
        event_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> Optional[AttendanceRecord]:
        sql = f"SELECT * FROM {ATTENDANCE_TABLE} WHERE id=%s"
        params: list = [int(attendance_id)]
        if event_id is not None:
            sql += " AND trainingeventid=%s"
            params.append(int(event_id))
        if user_id is not None:
            sql += " AND userid=%s"
            params.append(int(user_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            row = fetchone(cur)
            return _to_record(row) if row else None

    def get_for_user_and_event(self, *, user_id: int, event_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT * FROM {ATTENDANCE_TABLE} WHERE userid=%s AND trainingeventid=%s",
                (int(user_id), int(event_id)),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def insert(self, record: AttendanceRecord) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    INSERT INTO {ATTENDANCE_TABLE}(
                        userid, trainingeventid, companyid, waitlisted, approved, manager_ok, tm_ok, booking_notes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(record.user_id),
                        int(record.event_id),
                        int(record.company_id),
                        int(record.waitlisted),
                        int(record.approved),
                        int(record.manager_ok),
                        int(record.tm_ok),
                        record.booking_notes,
                    ),
                )
                return int(cur.lastrowid or 0)
        except mysql.connector.Error as e:
            # Includes the (user, event) unique key losing a race.
            raise RecordStoreError(message("updatefailed")) from e

    def update(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE {ATTENDANCE_TABLE}
                SET waitlisted=%s, approved=%s, manager_ok=%s, tm_ok=%s, booking_notes=%s
                WHERE id=%s
                """,
                (
                    int(record.waitlisted),
                    int(record.approved),
                    int(record.manager_ok),
                    int(record.tm_ok),
                    record.booking_notes,
                    int(record.attendance_id),
                ),
            )
            return cur.rowcount >= 0

    def delete(self, *, attendance_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {ATTENDANCE_TABLE} WHERE id=%s", (int(attendance_id),))
            return cur.rowcount > 0

    def set_field(self, *, attendance_id: int, field: str, value: Any) -> bool:
        column = _SETTABLE.get(field)
        if not column:
            raise ValueError(f"Field cannot be set: {field!r}")
        if isinstance(value, bool):
            value = int(value)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {ATTENDANCE_TABLE} SET {column}=%s WHERE id=%s",
                (value, int(attendance_id)),
            )
            return cur.rowcount >= 0

    def find_matching(self, predicate: Expr) -> Sequence[AttendanceRecord]:
        where, params = predicate.to_sql()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE {where} ORDER BY tu.id", tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def exists_matching(self, predicate: Expr) -> bool:
        where, params = predicate.to_sql()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT 1 AS found FROM ({_SELECT} WHERE {where} LIMIT 1) AS pending", tuple(params))
            return fetchone(cur) is not None
