from __future__ import annotations

from typing import Optional

from ..core.constants import EVENT_TABLE
from ..core.enums import ApprovalType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import TrainingEvent
from .repository import EventRepository


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, event_id: int) -> Optional[TrainingEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT id, course, name, approvaltype FROM {EVENT_TABLE} WHERE id=%s",
                (int(event_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return TrainingEvent(
                event_id=int(row["id"]),
                course_id=int(row["course"]),
                name=row["name"],
                approval_type=ApprovalType(int(row["approvaltype"] or 0)),
            )

    def get_course_module_id(self, event_id: int) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id FROM course_modules
                WHERE modulename=%s AND instance=%s
                ORDER BY id
                LIMIT 1
                """,
                (EVENT_TABLE, int(event_id)),
            )
            row = fetchone(cur)
            return int(row["id"]) if row else None
