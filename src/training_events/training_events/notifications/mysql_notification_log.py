from __future__ import annotations

import json

from ..core.enums import NotificationKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import NotificationPayload


class MySQLNotificationLog:
    """Bus subscriber that keeps an audit row per emitted notification."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def __call__(self, kind: NotificationKind, payload: NotificationPayload) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notification_log(
                    kind, actorid, relateduserid, objectid, companyid, courseid, cmid, other
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    NotificationKind(kind).value,
                    int(payload.actor_id),
                    int(payload.related_user_id),
                    int(payload.object_id),
                    int(payload.company_id),
                    int(payload.course_id),
                    int(payload.course_module_id),
                    json.dumps(payload.other, sort_keys=True),
                ),
            )
