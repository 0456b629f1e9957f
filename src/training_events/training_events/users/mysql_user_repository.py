from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, username, full_name, is_site_admin
                FROM users
                WHERE id=%s
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return User(
                user_id=int(row["id"]),
                username=row["username"],
                full_name=row["full_name"],
                is_site_admin=bool(row.get("is_site_admin", False)),
            )

    def is_site_admin(self, user_id: int) -> bool:
        user = self.get_by_id(user_id)
        return bool(user and user.is_site_admin)
