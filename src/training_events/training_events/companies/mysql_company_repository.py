from __future__ import annotations

from typing import Optional, Sequence, Set

from ..core.enums import ManagerType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .hierarchy import subordinate_user_ids
from .model import CompanyMembership, Department
from .repository import CompanyRepository


class MySQLCompanyRepository(CompanyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def resolve_company_for_user(self, user_id: int) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT companyid FROM company_users WHERE userid=%s ORDER BY id LIMIT 1",
                (int(user_id),),
            )
            row = fetchone(cur)
            return int(row["companyid"]) if row else None

    def list_manager_types(self, *, user_id: int, company_id: int) -> Sequence[ManagerType]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT managertype
                FROM company_users
                WHERE userid=%s AND companyid=%s AND managertype > 0
                ORDER BY id
                """,
                (int(user_id), int(company_id)),
            )
            return [ManagerType(int(r["managertype"])) for r in fetchall(cur)]

    def list_subordinate_user_ids(self, *, user_id: int, company_id: int) -> Set[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, company, name, parent FROM department WHERE company=%s",
                (int(company_id),),
            )
            departments = [
                Department(
                    department_id=int(r["id"]),
                    company_id=int(r["company"]),
                    name=r["name"],
                    parent_id=int(r.get("parent") or 0),
                )
                for r in fetchall(cur)
            ]
            cur.execute(
                """
                SELECT id, companyid, userid, managertype, departmentid
                FROM company_users
                WHERE companyid=%s
                ORDER BY id
                """,
                (int(company_id),),
            )
            memberships = [
                CompanyMembership(
                    membership_id=int(r["id"]),
                    company_id=int(r["companyid"]),
                    user_id=int(r["userid"]),
                    manager_type=ManagerType(int(r["managertype"])),
                    department_id=int(r["departmentid"]),
                )
                for r in fetchall(cur)
            ]
        return subordinate_user_ids(manager_id=int(user_id), memberships=memberships, departments=departments)

    def list_company_user_ids(self, company_id: int) -> Set[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT DISTINCT userid FROM company_users WHERE companyid=%s", (int(company_id),))
            return {int(r["userid"]) for r in fetchall(cur)}
