from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ManagerType


@dataclass(frozen=True)
class Department:
    department_id: int
    company_id: int
    name: str
    parent_id: int = 0


@dataclass(frozen=True)
class CompanyMembership:
    """One company_users row: a user's place (and manager type) in a company."""

    membership_id: int
    company_id: int
    user_id: int
    manager_type: ManagerType
    department_id: int
