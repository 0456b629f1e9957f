from __future__ import annotations

from typing import Optional, Protocol, Sequence, Set

from ..core.enums import ManagerType


class CompanyRepository(Protocol):
    """Company membership directory."""

    def resolve_company_for_user(self, user_id: int) -> Optional[int]:
        raise NotImplementedError

    def list_manager_types(self, *, user_id: int, company_id: int) -> Sequence[ManagerType]:
        """Manager types held in the company, ascending row id, type 0 excluded."""

        raise NotImplementedError

    def list_subordinate_user_ids(self, *, user_id: int, company_id: int) -> Set[int]:
        raise NotImplementedError

    def list_company_user_ids(self, company_id: int) -> Set[int]:
        raise NotImplementedError
