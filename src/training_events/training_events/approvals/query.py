from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional

from ..core.enums import ApprovalAuthority, ApprovalType, CompanyClauseGrouping
from .predicates import APPROVAL_TYPE, COMPANY_ID, MANAGER_OK, TM_OK, USER_ID, And, Eq, Expr, In, Ne, Or

_MANAGER_APPROVAL_TYPES = (int(ApprovalType.MANAGER), int(ApprovalType.BOTH))
_COMPANY_APPROVAL_TYPES = (int(ApprovalType.COMPANY), int(ApprovalType.BOTH))


@dataclass(frozen=True)
class ApprovalScope:
    """Who is asking, in which company, about which users."""

    company_id: int
    actor_id: int
    subordinate_ids: FrozenSet[int]


def scope_clause(scope: ApprovalScope) -> Expr:
    return And(
        Eq(COMPANY_ID, int(scope.company_id)),
        Ne(USER_ID, int(scope.actor_id)),
        In(USER_ID, sorted(scope.subordinate_ids)),
    )


def department_clause(scope: ApprovalScope) -> Expr:
    return And(
        scope_clause(scope),
        Eq(MANAGER_OK, 0),
        In(APPROVAL_TYPE, _MANAGER_APPROVAL_TYPES),
    )


def company_clause(
    scope: ApprovalScope,
    grouping: CompanyClauseGrouping = CompanyClauseGrouping.GROUPED,
) -> Expr:
    needs_company = And(In(APPROVAL_TYPE, _COMPANY_APPROVAL_TYPES), Eq(TM_OK, 0))
    needs_manager = And(Eq(APPROVAL_TYPE, int(ApprovalType.MANAGER)), Eq(MANAGER_OK, 0))

    if grouping == CompanyClauseGrouping.LEGACY:
        # AND binds tighter than OR: the second arm escapes the scope.
        return Or(And(scope_clause(scope), needs_company), needs_manager)
    return And(scope_clause(scope), Or(needs_company, needs_manager))


def unrestricted_clause(scope: ApprovalScope) -> Expr:
    return And(scope_clause(scope), Or(Eq(TM_OK, 0), Eq(MANAGER_OK, 0)))


def pending_clause(
    authority: ApprovalAuthority,
    scope: ApprovalScope,
    *,
    grouping: CompanyClauseGrouping = CompanyClauseGrouping.GROUPED,
) -> Optional[Expr]:
    """Predicate for records awaiting ``authority``'s approval; None when there is nothing to look for."""

    if authority == ApprovalAuthority.NONE or not scope.subordinate_ids:
        return None
    if authority == ApprovalAuthority.MANAGER:
        return department_clause(scope)
    if authority == ApprovalAuthority.COMPANY:
        return company_clause(scope, grouping)
    return unrestricted_clause(scope)
