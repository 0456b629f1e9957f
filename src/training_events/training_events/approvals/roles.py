from __future__ import annotations

from typing import Iterable

from ..core.enums import ApprovalAuthority, ManagerType, RoleTieBreak

_AUTHORITY_BY_MANAGER_TYPE = {
    ManagerType.DEPARTMENT: ApprovalAuthority.MANAGER,
    ManagerType.COMPANY: ApprovalAuthority.COMPANY,
}

# Higher wins under RoleTieBreak.RANKED.
_RANK = {
    ApprovalAuthority.NONE: 0,
    ApprovalAuthority.MANAGER: 1,
    ApprovalAuthority.COMPANY: 2,
    ApprovalAuthority.BOTH: 3,
}


def resolve_authority(
    *,
    is_site_admin: bool,
    manager_types: Iterable[ManagerType],
    policy: RoleTieBreak = RoleTieBreak.RANKED,
) -> ApprovalAuthority:
    """Map an actor's manager rows in one company to a single approval authority.

    ``manager_types`` must be in ascending row order; FIRST_ROW relies on it.
    Holding a company row and a department row does not add up to BOTH, only
    site administrators get BOTH.
    """

    if is_site_admin:
        return ApprovalAuthority.BOTH

    held = [
        _AUTHORITY_BY_MANAGER_TYPE[ManagerType(t)]
        for t in manager_types
        if ManagerType(t) in _AUTHORITY_BY_MANAGER_TYPE
    ]
    if not held:
        return ApprovalAuthority.NONE

    if policy == RoleTieBreak.FIRST_ROW:
        return held[0]
    return max(held, key=_RANK.__getitem__)
