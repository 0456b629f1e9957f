from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Set

from .model import CompanyMembership, Department


def descendant_department_ids(departments: Iterable[Department], root_ids: Iterable[int]) -> Set[int]:
    """Return ``root_ids`` plus every department below them."""

    children: dict[int, list[int]] = defaultdict(list)
    for d in departments:
        if d.parent_id and d.parent_id != d.department_id:
            children[d.parent_id].append(d.department_id)

    seen: Set[int] = set()
    stack = [int(r) for r in root_ids]
    while stack:
        current = stack.pop()
        if current in seen:
            continue
        seen.add(current)
        stack.extend(children.get(current, ()))
    return seen


def subordinate_user_ids(
    *,
    manager_id: int,
    memberships: Iterable[CompanyMembership],
    departments: Iterable[Department],
) -> Set[int]:
    """Users in the manager's departments or any department beneath them.

    The manager's own id is part of the result when they sit in one of those
    departments; callers exclude it where needed.
    """

    memberships = list(memberships)
    roots = {m.department_id for m in memberships if m.user_id == manager_id and m.manager_type}
    if not roots:
        return set()
    scope = descendant_department_ids(departments, roots)
    return {m.user_id for m in memberships if m.department_id in scope}
