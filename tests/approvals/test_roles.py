import pytest

from src.training_events.training_events.approvals.roles import resolve_authority
from src.training_events.training_events.core.enums import ApprovalAuthority, ManagerType, RoleTieBreak


def test_site_admin_holds_both_without_membership():
    assert resolve_authority(is_site_admin=True, manager_types=[]) == ApprovalAuthority.BOTH


def test_site_admin_wins_over_department_row():
    assert resolve_authority(is_site_admin=True, manager_types=[ManagerType.DEPARTMENT]) == ApprovalAuthority.BOTH


def test_no_manager_rows_means_no_authority():
    assert resolve_authority(is_site_admin=False, manager_types=[]) == ApprovalAuthority.NONE


def test_not_a_manager_rows_are_ignored():
    assert resolve_authority(is_site_admin=False, manager_types=[ManagerType.NONE]) == ApprovalAuthority.NONE


@pytest.mark.parametrize(
    "manager_type, expected",
    [
        (ManagerType.DEPARTMENT, ApprovalAuthority.MANAGER),
        (ManagerType.COMPANY, ApprovalAuthority.COMPANY),
        (2, ApprovalAuthority.MANAGER),
        (1, ApprovalAuthority.COMPANY),
    ],
)
def test_single_manager_row(manager_type, expected):
    assert resolve_authority(is_site_admin=False, manager_types=[manager_type]) == expected


def test_ranked_policy_prefers_company_regardless_of_row_order():
    rows = [ManagerType.DEPARTMENT, ManagerType.COMPANY]
    assert resolve_authority(is_site_admin=False, manager_types=rows) == ApprovalAuthority.COMPANY
    assert resolve_authority(is_site_admin=False, manager_types=list(reversed(rows))) == ApprovalAuthority.COMPANY


def test_ranked_policy_never_merges_into_both():
    rows = [ManagerType.COMPANY, ManagerType.DEPARTMENT]
    assert resolve_authority(is_site_admin=False, manager_types=rows) != ApprovalAuthority.BOTH


def test_first_row_policy_follows_row_order():
    rows = [ManagerType.DEPARTMENT, ManagerType.COMPANY]
    result = resolve_authority(is_site_admin=False, manager_types=rows, policy=RoleTieBreak.FIRST_ROW)
    assert result == ApprovalAuthority.MANAGER


def test_first_row_policy_is_deterministic():
    rows = [ManagerType.COMPANY, ManagerType.DEPARTMENT, ManagerType.DEPARTMENT]
    results = {
        resolve_authority(is_site_admin=False, manager_types=rows, policy=RoleTieBreak.FIRST_ROW) for _ in range(5)
    }
    assert results == {ApprovalAuthority.COMPANY}
