from __future__ import annotations

from enum import Enum, IntEnum


class ManagerType(IntEnum):
    """managertype values stored in company_users."""

    NONE = 0
    COMPANY = 1
    DEPARTMENT = 2


class ApprovalType(IntEnum):
    """Per-event approval policy."""

    NONE = 0
    MANAGER = 1
    COMPANY = 2
    BOTH = 3

    @property
    def requires_manager(self) -> bool:
        return self in (ApprovalType.MANAGER, ApprovalType.BOTH)

    @property
    def requires_company(self) -> bool:
        return self in (ApprovalType.COMPANY, ApprovalType.BOTH)


class ApprovalAuthority(str, Enum):
    """What kind of approval an actor may grant within a company."""

    NONE = "none"
    MANAGER = "manager"
    COMPANY = "company"
    BOTH = "both"


class RoleTieBreak(str, Enum):
    """How to pick one authority when an actor has several manager rows."""

    RANKED = "ranked"
    FIRST_ROW = "first_row"


class CompanyClauseGrouping(str, Enum):
    GROUPED = "grouped"
    LEGACY = "legacy"


class AttendanceIntent(str, Enum):
    ATTEND = "attend"
    REQUEST = "request"
    UPDATE = "update"
    REMOVE = "remove"


class AttendanceState(str, Enum):
    ABSENT = "absent"
    PENDING_APPROVAL = "pending_approval"
    WAITLISTED = "waitlisted"
    CONFIRMED = "confirmed"


class StoreAction(str, Enum):
    NONE = "none"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


class NotificationKind(str, Enum):
    USER_ATTENDING = "user_attending"
    APPROVAL_REQUESTED = "approval_requested"
    USER_REMOVED = "user_removed"
    ATTENDANCE_WITHDRAWN = "attendance_withdrawn"
    REQUEST_DENIED = "request_denied"
