from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.enums import ApprovalType, AttendanceState


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's booking (or request) for one training event."""

    attendance_id: Optional[int]
    user_id: int
    event_id: int
    company_id: int = 0
    waitlisted: bool = False
    approved: bool = False
    manager_ok: bool = False
    tm_ok: bool = False
    booking_notes: str = ""

    @property
    def state(self) -> AttendanceState:
        if not self.approved:
            return AttendanceState.PENDING_APPROVAL
        if self.waitlisted:
            return AttendanceState.WAITLISTED
        return AttendanceState.CONFIRMED

    def as_row(self, approval_type: ApprovalType) -> Dict[str, Any]:
        """Flatten into the field names the approval predicates use."""

        return {
            "attendance_id": self.attendance_id,
            "user_id": self.user_id,
            "event_id": self.event_id,
            "company_id": self.company_id,
            "waitlisted": int(self.waitlisted),
            "approved": int(self.approved),
            "manager_ok": int(self.manager_ok),
            "tm_ok": int(self.tm_ok),
            "approval_type": int(approval_type),
        }


def state_of(record: Optional[AttendanceRecord]) -> AttendanceState:
    return record.state if record else AttendanceState.ABSENT
