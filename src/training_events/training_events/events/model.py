from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import ApprovalType


@dataclass(frozen=True)
class TrainingEvent:
    """Domain entity: a scheduled training event (read-only here)."""

    event_id: int
    course_id: int
    name: str
    approval_type: ApprovalType = ApprovalType.NONE

    @property
    def requires_approval(self) -> bool:
        return self.approval_type != ApprovalType.NONE
