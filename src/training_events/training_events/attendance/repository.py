from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from ..approvals.predicates import Expr
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get(
        self,
        *,
        attendance_id: int,
        event_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_event(self, *, user_id: int, event_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def insert(self, record: AttendanceRecord) -> int:
        """Insert and return the new id (0 when the store refused it)."""

        raise NotImplementedError

    def update(self, record: AttendanceRecord) -> bool:
        raise NotImplementedError

    def delete(self, *, attendance_id: int) -> bool:
        raise NotImplementedError

    def set_field(self, *, attendance_id: int, field: str, value: Any) -> bool:
        raise NotImplementedError

    def find_matching(self, predicate: Expr) -> Sequence[AttendanceRecord]:
        """Records (joined with their event) matching ``predicate``, ordered by id."""

        raise NotImplementedError

    def exists_matching(self, predicate: Expr) -> bool:
        raise NotImplementedError
