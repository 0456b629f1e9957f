from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Tuple

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..companies.repository import CompanyRepository
from ..core.constants import message
from ..core.enums import ApprovalAuthority, ApprovalType, CompanyClauseGrouping, NotificationKind, RoleTieBreak
from ..core.exceptions import AuthorizationError, CourseModuleNotFoundError, NotFoundError, RecordStoreError
from ..events.model import TrainingEvent
from ..events.repository import EventRepository
from ..notifications.bus import NotificationBus
from ..notifications.model import NotificationPayload
from ..users.repository import UserRepository
from . import roles
from .predicates import Expr
from .query import ApprovalScope, pending_clause

logger = logging.getLogger(__name__)


class ApprovalService:
    """Use cases for managers: what is waiting for me, approve, deny, register."""

    def __init__(
        self,
        users: UserRepository,
        companies: CompanyRepository,
        attendance: AttendanceRepository,
        events: EventRepository,
        bus: NotificationBus,
        *,
        tie_break: RoleTieBreak = RoleTieBreak.RANKED,
        grouping: CompanyClauseGrouping = CompanyClauseGrouping.GROUPED,
    ):
        self._users = users
        self._companies = companies
        self._attendance = attendance
        self._events = events
        self._bus = bus
        self._tie_break = RoleTieBreak(tie_break)
        self._grouping = CompanyClauseGrouping(grouping)

    def resolve_authority(self, *, actor_id: int, company_id: int) -> ApprovalAuthority:
        return roles.resolve_authority(
            is_site_admin=self._users.is_site_admin(int(actor_id)),
            manager_types=self._companies.list_manager_types(user_id=int(actor_id), company_id=int(company_id)),
            policy=self._tie_break,
        )

    def _pending(self, actor_id: int) -> Tuple[ApprovalAuthority, Optional[Expr]]:
        company_id = self._companies.resolve_company_for_user(int(actor_id))
        if not company_id:
            logger.debug("Actor %s has no company, nothing to approve", actor_id)
            return ApprovalAuthority.NONE, None

        is_admin = self._users.is_site_admin(int(actor_id))
        authority = roles.resolve_authority(
            is_site_admin=is_admin,
            manager_types=self._companies.list_manager_types(user_id=int(actor_id), company_id=company_id),
            policy=self._tie_break,
        )
        if authority == ApprovalAuthority.NONE:
            logger.debug("Actor %s is not a manager in company %s", actor_id, company_id)
            return authority, None

        if is_admin:
            subordinates = self._companies.list_company_user_ids(company_id)
        else:
            subordinates = self._companies.list_subordinate_user_ids(user_id=int(actor_id), company_id=company_id)

        scope = ApprovalScope(company_id=int(company_id), actor_id=int(actor_id), subordinate_ids=frozenset(subordinates))
        return authority, pending_clause(authority, scope, grouping=self._grouping)

    def has_pending_approvals(self, *, actor_id: int) -> bool:
        _, clause = self._pending(actor_id)
        if clause is None:
            return False
        return self._attendance.exists_matching(clause)

    def list_pending_approvals(self, *, actor_id: int) -> List[AttendanceRecord]:
        _, clause = self._pending(actor_id)
        if clause is None:
            return []
        return list(self._attendance.find_matching(clause))

    def _load_pending(self, *, actor_id: int, attendance_id: int) -> Tuple[ApprovalAuthority, AttendanceRecord, TrainingEvent]:
        record = self._attendance.get(attendance_id=int(attendance_id))
        if not record:
            raise NotFoundError("Attendance request not found")
        event = self._events.get_by_id(record.event_id)
        if not event:
            raise NotFoundError("Training event not found")

        authority, clause = self._pending(actor_id)
        if clause is None or not clause.matches(record.as_row(event.approval_type)):
            raise AuthorizationError("You cannot decide this request")
        return authority, record, event

    def approve_request(self, *, actor_id: int, attendance_id: int) -> AttendanceRecord:
        authority, record, event = self._load_pending(actor_id=actor_id, attendance_id=attendance_id)

        policy = event.approval_type
        changes = {}
        if authority == ApprovalAuthority.BOTH:
            changes.update(manager_ok=True, tm_ok=True)
        elif authority == ApprovalAuthority.MANAGER:
            changes["manager_ok"] = True
        elif authority == ApprovalAuthority.COMPANY:
            if policy.requires_company:
                changes["tm_ok"] = True
            if policy == ApprovalType.MANAGER:
                changes["manager_ok"] = True

        decided = replace(record, **changes)
        ready = (not policy.requires_manager or decided.manager_ok) and (not policy.requires_company or decided.tm_ok)
        if ready:
            # Flags the event does not ask for count as given.
            changes.update(manager_ok=True, tm_ok=True)

        for field, value in changes.items():
            if getattr(record, field) != value:
                self._attendance.set_field(attendance_id=int(record.attendance_id), field=field, value=value)
        record = replace(record, **changes)
        logger.info("Actor %s approved %s on attendance %s", actor_id, sorted(changes), record.attendance_id)

        if ready:
            return self.register_user(
                actor_id=actor_id,
                user_id=record.user_id,
                event_id=event.event_id,
                company_id=record.company_id,
                waitlisted=record.waitlisted,
            )
        return record

    def deny_request(self, *, actor_id: int, attendance_id: int) -> None:
        _, record, event = self._load_pending(actor_id=actor_id, attendance_id=attendance_id)

        self._attendance.delete(attendance_id=int(record.attendance_id))
        logger.info("Actor %s denied attendance %s", actor_id, record.attendance_id)
        self._bus.emit(
            NotificationKind.REQUEST_DENIED,
            NotificationPayload(
                actor_id=int(actor_id),
                related_user_id=record.user_id,
                object_id=event.event_id,
                company_id=record.company_id,
                course_id=event.course_id,
                course_module_id=self._events.get_course_module_id(event.event_id) or 0,
                other={"waitlisted": int(record.waitlisted)},
            ),
        )

    def register_user(
        self,
        *,
        actor_id: int,
        user_id: int,
        event_id: int,
        company_id: int = 0,
        waitlisted: bool = False,
    ) -> AttendanceRecord:
        """Put an approved user on the event, creating the booking if needed."""

        event = self._events.get_by_id(int(event_id))
        if not event:
            raise NotFoundError("Training event not found")
        course_module_id = self._events.get_course_module_id(event.event_id)
        if not course_module_id:
            raise CourseModuleNotFoundError(message("invalidcoursemodule"))

        current = self._attendance.get_for_user_and_event(user_id=int(user_id), event_id=event.event_id)
        if current is None:
            current = AttendanceRecord(
                attendance_id=None,
                user_id=int(user_id),
                event_id=event.event_id,
                company_id=int(company_id),
                waitlisted=bool(waitlisted),
                approved=True,
                manager_ok=True,
                tm_ok=True,
            )
            new_id = self._attendance.insert(current)
            if not new_id:
                raise RecordStoreError(message("updatefailed"))
            current = replace(current, attendance_id=int(new_id))
        else:
            self._attendance.set_field(attendance_id=int(current.attendance_id), field="waitlisted", value=bool(waitlisted))
            self._attendance.set_field(attendance_id=int(current.attendance_id), field="approved", value=True)
            current = replace(current, waitlisted=bool(waitlisted), approved=True)

        self._bus.emit(
            NotificationKind.USER_ATTENDING,
            NotificationPayload(
                actor_id=int(actor_id),
                related_user_id=int(user_id),
                object_id=event.event_id,
                company_id=current.company_id or int(company_id),
                course_id=event.course_id,
                course_module_id=int(course_module_id),
                other={"waitlisted": int(bool(waitlisted)), "skipemails": True},
            ),
        )
        logger.info("User %s registered on event %s by actor %s", user_id, event.event_id, actor_id)
        return current
