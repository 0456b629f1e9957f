"""Attendance state transitions.

``decide_transition`` is pure: it looks at the stored record for a
(user, event) pair and the submitted form, and says what to write, which
notification to raise and what to tell the user. Applying the decision is
``AttendanceService``'s job.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from ..common.validators import parse_flag, parse_int
from ..core.constants import REQUEST_AGAIN
from ..core.enums import AttendanceIntent, AttendanceState, NotificationKind, StoreAction
from ..core.exceptions import ValidationError
from ..events.model import TrainingEvent
from ..notifications.model import Notification, NotificationPayload
from .model import AttendanceRecord, state_of


@dataclass(frozen=True)
class AttendanceSubmission:
    """What the attendance form posts back."""

    event_id: int
    user_id: int
    company_id: int = 0
    course_id: int = 0
    course_module_id: int = 0
    attendance_id: int = 0
    waitlisted: bool = False
    request_type: int = 0
    remove: bool = False
    booking_notes: str = ""
    refresh: bool = False

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> "AttendanceSubmission":
        event_id = parse_int(form.get("trainingeventid"), "trainingeventid")
        user_id = parse_int(form.get("userid"), "userid")
        if event_id <= 0 or user_id <= 0:
            raise ValidationError("trainingeventid and userid are required")
        return cls(
            event_id=event_id,
            user_id=user_id,
            company_id=parse_int(form.get("companyid"), "companyid"),
            course_id=parse_int(form.get("courseid"), "courseid"),
            course_module_id=parse_int(form.get("cmid"), "cmid"),
            attendance_id=parse_int(form.get("attendanceid"), "attendanceid"),
            waitlisted=parse_flag(form.get("waitlisted")),
            request_type=parse_int(form.get("requesttype"), "requesttype"),
            remove=parse_flag(form.get("removeme")),
            booking_notes=str(form.get("booking_notes") or ""),
            refresh=parse_flag(form.get("dorefresh")),
        )


@dataclass(frozen=True)
class TransitionDecision:
    intent: AttendanceIntent
    action: StoreAction
    record: Optional[AttendanceRecord]
    notification: Optional[Notification]
    message_key: str
    refresh: bool

    @property
    def next_state(self) -> AttendanceState:
        if self.action == StoreAction.DELETE or self.record is None:
            return AttendanceState.ABSENT
        return state_of(self.record)


def intent_for(submission: AttendanceSubmission, existing: Optional[AttendanceRecord]) -> AttendanceIntent:
    if submission.remove:
        return AttendanceIntent.REMOVE
    if existing is not None:
        return AttendanceIntent.UPDATE
    if submission.request_type:
        return AttendanceIntent.REQUEST
    return AttendanceIntent.ATTEND


def _notify(
    kind: NotificationKind,
    submission: AttendanceSubmission,
    event: TrainingEvent,
    actor_id: int,
) -> Notification:
    return Notification(
        kind=kind,
        payload=NotificationPayload(
            actor_id=int(actor_id),
            related_user_id=submission.user_id,
            object_id=event.event_id,
            company_id=submission.company_id,
            course_id=submission.course_id or event.course_id,
            course_module_id=submission.course_module_id,
            other={"waitlisted": int(submission.waitlisted)},
        ),
    )


def decide_transition(
    *,
    submission: AttendanceSubmission,
    existing: Optional[AttendanceRecord],
    event: TrainingEvent,
    actor_id: int,
) -> TransitionDecision:
    if submission.event_id != event.event_id:
        raise ValidationError("Submission does not belong to this training event")

    intent = intent_for(submission, existing)

    if intent == AttendanceIntent.REMOVE:
        if existing is None:
            # Nothing stored (e.g. a request that never landed); the client still gets told.
            return TransitionDecision(
                intent=intent,
                action=StoreAction.NONE,
                record=None,
                notification=_notify(NotificationKind.ATTENDANCE_WITHDRAWN, submission, event, actor_id),
                message_key="removerequest_successful",
                refresh=True,
            )
        if existing.approved:
            kind, key = NotificationKind.USER_REMOVED, "unattend_successful"
        else:
            kind, key = NotificationKind.ATTENDANCE_WITHDRAWN, "removerequest_successful"
        return TransitionDecision(
            intent=intent,
            action=StoreAction.DELETE,
            record=existing,
            notification=_notify(kind, submission, event, actor_id),
            message_key=key,
            refresh=True,
        )

    if intent == AttendanceIntent.UPDATE:
        return TransitionDecision(
            intent=intent,
            action=StoreAction.UPDATE,
            record=replace(existing, booking_notes=submission.booking_notes, waitlisted=submission.waitlisted),
            notification=None,
            message_key="updateattendance_successful",
            refresh=False,
        )

    policy = event.approval_type
    record = AttendanceRecord(
        attendance_id=None,
        user_id=submission.user_id,
        event_id=event.event_id,
        company_id=submission.company_id,
        waitlisted=submission.waitlisted,
        approved=not event.requires_approval,
        manager_ok=not policy.requires_manager,
        tm_ok=not policy.requires_company,
        booking_notes=submission.booking_notes,
    )

    if event.requires_approval:
        key = "requestagain_success" if submission.request_type == REQUEST_AGAIN else "request_success"
        return TransitionDecision(
            intent=AttendanceIntent.REQUEST,
            action=StoreAction.INSERT,
            record=record,
            notification=_notify(NotificationKind.APPROVAL_REQUESTED, submission, event, actor_id),
            message_key=key,
            refresh=submission.refresh,
        )

    return TransitionDecision(
        intent=AttendanceIntent.ATTEND,
        action=StoreAction.INSERT,
        record=record,
        notification=_notify(NotificationKind.USER_ATTENDING, submission, event, actor_id),
        message_key="attend_waitlist_successful" if submission.waitlisted else "attend_successful",
        refresh=submission.refresh,
    )


def removal_label(*, attending: bool, approval_type: int) -> Optional[str]:
    """Label key for the form's removal checkbox; None hides it."""

    if not attending:
        return None
    return "removerequest" if int(approval_type) != 0 else "unattend"
