from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.constants import message
from ..core.enums import StoreAction
from ..core.exceptions import NotFoundError, RecordStoreError
from ..events.repository import EventRepository
from ..notifications.bus import NotificationBus
from .model import AttendanceRecord
from .repository import AttendanceRepository
from .transitions import AttendanceSubmission, TransitionDecision, decide_transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionResult:
    success: bool
    message: str
    should_refresh: bool
    attendance_id: Optional[int] = None

    def as_response(self) -> dict:
        return {
            "result": self.success,
            "returnmessage": self.message,
            "dorefresh": self.should_refresh,
        }


class AttendanceService:
    """Use case: a user books, requests, updates or withdraws attendance."""

    def __init__(self, attendance: AttendanceRepository, events: EventRepository, bus: NotificationBus):
        self._attendance = attendance
        self._events = events
        self._bus = bus

    def _existing(self, submission: AttendanceSubmission) -> Optional[AttendanceRecord]:
        record = None
        if submission.attendance_id:
            record = self._attendance.get(
                attendance_id=submission.attendance_id,
                event_id=submission.event_id,
                user_id=submission.user_id,
            )
        if record is None:
            record = self._attendance.get_for_user_and_event(
                user_id=submission.user_id,
                event_id=submission.event_id,
            )
        return record

    def _apply(self, decision: TransitionDecision) -> Optional[int]:
        record = decision.record
        if decision.action == StoreAction.INSERT:
            new_id = self._attendance.insert(record)
            if not new_id:
                raise RecordStoreError(message("updatefailed"))
            return int(new_id)
        if decision.action == StoreAction.UPDATE:
            self._attendance.update(record)
            return record.attendance_id
        if decision.action == StoreAction.DELETE:
            self._attendance.delete(attendance_id=int(record.attendance_id))
        return None

    def process_submission(self, *, actor_id: int, submission: AttendanceSubmission) -> SubmissionResult:
        event = self._events.get_by_id(submission.event_id)
        if not event:
            raise NotFoundError("Training event not found")

        existing = self._existing(submission)
        decision = decide_transition(submission=submission, existing=existing, event=event, actor_id=actor_id)
        attendance_id = self._apply(decision)

        logger.info(
            "Attendance %s by actor %s for user %s on event %s: %s -> %s",
            decision.intent.value,
            actor_id,
            submission.user_id,
            event.event_id,
            "absent" if existing is None else existing.state.value,
            decision.next_state.value,
        )

        if decision.notification is not None:
            self._bus.emit(decision.notification.kind, decision.notification.payload)

        return SubmissionResult(
            success=True,
            message=message(decision.message_key),
            should_refresh=decision.refresh,
            attendance_id=attendance_id,
        )

    def load_form_defaults(
        self,
        *,
        event_id: int,
        user_id: int,
        company_id: int = 0,
        course_module_id: int = 0,
        attendance_id: int = 0,
        waitlisted: bool = False,
        request_type: int = 0,
        refresh: bool = False,
    ) -> dict:
        """Initial values for the attendance form; a stored booking overrides the request values."""

        booking_notes = ""
        record = self._attendance.get_for_user_and_event(user_id=int(user_id), event_id=int(event_id))
        if record:
            attendance_id = record.attendance_id
            waitlisted = record.waitlisted
            booking_notes = record.booking_notes

        return {
            "companyid": int(company_id),
            "attendanceid": int(attendance_id or 0),
            "waitlisted": int(bool(waitlisted)),
            "booking_notes": booking_notes,
            "cmid": int(course_module_id),
            "requesttype": int(request_type),
            "dorefresh": bool(refresh),
            "userid": int(user_id),
            "trainingeventid": int(event_id),
        }
