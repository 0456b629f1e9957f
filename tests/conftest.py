from __future__ import annotations

from dataclasses import replace
from typing import Optional

import pytest

from src.training_events.training_events.approvals.service import ApprovalService
from src.training_events.training_events.attendance.model import AttendanceRecord
from src.training_events.training_events.attendance.service import AttendanceService
from src.training_events.training_events.core.enums import ApprovalType, ManagerType
from src.training_events.training_events.events.model import TrainingEvent

COMPANY = 10

ADMIN = 1
COMPANY_MANAGER = 2
DEPT_MANAGER = 3
ALICE = 4
BOB = 5
OUTSIDER = 6
NEWCOMER = 7


class InMemoryUsers:
    def __init__(self, admins=()):
        self._admins = set(admins)

    def get_by_id(self, user_id):
        return None

    def is_site_admin(self, user_id):
        return int(user_id) in self._admins


class InMemoryCompanies:
    def __init__(self):
        self.company_by_user: dict[int, int] = {}
        self.manager_types: dict[tuple[int, int], list[ManagerType]] = {}
        self.subordinates: dict[tuple[int, int], set[int]] = {}

    def add(self, user_id, company_id, *manager_types, subordinates=()):
        self.company_by_user.setdefault(user_id, company_id)
        self.manager_types[(user_id, company_id)] = [ManagerType(t) for t in manager_types]
        self.subordinates[(user_id, company_id)] = set(subordinates)

    def resolve_company_for_user(self, user_id):
        return self.company_by_user.get(int(user_id))

    def list_manager_types(self, *, user_id, company_id):
        return [t for t in self.manager_types.get((user_id, company_id), []) if t]

    def list_subordinate_user_ids(self, *, user_id, company_id):
        return set(self.subordinates.get((user_id, company_id), set()))

    def list_company_user_ids(self, company_id):
        return {u for u, c in self.company_by_user.items() if c == company_id}


class InMemoryEvents:
    def __init__(self):
        self.events: dict[int, TrainingEvent] = {}
        self.course_modules: dict[int, int] = {}

    def add(self, event_id, approval_type, *, course_id=100, course_module_id=None):
        self.events[event_id] = TrainingEvent(
            event_id=event_id,
            course_id=course_id,
            name=f"Event {event_id}",
            approval_type=ApprovalType(approval_type),
        )
        if course_module_id is not None:
            self.course_modules[event_id] = course_module_id
        return self.events[event_id]

    def get_by_id(self, event_id):
        return self.events.get(int(event_id))

    def get_course_module_id(self, event_id):
        return self.course_modules.get(int(event_id))


class InMemoryAttendance:
    def __init__(self, events: InMemoryEvents):
        self._events = events
        self.records: dict[int, AttendanceRecord] = {}
        self._next_id = 1
        self.fail_inserts = False

    def get(self, *, attendance_id, event_id=None, user_id=None) -> Optional[AttendanceRecord]:
        rec = self.records.get(int(attendance_id))
        if not rec:
            return None
        if event_id is not None and rec.event_id != event_id:
            return None
        if user_id is not None and rec.user_id != user_id:
            return None
        return rec

    def get_for_user_and_event(self, *, user_id, event_id):
        for rec in self.records.values():
            if rec.user_id == user_id and rec.event_id == event_id:
                return rec
        return None

    def insert(self, record):
        if self.fail_inserts:
            return 0
        if self.get_for_user_and_event(user_id=record.user_id, event_id=record.event_id):
            raise AssertionError("duplicate (user, event) row")
        rid = self._next_id
        self._next_id += 1
        self.records[rid] = replace(record, attendance_id=rid)
        return rid

    def update(self, record):
        self.records[record.attendance_id] = record
        return True

    def delete(self, *, attendance_id):
        return self.records.pop(int(attendance_id), None) is not None

    def set_field(self, *, attendance_id, field, value):
        self.records[attendance_id] = replace(self.records[attendance_id], **{field: value})
        return True

    def find_matching(self, predicate):
        return [
            rec
            for _, rec in sorted(self.records.items())
            if predicate.matches(rec.as_row(self._events.events[rec.event_id].approval_type))
        ]

    def exists_matching(self, predicate):
        return bool(self.find_matching(predicate))


class RecordingBus:
    def __init__(self):
        self.emitted = []

    def emit(self, kind, payload):
        self.emitted.append((kind, payload))

    @property
    def kinds(self):
        return [k for k, _ in self.emitted]


class World:
    """A company with an admin, a company manager and a department manager over Alice and Bob."""

    def __init__(self, **service_options):
        self.users = InMemoryUsers(admins={ADMIN})
        self.companies = InMemoryCompanies()
        self.events = InMemoryEvents()
        self.attendance = InMemoryAttendance(self.events)
        self.bus = RecordingBus()

        staff = {COMPANY_MANAGER, DEPT_MANAGER, ALICE, BOB}
        self.companies.add(ADMIN, COMPANY)
        self.companies.add(COMPANY_MANAGER, COMPANY, ManagerType.COMPANY, subordinates=staff)
        self.companies.add(DEPT_MANAGER, COMPANY, ManagerType.DEPARTMENT, subordinates={DEPT_MANAGER, ALICE, BOB})
        self.companies.add(ALICE, COMPANY)
        self.companies.add(BOB, COMPANY)
        self.companies.add(OUTSIDER, 99)

        self.approvals = ApprovalService(
            self.users, self.companies, self.attendance, self.events, self.bus, **service_options
        )
        self.bookings = AttendanceService(self.attendance, self.events, self.bus)

    def seed(self, user_id, event_id, *, approved=False, manager_ok=False, tm_ok=False, waitlisted=False):
        rid = self.attendance.insert(
            AttendanceRecord(
                attendance_id=None,
                user_id=user_id,
                event_id=event_id,
                company_id=COMPANY,
                approved=approved,
                manager_ok=manager_ok,
                tm_ok=tm_ok,
                waitlisted=waitlisted,
            )
        )
        return self.attendance.records[rid]


@pytest.fixture
def world():
    return World()
