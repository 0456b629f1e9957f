from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .approvals.service import ApprovalService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .companies.mysql_company_repository import MySQLCompanyRepository
from .core.enums import CompanyClauseGrouping, RoleTieBreak
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventRepository
from .notifications.bus import SignalNotificationBus, log_notification
from .notifications.mysql_notification_log import MySQLNotificationLog
from .users.mysql_user_repository import MySQLUserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    companies_repo: MySQLCompanyRepository
    events_repo: MySQLEventRepository
    attendance_repo: MySQLAttendanceRepository

    bus: SignalNotificationBus

    approval_service: ApprovalService
    attendance_service: AttendanceService


def build_container(*, db_config: dict, settings: Optional[Any] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    users_repo = MySQLUserRepository(conn)
    companies_repo = MySQLCompanyRepository(conn)
    events_repo = MySQLEventRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)

    bus = SignalNotificationBus()
    bus.subscribe(log_notification)
    if getattr(settings, "PERSIST_NOTIFICATIONS", True):
        bus.subscribe(MySQLNotificationLog(conn))

    approval_service = ApprovalService(
        users_repo,
        companies_repo,
        attendance_repo,
        events_repo,
        bus,
        tie_break=RoleTieBreak(getattr(settings, "ROLE_TIE_BREAK", RoleTieBreak.RANKED.value)),
        grouping=CompanyClauseGrouping(getattr(settings, "COMPANY_CLAUSE_GROUPING", CompanyClauseGrouping.GROUPED.value)),
    )
    attendance_service = AttendanceService(attendance_repo, events_repo, bus)

    return Container(
        conn=conn,
        users_repo=users_repo,
        companies_repo=companies_repo,
        events_repo=events_repo,
        attendance_repo=attendance_repo,
        bus=bus,
        approval_service=approval_service,
        attendance_service=attendance_service,
    )
