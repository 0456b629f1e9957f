import mysql.connector
import pytest

from src.training_events.training_events.attendance.model import AttendanceRecord
from src.training_events.training_events.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.training_events.training_events.core.constants import message
from src.training_events.training_events.core.exceptions import RecordStoreError


class DuplicateKeyCursor:
    def execute(self, sql, params=None):
        raise mysql.connector.IntegrityError(msg="Duplicate entry '4-1' for key 'uq_trainingevent_user'", errno=1062)

    def close(self):
        pass


class FakeConnection:
    def __init__(self):
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return DuplicateKeyCursor()

    def commit(self):
        raise AssertionError("commit after a failed insert")

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnectionFactory:
    def __init__(self):
        self.conn = FakeConnection()

    def connect(self, with_database=True):
        return self.conn


def test_insert_driver_error_becomes_record_store_error():
    factory = FakeConnectionFactory()
    repo = MySQLAttendanceRepository(factory)
    record = AttendanceRecord(attendance_id=None, user_id=4, event_id=1, company_id=10)

    with pytest.raises(RecordStoreError) as exc:
        repo.insert(record)

    assert str(exc.value) == message("updatefailed")
    assert isinstance(exc.value.__cause__, mysql.connector.IntegrityError)
    assert factory.conn.rolled_back is True
    assert factory.conn.closed is True
