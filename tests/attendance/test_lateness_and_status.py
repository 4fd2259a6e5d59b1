from src.attendance_console.attendance_console.attendance.factory import AttendanceStrategyFactory
from src.attendance_console.attendance_console.attendance.lateness import is_late
from src.attendance_console.attendance_console.attendance.model import AttendanceRecord
from src.attendance_console.attendance_console.attendance.strategies.absent_strategy import AbsentStrategy
from src.attendance_console.attendance_console.attendance.strategies.late_strategy import LateStrategy
from src.attendance_console.attendance_console.attendance.strategies.normal_strategy import NormalStrategy
from src.attendance_console.attendance_console.core.enums import AttendanceStatus


def test_late_when_first_in_exceeds_duty_time():
    assert is_late(AttendanceRecord(date="2024-01-01", duty_time="08:00", in_time1="08:05"))


def test_not_late_within_grace_period():
    record = AttendanceRecord(date="2024-01-01", duty_time="08:00", in_time1="08:05", grace_period=5)
    assert not is_late(record)


def test_missing_or_malformed_times_are_never_late():
    assert not is_late(AttendanceRecord(date="2024-01-01", duty_time="08:00"))
    assert not is_late(AttendanceRecord(date="2024-01-01", in_time1="09:00"))
    assert not is_late(AttendanceRecord(date="2024-01-01", duty_time="8am", in_time1="09:00"))
    assert not is_late(AttendanceRecord(date="2024-01-01", duty_time="08:00", in_time1="25:99"))


def test_factory_prefers_absent_over_late():
    record = AttendanceRecord(date="2024-01-01", duty_time="08:00", in_time1="09:00", absent=True)

    assert isinstance(AttendanceStrategyFactory().for_record(record), AbsentStrategy)


def test_factory_reports_late_minutes():
    record = AttendanceRecord(date="2024-01-01", duty_time="08:00", in_time1="08:20", grace_period=5)
    factory = AttendanceStrategyFactory()

    assert isinstance(factory.for_record(record), LateStrategy)
    decision = factory.decide(record)
    assert decision.status == AttendanceStatus.LATE
    assert decision.label == "Late (20 min)"


def test_factory_normal_and_unknown():
    factory = AttendanceStrategyFactory()
    on_time = AttendanceRecord(date="2024-01-01", duty_time="08:00", in_time1="07:55")

    assert isinstance(factory.for_record(on_time), NormalStrategy)
    assert factory.decide(on_time).status == AttendanceStatus.ON_TIME
    assert factory.decide(AttendanceRecord(date="2024-01-01")).status == AttendanceStatus.UNKNOWN
    assert factory.decide(AttendanceRecord(date="2024-01-01", medical=True)).status == AttendanceStatus.MEDICAL


def test_grace_period_boundary():
    on_time = AttendanceRecord(date="2024-01-01", duty_time="09:00", in_time1="09:05", grace_period=10)
    late = AttendanceRecord(date="2024-01-01", duty_time="09:00", in_time1="09:15", grace_period=10)

    assert not is_late(on_time)
    assert is_late(late)
