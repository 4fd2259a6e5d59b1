from datetime import date

from src.attendance_console.attendance_console.attendance.mapping import (
    record_from_payload,
    record_from_row,
    row_from_record,
)
from src.attendance_console.attendance_console.attendance.model import AttendanceRecord


def test_null_columns_become_empty_values():
    record = record_from_row({"id": "r1", "date": date(2024, 1, 5), "in_time1": None, "medical": None, "absent": 1})

    assert record.date == "2024-01-05"
    assert record.in_time1 == ""
    assert record.medical is False
    assert record.absent is True
    assert record.record_id == "r1"


def test_stored_duty_time_wins_over_roster_shift():
    row = {"date": date(2024, 1, 5), "duty_time": "07:30"}

    assert record_from_row(row, duty_time="08:00", grace_period=5).duty_time == "07:30"
    assert record_from_row({"date": date(2024, 1, 5)}, duty_time="08:00").duty_time == "08:00"
    assert record_from_row(row, grace_period=5).grace_period == 5


def test_storage_row_round_trips_defined_fields():
    record = AttendanceRecord(date="2024-01-05", in_time1="08:00", out_time1="17:00", medical=True, remarks="")
    row = row_from_record("emp-1", record)

    assert row["remarks"] is None
    assert row["in_time2"] is None
    assert record_from_row(row) == record


def test_payload_is_trimmed_and_typed():
    record = record_from_payload({"date": " 2024-01-05 ", "in_time1": "08:00", "absent": True, "remarks": None})

    assert record.date == "2024-01-05"
    assert record.absent is True
    assert record.remarks == ""


def test_roster_filled_duty_time_is_written_back_on_save():
    record = record_from_row({"date": date(2024, 1, 5), "duty_time": None}, duty_time="08:00", grace_period=10)

    assert row_from_record("emp-1", record)["duty_time"] == "08:00"
