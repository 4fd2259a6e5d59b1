from __future__ import annotations

import pytest

from src.attendance_console.attendance_console.attendance.model import AttendanceRecord
from src.attendance_console.attendance_console.attendance.service import AttendanceService
from src.attendance_console.attendance_console.core.enums import AttendanceStatus
from src.attendance_console.attendance_console.core.exceptions import DuplicateDateError, NotFoundError


@pytest.fixture
def service(attendance_repo, employees_repo):
    return AttendanceService(attendance_repo, employees_repo, page_size=2)


def test_save_updates_inserts_and_deletes_then_rereads(service, attendance_repo, alice):
    attendance_repo.seed(
        alice.employee_id,
        AttendanceRecord(date="2024-01-01", in_time1="08:00"),
        AttendanceRecord(date="2024-01-02", in_time1="08:10"),
    )

    saved = service.save_records(
        alice.employee_id,
        [
            AttendanceRecord(date="2024-01-03", in_time1="07:59"),
            AttendanceRecord(date="2024-01-01", in_time1="08:30", remarks="traffic"),
        ],
    )

    assert [r.date for r in saved] == ["2024-01-01", "2024-01-03"]
    assert saved[0].remarks == "traffic"
    kinds = [w[0] for w in attendance_repo.writes]
    assert kinds == ["update", "insert", "delete"]


def test_save_with_duplicate_dates_writes_nothing(service, attendance_repo, alice):
    with pytest.raises(DuplicateDateError) as exc:
        service.save_records(
            alice.employee_id,
            [AttendanceRecord(date="2024-01-01"), AttendanceRecord(date="2024-01-01")],
        )

    assert exc.value.dates == ["2024-01-01"]
    assert attendance_repo.writes == []


def test_upsert_keeps_unlisted_dates(service, attendance_repo, alice):
    attendance_repo.seed(alice.employee_id, AttendanceRecord(date="2024-01-01"))

    records = service.upsert_records(alice.employee_id, [AttendanceRecord(date="2024-01-02", in_time1="09:00")])

    assert [r.date for r in records] == ["2024-01-01", "2024-01-02"]


def test_unknown_employee_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.get_records("missing")


def test_view_page_flags_late_rows_and_paginates(service, attendance_repo, alice):
    attendance_repo.seed(
        alice.employee_id,
        AttendanceRecord(date="2024-01-01", duty_time="08:00", in_time1="08:30"),
        AttendanceRecord(date="2024-01-02", duty_time="08:00", in_time1="07:50"),
        AttendanceRecord(date="2024-01-03", absent=True),
    )

    first = service.view_page(alice.employee_id, page=1)
    assert first.page_count == 2
    assert first.total == 3
    assert [r.is_late for r in first.rows] == [True, False]
    assert first.rows[0].status == AttendanceStatus.LATE

    newest = service.view_page(alice.employee_id, page=1, descending=True)
    assert newest.rows[0].date == "2024-01-03"
    assert newest.rows[0].status == AttendanceStatus.ABSENT


def test_editor_save_goes_through_save_records(service, attendance_repo, alice):
    attendance_repo.seed(alice.employee_id, AttendanceRecord(date="2024-01-01"), AttendanceRecord(date="2024-01-02"))

    editor = service.open_editor(alice.employee_id)
    editor.begin_edit()
    editor.delete_row(0)
    committed = editor.save()

    assert [r.date for r in committed] == ["2024-01-02"]
    assert [r.date for r in attendance_repo.list_for_employee(alice.employee_id)] == ["2024-01-02"]


def test_export_groups_cover_every_employee(service, attendance_repo, alice, bala):
    attendance_repo.seed(alice.employee_id, AttendanceRecord(date="2024-01-01"))

    groups = service.export_groups()

    assert [g.employee.name for g in groups] == ["Alice Tan", "Bala Kumar"]
    assert [len(g.records) for g in groups] == [1, 0]


def test_upload_editor_upserts_without_deleting_stored_dates(service, attendance_repo, alice):
    attendance_repo.seed(alice.employee_id, AttendanceRecord(date="2024-01-01", in_time1="08:00"))

    editor = service.open_upload_editor(alice.employee_id, [AttendanceRecord(date="2024-01-02", in_time1="09:00")])
    editor.begin_edit()
    editor.edit_field(0, "remarks", "from upload")
    committed = editor.save()

    assert [r.date for r in committed] == ["2024-01-01", "2024-01-02"]
    assert committed[1].remarks == "from upload"
    assert [w[0] for w in attendance_repo.writes] == ["upsert"]


def test_upload_editor_requires_known_employee(service):
    with pytest.raises(NotFoundError):
        service.open_upload_editor("ghost", [])
