from __future__ import annotations

import io
from datetime import date

import pandas as pd
import pytest
from openpyxl import load_workbook

from src.attendance_console.attendance_console.attendance.model import AttendanceRecord
from src.attendance_console.attendance_console.main import create_app


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    container.account_service.create_admin(email="admin@example.com", full_name="Admin", password="secret1")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def signed_in(client):
    resp = client.post("/api/auth/sign-in", json={"email": "admin@example.com", "password": "secret1"})
    assert resp.status_code == 200
    return client


def test_routes_require_sign_in(client):
    resp = client.get("/api/employees")

    assert resp.status_code == 401
    assert resp.get_json()["redirect"] == "/login"


def test_bad_credentials(client):
    resp = client.post("/api/auth/sign-in", json={"email": "admin@example.com", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_me_and_sign_out(signed_in):
    assert signed_in.get("/api/auth/me").get_json()["user"]["email"] == "admin@example.com"

    assert signed_in.post("/api/auth/sign-out").status_code == 200
    assert signed_in.get("/api/auth/me").status_code == 401


def test_employee_crud(signed_in):
    resp = signed_in.post("/api/employees", json={"name": "Chen Li", "staff_id": "E100", "joined_date": "2023-05-01"})
    assert resp.status_code == 201
    employee_id = resp.get_json()["employee"]["id"]

    resp = signed_in.post("/api/employees", json={"name": "Other", "staff_id": "E100"})
    assert resp.status_code == 400

    resp = signed_in.put(f"/api/employees/{employee_id}", json={"name": "Chen Li", "staff_id": "E101"})
    assert resp.get_json()["employee"]["staff_id"] == "E101"

    assert signed_in.get("/api/employees/missing").status_code == 404


def test_attendance_save_reports_duplicate_dates(signed_in, alice):
    body = {"records": [{"date": "2024-01-01"}, {"date": "2024-01-01"}]}

    resp = signed_in.put(f"/api/attendance/{alice.employee_id}", json=body)

    assert resp.status_code == 400
    assert resp.get_json()["dates"] == ["2024-01-01"]


def test_attendance_save_and_view(signed_in, alice):
    body = {"records": [{"date": "2024-01-02", "duty_time": "08:00", "in_time1": "08:30"}, {"date": "2024-01-01"}]}

    assert signed_in.put(f"/api/attendance/{alice.employee_id}", json=body).status_code == 200

    page = signed_in.get(f"/api/attendance/{alice.employee_id}?page=1").get_json()
    assert [r["date"] for r in page["rows"]] == ["2024-01-01", "2024-01-02"]
    assert page["rows"][1]["is_late"] is True


def test_import_upload(signed_in, alice):
    out = io.BytesIO()
    pd.DataFrame(
        [["2024-01-05", "E001", "alice tan", 9.5, 17]], columns=["Date", "ID Number", "Name", "IN", "OUT"]
    ).to_excel(out, index=False, engine="openpyxl")
    out.seek(0)

    resp = signed_in.post(
        "/api/attendance/import",
        data={"file": (out, "clock.xlsx")},
        content_type="multipart/form-data",
    )

    assert resp.status_code == 200
    assert resp.get_json()["record_count"] == 1
    view = signed_in.get(f"/api/attendance/{alice.employee_id}").get_json()
    assert view["rows"][0]["in_time1"] == "09:30"


def test_export_download(signed_in, attendance_repo, alice):
    attendance_repo.seed(alice.employee_id, AttendanceRecord(date="2024-01-05"), AttendanceRecord(date="2024-02-01"))

    resp = signed_in.get(f"/api/attendance/{alice.employee_id}/export?start=2024-01-01&end=2024-01-31")

    assert resp.status_code == 200
    assert "attendance_Alice_Tan_2024-01-01_2024-01-31.xlsx" in resp.headers["Content-Disposition"]
    ws = load_workbook(io.BytesIO(resp.data)).active
    assert [ws.cell(row=r, column=1).value for r in (13, 14)] == ["05/01/2024", None]


def test_export_with_no_rows_is_a_validation_error(signed_in, alice):
    resp = signed_in.get("/api/attendance/export?start=2030-01-01")

    assert resp.status_code == 400


def test_leave_quota_error_payload(signed_in, alice):
    today = date.today()
    start = today.replace(month=1, day=1)
    resp = signed_in.post(
        "/api/leave-plans",
        json={
            "employee_id": alice.employee_id,
            "leave_type": "FRL",
            "start_date": start.isoformat(),
            "end_date": start.replace(day=11).isoformat(),
        },
    )

    assert resp.status_code == 400
    assert resp.get_json()["limit"] == 10


def test_roster_round_trip(signed_in, shifts_repo, alice):
    created = signed_in.post("/api/shifts", json={"name": "Morning", "start_time": "08:00", "end_time": "16:00"})
    shift_id = created.get_json()["shift"]["id"]

    resp = signed_in.put(
        "/api/roster",
        json={
            "start": "2024-01-01",
            "end": "2024-01-03",
            "cells": [{"employee_id": alice.employee_id, "date": "2024-01-02", "shift_id": shift_id}],
        },
    )
    assert resp.get_json()["saved"] == 1

    view = signed_in.get(f"/api/roster?start=2024-01-01&end=2024-01-03&employee_id={alice.employee_id}").get_json()
    assert view["rows"][0]["cells"][1]["shift"]["name"] == "Morning"


def test_calendar_rejects_bad_month(signed_in):
    assert signed_in.get("/api/calendar?year=2024&month=13").status_code == 400
    assert signed_in.get("/api/calendar?year=2024&month=2&leave_type=Sick").status_code == 200


def test_roster_save_rejects_malformed_cells_and_unknown_employees(signed_in, alice):
    resp = signed_in.put("/api/roster", json={"start": "2024-01-01", "end": "2024-01-02", "cells": ["oops"]})
    assert resp.status_code == 400

    resp = signed_in.put(
        "/api/roster",
        json={"start": "2024-01-01", "end": "2024-01-02", "employee_ids": ["ghost"], "cells": []},
    )
    assert resp.status_code == 404


def test_leave_plan_with_numeric_date_is_a_validation_error(signed_in, alice):
    resp = signed_in.post(
        "/api/leave-plans",
        json={"employee_id": alice.employee_id, "leave_type": "Annual", "start_date": 20240101, "end_date": "2024-01-02"},
    )

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False
