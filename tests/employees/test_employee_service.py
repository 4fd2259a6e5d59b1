from __future__ import annotations

from datetime import date

import pytest

from src.attendance_console.attendance_console.core.exceptions import NotFoundError, ValidationError
from src.attendance_console.attendance_console.employees.service import EmployeeService


@pytest.fixture
def service(employees_repo):
    return EmployeeService(employees_repo)


def test_add_employee_trims_and_lists_by_name(service):
    service.add_employee(name=" Zed ", staff_id="E010")
    added = service.add_employee(name="Amy", staff_id=" E011 ", joined_date=date(2024, 1, 1), today=date(2024, 6, 1))

    assert added.staff_id == "E011"
    assert [e.name for e in service.list_employees()] == ["Amy", "Zed"]


def test_name_and_staff_id_required(service):
    with pytest.raises(ValidationError):
        service.add_employee(name="", staff_id="E1")
    with pytest.raises(ValidationError):
        service.add_employee(name="Amy", staff_id="  ")


def test_joined_date_cannot_be_in_future(service):
    with pytest.raises(ValidationError):
        service.add_employee(name="Amy", staff_id="E1", joined_date=date(2024, 6, 2), today=date(2024, 6, 1))


def test_staff_id_must_be_unique(service, alice):
    with pytest.raises(ValidationError):
        service.add_employee(name="Other", staff_id="E001")

    edited = service.edit_employee(alice.employee_id, name="Alice T.", staff_id="E001", position="Sister")
    assert edited.name == "Alice T."
    assert edited.position == "Sister"


def test_edit_unknown_employee(service):
    with pytest.raises(NotFoundError):
        service.edit_employee("missing", name="X", staff_id="E9")
