from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import date, time

import pytest

from src.attendance_console.attendance_console.accounts.model import AdminUser
from src.attendance_console.attendance_console.attendance.model import AttendanceRecord
from src.attendance_console.attendance_console.employees.model import Employee
from src.attendance_console.attendance_console.leave.model import LeavePlan
from src.attendance_console.attendance_console.roster.model import RosterAssignment
from src.attendance_console.attendance_console.shifts.model import Shift, ShiftType


_ids = itertools.count(1)


def _next_id(prefix: str) -> str:
    return f"{prefix}-{next(_ids)}"


class InMemoryAdminUsers:
    def __init__(self):
        self.users: dict[str, AdminUser] = {}

    def get_by_id(self, user_id):
        return self.users.get(user_id)

    def get_by_email(self, email):
        return next((u for u in self.users.values() if u.email == email), None)

    def create(self, *, email, full_name, password_hash):
        user_id = _next_id("user")
        self.users[user_id] = AdminUser(user_id=user_id, email=email, full_name=full_name, password_hash=password_hash)
        return user_id


class InMemoryEmployees:
    def __init__(self):
        self.items: dict[str, Employee] = {}

    def add(self, name: str, staff_id: str, **fields) -> Employee:
        employee = Employee(employee_id=_next_id("emp"), name=name, staff_id=staff_id, **fields)
        self.items[employee.employee_id] = employee
        return employee

    def list_all(self):
        return sorted(self.items.values(), key=lambda e: e.name)

    def get_by_id(self, employee_id):
        return self.items.get(employee_id)

    def get_by_staff_id(self, staff_id):
        return next((e for e in self.items.values() if e.staff_id == staff_id), None)

    def create(self, *, name, staff_id, position, department, contact_number, joined_date):
        return self.add(
            name,
            staff_id,
            position=position,
            department=department,
            contact_number=contact_number,
            joined_date=joined_date,
        ).employee_id

    def update(self, *, employee_id, **fields):
        if employee_id not in self.items:
            return False
        self.items[employee_id] = replace(self.items[employee_id], **fields)
        return True


class InMemoryAttendance:
    """Stores records per (employee, date) and counts write calls."""

    def __init__(self):
        self.rows: dict[str, dict[str, AttendanceRecord]] = {}
        self.writes: list[tuple] = []

    def seed(self, employee_id: str, *records: AttendanceRecord) -> None:
        for r in records:
            self.rows.setdefault(employee_id, {})[r.date] = replace(r, record_id=_next_id("att"))

    def list_for_employee(self, employee_id):
        return sorted(self.rows.get(employee_id, {}).values(), key=lambda r: r.date)

    def list_all(self):
        return {eid: self.list_for_employee(eid) for eid in self.rows}

    def list_existing(self, employee_id):
        return {day: r.record_id for day, r in self.rows.get(employee_id, {}).items()}

    def upsert(self, employee_id, record):
        self.writes.append(("upsert", employee_id, record.date))
        existing = self.rows.get(employee_id, {}).get(record.date)
        record_id = existing.record_id if existing else _next_id("att")
        self.rows.setdefault(employee_id, {})[record.date] = replace(record, record_id=record_id)

    def insert(self, employee_id, record):
        self.writes.append(("insert", employee_id, record.date))
        record_id = _next_id("att")
        self.rows.setdefault(employee_id, {})[record.date] = replace(record, record_id=record_id)
        return record_id

    def update(self, record_id, employee_id, record):
        self.writes.append(("update", employee_id, record.date))
        by_date = self.rows.get(employee_id, {})
        for day, r in list(by_date.items()):
            if r.record_id == record_id:
                del by_date[day]
                by_date[record.date] = replace(record, record_id=record_id)
                return True
        return False

    def delete_many(self, record_ids):
        removed = 0
        for by_date in self.rows.values():
            for day, r in list(by_date.items()):
                if r.record_id in record_ids:
                    self.writes.append(("delete", r.record_id, day))
                    del by_date[day]
                    removed += 1
        return removed


class InMemoryShifts:
    def __init__(self):
        self.items: dict[str, Shift] = {}

    def add(self, name: str, start: time, end: time, **fields) -> Shift:
        shift = Shift(shift_id=_next_id("shift"), name=name, start_time=start, end_time=end, **fields)
        self.items[shift.shift_id] = shift
        return shift

    def list_all(self):
        return sorted(self.items.values(), key=lambda s: (s.start_time, s.name))

    def get_by_id(self, shift_id):
        return self.items.get(shift_id)

    def create(self, *, name, description, start_time, end_time, color, grace_period, created_by):
        return self.add(
            name, start_time, end_time, description=description, color=color, grace_period=grace_period
        ).shift_id

    def delete(self, shift_id):
        return self.items.pop(shift_id, None) is not None


class InMemoryShiftTypes:
    def __init__(self):
        self.items: dict[str, ShiftType] = {}

    def add(self, name: str, **fields) -> ShiftType:
        shift_type = ShiftType(shift_type_id=_next_id("type"), name=name, **fields)
        self.items[shift_type.shift_type_id] = shift_type
        return shift_type

    def list_all(self):
        return sorted(self.items.values(), key=lambda t: t.name)

    def get_by_id(self, shift_type_id):
        return self.items.get(shift_type_id)

    def create(self, *, name, description, location, created_by):
        return self.add(name, description=description, location=location).shift_type_id

    def delete(self, shift_type_id):
        return self.items.pop(shift_type_id, None) is not None


class InMemoryRoster:
    def __init__(self):
        self.items: dict[tuple[str, date], RosterAssignment] = {}
        self.upserts: list[RosterAssignment] = []

    def list_between(self, start, end, employee_ids=None):
        return sorted(
            (
                a
                for a in self.items.values()
                if start <= a.date <= end and (employee_ids is None or a.employee_id in employee_ids)
            ),
            key=lambda a: (a.date, a.employee_id),
        )

    def upsert(self, assignment, *, created_by):
        self.upserts.append(assignment)
        self.items[(assignment.employee_id, assignment.date)] = assignment


class InMemoryLeavePlans:
    def __init__(self, employees: InMemoryEmployees):
        self._employees = employees
        self.items: dict[str, LeavePlan] = {}

    def _named(self, plan: LeavePlan) -> LeavePlan:
        employee = self._employees.get_by_id(plan.employee_id)
        return replace(plan, employee_name=employee.name if employee else "")

    def list_plans(self, employee_id=None):
        plans = [p for p in self.items.values() if employee_id is None or p.employee_id == employee_id]
        return [self._named(p) for p in reversed(plans)]

    def list_overlapping(self, start, end):
        plans = [p for p in self.items.values() if p.start_date <= end and p.end_date >= start]
        return [self._named(p) for p in sorted(plans, key=lambda p: p.start_date)]

    def create(self, *, employee_id, leave_type, start_date, end_date, created_by):
        plan_id = _next_id("leave")
        self.items[plan_id] = LeavePlan(
            plan_id=plan_id,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            created_by=created_by,
        )
        return plan_id

    def delete(self, plan_id):
        return self.items.pop(plan_id, None) is not None


@pytest.fixture
def admin_users():
    return InMemoryAdminUsers()


@pytest.fixture
def employees_repo():
    return InMemoryEmployees()


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def shifts_repo():
    return InMemoryShifts()


@pytest.fixture
def shift_types_repo():
    return InMemoryShiftTypes()


@pytest.fixture
def roster_repo():
    return InMemoryRoster()


@pytest.fixture
def leave_repo(employees_repo):
    return InMemoryLeavePlans(employees_repo)


@pytest.fixture
def alice(employees_repo) -> Employee:
    return employees_repo.add("Alice Tan", "E001", position="Nurse", department="Ward 3", contact_number="555-0101")


@pytest.fixture
def bala(employees_repo) -> Employee:
    return employees_repo.add("Bala Kumar", "E002", position="Porter", department="Logistics")


def make_record(day: str, **fields) -> AttendanceRecord:
    return AttendanceRecord(date=day, **fields)


@pytest.fixture
def record():
    return make_record


@pytest.fixture
def container(
    admin_users,
    employees_repo,
    attendance_repo,
    shifts_repo,
    shift_types_repo,
    roster_repo,
    leave_repo,
):
    from src.attendance_console.attendance_console.container import build_services

    return build_services(
        users_repo=admin_users,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        shifts_repo=shifts_repo,
        shift_types_repo=shift_types_repo,
        roster_repo=roster_repo,
        leave_repo=leave_repo,
    )
