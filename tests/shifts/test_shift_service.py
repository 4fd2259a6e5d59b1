from __future__ import annotations

from datetime import time

import pytest

from src.attendance_console.attendance_console.core.exceptions import NotFoundError, ValidationError
from src.attendance_console.attendance_console.shifts.service import ShiftService, resolve_color


@pytest.fixture
def service(shifts_repo, shift_types_repo):
    return ShiftService(shifts_repo, shift_types_repo)


def test_add_shift_parses_times_and_palette_color(service):
    shift = service.add_shift(name=" Night ", start_time="22:00", end_time="06:00", color="Purple", grace_period=10)

    assert shift.name == "Night"
    assert shift.start_time == time(22, 0)
    assert shift.color == "#8B5CF6"
    assert shift.grace_period == 10
    assert service.list_shifts() == [shift]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "", "start_time": "08:00", "end_time": "16:00"},
        {"name": "Day", "start_time": "8am", "end_time": "16:00"},
        {"name": "Day", "start_time": "08:00", "end_time": "16:00", "grace_period": -1},
        {"name": "Day", "start_time": "08:00", "end_time": "16:00", "color": "#000000"},
    ],
)
def test_add_shift_validation(service, kwargs):
    with pytest.raises(ValidationError):
        service.add_shift(**kwargs)


def test_resolve_color_accepts_hex_case_insensitively():
    assert resolve_color("#3b82f6") == "#3B82F6"
    assert resolve_color(None) == "#3B82F6"


def test_shift_types_share_one_color_and_can_be_deleted(service):
    shift_type = service.add_shift_type(name="Ward", location="Block B")

    assert shift_type.to_dict()["color"] == "#FFB3D9"
    service.delete_shift_type(shift_type.shift_type_id)
    assert service.list_shift_types() == []
    with pytest.raises(NotFoundError):
        service.delete_shift_type(shift_type.shift_type_id)


def test_shift_type_requires_name(service):
    with pytest.raises(ValidationError):
        service.add_shift_type(name="  ")
