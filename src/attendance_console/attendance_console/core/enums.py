from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Display status of a single attendance day."""

    ON_TIME = "ON_TIME"
    LATE = "LATE"
    MEDICAL = "MEDICAL"
    ABSENT = "ABSENT"
    UNKNOWN = "UNKNOWN"


class LeaveType(str, Enum):
    """Leave categories tracked against a yearly day quota."""

    ANNUAL = "Annual"
    FRL = "FRL"
    SICK = "Sick"


LEAVE_QUOTAS = {
    LeaveType.ANNUAL: 30,
    LeaveType.FRL: 10,
    LeaveType.SICK: 30,
}


class EditorState(str, Enum):
    VIEWING = "VIEWING"
    EDITING = "EDITING"
