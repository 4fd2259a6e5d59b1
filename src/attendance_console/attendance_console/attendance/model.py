from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from ..core.enums import AttendanceStatus

TIME_FIELDS = ("in_time1", "out_time1", "in_time2", "out_time2", "in_time3", "out_time3")
TEXT_FIELDS = ("date", "duty_time", *TIME_FIELDS, "remarks")
FLAG_FIELDS = ("medical", "absent")
EDITABLE_FIELDS = frozenset(TEXT_FIELDS + FLAG_FIELDS)


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one date.

    `date` is an ISO `YYYY-MM-DD` string; time fields hold "HH:MM", a decimal-hour
    string or "" when not recorded. `grace_period` is derived from the rostered shift
    and is never written back to the store.
    """

    date: str
    duty_time: str = ""
    in_time1: str = ""
    out_time1: str = ""
    in_time2: str = ""
    out_time2: str = ""
    in_time3: str = ""
    out_time3: str = ""
    medical: bool = False
    absent: bool = False
    remarks: str = ""
    grace_period: int = 0
    record_id: Optional[str] = None

    @classmethod
    def blank(cls, day: str) -> "AttendanceRecord":
        return cls(date=day)

    def to_dict(self) -> dict:
        data = asdict(self)
        data.pop("record_id")
        return data


@dataclass(frozen=True)
class AttendanceRowUI:
    date: str
    record: AttendanceRecord
    status: AttendanceStatus
    label: str
    css_class: str
    is_late: bool

    def to_dict(self) -> dict:
        return {
            **self.record.to_dict(),
            "status": self.status.value,
            "status_label": self.label,
            "css_class": self.css_class,
            "is_late": self.is_late,
        }
