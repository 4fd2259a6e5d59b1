from __future__ import annotations

from ..common.datetime_utils import minutes_of_day
from .model import AttendanceRecord


def is_late(record: AttendanceRecord) -> bool:
    """First clock-in later than duty time plus the shift's grace period.

    Missing or malformed times never count as late.
    """

    if not record.duty_time or not record.in_time1:
        return False

    duty = minutes_of_day(record.duty_time)
    first_in = minutes_of_day(record.in_time1)
    if duty is None or first_in is None:
        return False

    return first_in > duty + int(record.grace_period or 0)
