from __future__ import annotations

from ...common.datetime_utils import minutes_of_day
from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """First clock-in after duty time + grace period."""

    def decide(self, record: AttendanceRecord) -> StatusDecision:
        late_by = minutes_of_day(record.in_time1) - minutes_of_day(record.duty_time)
        return StatusDecision(status=AttendanceStatus.LATE, label=f"Late ({late_by} min)", css_class="bg-danger")
