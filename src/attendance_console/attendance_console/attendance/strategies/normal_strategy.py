from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from .base import AttendanceStrategy, StatusDecision


class NormalStrategy(AttendanceStrategy):
    """Clocked in on time (or no duty time to compare against)."""

    def decide(self, record: AttendanceRecord) -> StatusDecision:
        if not record.in_time1:
            return StatusDecision(status=AttendanceStatus.UNKNOWN, label="No clock-in", css_class="bg-secondary")
        return StatusDecision(status=AttendanceStatus.ON_TIME, label="On time", css_class="bg-success")
