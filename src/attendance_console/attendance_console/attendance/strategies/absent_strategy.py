from __future__ import annotations

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    def decide(self, record: AttendanceRecord) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT, label="Absent", css_class="bg-secondary")


class MedicalStrategy(AttendanceStrategy):
    """Medical leave day."""

    def decide(self, record: AttendanceRecord) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.MEDICAL, label="Medical", css_class="bg-info text-dark")
