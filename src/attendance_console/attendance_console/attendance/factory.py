from __future__ import annotations

from dataclasses import dataclass

from .lateness import is_late
from .model import AttendanceRecord
from .strategies.absent_strategy import AbsentStrategy, MedicalStrategy
from .strategies.base import AttendanceStrategy, StatusDecision
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_record(self, record: AttendanceRecord) -> AttendanceStrategy:
        if record.absent:
            return AbsentStrategy()
        if record.medical:
            return MedicalStrategy()
        if is_late(record):
            return LateStrategy()
        return NormalStrategy()

    def decide(self, record: AttendanceRecord) -> StatusDecision:
        return self.for_record(record).decide(record)
