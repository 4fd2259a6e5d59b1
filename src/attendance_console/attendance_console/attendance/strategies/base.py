from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import AttendanceStatus
from ..model import AttendanceRecord


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    label: str
    css_class: str


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how a day's display status is decided."""

    @abstractmethod
    def decide(self, record: AttendanceRecord) -> StatusDecision:
        raise NotImplementedError
