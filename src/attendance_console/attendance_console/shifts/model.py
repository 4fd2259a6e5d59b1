from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..core.constants import SHIFT_TYPE_COLOR


@dataclass(frozen=True)
class Shift:
    """Domain entity: a named working shift that roster cells can reference."""

    shift_id: str
    name: str
    start_time: time
    end_time: time
    description: str = ""
    color: str = "#3B82F6"
    grace_period: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.shift_id,
            "name": self.name,
            "description": self.description,
            "start_time": self.start_time.strftime("%H:%M"),
            "end_time": self.end_time.strftime("%H:%M"),
            "color": self.color,
            "grace_period": self.grace_period,
        }


@dataclass(frozen=True)
class ShiftType:
    """Domain entity: a duty category (location/kind of work) for roster cells."""

    shift_type_id: str
    name: str
    description: str = ""
    location: str = ""

    @property
    def color(self) -> str:
        return SHIFT_TYPE_COLOR

    def to_dict(self) -> dict:
        return {
            "id": self.shift_type_id,
            "name": self.name,
            "description": self.description,
            "location": self.location,
            "color": self.color,
        }
