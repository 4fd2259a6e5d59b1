from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.validators import require_hhmm, require_non_empty
from ..core.constants import DEFAULT_SHIFT_COLOR, SHIFT_COLORS
from ..core.exceptions import NotFoundError, ValidationError
from .model import Shift, ShiftType
from .repository import ShiftRepository, ShiftTypeRepository

logger = logging.getLogger(__name__)


def resolve_color(value: Optional[str]) -> str:
    """Accept a palette name or one of its hex values; anything else is rejected."""

    value = (value or "").strip()
    if not value:
        return DEFAULT_SHIFT_COLOR
    if value in SHIFT_COLORS:
        return SHIFT_COLORS[value]
    for hex_value in SHIFT_COLORS.values():
        if value.upper() == hex_value.upper():
            return hex_value
    raise ValidationError(f"Color must be one of: {', '.join(SHIFT_COLORS)}")


class ShiftService:
    """Use case: maintain the shift and shift-type catalogues used by the roster."""

    def __init__(self, shifts: ShiftRepository, shift_types: ShiftTypeRepository):
        self._shifts = shifts
        self._shift_types = shift_types

    def list_shifts(self) -> Sequence[Shift]:
        return self._shifts.list_all()

    def add_shift(
        self,
        *,
        name: str,
        start_time: str,
        end_time: str,
        description: str = "",
        color: Optional[str] = None,
        grace_period: int = 0,
        created_by: Optional[str] = None,
    ) -> Shift:
        name = require_non_empty(name, "Shift name")
        start = datetime.strptime(require_hhmm(start_time, "Start time"), "%H:%M").time()
        end = datetime.strptime(require_hhmm(end_time, "End time"), "%H:%M").time()
        try:
            grace = int(grace_period or 0)
        except (TypeError, ValueError):
            raise ValidationError("Grace period must be a whole number of minutes")
        if grace < 0:
            raise ValidationError("Grace period cannot be negative")

        shift_id = self._shifts.create(
            name=name,
            description=(description or "").strip(),
            start_time=start,
            end_time=end,
            color=resolve_color(color),
            grace_period=grace,
            created_by=created_by,
        )
        logger.info("Added shift %s (%s-%s)", name, start_time, end_time)
        shift = self._shifts.get_by_id(shift_id)
        if not shift:
            raise NotFoundError("Shift not found")
        return shift

    def delete_shift(self, shift_id: str) -> None:
        if not self._shifts.delete(shift_id):
            raise NotFoundError("Shift not found")

    def list_shift_types(self) -> Sequence[ShiftType]:
        return self._shift_types.list_all()

    def add_shift_type(
        self,
        *,
        name: str,
        description: str = "",
        location: str = "",
        created_by: Optional[str] = None,
    ) -> ShiftType:
        name = require_non_empty(name, "Shift type name")
        shift_type_id = self._shift_types.create(
            name=name,
            description=(description or "").strip(),
            location=(location or "").strip(),
            created_by=created_by,
        )
        shift_type = self._shift_types.get_by_id(shift_type_id)
        if not shift_type:
            raise NotFoundError("Shift type not found")
        return shift_type

    def delete_shift_type(self, shift_type_id: str) -> None:
        if not self._shift_types.delete(shift_type_id):
            raise NotFoundError("Shift type not found")
