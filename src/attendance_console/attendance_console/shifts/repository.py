from __future__ import annotations

from datetime import time
from typing import Optional, Protocol, Sequence

from .model import Shift, ShiftType


class ShiftRepository(Protocol):
    def list_all(self) -> Sequence[Shift]:
        raise NotImplementedError

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        description: str,
        start_time: time,
        end_time: time,
        color: str,
        grace_period: int,
        created_by: Optional[str],
    ) -> str:
        raise NotImplementedError

    def delete(self, shift_id: str) -> bool:
        raise NotImplementedError


class ShiftTypeRepository(Protocol):
    def list_all(self) -> Sequence[ShiftType]:
        raise NotImplementedError

    def get_by_id(self, shift_type_id: str) -> Optional[ShiftType]:
        raise NotImplementedError

    def create(self, *, name: str, description: str, location: str, created_by: Optional[str]) -> str:
        raise NotImplementedError

    def delete(self, shift_type_id: str) -> bool:
        raise NotImplementedError
