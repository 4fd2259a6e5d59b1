from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import replace
from datetime import date
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import today_local
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import EditorState
from ..core.exceptions import DuplicateDateError, ValidationError
from .model import EDITABLE_FIELDS, FLAG_FIELDS, AttendanceRecord

logger = logging.getLogger(__name__)

SaveHandler = Callable[[list[AttendanceRecord]], Optional[Sequence[AttendanceRecord]]]


def sort_by_date(records: Iterable[AttendanceRecord], *, descending: bool = False) -> list[AttendanceRecord]:
    return sorted(records, key=lambda r: r.date, reverse=descending)


def find_duplicate_dates(records: Iterable[AttendanceRecord]) -> list[str]:
    counts = Counter(r.date for r in records)
    return sorted(d for d, n in counts.items() if n > 1)


def ensure_unique_dates(records: Iterable[AttendanceRecord]) -> None:
    duplicates = find_duplicate_dates(records)
    if duplicates:
        raise DuplicateDateError(duplicates)


def paginate(items: Sequence, *, page: int, page_size: int) -> tuple[list, int, int]:
    """Slice one page out of `items`; returns (rows, clamped page, page count)."""

    page_count = max(1, math.ceil(len(items) / page_size))
    page = min(max(1, int(page)), page_count)
    start = (page - 1) * page_size
    return list(items[start : start + page_size]), page, page_count


class AttendanceEditor:
    """Edit session over one employee's attendance records.

    VIEWING shows the committed records. `begin_edit()` snapshots them into a local
    buffer (EDITING); field edits, `add_date()` and `delete_row()` only touch that
    buffer. `save()` hands the date-sorted buffer to `on_save` (the owning page's
    persistence) and returns to VIEWING; `cancel()` drops the buffer.

    If `on_save` returns a sequence (a fresh re-read of the owner) it becomes the
    committed record set.
    """

    def __init__(
        self,
        records: Iterable[AttendanceRecord],
        on_save: SaveHandler,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        clock: Callable[[], date] = today_local,
    ):
        self._records = sort_by_date(records)
        self._buffer: list[AttendanceRecord] = []
        self._on_save = on_save
        self._page_size = int(page_size)
        self._clock = clock
        self._state = EditorState.VIEWING
        self._saving = False
        self._descending = False
        self._page = 1

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def records(self) -> list[AttendanceRecord]:
        """Committed records, ascending by date."""
        return list(self._records)

    @property
    def buffer(self) -> list[AttendanceRecord]:
        return list(self._buffer)

    @property
    def is_saving(self) -> bool:
        return self._saving

    @property
    def descending(self) -> bool:
        return self._descending

    @property
    def page(self) -> int:
        return self._page

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(len(self._visible()) / self._page_size))

    def _visible(self) -> list[AttendanceRecord]:
        return self._buffer if self._state == EditorState.EDITING else self._records

    def _require_editing(self) -> None:
        if self._state != EditorState.EDITING:
            raise ValidationError("Click Edit Records before changing attendance")

    def begin_edit(self) -> None:
        if self._state == EditorState.EDITING:
            return
        self._buffer = list(self._records)
        self._state = EditorState.EDITING

    def edit_field(self, index: int, field: str, value) -> AttendanceRecord:
        self._require_editing()
        if field not in EDITABLE_FIELDS:
            raise ValidationError(f"Field {field!r} cannot be edited")
        if not 0 <= index < len(self._buffer):
            raise ValidationError("Row does not exist")

        value = bool(value) if field in FLAG_FIELDS else ("" if value is None else str(value))
        updated = replace(self._buffer[index], **{field: value})
        self._buffer[index] = updated
        return updated

    def add_date(self) -> AttendanceRecord:
        self._require_editing()
        today = self._clock().strftime("%Y-%m-%d")
        if any(r.date == today for r in self._buffer):
            raise ValidationError(f"A record for {today} already exists")

        record = AttendanceRecord.blank(today)
        self._buffer = sort_by_date([*self._buffer, record])
        return record

    def delete_row(self, index: int) -> AttendanceRecord:
        self._require_editing()
        if not 0 <= index < len(self._buffer):
            raise ValidationError("Row does not exist")
        return self._buffer.pop(index)

    def cancel(self) -> None:
        self._buffer = []
        self._state = EditorState.VIEWING

    def save(self) -> Optional[list[AttendanceRecord]]:
        """Persist the buffer. Returns the committed records, or None when ignored."""

        if self._saving:
            logger.debug("Save already in progress; ignoring")
            return None
        self._require_editing()

        self._saving = True
        try:
            ordered = sort_by_date(self._buffer)
            ensure_unique_dates(ordered)

            fresh = self._on_save(list(ordered))
            self.replace_records(fresh if fresh is not None else ordered)
            self._buffer = []
            self._state = EditorState.VIEWING
            return self.records
        finally:
            self._saving = False

    def replace_records(self, records: Iterable[AttendanceRecord]) -> None:
        self._records = sort_by_date(records)
        self._page = 1

    def toggle_sort(self) -> bool:
        self._descending = not self._descending
        self._page = 1
        return self._descending

    def go_to_page(self, page: int) -> int:
        self._page = min(max(1, int(page)), self.page_count)
        return self._page

    def page_rows(self) -> list[AttendanceRecord]:
        ordered = sort_by_date(self._visible(), descending=self._descending)
        rows, self._page, _ = paginate(ordered, page=self._page, page_size=self._page_size)
        return rows
