"""Per-line ordered timeline of planned work.

Each line keeps its PLANNED items in start order with no overlap. New work
is only ever appended after the line's last commitment; backfilling gaps
mid-timeline is not supported. ACTUAL items are kept alongside as history
and never take part in planning.
"""

import logging
import threading
import uuid
from collections import defaultdict
from collections.abc import Iterable

from punnetplan.schemas.schedule import ScheduleItem, ScheduleKind
from punnetplan.services.errors import OverlapViolation

logger = logging.getLogger(__name__)


class LineTimeline:
    """Arena of schedule items indexed by production line id."""

    def __init__(self) -> None:
        self._planned: dict[uuid.UUID, list[ScheduleItem]] = defaultdict(list)
        self._actual: dict[uuid.UUID, list[ScheduleItem]] = defaultdict(list)
        self._locks: dict[uuid.UUID, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @classmethod
    def from_items(cls, items: Iterable[ScheduleItem]) -> "LineTimeline":
        """Build a timeline from stored items, validating PLANNED non-overlap."""
        timeline = cls()
        planned: list[ScheduleItem] = []
        for item in items:
            if item.kind == ScheduleKind.ACTUAL:
                timeline.record_actual(item)
            else:
                planned.append(item)
        for item in sorted(planned, key=lambda i: (i.start_at, i.end_at)):
            timeline.insert(item)
        return timeline

    def lock_for(self, line_id: uuid.UUID) -> threading.RLock:
        """Return the single-writer lock guarding one line."""
        with self._locks_guard:
            lock = self._locks.get(line_id)
            if lock is None:
                lock = self._locks[line_id] = threading.RLock()
            return lock

    def items(self, line_id: uuid.UUID) -> list[ScheduleItem]:
        return list(self._planned.get(line_id, ()))

    def actual_items(self, line_id: uuid.UUID) -> list[ScheduleItem]:
        return list(self._actual.get(line_id, ()))

    def line_ids(self) -> list[uuid.UUID]:
        return [line_id for line_id, items in self._planned.items() if items]

    def last_item(self, line_id: uuid.UUID) -> ScheduleItem | None:
        """Chronologically last PLANNED item on the line, or None when empty."""
        items = self._planned.get(line_id)
        return items[-1] if items else None

    def insert(self, item: ScheduleItem) -> ScheduleItem:
        """Add a PLANNED item, rejecting anything that starts before the line frees up."""
        if item.kind != ScheduleKind.PLANNED:
            raise ValueError(f"Only PLANNED items can be placed on a timeline, got {item.kind.value}")

        with self.lock_for(item.line_id):
            last = self.last_item(item.line_id)
            if last is not None and item.start_at < last.end_at:
                raise OverlapViolation(item.line_id, item.start_at, last.end_at)
            self._planned[item.line_id].append(item)

        logger.debug(
            "Line %s: placed item %s %s -> %s",
            item.line_id, item.id, item.start_at.isoformat(), item.end_at.isoformat(),
        )
        return item

    def append_after_last(self, line_id: uuid.UUID, item: ScheduleItem) -> ScheduleItem:
        if item.line_id != line_id:
            raise ValueError(f"Item {item.id} belongs to line {item.line_id}, not {line_id}")
        return self.insert(item)

    def record_actual(self, item: ScheduleItem) -> ScheduleItem:
        """Keep an ACTUAL item as display-only history."""
        if item.kind != ScheduleKind.ACTUAL:
            raise ValueError(f"Expected an ACTUAL item, got {item.kind.value}")
        self._actual[item.line_id].append(item)
        return item
