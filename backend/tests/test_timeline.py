"""Tests for the per-line timeline."""

import threading
from datetime import datetime, timedelta, timezone

import pytest

from punnetplan.schemas import ScheduleKind
from punnetplan.services.errors import OverlapViolation
from punnetplan.services.timeline import LineTimeline

T0 = datetime(2026, 3, 2, 6, 0, 0, tzinfo=timezone.utc)


class TestLastItem:
    def test_empty_line_has_no_last_item(self, line_1):
        assert LineTimeline().last_item(line_1.id) is None

    def test_last_item_is_latest_planned(self, item_factory, product_a, line_1):
        timeline = LineTimeline()
        first = timeline.insert(item_factory.create(product_a, line_1, start_at=T0))
        second = timeline.insert(item_factory.create(product_a, line_1, start_at=first.end_at))

        assert timeline.last_item(line_1.id) == second
        assert timeline.items(line_1.id) == [first, second]

    def test_actual_items_do_not_count(self, item_factory, product_a, line_1):
        timeline = LineTimeline()
        planned = timeline.insert(item_factory.create(product_a, line_1, start_at=T0))
        actual = item_factory.create(
            product_a, line_1, start_at=T0 + timedelta(hours=5), kind=ScheduleKind.ACTUAL
        )
        timeline.record_actual(actual)

        assert timeline.last_item(line_1.id) == planned
        assert timeline.actual_items(line_1.id) == [actual]


class TestInsert:
    def test_touching_items_are_allowed(self, item_factory, product_a, line_1):
        """An item may start exactly when the previous one ends."""
        timeline = LineTimeline()
        first = timeline.insert(item_factory.create(product_a, line_1, start_at=T0))
        timeline.insert(item_factory.create(product_a, line_1, start_at=first.end_at))
        assert len(timeline.items(line_1.id)) == 2

    def test_overlap_rejected(self, item_factory, product_a, line_1):
        timeline = LineTimeline()
        first = timeline.insert(item_factory.create(product_a, line_1, start_at=T0))
        clash = item_factory.create(product_a, line_1, start_at=first.end_at - timedelta(minutes=1))

        with pytest.raises(OverlapViolation) as exc_info:
            timeline.insert(clash)

        assert exc_info.value.line_id == line_1.id
        assert exc_info.value.last_end_at == first.end_at
        assert timeline.items(line_1.id) == [first]

    def test_inverted_order_rejected(self, item_factory, product_a, line_1):
        timeline = LineTimeline()
        timeline.insert(item_factory.create(product_a, line_1, start_at=T0 + timedelta(hours=2)))

        with pytest.raises(OverlapViolation):
            timeline.insert(item_factory.create(product_a, line_1, start_at=T0))

    def test_lines_are_independent(self, item_factory, product_a, line_1, line_factory):
        line_2 = line_factory.create()
        timeline = LineTimeline()
        timeline.insert(item_factory.create(product_a, line_1, start_at=T0))
        timeline.insert(item_factory.create(product_a, line_2, start_at=T0))

        assert len(timeline.items(line_1.id)) == 1
        assert len(timeline.items(line_2.id)) == 1

    def test_actual_item_cannot_be_inserted(self, item_factory, product_a, line_1):
        actual = item_factory.create(product_a, line_1, kind=ScheduleKind.ACTUAL)
        with pytest.raises(ValueError):
            LineTimeline().insert(actual)

    def test_record_actual_rejects_planned(self, item_factory, product_a, line_1):
        with pytest.raises(ValueError):
            LineTimeline().record_actual(item_factory.create(product_a, line_1))


class TestAppendAfterLast:
    def test_appends_to_named_line(self, item_factory, product_a, line_1):
        timeline = LineTimeline()
        item = timeline.append_after_last(line_1.id, item_factory.create(product_a, line_1))
        assert timeline.last_item(line_1.id) == item

    def test_rejects_item_for_other_line(self, item_factory, product_a, line_1, line_factory):
        line_2 = line_factory.create()
        with pytest.raises(ValueError):
            LineTimeline().append_after_last(line_2.id, item_factory.create(product_a, line_1))


class TestFromItems:
    def test_sorts_planned_and_separates_actual(self, item_factory, product_a, line_1):
        late = item_factory.create(product_a, line_1, start_at=T0 + timedelta(hours=3))
        early = item_factory.create(product_a, line_1, start_at=T0)
        actual = item_factory.create(product_a, line_1, start_at=T0, kind=ScheduleKind.ACTUAL)

        timeline = LineTimeline.from_items([late, actual, early])

        assert timeline.items(line_1.id) == [early, late]
        assert timeline.actual_items(line_1.id) == [actual]
        assert timeline.line_ids() == [line_1.id]

    def test_overlapping_stored_items_rejected(self, item_factory, product_a, line_1):
        a = item_factory.create(product_a, line_1, start_at=T0)
        b = item_factory.create(product_a, line_1, start_at=T0 + timedelta(minutes=30))
        with pytest.raises(OverlapViolation):
            LineTimeline.from_items([a, b])


class TestConcurrentInsert:
    def test_only_one_of_competing_items_lands(self, item_factory, product_a, line_1):
        """Threads racing to place items at the same start time: exactly one wins."""
        timeline = LineTimeline()
        candidates = [item_factory.create(product_a, line_1, start_at=T0) for _ in range(8)]
        outcomes: list[str] = []
        outcomes_lock = threading.Lock()
        barrier = threading.Barrier(len(candidates))

        def _place(item):
            barrier.wait()
            try:
                timeline.insert(item)
                result = "ok"
            except OverlapViolation:
                result = "overlap"
            with outcomes_lock:
                outcomes.append(result)

        threads = [threading.Thread(target=_place, args=(c,)) for c in candidates]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert outcomes.count("ok") == 1
        assert outcomes.count("overlap") == len(candidates) - 1
        assert len(timeline.items(line_1.id)) == 1

    def test_lock_is_per_line(self, line_1, line_factory):
        timeline = LineTimeline()
        line_2 = line_factory.create()
        assert timeline.lock_for(line_1.id) is timeline.lock_for(line_1.id)
        assert timeline.lock_for(line_1.id) is not timeline.lock_for(line_2.id)
