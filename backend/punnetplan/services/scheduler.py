"""Placement of an order onto a production line.

Turning "assign order O to line L" into a schedule item:

1. Anchor: the later of ``now`` and the end of the line's last PLANNED item
2. Setup: changeover from the last item's product (or the empty-line base)
3. Run: ``ceil(quantity / packs_per_minute)`` whole minutes
4. Window: ``anchor`` to ``anchor + setup + run``

``compute_placement`` only proposes. ``commit`` places the proposal on the
line timeline under the line's lock, which re-checks non-overlap, and queues
the pending -> scheduled status change for storage to apply.
"""

import logging
import math
import threading
import uuid
from datetime import datetime, timedelta
from decimal import Decimal

from punnetplan.schemas.order import Order, OrderStatus, OrderStatusChange
from punnetplan.schemas.reference import ProductionLine
from punnetplan.schemas.schedule import PlacementSummary, ScheduleItem, ScheduleKind
from punnetplan.schemas.snapshot import PlanningSnapshot
from punnetplan.services.changeover_resolver import ChangeoverResolver
from punnetplan.services.errors import InvalidOrderState, OverlapViolation
from punnetplan.services.rate_resolver import RateResolver
from punnetplan.services.timeline import LineTimeline

logger = logging.getLogger(__name__)

# Namespace for deterministic placement ids
PLACEMENT_NAMESPACE = uuid.UUID("5f0c2a8e-9b1d-4c3e-8a7f-2d6b1e4c9a30")


def run_minutes(quantity_packs: int, packs_per_minute: float) -> int:
    """Whole minutes needed to pack ``quantity_packs``, rounded up."""
    if packs_per_minute <= 0:
        raise ValueError(f"packs_per_minute must be positive, got {packs_per_minute}")
    # Decimal keeps e.g. 1200 / 120 from drifting above 10.0 before ceil
    return math.ceil(Decimal(quantity_packs) / Decimal(str(packs_per_minute)))


def placement_id(order_id: uuid.UUID, line_id: uuid.UUID, start_at: datetime) -> uuid.UUID:
    return uuid.uuid5(PLACEMENT_NAMESPACE, f"{order_id}:{line_id}:{start_at.isoformat()}")


class Scheduler:
    """Computes and commits single-line placements against a planning snapshot."""

    def __init__(
        self,
        snapshot: PlanningSnapshot,
        timeline: LineTimeline | None = None,
        rate_resolver: RateResolver | None = None,
        changeover_resolver: ChangeoverResolver | None = None,
    ) -> None:
        self.snapshot = snapshot
        self.timeline = timeline if timeline is not None else LineTimeline.from_items(
            snapshot.schedule_items
        )
        self.rate_resolver = rate_resolver or RateResolver.from_snapshot(snapshot)
        self.changeover_resolver = changeover_resolver or ChangeoverResolver.from_snapshot(snapshot)

        self._state_lock = threading.Lock()
        self._committed_orders: set[uuid.UUID] = {
            item.order_id
            for line_id in self.timeline.line_ids()
            for item in self.timeline.items(line_id)
        }
        self._status_changes: list[OrderStatusChange] = []

    # ---------------------------------------------------------------
    # Proposal
    # ---------------------------------------------------------------

    def _check_schedulable(self, order: Order) -> None:
        if not order.is_schedulable:
            raise InvalidOrderState(order.id, order.status.value)
        with self._state_lock:
            if order.id in self._committed_orders:
                raise InvalidOrderState(order.id, OrderStatus.SCHEDULED.value)

    def compute_placement(self, order: Order, line: ProductionLine, now: datetime) -> ScheduleItem:
        """Propose a PLANNED item for ``order`` at the end of ``line``'s timeline.

        Pure with respect to its inputs: the same order, line, ``now`` and
        timeline state always produce an identical proposal.

        Raises:
            InvalidOrderState: the order is not pending, or already committed.
            RateNotConfigured: no run rate for the product on this line.
            ChangeoverNotConfigured: no changeover from the line's last product.
        """
        self._check_schedulable(order)
        line = self.snapshot.line(line.id)
        product = self.snapshot.product(order.product_id)

        last = self.timeline.last_item(line.id)
        predecessor = self.snapshot.product(last.product_id) if last is not None else None
        anchor = max(now, last.end_at) if last is not None else now

        setup = self.changeover_resolver.resolve_changeover(predecessor, product)
        rate = self.rate_resolver.resolve_rate(product, line)
        run = run_minutes(order.quantity_packs, rate)

        return ScheduleItem(
            id=placement_id(order.id, line.id, anchor),
            order_id=order.id,
            product_id=product.id,
            line_id=line.id,
            start_at=anchor,
            end_at=anchor + timedelta(minutes=setup + run),
            setup_minutes=setup,
            run_minutes=run,
            kind=ScheduleKind.PLANNED,
        )

    def preview(self, order: Order, line: ProductionLine, now: datetime) -> PlacementSummary:
        """Durations to show for confirmation; identical to what ``commit`` will store."""
        return self.compute_placement(order, line, now).summary()

    # ---------------------------------------------------------------
    # Commit
    # ---------------------------------------------------------------

    def commit(self, proposal: ScheduleItem) -> ScheduleItem:
        """Place a proposal on its line and request the order's status change.

        Raises:
            OverlapViolation: the line moved on since the proposal was computed.
            InvalidOrderState: the order was already committed.
        """
        with self.timeline.lock_for(proposal.line_id):
            with self._state_lock:
                if proposal.order_id in self._committed_orders:
                    raise InvalidOrderState(proposal.order_id, OrderStatus.SCHEDULED.value)
                self._committed_orders.add(proposal.order_id)
            try:
                self.timeline.insert(proposal)
            except Exception:
                with self._state_lock:
                    self._committed_orders.discard(proposal.order_id)
                raise

        with self._state_lock:
            self._status_changes.append(
                OrderStatusChange(
                    order_id=proposal.order_id,
                    from_status=OrderStatus.PENDING,
                    to_status=OrderStatus.SCHEDULED,
                )
            )

        logger.info(
            "Committed order %s on line %s: %s -> %s (setup %s min, run %s min)",
            proposal.order_id,
            proposal.line_id,
            proposal.start_at.isoformat(),
            proposal.end_at.isoformat(),
            proposal.setup_minutes,
            proposal.run_minutes,
        )
        return proposal

    def schedule(self, order: Order, line: ProductionLine, now: datetime) -> ScheduleItem:
        """Compute and commit, recomputing once if the placement went stale."""
        proposal = self.compute_placement(order, line, now)
        try:
            return self.commit(proposal)
        except OverlapViolation:
            logger.warning(
                "Placement for order %s on line %s went stale, recomputing",
                order.id, line.id,
            )
        return self.commit(self.compute_placement(order, line, now))

    def drain_status_changes(self) -> list[OrderStatusChange]:
        """Hand queued status transitions to the storage side, clearing the queue."""
        with self._state_lock:
            changes = list(self._status_changes)
            self._status_changes.clear()
        return changes
