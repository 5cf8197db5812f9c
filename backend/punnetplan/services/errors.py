"""Error kinds raised by the planning core.

None of these are retryable by simply calling again with the same inputs,
except ``OverlapViolation`` which signals a stale placement: recompute
against fresh timeline state and commit once more.
"""

import uuid
from datetime import datetime


class PlanningError(Exception):
    """Base class for planning failures."""


class UnknownReference(PlanningError, LookupError):
    """Raised when an id is not present in the planning snapshot."""

    def __init__(self, kind: str, entity_id: uuid.UUID) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"Unknown {kind} {entity_id}")


class RateNotConfigured(PlanningError):
    """No specific or master run rate exists for a product on a line."""

    def __init__(self, product_id: uuid.UUID, line_id: uuid.UUID) -> None:
        self.product_id = product_id
        self.line_id = line_id
        super().__init__(
            f"No run rate configured for product {product_id} on line {line_id}"
        )


class ChangeoverNotConfigured(PlanningError):
    """No specific or master changeover exists for a product transition."""

    def __init__(self, from_product_id: uuid.UUID, to_product_id: uuid.UUID) -> None:
        self.from_product_id = from_product_id
        self.to_product_id = to_product_id
        super().__init__(
            f"No changeover configured from product {from_product_id} "
            f"to product {to_product_id}"
        )


class OverlapViolation(PlanningError):
    """A planned item would start before the line's last commitment ends."""

    def __init__(
        self,
        line_id: uuid.UUID,
        start_at: datetime,
        last_end_at: datetime,
    ) -> None:
        self.line_id = line_id
        self.start_at = start_at
        self.last_end_at = last_end_at
        super().__init__(
            f"Item starting at {start_at.isoformat()} overlaps line {line_id}, "
            f"which is busy until {last_end_at.isoformat()}"
        )


class InvalidOrderState(PlanningError):
    """The order is not in a schedulable status."""

    def __init__(self, order_id: uuid.UUID, status: str) -> None:
        self.order_id = order_id
        self.status = status
        super().__init__(f"Order {order_id} cannot be scheduled from status '{status}'")
