"""Order Pydantic schemas."""

import enum
import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class OrderStatus(str, enum.Enum):
    """Order lifecycle. Transitions other than pending -> scheduled happen outside the planner."""

    PENDING = "pending"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Order(BaseModel):
    """A customer order for a number of packs of one product."""

    id: uuid.UUID
    customer_id: uuid.UUID
    product_id: uuid.UUID
    quantity_packs: int = Field(..., gt=0)
    due_at: datetime
    status: OrderStatus = OrderStatus.PENDING

    model_config = {"from_attributes": True, "frozen": True}

    @property
    def is_schedulable(self) -> bool:
        return self.status == OrderStatus.PENDING


class OrderStatusChange(BaseModel):
    """A status transition the planner requests from the storage side."""

    order_id: uuid.UUID
    from_status: OrderStatus
    to_status: OrderStatus

    model_config = {"frozen": True}
