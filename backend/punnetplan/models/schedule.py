"""ScheduleItem SQLAlchemy model."""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Float, ForeignKey, Index, Integer, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from punnetplan.core.database import Base


class ScheduleItem(Base):
    """A planned or actual block of work for an order on a production line."""

    __tablename__ = "schedule_items"
    __table_args__ = (
        CheckConstraint("end_at > start_at", name="ck_schedule_items_window"),
        Index("ix_schedule_items_line_start", "line_id", "start_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    order_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("orders.id"), nullable=False
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("products.id"), nullable=False
    )
    line_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("production_lines.id"), nullable=False
    )
    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    setup_minutes: Mapped[float] = mapped_column(
        Float, nullable=False, server_default="0.0", comment="Changeover time in minutes"
    )
    run_minutes: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Packing time in whole minutes"
    )
    kind: Mapped[str] = mapped_column(
        String(10), nullable=False, server_default="PLANNED"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
