"""MasterRunRate and SpecificRunRate SQLAlchemy models."""

import uuid

from sqlalchemy import CheckConstraint, Float, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from punnetplan.core.database import Base


class MasterRunRate(Base):
    """Default packing speed for a punnet size on a line."""

    __tablename__ = "master_run_rates"
    __table_args__ = (
        UniqueConstraint("punnet_size_id", "line_id", name="uq_master_run_rates_key"),
        CheckConstraint("packs_per_minute > 0", name="ck_master_run_rates_positive"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    punnet_size_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("punnet_sizes.id"), nullable=False
    )
    line_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("production_lines.id", ondelete="CASCADE"), nullable=False
    )
    packs_per_minute: Mapped[float] = mapped_column(Float, nullable=False)


class SpecificRunRate(Base):
    """Packing speed override for one product on one line."""

    __tablename__ = "specific_run_rates"
    __table_args__ = (
        UniqueConstraint("product_id", "line_id", name="uq_specific_run_rates_key"),
        CheckConstraint("packs_per_minute > 0", name="ck_specific_run_rates_positive"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    line_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("production_lines.id", ondelete="CASCADE"), nullable=False
    )
    packs_per_minute: Mapped[float] = mapped_column(Float, nullable=False)
