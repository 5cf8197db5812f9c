"""MasterChangeover and SpecificChangeover SQLAlchemy models."""

import uuid

from sqlalchemy import CheckConstraint, Float, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from punnetplan.core.database import Base


class MasterChangeover(Base):
    """Directed setup time between two punnet sizes."""

    __tablename__ = "master_changeovers"
    __table_args__ = (
        UniqueConstraint(
            "from_punnet_size_id", "to_punnet_size_id", name="uq_master_changeovers_key"
        ),
        CheckConstraint("minutes >= 0", name="ck_master_changeovers_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    from_punnet_size_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("punnet_sizes.id"), nullable=False
    )
    to_punnet_size_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("punnet_sizes.id"), nullable=False
    )
    minutes: Mapped[float] = mapped_column(Float, nullable=False, comment="Setup time in minutes")


class SpecificChangeover(Base):
    """Directed setup time override between two products."""

    __tablename__ = "specific_changeovers"
    __table_args__ = (
        UniqueConstraint("from_product_id", "to_product_id", name="uq_specific_changeovers_key"),
        CheckConstraint("minutes >= 0", name="ck_specific_changeovers_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    from_product_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    to_product_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    minutes: Mapped[float] = mapped_column(Float, nullable=False, comment="Setup time in minutes")
