"""Product and ProductVariety SQLAlchemy models."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from punnetplan.core.database import Base


class Product(Base):
    """A customer's packed product in a given punnet size."""

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    customer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("customers.id"), nullable=False
    )
    punnet_size_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("punnet_sizes.id"), nullable=False
    )
    multi_type: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default="false", comment="Mixed punnet of several varieties"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    varieties: Mapped[list["ProductVariety"]] = relationship(
        back_populates="product", cascade="all, delete-orphan"
    )


class ProductVariety(Base):
    """Fruit variant that may go into a product."""

    __tablename__ = "product_varieties"
    __table_args__ = (UniqueConstraint("product_id", "fruit_variant_id"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
    )
    fruit_variant_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("fruit_variants.id"), nullable=False
    )
    preferred: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default="false")

    product: Mapped["Product"] = relationship(back_populates="varieties")
