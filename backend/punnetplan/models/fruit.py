"""Fruit and FruitVariant SQLAlchemy models."""

import uuid

from sqlalchemy import ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from punnetplan.core.database import Base


class Fruit(Base):
    __tablename__ = "fruits"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    variants: Mapped[list["FruitVariant"]] = relationship(
        back_populates="fruit", cascade="all, delete-orphan"
    )


class FruitVariant(Base):
    """Cultivar of a fruit, e.g. Chandler strawberries."""

    __tablename__ = "fruit_variants"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    fruit_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("fruits.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    fruit: Mapped["Fruit"] = relationship(back_populates="variants")
