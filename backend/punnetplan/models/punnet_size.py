"""PunnetSize SQLAlchemy model."""

import uuid

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from punnetplan.core.database import Base


class PunnetSize(Base):
    """Standard punnet container size."""

    __tablename__ = "punnet_sizes"
    __table_args__ = (CheckConstraint("size_grams > 0", name="ck_punnet_sizes_positive"),)

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    size_grams: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Nominal fill weight in grams"
    )
