"""Schedule item Pydantic schemas."""

import enum
import uuid
from datetime import datetime, timedelta

from pydantic import BaseModel, Field, computed_field, model_validator


class ScheduleKind(str, enum.Enum):
    """PLANNED items drive forward scheduling; ACTUAL items are display-only history."""

    PLANNED = "PLANNED"
    ACTUAL = "ACTUAL"


class PlacementSummary(BaseModel):
    """Durations shown to the planner before a placement is confirmed."""

    setup_minutes: float
    run_minutes: int
    total_minutes: float

    model_config = {"frozen": True}


class ScheduleItem(BaseModel):
    """A time-boxed block of work for one order on one line."""

    id: uuid.UUID
    order_id: uuid.UUID
    product_id: uuid.UUID
    line_id: uuid.UUID
    start_at: datetime
    end_at: datetime
    setup_minutes: float = Field(..., ge=0)
    run_minutes: int = Field(..., ge=0)
    kind: ScheduleKind = ScheduleKind.PLANNED

    model_config = {"from_attributes": True, "frozen": True}

    @model_validator(mode="after")
    def _check_window(self) -> "ScheduleItem":
        if self.end_at <= self.start_at:
            raise ValueError("end_at must be after start_at")
        expected = timedelta(minutes=self.setup_minutes + self.run_minutes)
        if self.end_at - self.start_at != expected:
            raise ValueError(
                f"Window of {self.end_at - self.start_at} does not match "
                f"{self.setup_minutes} setup + {self.run_minutes} run minutes"
            )
        return self

    @computed_field
    @property
    def total_minutes(self) -> float:
        return self.setup_minutes + self.run_minutes

    def summary(self) -> PlacementSummary:
        return PlacementSummary(
            setup_minutes=self.setup_minutes,
            run_minutes=self.run_minutes,
            total_minutes=self.total_minutes,
        )
