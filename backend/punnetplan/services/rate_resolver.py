"""Run-rate resolution.

A product's packs-per-minute on a line is found by walking an ordered chain
of lookups; the first one that has a row wins:

1. Specific run rate for the exact (product, line) pair
2. Master run rate for the product's punnet size on the line

A miss on every tier is a configuration error and raises ``RateNotConfigured``.
"""

import logging
import uuid
from collections.abc import Iterable, Sequence
from typing import Protocol

from punnetplan.schemas.reference import (
    MasterRunRate,
    Product,
    ProductionLine,
    SpecificRunRate,
)
from punnetplan.schemas.snapshot import PlanningSnapshot
from punnetplan.services.errors import RateNotConfigured

logger = logging.getLogger(__name__)


class RateLookup(Protocol):
    """One tier of the run-rate chain."""

    name: str

    def lookup(self, product: Product, line: ProductionLine) -> float | None:
        ...


class SpecificRunRateLookup:
    """Product-level override keyed by (product, line)."""

    name = "specific"

    def __init__(self, rows: Iterable[SpecificRunRate]) -> None:
        self._rates: dict[tuple[uuid.UUID, uuid.UUID], float] = {
            (row.product_id, row.line_id): row.packs_per_minute for row in rows
        }

    def lookup(self, product: Product, line: ProductionLine) -> float | None:
        return self._rates.get((product.id, line.id))


class MasterRunRateLookup:
    """Default rate keyed by (punnet size, line)."""

    name = "master"

    def __init__(self, rows: Iterable[MasterRunRate]) -> None:
        self._rates: dict[tuple[uuid.UUID, uuid.UUID], float] = {
            (row.punnet_size_id, row.line_id): row.packs_per_minute for row in rows
        }

    def lookup(self, product: Product, line: ProductionLine) -> float | None:
        return self._rates.get((product.punnet_size_id, line.id))


class RateResolver:
    """Resolves the effective packs-per-minute for a product on a line."""

    def __init__(self, strategies: Sequence[RateLookup]) -> None:
        self.strategies = tuple(strategies)

    @classmethod
    def from_snapshot(cls, snapshot: PlanningSnapshot) -> "RateResolver":
        return cls(
            [
                SpecificRunRateLookup(snapshot.specific_run_rates),
                MasterRunRateLookup(snapshot.master_run_rates),
            ]
        )

    def resolve_rate(self, product: Product, line: ProductionLine) -> float:
        for strategy in self.strategies:
            rate = strategy.lookup(product, line)
            if rate is not None:
                logger.debug(
                    "Run rate for product %s on line %s: %s ppm (%s)",
                    product.id, line.id, rate, strategy.name,
                )
                return rate
        raise RateNotConfigured(product.id, line.id)
