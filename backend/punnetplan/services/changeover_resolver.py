"""Changeover (setup) time resolution.

Changeovers are directed: A -> B and B -> A are independent lookups. The
chain for a non-empty line is:

1. Specific changeover for the exact (from product, to product) pair
2. Master changeover for the (from punnet size, to punnet size) pair
3. Zero for an unlisted same-size pair

Moving between two products of the same punnet size, including a product
to itself, still goes through the master table first, which may hold a
non-zero same-size cleandown. An empty line has no predecessor and costs
``base_setup_minutes``.
"""

import logging
import uuid
from collections.abc import Iterable, Sequence
from typing import Protocol

from punnetplan.core.config import settings
from punnetplan.schemas.reference import MasterChangeover, Product, SpecificChangeover
from punnetplan.schemas.snapshot import PlanningSnapshot
from punnetplan.services.errors import ChangeoverNotConfigured

logger = logging.getLogger(__name__)


class ChangeoverLookup(Protocol):
    """One tier of the changeover chain."""

    name: str

    def lookup(self, from_product: Product, to_product: Product) -> float | None:
        ...


class SpecificChangeoverLookup:
    name = "specific"

    def __init__(self, rows: Iterable[SpecificChangeover]) -> None:
        self._minutes: dict[tuple[uuid.UUID, uuid.UUID], float] = {
            (row.from_product_id, row.to_product_id): row.minutes for row in rows
        }

    def lookup(self, from_product: Product, to_product: Product) -> float | None:
        return self._minutes.get((from_product.id, to_product.id))


class MasterChangeoverLookup:
    name = "master"

    def __init__(self, rows: Iterable[MasterChangeover]) -> None:
        self._minutes: dict[tuple[uuid.UUID, uuid.UUID], float] = {
            (row.from_punnet_size_id, row.to_punnet_size_id): row.minutes for row in rows
        }

    def lookup(self, from_product: Product, to_product: Product) -> float | None:
        return self._minutes.get((from_product.punnet_size_id, to_product.punnet_size_id))


class SameSizeDefaultLookup:
    """No cleandown when the punnet size does not change and no row says otherwise."""

    name = "same-size default"

    def lookup(self, from_product: Product, to_product: Product) -> float | None:
        if from_product.punnet_size_id == to_product.punnet_size_id:
            return 0.0
        return None


class ChangeoverResolver:
    """Resolves setup minutes between consecutive products on a line."""

    def __init__(
        self,
        strategies: Sequence[ChangeoverLookup],
        base_setup_minutes: float | None = None,
    ) -> None:
        if base_setup_minutes is None:
            base_setup_minutes = settings.BASE_SETUP_MINUTES
        if base_setup_minutes < 0:
            raise ValueError(f"Base setup minutes must be non-negative, got {base_setup_minutes}")
        self.strategies = tuple(strategies)
        self.base_setup_minutes = base_setup_minutes

    @classmethod
    def from_snapshot(
        cls,
        snapshot: PlanningSnapshot,
        base_setup_minutes: float | None = None,
    ) -> "ChangeoverResolver":
        return cls(
            [
                SpecificChangeoverLookup(snapshot.specific_changeovers),
                MasterChangeoverLookup(snapshot.master_changeovers),
                SameSizeDefaultLookup(),
            ],
            base_setup_minutes=base_setup_minutes,
        )

    def resolve_changeover(self, from_product: Product | None, to_product: Product) -> float:
        # Empty line: nothing to change over from
        if from_product is None:
            return self.base_setup_minutes

        for strategy in self.strategies:
            minutes = strategy.lookup(from_product, to_product)
            if minutes is not None:
                logger.debug(
                    "Changeover %s -> %s: %s min (%s)",
                    from_product.id, to_product.id, minutes, strategy.name,
                )
                return minutes
        raise ChangeoverNotConfigured(from_product.id, to_product.id)
