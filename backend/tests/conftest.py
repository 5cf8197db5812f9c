"""Pytest configuration with planning fixtures and factories."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from punnetplan.schemas import (
    MasterChangeover,
    MasterRunRate,
    Order,
    PlanningSnapshot,
    Product,
    ProductionLine,
    ProductVariety,
    PunnetSize,
    ScheduleItem,
    ScheduleKind,
    SpecificChangeover,
    SpecificRunRate,
)

T0 = datetime(2026, 3, 2, 6, 0, 0, tzinfo=timezone.utc)  # Monday 6 AM

CUSTOMER_ID = uuid.UUID("10000000-0000-0000-0000-000000000001")
SITE_ID = uuid.UUID("20000000-0000-0000-0000-000000000001")


# ---------------------------------------------------------------------------
# Test Data Factories
# ---------------------------------------------------------------------------


class PunnetSizeFactory:
    """Factory for creating PunnetSize instances for testing."""

    @classmethod
    def create(cls, grams: int = 250, **overrides: Any) -> PunnetSize:
        defaults = {"id": uuid.uuid4(), "name": f"{grams}g", "size_grams": grams}
        return PunnetSize(**{**defaults, **overrides})


class ProductionLineFactory:
    """Factory for creating ProductionLine instances for testing."""

    _counter = 0

    @classmethod
    def create(cls, **overrides: Any) -> ProductionLine:
        cls._counter += 1
        defaults = {"id": uuid.uuid4(), "name": f"Line {cls._counter}", "site_id": SITE_ID}
        return ProductionLine(**{**defaults, **overrides})


class ProductFactory:
    """Factory for creating Product instances for testing."""

    _counter = 0

    @classmethod
    def create(cls, punnet_size: PunnetSize, **overrides: Any) -> Product:
        cls._counter += 1
        defaults = {
            "id": uuid.uuid4(),
            "name": f"Test Product {cls._counter} {punnet_size.name}",
            "customer_id": CUSTOMER_ID,
            "punnet_size_id": punnet_size.id,
            "multi_type": False,
            "varieties": (ProductVariety(fruit_variant_id=uuid.uuid4(), preferred=True),),
        }
        return Product(**{**defaults, **overrides})


class OrderFactory:
    """Factory for creating Order instances for testing."""

    @classmethod
    def create(cls, product: Product, **overrides: Any) -> Order:
        defaults = {
            "id": uuid.uuid4(),
            "customer_id": product.customer_id,
            "product_id": product.id,
            "quantity_packs": 1000,
            "due_at": T0 + timedelta(days=1),
            "status": "pending",
        }
        return Order(**{**defaults, **overrides})


class ScheduleItemFactory:
    """Factory for creating committed ScheduleItem instances for testing."""

    @classmethod
    def create(
        cls,
        product: Product,
        line: ProductionLine,
        start_at: datetime = T0,
        setup_minutes: float = 10.0,
        run_minutes: int = 50,
        **overrides: Any,
    ) -> ScheduleItem:
        defaults = {
            "id": uuid.uuid4(),
            "order_id": uuid.uuid4(),
            "product_id": product.id,
            "line_id": line.id,
            "start_at": start_at,
            "end_at": start_at + timedelta(minutes=setup_minutes + run_minutes),
            "setup_minutes": setup_minutes,
            "run_minutes": run_minutes,
            "kind": ScheduleKind.PLANNED,
        }
        return ScheduleItem(**{**defaults, **overrides})


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def line_factory():
    """Provide ProductionLineFactory for tests."""
    ProductionLineFactory._counter = 0
    return ProductionLineFactory


@pytest.fixture
def product_factory():
    """Provide ProductFactory for tests."""
    ProductFactory._counter = 0
    return ProductFactory


@pytest.fixture
def order_factory():
    """Provide OrderFactory for tests."""
    return OrderFactory


@pytest.fixture
def item_factory():
    """Provide ScheduleItemFactory for tests."""
    return ScheduleItemFactory


@pytest.fixture
def size_250():
    return PunnetSizeFactory.create(250)


@pytest.fixture
def size_500():
    return PunnetSizeFactory.create(500)


@pytest.fixture
def line_1(line_factory):
    return line_factory.create(name="L1")


@pytest.fixture
def product_a(product_factory, size_250):
    """Single-type product packed in 250g punnets."""
    return product_factory.create(size_250, name="Product A 250g")


@pytest.fixture
def product_b(product_factory, size_500):
    """Single-type product packed in 500g punnets."""
    return product_factory.create(size_500, name="Product B 500g")


@pytest.fixture
def reference_tables(size_250, size_500, line_1, product_a, product_b):
    """Keyword arguments for a snapshot holding the standard reference data.

    Master rates: 250g on L1 at 150 ppm, 500g on L1 at 120 ppm.
    Master changeovers: 250g -> 500g takes 20 min, 500g -> 250g takes 15 min.
    """
    return {
        "lines": [line_1],
        "punnet_sizes": [size_250, size_500],
        "products": [product_a, product_b],
        "master_run_rates": [
            MasterRunRate(punnet_size_id=size_250.id, line_id=line_1.id, packs_per_minute=150),
            MasterRunRate(punnet_size_id=size_500.id, line_id=line_1.id, packs_per_minute=120),
        ],
        "master_changeovers": [
            MasterChangeover(
                from_punnet_size_id=size_250.id, to_punnet_size_id=size_500.id, minutes=20
            ),
            MasterChangeover(
                from_punnet_size_id=size_500.id, to_punnet_size_id=size_250.id, minutes=15
            ),
        ],
    }


@pytest.fixture
def make_snapshot(reference_tables):
    """Build a PlanningSnapshot from the standard tables plus overrides."""

    def _make(**overrides: Any) -> PlanningSnapshot:
        return PlanningSnapshot(**{**reference_tables, **overrides})

    return _make


@pytest.fixture
def specific_a_to_b(product_a, product_b):
    return SpecificChangeover(from_product_id=product_a.id, to_product_id=product_b.id, minutes=45)


@pytest.fixture
def specific_rate_a(product_a, line_1):
    return SpecificRunRate(product_id=product_a.id, line_id=line_1.id, packs_per_minute=90)


@pytest.fixture
def mock_db():
    """Provide a mock AsyncSession for unit tests."""
    session = AsyncMock(spec=AsyncSession)
    session.add = MagicMock()
    session.add_all = MagicMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.execute = AsyncMock()
    return session
