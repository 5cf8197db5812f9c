"""Seed script with demo data for a single berry packing site.

Creates one customer, one site with two lines, 125g/250g/500g punnets,
strawberry and blueberry variants, three products (one mixed punnet),
master and specific run rates and changeovers, and three pending orders.
"""

import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from punnetplan.models import (
    Customer,
    Fruit,
    FruitVariant,
    MasterChangeover,
    MasterRunRate,
    Order,
    Product,
    ProductionLine,
    ProductVariety,
    PunnetSize,
    Site,
    SpecificChangeover,
    SpecificRunRate,
)

# Fixed UUIDs for deterministic seeding
CUSTOMER_ID = uuid.UUID("a0000000-0000-0000-0000-000000000001")
SITE_ID = uuid.UUID("a0000000-0000-0000-0000-000000000002")

LINE_IDS = {
    "Line 1 - Premium": uuid.UUID("b0000000-0000-0000-0000-000000000001"),
    "Line 2 - Standard": uuid.UUID("b0000000-0000-0000-0000-000000000002"),
}

PUNNET_SIZE_IDS = {
    "125g": uuid.UUID("c0000000-0000-0000-0000-000000000125"),
    "250g": uuid.UUID("c0000000-0000-0000-0000-000000000250"),
    "500g": uuid.UUID("c0000000-0000-0000-0000-000000000500"),
}

FRUIT_IDS = {
    "Strawberry": uuid.UUID("d0000000-0000-0000-0000-000000000001"),
    "Blueberry": uuid.UUID("d0000000-0000-0000-0000-000000000002"),
}

VARIANT_IDS = {
    "Sweet Charlie": uuid.UUID("d1000000-0000-0000-0000-000000000001"),
    "Chandler": uuid.UUID("d1000000-0000-0000-0000-000000000002"),
    "Festival": uuid.UUID("d1000000-0000-0000-0000-000000000003"),
    "Duke": uuid.UUID("d2000000-0000-0000-0000-000000000001"),
    "Bluecrop": uuid.UUID("d2000000-0000-0000-0000-000000000002"),
    "Jersey": uuid.UUID("d2000000-0000-0000-0000-000000000003"),
}

PRODUCT_IDS = {
    "Premium Strawberries 250g": uuid.UUID("e0000000-0000-0000-0000-000000000001"),
    "Mixed Berry Punnet 500g": uuid.UUID("e0000000-0000-0000-0000-000000000002"),
    "Blueberry Select 125g": uuid.UUID("e0000000-0000-0000-0000-000000000003"),
}

ORDER_IDS = {
    "strawberries": uuid.UUID("f0000000-0000-0000-0000-000000000001"),
    "mixed": uuid.UUID("f0000000-0000-0000-0000-000000000002"),
    "blueberries": uuid.UUID("f0000000-0000-0000-0000-000000000003"),
}


def _days_from_now(days: int) -> datetime:
    return datetime.now(timezone.utc) + timedelta(days=days)


def _create_reference_data() -> list:
    """Customer, site, lines, punnet sizes, fruits and variants."""
    rows: list = [
        Customer(id=CUSTOMER_ID, name="Premium Fruits Ltd"),
        Site(id=SITE_ID, name="Main Processing Facility"),
    ]
    rows += [ProductionLine(id=line_id, name=name, site_id=SITE_ID) for name, line_id in LINE_IDS.items()]
    rows += [
        PunnetSize(id=size_id, name=name, size_grams=int(name.rstrip("g")))
        for name, size_id in PUNNET_SIZE_IDS.items()
    ]
    rows += [Fruit(id=fruit_id, name=name) for name, fruit_id in FRUIT_IDS.items()]

    strawberry_variants = ("Sweet Charlie", "Chandler", "Festival")
    for name, variant_id in VARIANT_IDS.items():
        fruit = "Strawberry" if name in strawberry_variants else "Blueberry"
        rows.append(FruitVariant(id=variant_id, fruit_id=FRUIT_IDS[fruit], name=name))
    return rows


def _create_products() -> list[Product]:
    """Three products; the mixed berry punnet prefers two varieties."""
    return [
        Product(
            id=PRODUCT_IDS["Premium Strawberries 250g"],
            name="Premium Strawberries 250g",
            customer_id=CUSTOMER_ID,
            punnet_size_id=PUNNET_SIZE_IDS["250g"],
            multi_type=False,
            varieties=[ProductVariety(fruit_variant_id=VARIANT_IDS["Sweet Charlie"], preferred=True)],
        ),
        Product(
            id=PRODUCT_IDS["Mixed Berry Punnet 500g"],
            name="Mixed Berry Punnet 500g",
            customer_id=CUSTOMER_ID,
            punnet_size_id=PUNNET_SIZE_IDS["500g"],
            multi_type=True,
            varieties=[
                ProductVariety(fruit_variant_id=VARIANT_IDS["Chandler"], preferred=True),
                ProductVariety(fruit_variant_id=VARIANT_IDS["Duke"], preferred=True),
            ],
        ),
        Product(
            id=PRODUCT_IDS["Blueberry Select 125g"],
            name="Blueberry Select 125g",
            customer_id=CUSTOMER_ID,
            punnet_size_id=PUNNET_SIZE_IDS["125g"],
            multi_type=False,
            varieties=[ProductVariety(fruit_variant_id=VARIANT_IDS["Bluecrop"], preferred=True)],
        ),
    ]


def _create_run_rates() -> list:
    line1 = LINE_IDS["Line 1 - Premium"]
    line2 = LINE_IDS["Line 2 - Standard"]
    master = [
        ("125g", line1, 180),
        ("250g", line1, 150),
        ("500g", line1, 120),
        ("125g", line2, 160),
        ("250g", line2, 130),
        ("500g", line2, 100),
    ]
    rows: list = [
        MasterRunRate(punnet_size_id=PUNNET_SIZE_IDS[size], line_id=line_id, packs_per_minute=ppm)
        for size, line_id, ppm in master
    ]
    # Mixed berry is slower on the premium line
    rows.append(
        SpecificRunRate(
            product_id=PRODUCT_IDS["Mixed Berry Punnet 500g"],
            line_id=line1,
            packs_per_minute=90,
        )
    )
    return rows


def _create_changeovers() -> list:
    master = [
        ("125g", "250g", 15),
        ("250g", "500g", 20),
        ("500g", "125g", 25),
        ("250g", "125g", 10),
        ("500g", "250g", 15),
        ("125g", "500g", 30),
    ]
    rows: list = [
        MasterChangeover(
            from_punnet_size_id=PUNNET_SIZE_IDS[from_size],
            to_punnet_size_id=PUNNET_SIZE_IDS[to_size],
            minutes=minutes,
        )
        for from_size, to_size, minutes in master
    ]
    specific = [
        ("Premium Strawberries 250g", "Mixed Berry Punnet 500g", 45),
        ("Mixed Berry Punnet 500g", "Blueberry Select 125g", 35),
    ]
    rows += [
        SpecificChangeover(
            from_product_id=PRODUCT_IDS[from_name],
            to_product_id=PRODUCT_IDS[to_name],
            minutes=minutes,
        )
        for from_name, to_name, minutes in specific
    ]
    return rows


def _create_orders() -> list[Order]:
    return [
        Order(
            id=ORDER_IDS["strawberries"],
            customer_id=CUSTOMER_ID,
            product_id=PRODUCT_IDS["Premium Strawberries 250g"],
            quantity_packs=1000,
            due_at=_days_from_now(1),
            status="pending",
        ),
        Order(
            id=ORDER_IDS["mixed"],
            customer_id=CUSTOMER_ID,
            product_id=PRODUCT_IDS["Mixed Berry Punnet 500g"],
            quantity_packs=500,
            due_at=_days_from_now(1),
            status="pending",
        ),
        Order(
            id=ORDER_IDS["blueberries"],
            customer_id=CUSTOMER_ID,
            product_id=PRODUCT_IDS["Blueberry Select 125g"],
            quantity_packs=1500,
            due_at=_days_from_now(2),
            status="pending",
        ),
    ]


async def seed_demo_data(session: AsyncSession) -> dict[str, int]:
    """Seed the database with demo data.

    Args:
        session: An async SQLAlchemy session.

    Returns:
        Dictionary with counts of created entities.
    """
    reference = _create_reference_data()
    products = _create_products()
    rates = _create_run_rates()
    changeovers = _create_changeovers()
    orders = _create_orders()

    session.add_all(reference)
    await session.flush()

    session.add_all(products)
    await session.flush()

    session.add_all(rates)
    session.add_all(changeovers)
    session.add_all(orders)
    await session.flush()

    return {
        "reference_rows": len(reference),
        "products": len(products),
        "run_rates": len(rates),
        "changeovers": len(changeovers),
        "orders": len(orders),
    }


async def seed_if_empty(session: AsyncSession) -> dict[str, int] | None:
    """Seed demo data only if the database is empty.

    Returns:
        Seed counts if data was seeded, None if database already has data.
    """
    result = await session.execute(select(func.count()).select_from(Product))
    count = result.scalar() or 0

    if count > 0:
        return None

    return await seed_demo_data(session)
