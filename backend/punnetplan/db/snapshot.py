"""Bridges the relational store and the in-memory planning core.

``load_snapshot`` reads every table the planner needs into an immutable
``PlanningSnapshot``; ``persist_commit`` writes a committed placement back
along with the order status transition the scheduler requested.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from punnetplan import models
from punnetplan.schemas import (
    Customer,
    Fruit,
    FruitVariant,
    MasterChangeover,
    MasterRunRate,
    Order,
    OrderStatus,
    OrderStatusChange,
    PlanningSnapshot,
    Product,
    ProductionLine,
    PunnetSize,
    ScheduleItem,
    Site,
    SpecificChangeover,
    SpecificRunRate,
)

logger = logging.getLogger(__name__)

# Orders the planner can see; completed/cancelled ones never reach it
VISIBLE_ORDER_STATUSES = (OrderStatus.PENDING.value, OrderStatus.SCHEDULED.value)


async def _fetch_all(session: AsyncSession, stmt) -> list:
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def load_snapshot(session: AsyncSession) -> PlanningSnapshot:
    """Read reference data, visible orders and the current schedule."""
    customers = await _fetch_all(session, select(models.Customer))
    sites = await _fetch_all(session, select(models.Site))
    lines = await _fetch_all(session, select(models.ProductionLine))
    punnet_sizes = await _fetch_all(session, select(models.PunnetSize))
    fruits = await _fetch_all(session, select(models.Fruit))
    fruit_variants = await _fetch_all(session, select(models.FruitVariant))
    products = await _fetch_all(
        session,
        select(models.Product).options(selectinload(models.Product.varieties)),
    )
    master_rates = await _fetch_all(session, select(models.MasterRunRate))
    specific_rates = await _fetch_all(session, select(models.SpecificRunRate))
    master_changeovers = await _fetch_all(session, select(models.MasterChangeover))
    specific_changeovers = await _fetch_all(session, select(models.SpecificChangeover))
    orders = await _fetch_all(
        session,
        select(models.Order)
        .where(models.Order.status.in_(VISIBLE_ORDER_STATUSES))
        .order_by(models.Order.due_at),
    )
    schedule_items = await _fetch_all(
        session,
        select(models.ScheduleItem).order_by(
            models.ScheduleItem.line_id, models.ScheduleItem.start_at
        ),
    )

    snapshot = PlanningSnapshot(
        customers=[Customer.model_validate(row) for row in customers],
        sites=[Site.model_validate(row) for row in sites],
        lines=[ProductionLine.model_validate(row) for row in lines],
        punnet_sizes=[PunnetSize.model_validate(row) for row in punnet_sizes],
        fruits=[Fruit.model_validate(row) for row in fruits],
        fruit_variants=[FruitVariant.model_validate(row) for row in fruit_variants],
        products=[Product.model_validate(row) for row in products],
        master_run_rates=[MasterRunRate.model_validate(row) for row in master_rates],
        specific_run_rates=[SpecificRunRate.model_validate(row) for row in specific_rates],
        master_changeovers=[MasterChangeover.model_validate(row) for row in master_changeovers],
        specific_changeovers=[
            SpecificChangeover.model_validate(row) for row in specific_changeovers
        ],
        orders=[Order.model_validate(row) for row in orders],
        schedule_items=[ScheduleItem.model_validate(row) for row in schedule_items],
    )
    logger.info(
        "Loaded planning snapshot: %d lines, %d products, %d orders, %d schedule items",
        len(snapshot.lines),
        len(snapshot.products),
        len(snapshot.orders),
        len(snapshot.schedule_items),
    )
    return snapshot


async def persist_commit(
    session: AsyncSession,
    item: ScheduleItem,
    status_change: OrderStatusChange | None = None,
) -> models.ScheduleItem:
    """Insert a committed schedule item and apply the requested order transition.

    The status update is guarded on the expected current status so a
    concurrent cancellation is not overwritten.
    """
    row = models.ScheduleItem(
        id=item.id,
        order_id=item.order_id,
        product_id=item.product_id,
        line_id=item.line_id,
        start_at=item.start_at,
        end_at=item.end_at,
        setup_minutes=item.setup_minutes,
        run_minutes=item.run_minutes,
        kind=item.kind.value,
    )
    session.add(row)

    if status_change is not None:
        await session.execute(
            update(models.Order)
            .where(
                models.Order.id == status_change.order_id,
                models.Order.status == status_change.from_status.value,
            )
            .values(status=status_change.to_status.value)
        )

    await session.flush()
    logger.info("Persisted schedule item %s for order %s", item.id, item.order_id)
    return row
