"""Pydantic v2 schemas for the planning domain."""

from punnetplan.schemas.order import Order, OrderStatus, OrderStatusChange
from punnetplan.schemas.reference import (
    Customer,
    Fruit,
    FruitVariant,
    MasterChangeover,
    MasterRunRate,
    Product,
    ProductionLine,
    ProductVariety,
    PunnetSize,
    Site,
    SpecificChangeover,
    SpecificRunRate,
)
from punnetplan.schemas.schedule import PlacementSummary, ScheduleItem, ScheduleKind
from punnetplan.schemas.snapshot import PlanningSnapshot

__all__ = [
    "Customer",
    "Fruit",
    "FruitVariant",
    "MasterChangeover",
    "MasterRunRate",
    "Order",
    "OrderStatus",
    "OrderStatusChange",
    "PlacementSummary",
    "PlanningSnapshot",
    "Product",
    "ProductionLine",
    "ProductVariety",
    "PunnetSize",
    "ScheduleItem",
    "ScheduleKind",
    "Site",
    "SpecificChangeover",
    "SpecificRunRate",
]
