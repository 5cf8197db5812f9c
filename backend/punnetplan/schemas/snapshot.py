"""Read-only planning snapshot handed to the scheduling core by storage."""

import uuid
from collections import Counter
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field, model_validator

from punnetplan.schemas.order import Order
from punnetplan.schemas.reference import (
    Customer,
    Fruit,
    FruitVariant,
    MasterChangeover,
    MasterRunRate,
    Product,
    ProductionLine,
    PunnetSize,
    Site,
    SpecificChangeover,
    SpecificRunRate,
)
from punnetplan.schemas.schedule import ScheduleItem
from punnetplan.services.errors import UnknownReference


def _duplicates(keys: Iterable[Any]) -> list[Any]:
    return [key for key, count in Counter(keys).items() if count > 1]


class PlanningSnapshot(BaseModel):
    """Reference tables, orders and the existing schedule at one point in time."""

    customers: tuple[Customer, ...] = ()
    sites: tuple[Site, ...] = ()
    lines: tuple[ProductionLine, ...] = ()
    punnet_sizes: tuple[PunnetSize, ...] = ()
    fruits: tuple[Fruit, ...] = ()
    fruit_variants: tuple[FruitVariant, ...] = ()
    products: tuple[Product, ...] = ()
    master_run_rates: tuple[MasterRunRate, ...] = ()
    specific_run_rates: tuple[SpecificRunRate, ...] = ()
    master_changeovers: tuple[MasterChangeover, ...] = ()
    specific_changeovers: tuple[SpecificChangeover, ...] = ()
    orders: tuple[Order, ...] = ()
    schedule_items: tuple[ScheduleItem, ...] = Field(default=())

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_unique_keys(self) -> "PlanningSnapshot":
        """Every override lookup key must resolve to at most one row."""
        tables = {
            "master run rate": [(r.punnet_size_id, r.line_id) for r in self.master_run_rates],
            "specific run rate": [(r.product_id, r.line_id) for r in self.specific_run_rates],
            "master changeover": [
                (c.from_punnet_size_id, c.to_punnet_size_id) for c in self.master_changeovers
            ],
            "specific changeover": [
                (c.from_product_id, c.to_product_id) for c in self.specific_changeovers
            ],
        }
        for table, keys in tables.items():
            dupes = _duplicates(keys)
            if dupes:
                raise ValueError(f"Duplicate {table} rows for keys {dupes}")
        return self

    @model_validator(mode="after")
    def _check_references(self) -> "PlanningSnapshot":
        size_ids = {p.id for p in self.punnet_sizes}
        line_ids = {line.id for line in self.lines}
        product_ids = {p.id for p in self.products}

        missing: list[str] = []
        for product in self.products:
            if product.punnet_size_id not in size_ids:
                missing.append(f"punnet size {product.punnet_size_id} of product {product.id}")
        for rate in self.master_run_rates:
            if rate.punnet_size_id not in size_ids or rate.line_id not in line_ids:
                missing.append(f"master run rate ({rate.punnet_size_id}, {rate.line_id})")
        for rate in self.specific_run_rates:
            if rate.product_id not in product_ids or rate.line_id not in line_ids:
                missing.append(f"specific run rate ({rate.product_id}, {rate.line_id})")
        for co in self.master_changeovers:
            if co.from_punnet_size_id not in size_ids or co.to_punnet_size_id not in size_ids:
                missing.append(
                    f"master changeover ({co.from_punnet_size_id}, {co.to_punnet_size_id})"
                )
        for co in self.specific_changeovers:
            if co.from_product_id not in product_ids or co.to_product_id not in product_ids:
                missing.append(f"specific changeover ({co.from_product_id}, {co.to_product_id})")

        if missing:
            raise ValueError("Dangling references: " + "; ".join(missing))
        return self

    def product(self, product_id: uuid.UUID) -> Product:
        for product in self.products:
            if product.id == product_id:
                return product
        raise UnknownReference("product", product_id)

    def line(self, line_id: uuid.UUID) -> ProductionLine:
        for line in self.lines:
            if line.id == line_id:
                return line
        raise UnknownReference("production line", line_id)

    def order(self, order_id: uuid.UUID) -> Order:
        for order in self.orders:
            if order.id == order_id:
                return order
        raise UnknownReference("order", order_id)

    def punnet_size(self, punnet_size_id: uuid.UUID) -> PunnetSize:
        for size in self.punnet_sizes:
            if size.id == punnet_size_id:
                return size
        raise UnknownReference("punnet size", punnet_size_id)
