"""SQLAlchemy ORM models."""

from punnetplan.models.changeover import MasterChangeover, SpecificChangeover
from punnetplan.models.customer import Customer
from punnetplan.models.fruit import Fruit, FruitVariant
from punnetplan.models.order import Order
from punnetplan.models.product import Product, ProductVariety
from punnetplan.models.production_line import ProductionLine, Site
from punnetplan.models.punnet_size import PunnetSize
from punnetplan.models.run_rate import MasterRunRate, SpecificRunRate
from punnetplan.models.schedule import ScheduleItem

__all__ = [
    "Customer",
    "Fruit",
    "FruitVariant",
    "MasterChangeover",
    "MasterRunRate",
    "Order",
    "Product",
    "ProductionLine",
    "ProductVariety",
    "PunnetSize",
    "ScheduleItem",
    "Site",
    "SpecificChangeover",
    "SpecificRunRate",
]
