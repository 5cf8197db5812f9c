"""Reference data Pydantic schemas.

Reference data is provisioned by the admin side and is read-only from the
planner's perspective, so every schema here is frozen.
"""

import uuid

from pydantic import BaseModel, Field, model_validator

_READ_ONLY = {"from_attributes": True, "frozen": True}


class Customer(BaseModel):
    id: uuid.UUID
    name: str = Field(..., max_length=200)

    model_config = _READ_ONLY


class Site(BaseModel):
    id: uuid.UUID
    name: str = Field(..., max_length=200)

    model_config = _READ_ONLY


class ProductionLine(BaseModel):
    """A packing line belonging to one site."""

    id: uuid.UUID
    name: str = Field(..., max_length=100)
    site_id: uuid.UUID

    model_config = _READ_ONLY


class PunnetSize(BaseModel):
    """A standard punnet container size."""

    id: uuid.UUID
    name: str = Field(..., max_length=50)
    size_grams: int = Field(..., gt=0)

    model_config = _READ_ONLY


class Fruit(BaseModel):
    id: uuid.UUID
    name: str = Field(..., max_length=100)

    model_config = _READ_ONLY


class FruitVariant(BaseModel):
    """A cultivar of a fruit; ``fruit_id`` is a back-reference, not ownership."""

    id: uuid.UUID
    fruit_id: uuid.UUID
    name: str = Field(..., max_length=100)

    model_config = _READ_ONLY


class ProductVariety(BaseModel):
    fruit_variant_id: uuid.UUID
    preferred: bool = False

    model_config = _READ_ONLY


class Product(BaseModel):
    """A packed product sold to a customer in a given punnet size.

    Single-type products have at most one preferred variety driving their
    default composition; ``multi_type`` products (mixed punnets) may prefer
    several at once.
    """

    id: uuid.UUID
    name: str = Field(..., max_length=200)
    customer_id: uuid.UUID
    punnet_size_id: uuid.UUID
    multi_type: bool = False
    varieties: tuple[ProductVariety, ...] = ()

    model_config = _READ_ONLY

    @model_validator(mode="after")
    def _check_preferred_varieties(self) -> "Product":
        if not self.multi_type and len(self.preferred_varieties()) > 1:
            raise ValueError(
                f"Product {self.id} is single-type but prefers "
                f"{len(self.preferred_varieties())} varieties"
            )
        return self

    def preferred_varieties(self) -> tuple[ProductVariety, ...]:
        return tuple(v for v in self.varieties if v.preferred)


class MasterRunRate(BaseModel):
    """Default packs-per-minute for a punnet size on a line."""

    punnet_size_id: uuid.UUID
    line_id: uuid.UUID
    packs_per_minute: float = Field(..., gt=0)

    model_config = _READ_ONLY


class SpecificRunRate(BaseModel):
    """Packs-per-minute override for one product on one line."""

    product_id: uuid.UUID
    line_id: uuid.UUID
    packs_per_minute: float = Field(..., gt=0)

    model_config = _READ_ONLY


class MasterChangeover(BaseModel):
    """Directed setup minutes between two punnet sizes."""

    from_punnet_size_id: uuid.UUID
    to_punnet_size_id: uuid.UUID
    minutes: float = Field(..., ge=0)

    model_config = _READ_ONLY


class SpecificChangeover(BaseModel):
    """Directed setup minutes override between two products."""

    from_product_id: uuid.UUID
    to_product_id: uuid.UUID
    minutes: float = Field(..., ge=0)

    model_config = _READ_ONLY
