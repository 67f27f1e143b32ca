"""Domain models.

Business records handled by the back-office managers. Records are
immutable: an edit produces a new record that replaces the stored one
by id. Validation lives in ``domain.services.validators`` so that an
invalid draft can still be represented while the user corrects it.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any, Optional

MIX_TYPES = ("base", "finish", "special")
INGREDIENT_UNITS = ("kg", "g", "ml", "L", "unidades")


@dataclass(frozen=True)
class Input:
    """Raw material (insumo) used by the formulas."""

    id: int
    name: str
    description: str
    quantity: Optional[Decimal]
    unit_price: Optional[Decimal]
    type: str
    unit: str

    @property
    def stock_value(self) -> Decimal:
        """Quantity times unit price (0 when either is missing)."""
        if self.quantity is None or self.unit_price is None:
            return Decimal("0")
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class Product:
    """Finished product held in the inventory."""

    id: int
    name: str
    description: str
    quantity: Optional[Decimal]
    unit_price: Optional[Decimal]


@dataclass(frozen=True)
class Purchase:
    """Purchase of a product from a supplier."""

    id: int
    product: str
    supplier: str
    date: str
    quantity: Optional[Decimal]
    total_cost: Optional[Decimal]


@dataclass(frozen=True)
class Sale:
    """Sale of a product to a client."""

    id: int
    client: str
    product: str
    date: str
    quantity: Optional[Decimal]
    total_price: Optional[Decimal]


@dataclass(frozen=True)
class Ingredient:
    """Ingredient line of a formula. Has no existence outside its formula."""

    id: int
    name: str
    quantity: Optional[Decimal]
    unit: str


@dataclass(frozen=True)
class Formula:
    """Paint formula with its ordered list of ingredients."""

    id: int
    name: str
    description: str
    mix_type: str
    total_amount: Optional[Decimal]
    drying_time: Optional[int]
    coverage: Optional[Decimal]
    ingredients: tuple[Ingredient, ...] = field(default_factory=tuple)


def with_id(entity: Any, new_id: int) -> Any:
    """Return a copy of ``entity`` carrying ``new_id``."""
    return replace(entity, id=new_id)
