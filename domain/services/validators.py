"""Entity validators.

Each validator runs a fixed, ordered list of field rules and stops at the
first violation, returning its message. The order is part of the contract:
the message shown to the user is always the first broken rule.

Numeric rules are strict ``> 0`` for every entity except Product, whose
quantity and unit price accept values ``>= 1``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Optional, Sequence

from domain.exceptions import ValidationError
from domain.models import (
    INGREDIENT_UNITS,
    MIX_TYPES,
    Formula,
    Ingredient,
    Input,
    Product,
    Purchase,
    Sale,
)
from domain.services.number_parser import parse_user_number

DATE_FORMAT = "%Y-%m-%d"

Rule = Callable[[Any], Optional[str]]


@dataclass(frozen=True)
class ValidationResult:
    """Either ``Ok`` (no message) or ``Invalid(message)``."""

    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.message is None

    def raise_if_invalid(self) -> None:
        """Raise ValidationError carrying the message when invalid."""
        if self.message is not None:
            raise ValidationError(self.message)


OK = ValidationResult()


def invalid(message: str) -> ValidationResult:
    return ValidationResult(message=message)


# ============================================================================
# Rule builders
# ============================================================================


def required(attr: str, label: str) -> Rule:
    def check(candidate: Any) -> Optional[str]:
        value = getattr(candidate, attr, None)
        if value is None or not str(value).strip():
            return f"El campo '{label}' es obligatorio."
        return None

    return check


def greater_than_zero(attr: str, message: str) -> Rule:
    def check(candidate: Any) -> Optional[str]:
        number = parse_user_number(getattr(candidate, attr, None))
        if number is None or number <= 0:
            return message
        return None

    return check


def at_least(attr: str, minimum: Decimal, message: str) -> Rule:
    def check(candidate: Any) -> Optional[str]:
        number = parse_user_number(getattr(candidate, attr, None))
        if number is None or number < minimum:
            return message
        return None

    return check


def one_of(attr: str, choices: Sequence[str], message: str) -> Rule:
    def check(candidate: Any) -> Optional[str]:
        if getattr(candidate, attr, None) not in choices:
            return message
        return None

    return check


def calendar_date(attr: str, label: str) -> Rule:
    def check(candidate: Any) -> Optional[str]:
        value = str(getattr(candidate, attr, "") or "").strip()
        try:
            datetime.strptime(value, DATE_FORMAT)
        except ValueError:
            return f"La '{label}' debe ser una fecha válida (AAAA-MM-DD)."
        return None

    return check


def run_rules(candidate: Any, rules: Sequence[Rule]) -> ValidationResult:
    for rule in rules:
        message = rule(candidate)
        if message is not None:
            return invalid(message)
    return OK


# ============================================================================
# Per-entity rules
# ============================================================================

INPUT_RULES: tuple[Rule, ...] = (
    required("name", "Nombre"),
    required("description", "Descripción"),
    greater_than_zero("quantity", "La 'Cantidad' debe ser mayor a 0."),
    greater_than_zero("unit_price", "El 'Precio por unidad' debe ser mayor a 0."),
    required("type", "Tipo"),
    required("unit", "Unidad"),
)

PRODUCT_RULES: tuple[Rule, ...] = (
    required("name", "Nombre"),
    required("description", "Descripción"),
    at_least("quantity", Decimal("1"), "La cantidad mínima es 1."),
    at_least("unit_price", Decimal("1"), "El precio mínimo por unidad es $1."),
)

PURCHASE_RULES: tuple[Rule, ...] = (
    required("product", "Producto"),
    required("supplier", "Proveedor"),
    required("date", "Fecha"),
    calendar_date("date", "Fecha"),
    greater_than_zero("quantity", "La 'Cantidad' debe ser mayor a 0."),
    greater_than_zero("total_cost", "El 'Costo total' debe ser mayor a 0."),
)

SALE_RULES: tuple[Rule, ...] = (
    required("client", "Cliente"),
    required("product", "Producto"),
    required("date", "Fecha"),
    calendar_date("date", "Fecha"),
    greater_than_zero("quantity", "La 'Cantidad' debe ser mayor a 0."),
    greater_than_zero("total_price", "El 'Precio total' debe ser mayor a 0."),
)

FORMULA_RULES: tuple[Rule, ...] = (
    required("name", "Nombre"),
    required("description", "Descripción"),
    greater_than_zero("total_amount", "La 'Cantidad total' debe ser mayor a 0."),
    greater_than_zero("drying_time", "El 'Tiempo de secado' debe ser mayor a 0."),
    greater_than_zero("coverage", "La 'Cobertura' debe ser mayor a 0."),
    one_of("mix_type", MIX_TYPES, "El 'Tipo de mezcla' debe ser base, finish o special."),
)


def validate_input(candidate: Input) -> ValidationResult:
    return run_rules(candidate, INPUT_RULES)


def validate_product(candidate: Product) -> ValidationResult:
    return run_rules(candidate, PRODUCT_RULES)


def validate_purchase(candidate: Purchase) -> ValidationResult:
    return run_rules(candidate, PURCHASE_RULES)


def validate_sale(candidate: Sale) -> ValidationResult:
    return run_rules(candidate, SALE_RULES)


def validate_ingredient(candidate: Ingredient, position: int) -> ValidationResult:
    """Validate one ingredient; ``position`` is 1-based and used in messages."""
    if not str(candidate.name or "").strip():
        return invalid(f"El nombre del ingrediente {position} es obligatorio.")
    quantity = parse_user_number(candidate.quantity)
    if quantity is None or quantity <= 0:
        return invalid(f"La cantidad del ingrediente {position} debe ser mayor a 0.")
    if candidate.unit not in INGREDIENT_UNITS:
        return invalid(f"La unidad del ingrediente {position} no es válida.")
    return OK


def validate_formula(candidate: Formula) -> ValidationResult:
    result = run_rules(candidate, FORMULA_RULES)
    if not result.ok:
        return result
    if not candidate.ingredients:
        return invalid("La fórmula debe tener al menos un ingrediente.")
    for position, ingredient in enumerate(candidate.ingredients, start=1):
        result = validate_ingredient(ingredient, position)
        if not result.ok:
            return result
    return OK


VALIDATORS: dict[type, Callable[[Any], ValidationResult]] = {
    Input: validate_input,
    Product: validate_product,
    Purchase: validate_purchase,
    Sale: validate_sale,
    Formula: validate_formula,
}


def validate(candidate: Any) -> ValidationResult:
    """Dispatch to the validator registered for the candidate's type."""
    validator = VALIDATORS.get(type(candidate))
    if validator is None:
        raise TypeError(f"No validator for {type(candidate).__name__}")
    return validator(candidate)
