"""Entity mapper - bridge between dialog drafts/table rows and domain records.

Maps between:
- Drafts (plain dicts edited field by field by a dialog)
- Domain records (Input, Product, Purchase, Sale, Formula)
- Table rows (display strings) and export rows (raw values)
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence

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
from domain.services.number_parser import parse_user_int, parse_user_number
from ui.formatters import fmt_mix_type, fmt_money, fmt_number

TEXT = "text"
NUMBER = "number"
INTEGER = "integer"
DATE = "date"
CHOICE = "choice"


@dataclass(frozen=True)
class FieldDef:
    """One editable field of a record, as shown in dialogs."""

    name: str
    label: str
    kind: str = TEXT
    choices: tuple[str, ...] = ()


@dataclass(frozen=True)
class ColumnDef:
    """One table column: record attribute, header and display formatter."""

    name: str
    header: str
    sortable: bool = False
    formatter: Callable[[Any], str] = lambda value: "" if value is None else str(value)


def _parse(kind: str, value: Any) -> Any:
    if kind == NUMBER:
        return parse_user_number(value)
    if kind == INTEGER:
        return parse_user_int(value)
    return "" if value is None else str(value)


class EntityMapper:
    """Maps one flat record type (no nested collections)."""

    def __init__(
        self,
        entity_type: type,
        fields: Sequence[FieldDef],
        columns: Sequence[ColumnDef],
        defaults: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.entity_type = entity_type
        self.fields = tuple(fields)
        self.columns = tuple(columns)
        self._defaults = dict(defaults or {})

    @property
    def headers(self) -> List[str]:
        return [column.header for column in self.columns]

    @property
    def sortable_keys(self) -> List[str]:
        return [column.name for column in self.columns if column.sortable]

    def field(self, name: str) -> FieldDef:
        for field_def in self.fields:
            if field_def.name == name:
                return field_def
        raise KeyError(f"Unknown field: {name}")

    def empty_draft(self) -> Dict[str, Any]:
        """Blank draft used by the create dialog."""
        draft: Dict[str, Any] = {}
        for field_def in self.fields:
            if field_def.name in self._defaults:
                draft[field_def.name] = copy.deepcopy(self._defaults[field_def.name])
            elif field_def.kind in (NUMBER, INTEGER):
                draft[field_def.name] = Decimal("0")
            elif field_def.kind == CHOICE and field_def.choices:
                draft[field_def.name] = field_def.choices[0]
            else:
                draft[field_def.name] = ""
        return draft

    def to_draft(self, entity: Any) -> Dict[str, Any]:
        """Detached editable copy of a stored record."""
        return {field_def.name: getattr(entity, field_def.name) for field_def in self.fields}

    def from_draft(self, draft: Dict[str, Any], entity_id: int = 0) -> Any:
        """Build a record from a draft; unparseable numbers become None."""
        values = {field_def.name: _parse(field_def.kind, draft.get(field_def.name)) for field_def in self.fields}
        return self.entity_type(id=entity_id, **values)

    def to_row(self, entity: Any) -> List[str]:
        return [column.formatter(getattr(entity, column.name, None)) for column in self.columns]

    def to_export_row(self, entity: Any) -> List[Any]:
        row: List[Any] = []
        for column in self.columns:
            value = getattr(entity, column.name, None)
            if isinstance(value, (tuple, list)):
                value = column.formatter(value)
            row.append(value)
        return row


class FormulaMapper(EntityMapper):
    """Formula mapper; drafts carry an ``ingredients`` list of dicts."""

    INGREDIENT_FIELDS = (
        FieldDef("name", "Nombre"),
        FieldDef("quantity", "Cantidad", NUMBER),
        FieldDef("unit", "Unidad", CHOICE, INGREDIENT_UNITS),
    )

    def empty_ingredient(self, ingredient_id: int) -> Dict[str, Any]:
        return {"id": ingredient_id, "name": "", "quantity": Decimal("0"), "unit": "g"}

    def empty_draft(self) -> Dict[str, Any]:
        draft = super().empty_draft()
        draft["ingredients"] = [self.empty_ingredient(1)]
        return draft

    def to_draft(self, entity: Formula) -> Dict[str, Any]:
        draft = super().to_draft(entity)
        draft["ingredients"] = [
            {"id": ing.id, "name": ing.name, "quantity": ing.quantity, "unit": ing.unit}
            for ing in entity.ingredients
        ]
        return draft

    def from_draft(self, draft: Dict[str, Any], entity_id: int = 0) -> Formula:
        formula = super().from_draft(draft, entity_id)
        return replace(formula, ingredients=self._ingredients_from_draft(draft))

    def _ingredients_from_draft(self, draft: Dict[str, Any]) -> tuple[Ingredient, ...]:
        return tuple(
            Ingredient(
                id=int(item.get("id", position)),
                name=_parse(TEXT, item.get("name")),
                quantity=_parse(NUMBER, item.get("quantity")),
                unit=_parse(TEXT, item.get("unit")),
            )
            for position, item in enumerate(draft.get("ingredients", []), start=1)
        )

    @staticmethod
    def next_ingredient_id(draft: Dict[str, Any]) -> int:
        ids = [int(item.get("id", 0)) for item in draft.get("ingredients", [])]
        return max(ids, default=0) + 1


def _fmt_ingredients(ingredients: Any) -> str:
    return ", ".join(
        f"{ing.name} ({fmt_number(ing.quantity)} {ing.unit})" for ing in ingredients or ()
    )


INPUT_MAPPER = EntityMapper(
    Input,
    fields=(
        FieldDef("name", "Nombre"),
        FieldDef("description", "Descripción"),
        FieldDef("quantity", "Cantidad", NUMBER),
        FieldDef("unit_price", "Precio por unidad", NUMBER),
        FieldDef("type", "Tipo (Sólido, Líquido, etc.)"),
        FieldDef("unit", "Unidad (kg, L, etc.)"),
    ),
    columns=(
        ColumnDef("name", "Nombre", sortable=True),
        ColumnDef("description", "Descripción"),
        ColumnDef("quantity", "Cantidad", sortable=True, formatter=fmt_number),
        ColumnDef("unit_price", "Precio por unidad", sortable=True, formatter=fmt_money),
        ColumnDef("type", "Tipo"),
        ColumnDef("unit", "Unidad"),
    ),
)

PRODUCT_MAPPER = EntityMapper(
    Product,
    fields=(
        FieldDef("name", "Nombre"),
        FieldDef("description", "Descripción"),
        FieldDef("quantity", "Cantidad", NUMBER),
        FieldDef("unit_price", "Precio por unidad", NUMBER),
    ),
    columns=(
        ColumnDef("name", "Nombre", sortable=True),
        ColumnDef("description", "Descripción"),
        ColumnDef("quantity", "Cantidad", sortable=True, formatter=fmt_number),
        ColumnDef("unit_price", "Precio por unidad", sortable=True, formatter=fmt_money),
    ),
    defaults={"quantity": Decimal("1"), "unit_price": Decimal("1")},
)

PURCHASE_MAPPER = EntityMapper(
    Purchase,
    fields=(
        FieldDef("product", "Producto"),
        FieldDef("supplier", "Proveedor"),
        FieldDef("date", "Fecha", DATE),
        FieldDef("quantity", "Cantidad", NUMBER),
        FieldDef("total_cost", "Costo total", NUMBER),
    ),
    columns=(
        ColumnDef("product", "Producto", sortable=True),
        ColumnDef("supplier", "Proveedor", sortable=True),
        ColumnDef("date", "Fecha", sortable=True),
        ColumnDef("quantity", "Cantidad", sortable=True, formatter=fmt_number),
        ColumnDef("total_cost", "Costo total", sortable=True, formatter=fmt_money),
    ),
)

SALE_MAPPER = EntityMapper(
    Sale,
    fields=(
        FieldDef("client", "Cliente"),
        FieldDef("product", "Producto"),
        FieldDef("date", "Fecha", DATE),
        FieldDef("quantity", "Cantidad", NUMBER),
        FieldDef("total_price", "Precio total", NUMBER),
    ),
    columns=(
        ColumnDef("product", "Producto", sortable=True),
        ColumnDef("client", "Cliente", sortable=True),
        ColumnDef("date", "Fecha", sortable=True),
        ColumnDef("quantity", "Cantidad", sortable=True, formatter=fmt_number),
        ColumnDef("total_price", "Ingreso total", sortable=True, formatter=fmt_money),
    ),
)

FORMULA_MAPPER = FormulaMapper(
    Formula,
    fields=(
        FieldDef("name", "Nombre"),
        FieldDef("description", "Descripción"),
        FieldDef("mix_type", "Tipo de mezcla", CHOICE, MIX_TYPES),
        FieldDef("total_amount", "Cantidad total (L)", NUMBER),
        FieldDef("drying_time", "Tiempo de secado (min)", INTEGER),
        FieldDef("coverage", "Cobertura (m²/L)", NUMBER),
    ),
    columns=(
        ColumnDef("name", "Nombre", sortable=True),
        ColumnDef("description", "Descripción"),
        ColumnDef("mix_type", "Tipo de mezcla", sortable=True, formatter=fmt_mix_type),
        ColumnDef("total_amount", "Cantidad total (L)", sortable=True, formatter=fmt_number),
        ColumnDef("drying_time", "Secado (min)", sortable=True, formatter=fmt_number),
        ColumnDef("coverage", "Cobertura (m²/L)", sortable=True, formatter=fmt_number),
        ColumnDef("ingredients", "Ingredientes", formatter=_fmt_ingredients),
    ),
)
