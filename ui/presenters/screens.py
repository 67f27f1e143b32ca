"""Per-screen configuration of the manager presenters.

Each manager screen differs only in its record type, dialog fields,
columns, default ordering and user-facing messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict

from config.constants import (
    SCREEN_FORMULA_CATALOG,
    SCREEN_FORMULA_MANAGER,
    SCREEN_INPUTS,
    SCREEN_INVENTORY,
    SCREEN_PURCHASES,
    SCREEN_SALES,
    SORT_ASC,
    SORT_DESC,
)
from domain.services.validators import (
    ValidationResult,
    validate_formula,
    validate_input,
    validate_product,
    validate_purchase,
    validate_sale,
)
from ui.adapters.entity_mapper import (
    FORMULA_MAPPER,
    INPUT_MAPPER,
    PRODUCT_MAPPER,
    PURCHASE_MAPPER,
    SALE_MAPPER,
    EntityMapper,
)


@dataclass(frozen=True)
class ManagerMessages:
    created: str
    updated: str
    deleted: str
    create_failed: str
    update_failed: str
    delete_failed: str
    confirm_delete: str


@dataclass(frozen=True)
class ManagerConfig:
    screen: str
    kind: str
    title: str
    subtitle: str
    mapper: EntityMapper
    validator: Callable[[Any], ValidationResult]
    messages: ManagerMessages
    default_sort_key: str
    default_direction: str = SORT_ASC
    read_only: bool = False
    create_label: str = "Agregar"


INPUT_MESSAGES = ManagerMessages(
    created="Insumo creado correctamente",
    updated="Insumo actualizado correctamente",
    deleted="Insumo eliminado correctamente",
    create_failed="Hubo un error al crear el insumo",
    update_failed="Hubo un error al actualizar el insumo",
    delete_failed="Hubo un error al eliminar el insumo",
    confirm_delete="¿Estás seguro de que deseas eliminar este insumo?",
)

PRODUCT_MESSAGES = ManagerMessages(
    created="Producto creado correctamente",
    updated="Producto actualizado correctamente",
    deleted="Producto eliminado correctamente",
    create_failed="Hubo un error al crear el producto",
    update_failed="Hubo un error al actualizar el producto",
    delete_failed="Hubo un error al eliminar el producto",
    confirm_delete=(
        "¿Estás seguro de que deseas eliminar este producto? "
        "Esta acción no se puede deshacer."
    ),
)

PURCHASE_MESSAGES = ManagerMessages(
    created="Compra registrada correctamente",
    updated="Compra actualizada correctamente",
    deleted="Compra eliminada correctamente",
    create_failed="Error al registrar la compra",
    update_failed="Error al actualizar la compra",
    delete_failed="Error al eliminar la compra",
    confirm_delete="¿Estás seguro de que deseas eliminar esta compra?",
)

SALE_MESSAGES = ManagerMessages(
    created="Venta registrada correctamente",
    updated="Venta actualizada correctamente",
    deleted="Venta eliminada correctamente",
    create_failed="Error al registrar la venta",
    update_failed="Error al actualizar la venta",
    delete_failed="Error al eliminar la venta",
    confirm_delete="¿Estás seguro de que deseas eliminar esta venta?",
)

FORMULA_MESSAGES = ManagerMessages(
    created="Fórmula creada correctamente",
    updated="Fórmula actualizada correctamente",
    deleted="Fórmula eliminada correctamente",
    create_failed="Error al crear la fórmula",
    update_failed="Error al actualizar la fórmula",
    delete_failed="Error al eliminar la fórmula",
    confirm_delete="¿Estás seguro de que deseas eliminar esta fórmula?",
)


INPUTS_SCREEN = ManagerConfig(
    screen=SCREEN_INPUTS,
    kind="input",
    title="Gestor de insumos",
    subtitle="Administra los insumos utilizados en la producción de pinturas",
    mapper=INPUT_MAPPER,
    validator=validate_input,
    messages=INPUT_MESSAGES,
    default_sort_key="name",
    create_label="Agregar insumo",
)

INVENTORY_SCREEN = ManagerConfig(
    screen=SCREEN_INVENTORY,
    kind="product",
    title="Inventario",
    subtitle="Productos terminados disponibles para la venta",
    mapper=PRODUCT_MAPPER,
    validator=validate_product,
    messages=PRODUCT_MESSAGES,
    default_sort_key="name",
    create_label="Agregar producto",
)

PURCHASES_SCREEN = ManagerConfig(
    screen=SCREEN_PURCHASES,
    kind="purchase",
    title="Gestor de compras",
    subtitle="Registra y consulta las compras a proveedores",
    mapper=PURCHASE_MAPPER,
    validator=validate_purchase,
    messages=PURCHASE_MESSAGES,
    default_sort_key="date",
    default_direction=SORT_DESC,
    create_label="Registrar compra",
)

SALES_SCREEN = ManagerConfig(
    screen=SCREEN_SALES,
    kind="sale",
    title="Gestor de ventas",
    subtitle="Registra y consulta las ventas a clientes",
    mapper=SALE_MAPPER,
    validator=validate_sale,
    messages=SALE_MESSAGES,
    default_sort_key="date",
    default_direction=SORT_DESC,
    create_label="Registrar venta",
)

FORMULAS_SCREEN = ManagerConfig(
    screen=SCREEN_FORMULA_MANAGER,
    kind="formula",
    title="Gestor de fórmulas",
    subtitle="Crea y mantiene las fórmulas de pintura",
    mapper=FORMULA_MAPPER,
    validator=validate_formula,
    messages=FORMULA_MESSAGES,
    default_sort_key="name",
    create_label="Nueva fórmula",
)

FORMULA_CATALOG_SCREEN = ManagerConfig(
    screen=SCREEN_FORMULA_CATALOG,
    kind="formula",
    title="Fórmulas de Pintura",
    subtitle="Consulta las fórmulas disponibles y sus ingredientes",
    mapper=FORMULA_MAPPER,
    validator=validate_formula,
    messages=FORMULA_MESSAGES,
    default_sort_key="name",
    read_only=True,
)

MANAGER_SCREENS: Dict[str, ManagerConfig] = {
    config.screen: config
    for config in (
        INPUTS_SCREEN,
        INVENTORY_SCREEN,
        PURCHASES_SCREEN,
        SALES_SCREEN,
        FORMULAS_SCREEN,
        FORMULA_CATALOG_SCREEN,
    )
}
