"""JSON fixture loading.

Reads the static seed data of each manager from JSON files. Fixture
records use camelCase keys (``unitPrice``, ``totalCost``, ``mixType``...).
"""

import json
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from config.constants import FIXTURE_FILES
from domain.exceptions import FixtureNotFoundError, InvalidFixtureError
from domain.models import Formula, Ingredient, Input, Product, Purchase, Sale


def _decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    return Decimal(str(value))


def dict_to_input(data: Dict[str, Any]) -> Input:
    return Input(
        id=int(data["id"]),
        name=data["name"],
        description=data.get("description", ""),
        quantity=_decimal(data.get("quantity")),
        unit_price=_decimal(data.get("unitPrice")),
        type=data.get("type", ""),
        unit=data.get("unit", ""),
    )


def dict_to_product(data: Dict[str, Any]) -> Product:
    return Product(
        id=int(data["id"]),
        name=data["name"],
        description=data.get("description", ""),
        quantity=_decimal(data.get("quantity")),
        unit_price=_decimal(data.get("unitPrice")),
    )


def dict_to_purchase(data: Dict[str, Any]) -> Purchase:
    return Purchase(
        id=int(data["id"]),
        product=data["product"],
        supplier=data.get("supplier", ""),
        date=data.get("date", ""),
        quantity=_decimal(data.get("quantity")),
        total_cost=_decimal(data.get("totalCost")),
    )


def dict_to_sale(data: Dict[str, Any]) -> Sale:
    return Sale(
        id=int(data["id"]),
        client=data["client"],
        product=data.get("product", ""),
        date=data.get("date", ""),
        quantity=_decimal(data.get("quantity")),
        total_price=_decimal(data.get("totalPrice")),
    )


def dict_to_formula(data: Dict[str, Any]) -> Formula:
    ingredients = tuple(
        Ingredient(
            id=int(ing_data["id"]),
            name=ing_data["name"],
            quantity=_decimal(ing_data.get("quantity")),
            unit=ing_data.get("unit", ""),
        )
        for ing_data in data.get("ingredients", [])
    )
    drying_time = data.get("dryingTime")
    return Formula(
        id=int(data["id"]),
        name=data["name"],
        description=data.get("description", ""),
        mix_type=data.get("mixType", "base"),
        total_amount=_decimal(data.get("totalAmount")),
        drying_time=int(drying_time) if drying_time is not None else None,
        coverage=_decimal(data.get("coverage")),
        ingredients=ingredients,
    )


PARSERS: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    "input": dict_to_input,
    "product": dict_to_product,
    "purchase": dict_to_purchase,
    "sale": dict_to_sale,
    "formula": dict_to_formula,
}


class JSONFixtureRepository:
    """Repository reading seed records from JSON fixture files."""

    def __init__(self, base_directory: str | Path = "data/fixtures") -> None:
        """Initialize repository.

        Args:
            base_directory: Directory holding the fixture files
        """
        self._base_dir = Path(base_directory)

    @property
    def base_directory(self) -> Path:
        return self._base_dir

    def load(self, kind: str) -> List[Any]:
        """Load the seed records of one entity kind.

        Args:
            kind: Entity kind (input, product, purchase, sale, formula)

        Returns:
            Records in fixture order

        Raises:
            FixtureNotFoundError: If the fixture file doesn't exist
            InvalidFixtureError: If the file is malformed
        """
        parser = PARSERS.get(kind)
        if parser is None:
            raise ValueError(f"Unknown fixture kind: {kind}")
        filename = FIXTURE_FILES[kind]
        try:
            return [parser(item) for item in self._read(filename)]
        except (KeyError, ValueError, TypeError, ArithmeticError) as exc:
            raise InvalidFixtureError(f"Invalid fixture file: {filename}") from exc

    def load_users(self) -> List[Dict[str, Any]]:
        """Load the user accounts used by the login screen."""
        users = self._read(FIXTURE_FILES["user"])
        for user in users:
            if not isinstance(user, dict) or "nameUser" not in user:
                raise InvalidFixtureError("Invalid fixture file: users")
        return users

    def _read(self, filename: str) -> List[Any]:
        file_path = self._base_dir / filename

        if not file_path.exists():
            raise FixtureNotFoundError(f"Fixture file not found: {filename}")

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidFixtureError(f"Invalid fixture file: {filename}") from exc

        if not isinstance(data, list):
            raise InvalidFixtureError(f"Fixture must hold a list: {filename}")
        return data
