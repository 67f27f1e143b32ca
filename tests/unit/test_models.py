"""Tests for domain models."""

from decimal import Decimal

import pytest

from domain.models import Formula, Ingredient, Input, with_id


def _input(**overrides) -> Input:
    data = dict(
        id=1,
        name="Pigmento Azul",
        description="Pigmento azul cobalto",
        quantity=Decimal("150"),
        unit_price=Decimal("25.5"),
        type="Sólido",
        unit="kg",
    )
    data.update(overrides)
    return Input(**data)


class TestInput:
    """Test Input model."""

    def test_input_is_immutable(self) -> None:
        item = _input()

        with pytest.raises(Exception):  # FrozenInstanceError
            item.name = "Otro"  # type: ignore

    def test_stock_value(self) -> None:
        assert _input().stock_value == Decimal("3825.0")

    def test_stock_value_missing_quantity(self) -> None:
        assert _input(quantity=None).stock_value == Decimal("0")


class TestFormula:
    """Test Formula model."""

    def test_ingredients_default_empty(self) -> None:
        formula = Formula(
            id=1,
            name="Azul",
            description="x",
            mix_type="base",
            total_amount=Decimal("100"),
            drying_time=45,
            coverage=Decimal("10"),
        )

        assert formula.ingredients == ()
        assert len(formula.ingredients) == 0

    def test_keeps_ingredient_order(self) -> None:
        formula = Formula(
            id=1,
            name="Azul",
            description="x",
            mix_type="base",
            total_amount=Decimal("100"),
            drying_time=45,
            coverage=Decimal("10"),
            ingredients=(
                Ingredient(id=1, name="Resina", quantity=Decimal("40"), unit="L"),
                Ingredient(id=2, name="Pigmento", quantity=Decimal("12"), unit="kg"),
            ),
        )

        assert [i.name for i in formula.ingredients] == ["Resina", "Pigmento"]


class TestHelpers:
    def test_with_id_returns_copy(self) -> None:
        original = _input(id=1)
        renumbered = with_id(original, 99)

        assert renumbered.id == 99
        assert renumbered.name == original.name
        # Original unchanged
        assert original.id == 1
