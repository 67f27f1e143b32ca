"""Tests for draft/row mapping."""

from decimal import Decimal

import pytest

from domain.models import Formula, Ingredient, Input
from ui.adapters.entity_mapper import FORMULA_MAPPER, INPUT_MAPPER, PRODUCT_MAPPER, SALE_MAPPER


@pytest.fixture
def formula():
    return Formula(
        id=7,
        name="Azul Cobalto Interior",
        description="Pintura acrílica azul",
        mix_type="base",
        total_amount=Decimal("100"),
        drying_time=45,
        coverage=Decimal("10"),
        ingredients=(
            Ingredient(id=1, name="Resina Acrílica", quantity=Decimal("40"), unit="L"),
            Ingredient(id=2, name="Pigmento Azul", quantity=Decimal("12.5"), unit="kg"),
        ),
    )


class TestEntityMapper:
    def test_empty_draft_defaults(self) -> None:
        draft = INPUT_MAPPER.empty_draft()
        assert draft["name"] == ""
        assert draft["quantity"] == Decimal("0")

    def test_product_defaults_to_minimum(self) -> None:
        draft = PRODUCT_MAPPER.empty_draft()
        assert draft["quantity"] == Decimal("1")
        assert draft["unit_price"] == Decimal("1")

    def test_from_draft_parses_user_numbers(self) -> None:
        draft = INPUT_MAPPER.empty_draft()
        draft.update(name="Pigmento", quantity="10,5", unit_price="$ 5")
        item = INPUT_MAPPER.from_draft(draft, entity_id=3)
        assert isinstance(item, Input)
        assert item.id == 3
        assert item.quantity == Decimal("10.5")
        assert item.unit_price == Decimal("5")

    def test_unparseable_number_becomes_none(self) -> None:
        draft = INPUT_MAPPER.empty_draft()
        draft["quantity"] = "mucho"
        assert INPUT_MAPPER.from_draft(draft).quantity is None

    def test_to_row_formats(self) -> None:
        item = Input(1, "Pigmento Azul", "x", Decimal("150"), Decimal("1234.5"), "Sólido", "kg")
        assert INPUT_MAPPER.to_row(item) == [
            "Pigmento Azul",
            "x",
            "150",
            "$ 1.234,50",
            "Sólido",
            "kg",
        ]

    def test_sortable_keys(self) -> None:
        assert "date" in SALE_MAPPER.sortable_keys
        assert "description" not in INPUT_MAPPER.sortable_keys


class TestFormulaMapper:
    def test_draft_roundtrip_keeps_ingredients(self, formula) -> None:
        draft = FORMULA_MAPPER.to_draft(formula)
        assert [i["name"] for i in draft["ingredients"]] == ["Resina Acrílica", "Pigmento Azul"]
        assert FORMULA_MAPPER.from_draft(draft, entity_id=7) == formula

    def test_draft_is_detached(self, formula) -> None:
        draft = FORMULA_MAPPER.to_draft(formula)
        draft["ingredients"][0]["name"] = "Otro"
        assert formula.ingredients[0].name == "Resina Acrílica"

    def test_empty_draft_has_one_ingredient(self) -> None:
        draft = FORMULA_MAPPER.empty_draft()
        assert draft["mix_type"] == "base"
        assert len(draft["ingredients"]) == 1

    def test_next_ingredient_id(self, formula) -> None:
        assert FORMULA_MAPPER.next_ingredient_id(FORMULA_MAPPER.to_draft(formula)) == 3

    def test_export_row_flattens_ingredients(self, formula) -> None:
        row = FORMULA_MAPPER.to_export_row(formula)
        assert row[-1] == "Resina Acrílica (40 L), Pigmento Azul (12,5 kg)"
        assert row[3] == Decimal("100")
