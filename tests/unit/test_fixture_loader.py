"""Tests for JSON fixture loading."""

import json
from decimal import Decimal
from pathlib import Path

import pytest

from domain.exceptions import FixtureNotFoundError, InvalidFixtureError
from domain.models import Formula, Input
from infrastructure.persistence.json_repository import JSONFixtureRepository

FIXTURES = Path(__file__).resolve().parents[2] / "data" / "fixtures"


@pytest.fixture
def repository():
    return JSONFixtureRepository(FIXTURES)


class TestBundledFixtures:
    def test_inputs(self, repository) -> None:
        inputs = repository.load("input")
        assert len(inputs) == 7
        assert isinstance(inputs[0], Input)
        assert inputs[0].name == "Pigmento Azul"
        assert inputs[0].unit_price == Decimal("25.5")

    def test_formulas_with_ingredients(self, repository) -> None:
        formulas = repository.load("formula")
        assert len(formulas) == 4
        assert isinstance(formulas[0], Formula)
        assert len(formulas[0].ingredients) == 3
        assert formulas[3].mix_type == "special"

    @pytest.mark.parametrize(
        "kind, count",
        [("product", 6), ("purchase", 8), ("sale", 8)],
    )
    def test_counts(self, repository, kind: str, count: int) -> None:
        assert len(repository.load(kind)) == count

    def test_ids_are_unique(self, repository) -> None:
        for kind in ("input", "product", "purchase", "sale", "formula"):
            ids = [record.id for record in repository.load(kind)]
            assert len(ids) == len(set(ids))

    def test_users(self, repository) -> None:
        users = repository.load_users()
        assert {u["role"] for u in users} == {"admin", "operario"}


class TestErrors:
    def test_unknown_kind(self, repository) -> None:
        with pytest.raises(ValueError):
            repository.load("customer")

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FixtureNotFoundError):
            JSONFixtureRepository(tmp_path).load("input")

    def test_malformed_json(self, tmp_path) -> None:
        (tmp_path / "inputs.json").write_text("{", encoding="utf-8")
        with pytest.raises(InvalidFixtureError):
            JSONFixtureRepository(tmp_path).load("input")

    def test_not_a_list(self, tmp_path) -> None:
        (tmp_path / "sales.json").write_text(json.dumps({"id": 1}), encoding="utf-8")
        with pytest.raises(InvalidFixtureError):
            JSONFixtureRepository(tmp_path).load("sale")

    def test_missing_required_key(self, tmp_path) -> None:
        (tmp_path / "sales.json").write_text(json.dumps([{"id": 1}]), encoding="utf-8")
        with pytest.raises(InvalidFixtureError):
            JSONFixtureRepository(tmp_path).load("sale")
