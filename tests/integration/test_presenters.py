"""Integration tests for presenters.

Tests presenters with real use cases, fixture data and the manual
scheduler standing in for UI timers.
"""

from decimal import Decimal
from pathlib import Path
from unittest.mock import Mock

import pytest
from openpyxl import load_workbook

from config.container import Container
from domain.exceptions import ExportError, InvalidTransitionError
from infrastructure.scheduling.scheduler import ManualScheduler
from infrastructure.session.storage import InMemoryStorage
from ui.presenters.manager_presenter import (
    NOT_FOUND_MESSAGE,
    ConfirmingDelete,
    Creating,
    Editing,
    Idle,
)

FIXTURES = Path(__file__).resolve().parents[2] / "data" / "fixtures"


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def container(scheduler):
    return Container(fixtures_dir=FIXTURES, storage=InMemoryStorage(), scheduler=scheduler)


@pytest.fixture
def inputs(container):
    return container.manager("insumos")


@pytest.fixture
def formulas(container):
    return container.manager("Gformulas")


def fill_input_draft(presenter, **values) -> None:
    defaults = dict(
        name="Pigmento",
        description="x",
        quantity="10",
        unit_price="5",
        type="Sólido",
        unit="kg",
    )
    defaults.update(values)
    for name, value in defaults.items():
        presenter.set_field(name, value)


class TestCreateFlow:
    def test_create_input(self, container, inputs) -> None:
        before = inputs.count()
        seen_ids = {entity.id for entity in inputs.entities()}

        inputs.open_create()
        assert isinstance(inputs.state, Creating)
        fill_input_draft(inputs)
        assert inputs.submit() is True

        assert inputs.count() == before + 1
        created = [e for e in inputs.entities() if e.id not in seen_ids]
        assert len(created) == 1
        assert created[0].name == "Pigmento"
        assert created[0].quantity == Decimal("10")
        assert isinstance(inputs.state, Idle)
        assert inputs.draft is None
        assert container.notifications.visible.message == "Insumo creado correctamente"
        assert container.notifications.visible.severity == "success"

    def test_invalid_formula_keeps_dialog_open(self, container, formulas) -> None:
        before = formulas.entities()

        formulas.open_create()
        formulas.set_field("name", "")
        assert formulas.submit() is False

        assert formulas.entities() == before
        assert isinstance(formulas.state, Creating)
        notification = container.notifications.visible
        assert notification.severity == "warning"
        assert "'Nombre'" in notification.message
        assert "obligatorio" in notification.message

    def test_formula_with_ingredients(self, formulas) -> None:
        formulas.open_create()
        for name, value in dict(
            name="Verde Jardín",
            description="Exterior",
            mix_type="finish",
            total_amount="60",
            drying_time="30",
            coverage="9,5",
        ).items():
            formulas.set_field(name, value)
        formulas.set_ingredient_field(0, "name", "Resina Acrílica")
        formulas.set_ingredient_field(0, "quantity", "20")
        formulas.set_ingredient_field(0, "unit", "L")
        formulas.add_ingredient()
        formulas.set_ingredient_field(1, "name", "Pigmento Verde")
        formulas.set_ingredient_field(1, "quantity", "4")
        formulas.set_ingredient_field(1, "unit", "kg")

        assert formulas.submit() is True
        created = next(f for f in formulas.entities() if f.name == "Verde Jardín")
        assert created.coverage == Decimal("9.5")
        assert [i.name for i in created.ingredients] == ["Resina Acrílica", "Pigmento Verde"]

    def test_remove_last_ingredient_fails_validation(self, container, formulas) -> None:
        formulas.open_edit(1)
        for _ in range(3):
            formulas.remove_ingredient(0)
        assert formulas.submit() is False
        assert container.notifications.visible.message == (
            "La fórmula debe tener al menos un ingrediente."
        )

    def test_cancel_discards_draft(self, inputs) -> None:
        before = inputs.entities()
        inputs.open_create()
        fill_input_draft(inputs)
        inputs.cancel()
        assert isinstance(inputs.state, Idle)
        assert inputs.entities() == before


class TestEditFlow:
    def test_edit_replaces_record(self, container, inputs) -> None:
        assert inputs.open_edit(3) is True
        assert isinstance(inputs.state, Editing)
        assert inputs.draft["name"] == "Solvente"

        inputs.set_field("quantity", "250")
        assert inputs.submit() is True

        updated = [e for e in inputs.entities() if e.id == 3]
        assert len(updated) == 1
        assert updated[0].quantity == Decimal("250")
        assert container.notifications.visible.message == "Insumo actualizado correctamente"

    def test_draft_edits_do_not_touch_store(self, inputs) -> None:
        inputs.open_edit(3)
        inputs.set_field("name", "Cambiado")
        assert [e.name for e in inputs.entities() if e.id == 3] == ["Solvente"]

    def test_edit_missing_record(self, container, inputs) -> None:
        assert inputs.open_edit(999) is False
        assert isinstance(inputs.state, Idle)
        assert container.notifications.visible.message == NOT_FOUND_MESSAGE

    def test_record_deleted_while_editing(self, container, inputs) -> None:
        inputs.open_edit(3)
        container.store("input").delete_by_id(3)
        assert inputs.submit() is False
        assert isinstance(inputs.state, Idle)
        assert inputs.dialog_open is False
        assert container.notifications.visible.severity == "error"


class TestDeleteFlow:
    def test_cancel_then_confirm(self, container, inputs) -> None:
        before = inputs.entities()

        inputs.request_delete(3)
        assert inputs.state == ConfirmingDelete(3)
        inputs.cancel_delete()
        assert isinstance(inputs.state, Idle)
        assert inputs.entities() == before

        inputs.request_delete(3)
        assert inputs.confirm_delete() is True
        assert 3 not in [e.id for e in inputs.entities()]
        assert container.notifications.visible.message == "Insumo eliminado correctamente"

    def test_delete_missing_record(self, container, inputs) -> None:
        inputs.request_delete(999)
        assert inputs.confirm_delete() is False
        assert inputs.count() == 7
        assert container.notifications.visible.severity == "error"

    def test_store_failure_is_reported(self, container, inputs) -> None:
        store = container.store("input")
        store.delete_by_id = Mock(side_effect=RuntimeError("boom"))

        inputs.request_delete(3)
        assert inputs.confirm_delete() is False
        assert container.notifications.visible.message == "Hubo un error al eliminar el insumo"
        # Still pending so the user can retry or cancel
        assert inputs.state == ConfirmingDelete(3)
        assert inputs.delete_pending is True

    def test_failed_delete_can_be_retried(self, container, inputs) -> None:
        store = container.store("input")
        real_delete = store.delete_by_id
        store.delete_by_id = Mock(side_effect=RuntimeError("boom"))

        inputs.request_delete(3)
        assert inputs.confirm_delete() is False
        store.delete_by_id = real_delete
        assert inputs.confirm_delete() is True
        assert inputs.delete_pending is False
        assert 3 not in [e.id for e in inputs.entities()]

    def test_failed_delete_can_be_cancelled(self, container, inputs) -> None:
        container.store("input").delete_by_id = Mock(side_effect=RuntimeError("boom"))

        inputs.request_delete(3)
        inputs.confirm_delete()
        inputs.cancel_delete()
        assert isinstance(inputs.state, Idle)
        # The screen accepts new actions again
        inputs.open_create()
        assert inputs.dialog_open is True

    def test_create_then_delete_restores_store(self, container, inputs) -> None:
        before = inputs.entities()

        inputs.open_create()
        fill_input_draft(inputs)
        assert inputs.submit() is True
        created = next(e for e in inputs.entities() if e not in before)
        inputs.request_delete(created.id)
        assert inputs.confirm_delete() is True

        assert inputs.entities() == before


class TestTransitions:
    def test_one_dialog_at_a_time(self, inputs) -> None:
        inputs.open_create()
        with pytest.raises(InvalidTransitionError):
            inputs.request_delete(3)
        with pytest.raises(InvalidTransitionError):
            inputs.open_edit(3)

    def test_confirm_without_request(self, inputs) -> None:
        with pytest.raises(InvalidTransitionError):
            inputs.confirm_delete()

    def test_submit_without_dialog(self, inputs) -> None:
        with pytest.raises(InvalidTransitionError):
            inputs.submit()

    def test_catalog_is_read_only(self, container) -> None:
        catalog = container.manager("formulas")
        with pytest.raises(InvalidTransitionError):
            catalog.open_create()
        with pytest.raises(InvalidTransitionError):
            catalog.request_delete(1)

    def test_ingredients_only_on_formulas(self, inputs) -> None:
        inputs.open_create()
        with pytest.raises(InvalidTransitionError):
            inputs.add_ingredient()

    def test_unknown_field(self, inputs) -> None:
        inputs.open_create()
        with pytest.raises(KeyError):
            inputs.set_field("color", "rojo")


class TestTable:
    def test_default_sorts(self, container) -> None:
        names = [e.name for e in container.manager("insumos").page().rows]
        assert names == [
            "Antiespumante",
            "Carbonato de Calcio",
            "Dióxido de Titanio",
            "Pigmento Azul",
            "Pigmento Rojo",
        ]

        dates = [e.date for e in container.manager("compras").page().rows]
        assert dates == sorted(dates, reverse=True)
        assert dates[0] == "2024-04-20"

    def test_pagination(self, inputs) -> None:
        first = inputs.page()
        assert len(first.rows) == 5
        inputs.set_page(1)
        second = inputs.page()
        assert len(second.rows) == 2
        assert set(first.rows).isdisjoint(second.rows)

    def test_sort_resets_page_and_toggles(self, inputs) -> None:
        inputs.set_page(1)
        inputs.sort_by("name")
        assert inputs.table_state.page == 0
        assert inputs.table_state.direction == "desc"

    def test_huge_values_still_render(self, inputs) -> None:
        inputs.open_create()
        fill_input_draft(inputs, name="AAA Gigante", quantity="1e50", unit_price="1e30")
        assert inputs.submit() is True

        row = inputs.rows()[0]
        assert row[0] == "AAA Gigante"
        assert row[2] == "1" + "0" * 50
        assert row[3].startswith("$ 1.000.000")

    def test_out_of_range_number_is_rejected(self, container, inputs) -> None:
        before = inputs.entities()
        inputs.open_create()
        fill_input_draft(inputs, quantity="1e5000")
        assert inputs.submit() is False
        assert inputs.entities() == before
        assert container.notifications.visible.severity == "warning"

    def test_unsortable_column(self, inputs) -> None:
        with pytest.raises(ValueError):
            inputs.sort_by("description")

    def test_catalog_searches_ingredients(self, container) -> None:
        catalog = container.manager("formulas")
        catalog.set_search("antiespumante")
        assert [f.name for f in catalog.page().rows] == [
            "Barniz Marino Especial",
            "Blanco Universal",
        ]

    def test_catalog_sees_manager_changes(self, container) -> None:
        container.manager("Gformulas").request_delete(2)
        container.manager("Gformulas").confirm_delete()
        assert 2 not in [f.id for f in container.manager("formulas").entities()]

    def test_page_clamped_after_delete(self, inputs) -> None:
        inputs.set_page(1)
        for entity_id in (6, 7):
            inputs.request_delete(entity_id)
            inputs.confirm_delete()
        assert inputs.page().page == 0

    def test_listeners_notified(self, inputs) -> None:
        listener = Mock()
        inputs.subscribe(listener)
        inputs.set_search("azul")
        assert listener.called
        inputs.unsubscribe(listener)
        listener.reset_mock()
        inputs.set_search("")
        assert not listener.called


class TestNotificationsThroughPresenter:
    def test_back_to_back_outcomes(self, container, scheduler, inputs) -> None:
        seen = []
        container.notifications.subscribe(seen.append)
        inputs.request_delete(1)
        inputs.confirm_delete()
        inputs.request_delete(2)
        inputs.confirm_delete()

        # Identical success message: the second one is ignored
        assert len([n for n in seen if n is not None]) == 1

        inputs.open_create()
        inputs.submit()
        assert container.notifications.visible is None
        scheduler.advance(200)
        assert container.notifications.visible.severity == "warning"


class TestExport:
    def test_export_all_filtered_rows(self, container, inputs, tmp_path) -> None:
        inputs.set_search("pigmento")
        path = tmp_path / "insumos.xlsx"
        assert inputs.export(path) is True

        ws = load_workbook(path).active
        names = [row[0] for row in ws.iter_rows(min_row=2, values_only=True)]
        # Dióxido de Titanio matches through its description
        assert names == ["Dióxido de Titanio", "Pigmento Azul", "Pigmento Rojo"]
        assert container.notifications.visible.message == "Exportado a insumos.xlsx"

    def test_export_failure(self, container, inputs, tmp_path) -> None:
        container.excel_exporter.export_table = Mock(side_effect=ExportError("disk"))
        assert inputs.export(tmp_path / "x.xlsx") is False
        assert container.notifications.visible.severity == "error"


class TestDashboard:
    def test_stats_from_fixtures(self, container) -> None:
        stats = container.dashboard.purchase_stats()
        assert stats.total_purchases == 8
        assert stats.supplier_count == 4
        assert container.dashboard.sale_stats().total_sales == 8

    def test_stats_follow_mutations(self, container) -> None:
        ventas = container.manager("ventas")
        ventas.request_delete(1)
        ventas.confirm_delete()
        assert container.dashboard.sale_stats().total_sales == 7

    def test_analytics(self, container) -> None:
        series = container.dashboard.analytics()
        assert [r["month"] for r in series["monthly_sales"]] == [
            "2024-01",
            "2024-02",
            "2024-03",
            "2024-04",
        ]
        counts = {r["mix_type"]: r["count"] for r in series["formulas_by_mix_type"]}
        assert counts == {"base": 2, "finish": 1, "special": 1}


class TestContainer:
    def test_session_uses_fixture_users(self, container) -> None:
        assert container.session.login("admin", "admin123")
        assert container.session.can_access("analisis")

    def test_unknown_screen(self, container) -> None:
        with pytest.raises(ValueError):
            container.manager("clientes")

    def test_managers_are_singletons(self, container) -> None:
        assert container.manager("ventas") is container.manager("ventas")
