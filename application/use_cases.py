"""Application use cases.

Use cases orchestrate domain services and infrastructure to fulfill
business workflows.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence

from domain.exceptions import EntityNotFoundError
from domain.models import with_id
from domain.services.table_view import TableState, TableView
from domain.services.validators import ValidationResult, validate
from infrastructure.persistence.excel_exporter import ExcelExporter
from infrastructure.persistence.json_repository import JSONFixtureRepository
from infrastructure.persistence.memory_repository import CollectionStore
from infrastructure.reporting.analytics import AnalyticsReport

Validator = Callable[[Any], ValidationResult]


class LoadFixtureUseCase:
    """Seed a collection store from its static fixture."""

    def __init__(self, fixture_repository: JSONFixtureRepository) -> None:
        self._repository = fixture_repository

    def execute(self, kind: str) -> CollectionStore:
        """Build a store holding the fixture records of ``kind``.

        Args:
            kind: Entity kind (input, product, purchase, sale, formula)

        Returns:
            Store seeded in fixture order
        """
        records = self._repository.load(kind)
        logging.info("Loaded %s %s records", len(records), kind)
        return CollectionStore(records)


class CreateEntityUseCase:
    """Validate a candidate and append it with a fresh id."""

    def __init__(self, store: CollectionStore, validator: Validator = validate) -> None:
        self._store = store
        self._validator = validator

    def execute(self, candidate: Any) -> Any:
        """Create a record.

        Args:
            candidate: Record whose id is ignored

        Returns:
            The stored record, carrying its new id

        Raises:
            ValidationError: If a field rule is broken (store untouched)
        """
        self._validator(candidate).raise_if_invalid()
        entity = with_id(candidate, self._store.next_id())
        self._store.create(entity)
        return entity


class UpdateEntityUseCase:
    """Validate a candidate and replace the stored record with the same id."""

    def __init__(self, store: CollectionStore, validator: Validator = validate) -> None:
        self._store = store
        self._validator = validator

    def execute(self, entity_id: int, candidate: Any) -> Any:
        """Replace a record as a whole.

        Args:
            entity_id: Id of the record to replace
            candidate: New value; its id is forced to ``entity_id``

        Returns:
            The stored record

        Raises:
            ValidationError: If a field rule is broken (store untouched)
            EntityNotFoundError: If no record has ``entity_id``
        """
        self._validator(candidate).raise_if_invalid()
        entity = with_id(candidate, entity_id)
        if not self._store.update_by_id(entity_id, entity):
            raise EntityNotFoundError(entity_id)
        return entity


class DeleteEntityUseCase:
    """Remove a record by id."""

    def __init__(self, store: CollectionStore) -> None:
        self._store = store

    def execute(self, entity_id: int) -> None:
        """Delete a record.

        Raises:
            EntityNotFoundError: If no record has ``entity_id``
        """
        if not self._store.delete_by_id(entity_id):
            raise EntityNotFoundError(entity_id)


class ViewTableUseCase:
    """Produce the visible page of a store for the given table settings."""

    def __init__(self, store: CollectionStore) -> None:
        self._store = store

    def execute(self, state: TableState) -> TableView:
        return state.apply(self._store.all())


class ExportTableUseCase:
    """Export a table to Excel."""

    def __init__(self, exporter: ExcelExporter) -> None:
        self._exporter = exporter

    def execute(
        self,
        title: str,
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
        output_path: Path | str,
    ) -> None:
        """Export rows under a header line.

        Args:
            title: Sheet title
            headers: Column headers
            rows: Cell values per row
            output_path: Output file path
        """
        self._exporter.export_table(title, headers, rows, output_path)


class BuildAnalyticsUseCase:
    """Aggregate the dashboard analytics from the current collections."""

    def __init__(self, report: AnalyticsReport) -> None:
        self._report = report

    def execute(
        self,
        inputs: Sequence[Any],
        purchases: Sequence[Any],
        sales: Sequence[Any],
        formulas: Sequence[Any],
    ) -> Dict[str, List[Dict[str, Any]]]:
        """Build every analytics series as a list of plain row dicts."""
        return {
            "monthly_sales": self._report.monthly_sales(sales),
            "monthly_purchases": self._report.monthly_purchases(purchases),
            "input_value_by_type": self._report.input_value_by_type(inputs),
            "formulas_by_mix_type": self._report.formulas_by_mix_type(formulas),
        }
