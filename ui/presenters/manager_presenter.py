"""Manager presenter - create/edit/delete workflow of one manager screen.

Handles:
- Table view (sort, search, pagination) over the screen's collection
- Create/edit dialogs working on a detached draft
- Delete with explicit confirmation
- Outcome notifications (success, warning for validation, error)

The dialog state is a single tagged value, so two dialogs can never be
open at once. The UI should only call presenter methods and render
``state``, ``draft`` and ``page()``.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from application.use_cases import (
    CreateEntityUseCase,
    DeleteEntityUseCase,
    ExportTableUseCase,
    UpdateEntityUseCase,
    ViewTableUseCase,
)
from config.constants import SEVERITY_ERROR, SEVERITY_SUCCESS, SEVERITY_WARNING
from domain.exceptions import (
    EntityNotFoundError,
    ExportError,
    InvalidTransitionError,
    ValidationError,
)
from domain.services.table_view import TableState, TableView
from infrastructure.persistence.memory_repository import CollectionStore
from ui.adapters.entity_mapper import FormulaMapper
from ui.presenters.notification_presenter import NotificationChannel
from ui.presenters.screens import ManagerConfig

NOT_FOUND_MESSAGE = "El registro ya no existe."


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Creating:
    pass


@dataclass(frozen=True)
class Editing:
    entity_id: int


@dataclass(frozen=True)
class ConfirmingDelete:
    entity_id: int


DialogState = Union[Idle, Creating, Editing, ConfirmingDelete]

IDLE = Idle()


class ManagerPresenter:
    """Presenter for one manager screen.

    Coordinates use cases and prepares data for UI display.
    """

    def __init__(
        self,
        config: ManagerConfig,
        store: CollectionStore,
        notifications: NotificationChannel,
        export_table: Optional[ExportTableUseCase] = None,
    ) -> None:
        """Initialize presenter.

        Args:
            config: Screen configuration (mapper, validator, messages)
            store: Collection owned by this screen
            notifications: Channel receiving the outcome messages
            export_table: Excel export use case (export disabled if None)
        """
        self._config = config
        self._store = store
        self._notifications = notifications
        self._create = CreateEntityUseCase(store, config.validator)
        self._update = UpdateEntityUseCase(store, config.validator)
        self._delete = DeleteEntityUseCase(store)
        self._view = ViewTableUseCase(store)
        self._export_table = export_table
        self._table = TableState(
            sort_key=config.default_sort_key,
            direction=config.default_direction,
        )
        self._state: DialogState = IDLE
        self._draft: Optional[Dict[str, Any]] = None
        self._listeners: List[Callable[[], None]] = []

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def config(self) -> ManagerConfig:
        return self._config

    @property
    def state(self) -> DialogState:
        return self._state

    @property
    def dialog_open(self) -> bool:
        """True while a create/edit dialog holds a draft."""
        return isinstance(self._state, (Creating, Editing))

    @property
    def delete_pending(self) -> bool:
        return isinstance(self._state, ConfirmingDelete)

    @property
    def draft(self) -> Optional[Dict[str, Any]]:
        """Copy of the draft held by the open create/edit dialog."""
        return copy.deepcopy(self._draft)

    @property
    def table_state(self) -> TableState:
        return self._table

    def entities(self) -> tuple[Any, ...]:
        return self._store.all()

    def count(self) -> int:
        return self._store.count()

    def page(self) -> TableView:
        """Visible page for the current sort/search/pagination settings."""
        return self._view.execute(self._table)

    def rows(self) -> List[List[str]]:
        """Display rows of the visible page."""
        return [self._config.mapper.to_row(entity) for entity in self.page().rows]

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback fired after any state or data change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------------
    # Table settings
    # ------------------------------------------------------------------

    def sort_by(self, key: str) -> None:
        if key not in self._config.mapper.sortable_keys:
            raise ValueError(f"Column is not sortable: {key}")
        self._table.toggle_sort(key)
        self._changed()

    def set_page(self, page: int) -> None:
        self._table.set_page(page)
        self._changed()

    def set_page_size(self, page_size: int) -> None:
        self._table.set_page_size(page_size)
        self._changed()

    def set_search(self, term: str) -> None:
        self._table.set_search(term)
        self._changed()

    # ------------------------------------------------------------------
    # Create / edit
    # ------------------------------------------------------------------

    def open_create(self) -> None:
        self._require_writable()
        self._require_idle()
        self._draft = self._config.mapper.empty_draft()
        self._state = Creating()
        self._changed()

    def open_edit(self, entity_id: int) -> bool:
        """Open the edit dialog pre-filled from the stored record.

        Returns:
            False when the record does not exist (nothing opens)
        """
        self._require_writable()
        self._require_idle()
        entity = self._store.get(entity_id)
        if entity is None:
            logging.error("Edit requested for missing %s id=%s", self._config.kind, entity_id)
            self._notifications.show(NOT_FOUND_MESSAGE, SEVERITY_ERROR)
            return False
        self._draft = self._config.mapper.to_draft(entity)
        self._state = Editing(entity_id)
        self._changed()
        return True

    def set_field(self, name: str, value: Any) -> None:
        draft = self._require_draft()
        self._config.mapper.field(name)
        draft[name] = value

    def add_ingredient(self) -> None:
        draft = self._require_draft()
        mapper = self._formula_mapper()
        draft["ingredients"].append(mapper.empty_ingredient(mapper.next_ingredient_id(draft)))
        self._changed()

    def remove_ingredient(self, index: int) -> None:
        draft = self._require_draft()
        self._formula_mapper()
        ingredients = draft["ingredients"]
        if not 0 <= index < len(ingredients):
            raise IndexError(f"Invalid ingredient index: {index}")
        del ingredients[index]
        self._changed()

    def set_ingredient_field(self, index: int, name: str, value: Any) -> None:
        draft = self._require_draft()
        self._formula_mapper()
        ingredients = draft["ingredients"]
        if not 0 <= index < len(ingredients):
            raise IndexError(f"Invalid ingredient index: {index}")
        if name not in ("name", "quantity", "unit"):
            raise KeyError(f"Unknown ingredient field: {name}")
        ingredients[index][name] = value

    def submit(self) -> bool:
        """Validate the draft and apply it to the store.

        Returns:
            True when the record was stored and the dialog closed
        """
        state = self._state
        if not isinstance(state, (Creating, Editing)):
            raise InvalidTransitionError("No create/edit dialog is open")
        messages = self._config.messages
        try:
            if isinstance(state, Creating):
                entity = self._create.execute(self._config.mapper.from_draft(self._draft))
                success, failure = messages.created, messages.create_failed
            else:
                entity = self._update.execute(
                    state.entity_id,
                    self._config.mapper.from_draft(self._draft, state.entity_id),
                )
                success, failure = messages.updated, messages.update_failed
        except ValidationError as exc:
            self._notifications.show(exc.message, SEVERITY_WARNING)
            return False
        except EntityNotFoundError as exc:
            logging.error("Update target vanished %s id=%s", self._config.kind, exc.entity_id)
            self._close_dialog()
            self._notifications.show(NOT_FOUND_MESSAGE, SEVERITY_ERROR)
            return False
        except Exception as exc:  # noqa: BLE001 - surface any mutation failure to UI
            logging.exception("Error saving %s: %s", self._config.kind, exc)
            failure = (
                messages.create_failed if isinstance(state, Creating) else messages.update_failed
            )
            self._notifications.show(failure, SEVERITY_ERROR)
            return False

        logging.info("Saved %s id=%s", self._config.kind, entity.id)
        self._close_dialog()
        self._notifications.show(success, SEVERITY_SUCCESS)
        return True

    def cancel(self) -> None:
        """Close the create/edit dialog discarding the draft."""
        if isinstance(self._state, (Creating, Editing)):
            self._close_dialog()

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def request_delete(self, entity_id: int) -> None:
        """Ask for confirmation; nothing is deleted yet."""
        self._require_writable()
        self._require_idle()
        self._state = ConfirmingDelete(entity_id)
        self._changed()

    def confirm_delete(self) -> bool:
        state = self._state
        if not isinstance(state, ConfirmingDelete):
            raise InvalidTransitionError("No delete is pending confirmation")
        messages = self._config.messages
        try:
            self._delete.execute(state.entity_id)
        except EntityNotFoundError:
            logging.error("Delete target missing %s id=%s", self._config.kind, state.entity_id)
            self._close_dialog()
            self._notifications.show(NOT_FOUND_MESSAGE, SEVERITY_ERROR)
            return False
        except Exception as exc:  # noqa: BLE001 - surface any mutation failure to UI
            logging.exception("Error deleting %s: %s", self._config.kind, exc)
            self._notifications.show(messages.delete_failed, SEVERITY_ERROR)
            return False

        logging.info("Deleted %s id=%s", self._config.kind, state.entity_id)
        self._close_dialog()
        self._notifications.show(messages.deleted, SEVERITY_SUCCESS)
        return True

    def cancel_delete(self) -> None:
        if isinstance(self._state, ConfirmingDelete):
            self._close_dialog()

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(self, output_path: Path | str) -> bool:
        """Export every row matching the search, in the current sort order."""
        if self._export_table is None:
            raise InvalidTransitionError("Export is not available")
        mapper = self._config.mapper
        table = TableState(
            sort_key=self._table.sort_key,
            direction=self._table.direction,
            page_size=max(self._store.count(), 1),
            search=self._table.search,
        )
        rows = [mapper.to_export_row(entity) for entity in table.apply(self._store.all()).rows]
        try:
            self._export_table.execute(self._config.title, mapper.headers, rows, output_path)
        except ExportError as exc:
            logging.error("Export failed for %s: %s", self._config.kind, exc)
            self._notifications.show("Error al exportar a Excel", SEVERITY_ERROR)
            return False
        self._notifications.show(f"Exportado a {Path(output_path).name}", SEVERITY_SUCCESS)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _close_dialog(self) -> None:
        self._state = IDLE
        self._draft = None
        self._changed()

    def _require_idle(self) -> None:
        if not isinstance(self._state, Idle):
            raise InvalidTransitionError(
                f"Another dialog is open: {type(self._state).__name__}"
            )

    def _require_writable(self) -> None:
        if self._config.read_only:
            raise InvalidTransitionError(f"{self._config.title} is read-only")

    def _require_draft(self) -> Dict[str, Any]:
        if self._draft is None or not isinstance(self._state, (Creating, Editing)):
            raise InvalidTransitionError("No create/edit dialog is open")
        return self._draft

    def _formula_mapper(self) -> FormulaMapper:
        mapper = self._config.mapper
        if not isinstance(mapper, FormulaMapper):
            raise InvalidTransitionError(f"{self._config.title} has no ingredients")
        return mapper

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener()
