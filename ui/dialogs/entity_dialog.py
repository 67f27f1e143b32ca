from __future__ import annotations

from typing import Any, Dict

from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from domain.models import INGREDIENT_UNITS
from ui.adapters.entity_mapper import CHOICE, DATE, FormulaMapper
from ui.formatters import fmt_number
from ui.presenters.manager_presenter import Creating, ManagerPresenter


def _display(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return fmt_number(value)


class EntityDialog(QDialog):
    """Create/edit dialog bound to the draft of a manager presenter.

    Accepting pushes the widget values into the draft and submits; the
    dialog stays open while the presenter rejects the draft.
    """

    def __init__(self, presenter: ManagerPresenter, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._presenter = presenter
        config = presenter.config
        creating = isinstance(presenter.state, Creating)
        self.setWindowTitle(("Nuevo registro - " if creating else "Editar - ") + config.title)
        self.setMinimumWidth(420)
        self._inputs: Dict[str, QWidget] = {}
        self._ingredients: QTableWidget | None = None

        layout = QVBoxLayout(self)
        form = QFormLayout()
        draft = presenter.draft or {}
        for field_def in config.mapper.fields:
            if field_def.kind == CHOICE:
                widget: QWidget = QComboBox()
                widget.addItems(list(field_def.choices))
                widget.setCurrentText(str(draft.get(field_def.name, "")))
            else:
                widget = QLineEdit(_display(draft.get(field_def.name)))
                if field_def.kind == DATE:
                    widget.setPlaceholderText("AAAA-MM-DD")
            self._inputs[field_def.name] = widget
            form.addRow(QLabel(field_def.label), widget)
        layout.addLayout(form)

        if isinstance(config.mapper, FormulaMapper):
            layout.addWidget(QLabel("Ingredientes"))
            self._ingredients = QTableWidget(0, 3)
            self._ingredients.setHorizontalHeaderLabels(["Nombre", "Cantidad", "Unidad"])
            layout.addWidget(self._ingredients)
            buttons_row = QHBoxLayout()
            add_button = QPushButton("Agregar ingrediente")
            remove_button = QPushButton("Quitar ingrediente")
            add_button.clicked.connect(self._add_ingredient)
            remove_button.clicked.connect(self._remove_ingredient)
            buttons_row.addWidget(add_button)
            buttons_row.addWidget(remove_button)
            buttons_row.addStretch()
            layout.addLayout(buttons_row)
            self._load_ingredients()

        buttons = QDialogButtonBox(QDialogButtonBox.Save | QDialogButtonBox.Cancel, parent=self)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def accept(self) -> None:  # noqa: N802
        self._push_fields()
        if self._presenter.submit():
            super().accept()
        elif not self._presenter.dialog_open:
            # The record vanished; the presenter already closed the draft
            super().reject()

    def reject(self) -> None:  # noqa: N802
        self._presenter.cancel()
        super().reject()

    def _push_fields(self) -> None:
        for name, widget in self._inputs.items():
            value = widget.currentText() if isinstance(widget, QComboBox) else widget.text()
            self._presenter.set_field(name, value)
        self._push_ingredients()

    def _push_ingredients(self) -> None:
        if self._ingredients is None:
            return
        for row in range(self._ingredients.rowCount()):
            name_item = self._ingredients.item(row, 0)
            qty_item = self._ingredients.item(row, 1)
            unit_box = self._ingredients.cellWidget(row, 2)
            self._presenter.set_ingredient_field(row, "name", name_item.text() if name_item else "")
            self._presenter.set_ingredient_field(row, "quantity", qty_item.text() if qty_item else "")
            if isinstance(unit_box, QComboBox):
                self._presenter.set_ingredient_field(row, "unit", unit_box.currentText())

    def _load_ingredients(self) -> None:
        if self._ingredients is None:
            return
        ingredients = (self._presenter.draft or {}).get("ingredients", [])
        self._ingredients.setRowCount(len(ingredients))
        for row, item in enumerate(ingredients):
            self._ingredients.setItem(row, 0, QTableWidgetItem(_display(item.get("name"))))
            self._ingredients.setItem(row, 1, QTableWidgetItem(_display(item.get("quantity"))))
            unit_box = QComboBox()
            unit_box.addItems(list(INGREDIENT_UNITS))
            unit_box.setCurrentText(str(item.get("unit", "")))
            self._ingredients.setCellWidget(row, 2, unit_box)

    def _add_ingredient(self) -> None:
        self._push_ingredients()
        self._presenter.add_ingredient()
        self._load_ingredients()

    def _remove_ingredient(self) -> None:
        if self._ingredients is None:
            return
        row = self._ingredients.currentRow()
        if row < 0:
            row = self._ingredients.rowCount() - 1
        if row < 0:
            return
        self._push_ingredients()
        self._presenter.remove_ingredient(row)
        self._load_ingredients()
