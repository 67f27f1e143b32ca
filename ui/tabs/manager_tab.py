"""Manager tab - table, toolbar and dialogs of one manager screen.

The tab renders whatever the presenter exposes and forwards every user
action to it; it holds no record state of its own.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QVBoxLayout,
    QWidget,
)

from config.constants import PAGE_SIZE_OPTIONS, SORT_ASC
from ui.dialogs.entity_dialog import EntityDialog
from ui.presenters.manager_presenter import ManagerPresenter
from ui.tabs.table_utils import configure_record_table, fill_table, selected_entity_id


class ManagerTab(QWidget):
    data_changed = Signal()

    def __init__(
        self,
        presenter: ManagerPresenter,
        stats_cards: Optional[Callable[[], List[tuple[str, str]]]] = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._presenter = presenter
        self._stats_cards = stats_cards
        self._stats_labels: List[QLabel] = []
        self._build_ui()
        presenter.subscribe(self.refresh)
        self.refresh()

    def _build_ui(self) -> None:
        config = self._presenter.config
        layout = QVBoxLayout(self)

        title = QLabel(config.title)
        title.setStyleSheet("font-size: 18px; font-weight: bold;")
        subtitle = QLabel(config.subtitle)
        subtitle.setStyleSheet("color: gray;")
        layout.addWidget(title)
        layout.addWidget(subtitle)

        if self._stats_cards is not None:
            stats_row = QHBoxLayout()
            for _ in self._stats_cards():
                label = QLabel("")
                label.setStyleSheet("border: 1px solid #ddd; padding: 6px;")
                stats_row.addWidget(label)
                self._stats_labels.append(label)
            layout.addLayout(stats_row)

        toolbar = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Buscar...")
        self.search_input.textChanged.connect(self._presenter.set_search)
        toolbar.addWidget(self.search_input, 1)

        self.export_button = QPushButton("Exportar a Excel")
        self.export_button.clicked.connect(self._on_export)
        toolbar.addWidget(self.export_button)

        if not config.read_only:
            self.add_button = QPushButton(config.create_label)
            self.edit_button = QPushButton("Editar")
            self.delete_button = QPushButton("Eliminar")
            self.add_button.clicked.connect(self._on_add)
            self.edit_button.clicked.connect(self._on_edit)
            self.delete_button.clicked.connect(self._on_delete)
            for button in (self.add_button, self.edit_button, self.delete_button):
                toolbar.addWidget(button)
        layout.addLayout(toolbar)

        self.table = QTableWidget()
        configure_record_table(self.table, config.mapper.headers)
        self.table.horizontalHeader().sectionClicked.connect(self._on_header_clicked)
        if not config.read_only:
            self.table.doubleClicked.connect(lambda _index: self._on_edit())
        layout.addWidget(self.table, 1)

        pager = QHBoxLayout()
        pager.addWidget(QLabel("Filas por página:"))
        self.page_size_combo = QComboBox()
        self.page_size_combo.addItems([str(size) for size in PAGE_SIZE_OPTIONS])
        self.page_size_combo.currentTextChanged.connect(
            lambda text: self._presenter.set_page_size(int(text))
        )
        pager.addWidget(self.page_size_combo)
        pager.addStretch()
        self.range_label = QLabel("")
        self.prev_page_button = QPushButton("<")
        self.prev_page_button.setFixedWidth(32)
        self.next_page_button = QPushButton(">")
        self.next_page_button.setFixedWidth(32)
        self.prev_page_button.clicked.connect(lambda: self._step_page(-1))
        self.next_page_button.clicked.connect(lambda: self._step_page(1))
        pager.addWidget(self.range_label)
        pager.addWidget(self.prev_page_button)
        pager.addWidget(self.next_page_button)
        layout.addLayout(pager)

    def refresh(self) -> None:
        page = self._presenter.page()
        mapper = self._presenter.config.mapper
        fill_table(
            self.table,
            [mapper.to_row(entity) for entity in page.rows],
            [entity.id for entity in page.rows],
        )
        self.range_label.setText(
            f"{page.first_row_number}-{page.last_row_number} de {page.total_count}"
        )
        self.prev_page_button.setEnabled(page.page > 0)
        self.next_page_button.setEnabled(page.page + 1 < page.page_count)
        self._update_sort_indicator()
        if self._stats_cards is not None:
            for label, (caption, value) in zip(self._stats_labels, self._stats_cards()):
                label.setText(f"{caption}\n{value}")
        self.data_changed.emit()

    def detach(self) -> None:
        """Stop listening to the presenter before the tab is discarded."""
        self._presenter.unsubscribe(self.refresh)

    def _update_sort_indicator(self) -> None:
        state = self._presenter.table_state
        columns = [column.name for column in self._presenter.config.mapper.columns]
        header = self.table.horizontalHeader()
        if state.sort_key in columns:
            header.setSortIndicatorShown(True)
            header.setSortIndicator(
                columns.index(state.sort_key),
                Qt.AscendingOrder if state.direction == SORT_ASC else Qt.DescendingOrder,
            )

    def _on_header_clicked(self, column: int) -> None:
        name = self._presenter.config.mapper.columns[column].name
        if name in self._presenter.config.mapper.sortable_keys:
            self._presenter.sort_by(name)

    def _step_page(self, delta: int) -> None:
        self._presenter.set_page(self._presenter.table_state.page + delta)

    def _on_add(self) -> None:
        self._presenter.open_create()
        EntityDialog(self._presenter, self).exec()

    def _on_edit(self) -> None:
        entity_id = selected_entity_id(self.table)
        if entity_id is None:
            return
        if self._presenter.open_edit(entity_id):
            EntityDialog(self._presenter, self).exec()

    def _on_delete(self) -> None:
        entity_id = selected_entity_id(self.table)
        if entity_id is None:
            return
        self._presenter.request_delete(entity_id)
        # A failed delete stays pending: ask again until it succeeds or is cancelled
        while self._presenter.delete_pending:
            answer = QMessageBox.question(
                self,
                "Confirmar eliminación",
                self._presenter.config.messages.confirm_delete,
                QMessageBox.Yes | QMessageBox.No,
                QMessageBox.No,
            )
            if answer == QMessageBox.Yes:
                self._presenter.confirm_delete()
            else:
                self._presenter.cancel_delete()

    def _on_export(self) -> None:
        default_name = f"{self._presenter.config.screen}.xlsx"
        path, _ = QFileDialog.getSaveFileName(
            self, "Exportar a Excel", default_name, "Excel (*.xlsx)"
        )
        if not path:
            return
        logging.debug("Exporting %s to %s", self._presenter.config.screen, path)
        self._presenter.export(path)
