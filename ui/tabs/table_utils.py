from __future__ import annotations

from typing import Sequence

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import QAbstractItemView, QApplication, QHeaderView, QTableWidget, QTableWidgetItem


def configure_record_table(table: QTableWidget, headers: Sequence[str]) -> None:
    table.setColumnCount(len(headers))
    table.setHorizontalHeaderLabels(list(headers))
    table.setEditTriggers(QAbstractItemView.NoEditTriggers)
    table.setSelectionBehavior(QAbstractItemView.SelectRows)
    table.setSelectionMode(QAbstractItemView.SingleSelection)
    table.verticalHeader().setVisible(False)
    header = table.horizontalHeader()
    header.setSectionResizeMode(QHeaderView.Interactive)
    header.setStretchLastSection(True)
    attach_copy_shortcut(table)


def fill_table(table: QTableWidget, rows: Sequence[Sequence[str]], ids: Sequence[int]) -> None:
    """Replace table contents; the record id rides on column 0 as UserRole."""
    table.setRowCount(len(rows))
    for row_idx, (values, entity_id) in enumerate(zip(rows, ids)):
        for col_idx, value in enumerate(values):
            item = QTableWidgetItem(value)
            if col_idx == 0:
                item.setData(Qt.UserRole, entity_id)
            table.setItem(row_idx, col_idx, item)
    table.resizeColumnsToContents()


def selected_entity_id(table: QTableWidget) -> int | None:
    row = table.currentRow()
    if row < 0:
        return None
    item = table.item(row, 0)
    if item is None:
        return None
    return item.data(Qt.UserRole)


def attach_copy_shortcut(table: QTableWidget) -> None:
    shortcut = QShortcut(QKeySequence.Copy, table)
    shortcut.setContext(Qt.WidgetWithChildrenShortcut)
    shortcut.activated.connect(lambda t=table: copy_table_selection(t))


def copy_table_selection(table: QTableWidget) -> None:
    sel_model = table.selectionModel()
    if not sel_model or not sel_model.hasSelection():
        return
    ranges = table.selectedRanges()
    if not ranges:
        return
    selected_range = ranges[0]
    rows = range(selected_range.topRow(), selected_range.bottomRow() + 1)
    cols = range(selected_range.leftColumn(), selected_range.rightColumn() + 1)

    headers: list[str] = []
    for col in cols:
        header_item = table.horizontalHeaderItem(col)
        headers.append(header_item.text() if header_item else "")
    lines = ["\t".join(headers)]

    for row in rows:
        row_vals: list[str] = []
        for col in cols:
            item = table.item(row, col)
            row_vals.append("" if item is None else item.text())
        lines.append("\t".join(row_vals))

    QApplication.clipboard().setText("\n".join(lines))
