from __future__ import annotations

from typing import Any, Dict, List, Sequence

from PySide6.QtWidgets import (
    QGroupBox,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from ui.formatters import fmt_money, fmt_number
from ui.presenters.dashboard_presenter import DashboardPresenter
from ui.tabs.table_utils import configure_record_table

SECTIONS = (
    ("monthly_sales", "Ventas por mes", ("month", "sales", "quantity", "revenue")),
    ("monthly_purchases", "Compras por mes", ("month", "purchases", "quantity", "cost")),
    ("input_value_by_type", "Valor de insumos por tipo", ("type", "quantity", "value")),
    ("formulas_by_mix_type", "Fórmulas por tipo de mezcla", ("label", "count")),
)

HEADERS = {
    "month": "Mes",
    "sales": "Ventas",
    "purchases": "Compras",
    "quantity": "Cantidad",
    "revenue": "Ingresos",
    "cost": "Costo",
    "type": "Tipo",
    "value": "Valor",
    "label": "Tipo de mezcla",
    "count": "Fórmulas",
}

MONEY_COLUMNS = {"revenue", "cost", "value"}


def _cell(column: str, value: Any) -> str:
    if column in MONEY_COLUMNS:
        return fmt_money(value)
    if isinstance(value, (int, float)):
        return fmt_number(value)
    return str(value)


class AnalyticsTab(QWidget):
    """Read-only admin dashboard: one table per analytics series."""

    def __init__(self, presenter: DashboardPresenter, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._presenter = presenter
        self._tables: Dict[str, QTableWidget] = {}

        layout = QVBoxLayout(self)
        title = QLabel("Análisis y reportes")
        title.setStyleSheet("font-size: 18px; font-weight: bold;")
        layout.addWidget(title)
        for key, caption, columns in SECTIONS:
            box = QGroupBox(caption)
            box_layout = QVBoxLayout(box)
            table = QTableWidget()
            configure_record_table(table, [HEADERS[column] for column in columns])
            box_layout.addWidget(table)
            layout.addWidget(box)
            self._tables[key] = table
        self.refresh()

    def refresh(self) -> None:
        series = self._presenter.analytics()
        for key, _caption, columns in SECTIONS:
            self._fill(self._tables[key], series.get(key, []), columns)

    def _fill(
        self,
        table: QTableWidget,
        records: List[Dict[str, Any]],
        columns: Sequence[str],
    ) -> None:
        table.setRowCount(len(records))
        for row_idx, record in enumerate(records):
            for col_idx, column in enumerate(columns):
                table.setItem(row_idx, col_idx, QTableWidgetItem(_cell(column, record.get(column))))
        table.resizeColumnsToContents()
