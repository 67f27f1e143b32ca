"""Excel export functionality.

Exports manager tables (as currently filtered and sorted) to Excel with
a styled header row.
"""

from decimal import Decimal
from pathlib import Path
from typing import Any, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from domain.exceptions import ExportError

# Excel sheet titles are limited to 31 characters and some symbols.
_INVALID_TITLE_CHARS = set('[]:*?/\\')


def _sheet_title(title: str) -> str:
    cleaned = "".join(ch for ch in title if ch not in _INVALID_TITLE_CHARS).strip()
    return (cleaned or "Tabla")[:31]


def _cell_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    return value


class ExcelExporter:
    """Export tables to Excel format."""

    def export_table(
        self,
        title: str,
        headers: Sequence[str],
        rows: Sequence[Sequence[Any]],
        output_path: Path | str,
    ) -> None:
        """Export one table to a single-sheet workbook.

        Args:
            title: Sheet title
            headers: Column headers
            rows: Cell values per row
            output_path: Path to save Excel file

        Raises:
            ExportError: If export fails
        """
        try:
            wb = Workbook()
            ws = wb.active
            ws.title = _sheet_title(title)

            ws.append(list(headers))

            # Style headers
            header_fill = PatternFill(start_color="1565C0", end_color="1565C0", fill_type="solid")
            for col_num, _ in enumerate(headers, 1):
                cell = ws.cell(1, col_num)
                cell.fill = header_fill
                cell.font = Font(bold=True, color="FFFFFF")
                cell.alignment = Alignment(horizontal="center", vertical="center")

            for row in rows:
                ws.append([_cell_value(value) for value in row])

            # Auto-size columns
            for column in ws.columns:
                max_length = 0
                column_letter = get_column_letter(column[0].column)
                for cell in column:
                    if cell.value is not None:
                        max_length = max(max_length, len(str(cell.value)))
                ws.column_dimensions[column_letter].width = min(max_length + 2, 50)

            wb.save(output_path)

        except Exception as exc:
            raise ExportError(f"Failed to export to Excel: {exc}") from exc
