"""Analytics aggregates for the admin dashboard.

Builds the series behind the analytics charts with pandas. Each method
returns plain row dicts so callers never handle DataFrames.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

import pandas as pd

from config.constants import MIX_TYPE_LABELS


def _to_float(value: Any) -> float:
    if value is None:
        return 0.0
    return float(value)


def _records(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    return frame.to_dict(orient="records")


class AnalyticsReport:
    """Aggregate sales, purchases, inputs and formulas."""

    def monthly_sales(self, sales: Sequence[Any]) -> List[Dict[str, Any]]:
        """Revenue, units and sale count per calendar month (``YYYY-MM``)."""
        frame = pd.DataFrame(
            [
                {
                    "date": sale.date,
                    "quantity": _to_float(sale.quantity),
                    "revenue": _to_float(sale.total_price),
                }
                for sale in sales
            ],
            columns=["date", "quantity", "revenue"],
        )
        return self._by_month(frame, {"revenue": "sum", "quantity": "sum"}, "sales")

    def monthly_purchases(self, purchases: Sequence[Any]) -> List[Dict[str, Any]]:
        """Cost, quantity and purchase count per calendar month."""
        frame = pd.DataFrame(
            [
                {
                    "date": purchase.date,
                    "quantity": _to_float(purchase.quantity),
                    "cost": _to_float(purchase.total_cost),
                }
                for purchase in purchases
            ],
            columns=["date", "quantity", "cost"],
        )
        return self._by_month(frame, {"cost": "sum", "quantity": "sum"}, "purchases")

    def input_value_by_type(self, inputs: Sequence[Any]) -> List[Dict[str, Any]]:
        """Stock value (quantity x unit price) grouped by input type."""
        frame = pd.DataFrame(
            [
                {
                    "type": item.type or "-",
                    "quantity": _to_float(item.quantity),
                    "value": _to_float(item.stock_value),
                }
                for item in inputs
            ],
            columns=["type", "quantity", "value"],
        )
        if frame.empty:
            return []
        grouped = (
            frame.groupby("type", sort=True)
            .agg(quantity=("quantity", "sum"), value=("value", "sum"))
            .reset_index()
        )
        return _records(grouped)

    def formulas_by_mix_type(self, formulas: Sequence[Any]) -> List[Dict[str, Any]]:
        """Number of formulas per mix type, with display labels."""
        frame = pd.DataFrame(
            [{"mix_type": formula.mix_type} for formula in formulas],
            columns=["mix_type"],
        )
        if frame.empty:
            return []
        counts = frame.groupby("mix_type", sort=True).size().reset_index(name="count")
        counts["label"] = counts["mix_type"].map(lambda key: MIX_TYPE_LABELS.get(key, key))
        counts["count"] = counts["count"].astype(int)
        return _records(counts)

    def _by_month(
        self,
        frame: pd.DataFrame,
        sums: Dict[str, str],
        count_column: str,
    ) -> List[Dict[str, Any]]:
        if frame.empty:
            return []
        frame = frame.copy()
        frame["date"] = pd.to_datetime(frame["date"], format="%Y-%m-%d", errors="coerce")
        frame = frame.dropna(subset=["date"])
        if frame.empty:
            return []
        frame["month"] = frame["date"].dt.strftime("%Y-%m")
        aggregations = {column: (column, how) for column, how in sums.items()}
        aggregations[count_column] = ("date", "count")
        grouped = frame.groupby("month", sort=True).agg(**aggregations).reset_index()
        grouped[count_column] = grouped[count_column].astype(int)
        return _records(grouped)
