from __future__ import annotations

from typing import Any, Dict, List

from application.use_cases import BuildAnalyticsUseCase
from domain.services.stats_service import PurchaseStats, SaleStats, StatsService
from infrastructure.persistence.memory_repository import CollectionStore
from ui.formatters import fmt_money, fmt_number


class DashboardPresenter:
    """Presenter for the stats panels and the admin analytics screen."""

    def __init__(
        self,
        stores: Dict[str, CollectionStore],
        analytics: BuildAnalyticsUseCase,
        stats_service: StatsService | None = None,
    ) -> None:
        self._stores = stores
        self._analytics = analytics
        self._stats = stats_service or StatsService()

    def purchase_stats(self) -> PurchaseStats:
        return self._stats.purchase_stats(self._stores["purchase"].all())

    def sale_stats(self) -> SaleStats:
        return self._stats.sale_stats(self._stores["sale"].all())

    def purchase_cards(self) -> List[tuple[str, str]]:
        stats = self.purchase_stats()
        return [
            ("Total de compras", str(stats.total_purchases)),
            ("Cantidad total", fmt_number(stats.total_quantity)),
            ("Costo total", fmt_money(stats.total_cost)),
            ("Proveedores", str(stats.supplier_count)),
        ]

    def sale_cards(self) -> List[tuple[str, str]]:
        stats = self.sale_stats()
        return [
            ("Total de ventas", str(stats.total_sales)),
            ("Unidades vendidas", fmt_number(stats.units_sold)),
            ("Ingresos", fmt_money(stats.revenue)),
        ]

    def analytics(self) -> Dict[str, List[Dict[str, Any]]]:
        return self._analytics.execute(
            inputs=self._stores["input"].all(),
            purchases=self._stores["purchase"].all(),
            sales=self._stores["sale"].all(),
            formulas=self._stores["formula"].all(),
        )
