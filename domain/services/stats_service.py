"""Summary figures shown above the purchase and sale tables."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from domain.models import Purchase, Sale


def _amount(value: Optional[Decimal]) -> Decimal:
    return value if value is not None else Decimal("0")


@dataclass(frozen=True)
class PurchaseStats:
    total_purchases: int
    total_quantity: Decimal
    total_cost: Decimal
    supplier_count: int


@dataclass(frozen=True)
class SaleStats:
    total_sales: int
    units_sold: Decimal
    revenue: Decimal


class StatsService:
    """Service computing the stats panels of the purchase/sale managers."""

    def purchase_stats(self, purchases: Iterable[Purchase]) -> PurchaseStats:
        items = list(purchases)
        return PurchaseStats(
            total_purchases=len(items),
            total_quantity=sum((_amount(p.quantity) for p in items), Decimal("0")),
            total_cost=sum((_amount(p.total_cost) for p in items), Decimal("0")),
            supplier_count=len({p.supplier for p in items}),
        )

    def sale_stats(self, sales: Iterable[Sale]) -> SaleStats:
        items = list(sales)
        return SaleStats(
            total_sales=len(items),
            units_sold=sum((_amount(s.quantity) for s in items), Decimal("0")),
            revenue=sum((_amount(s.total_price) for s in items), Decimal("0")),
        )
