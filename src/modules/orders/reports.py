"""Dashboard aggregates over the order store (read only)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.orders.constants import OrderStatus
from modules.orders.dtos import DashboardSummaryDTO, DeliveryCountDTO

if TYPE_CHECKING:
    from modules.orders.repositories.interfaces import IOrderRepository


class DashboardService:
    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    def summary(self) -> DashboardSummaryDTO:
        """Order totals per status and per delivery descriptor.

        Every status is reported, with zero when it has no orders.
        """
        counts = self._order_repo.count_by_status()
        by_status = {status: counts.get(status, 0) for status in OrderStatus.values}
        by_delivery = [
            DeliveryCountDTO(**row) for row in self._order_repo.count_by_delivery()
        ]
        return DashboardSummaryDTO(
            total=sum(by_status.values()),
            by_status=by_status,
            by_delivery=by_delivery,
        )
