"""Unit tests for the dashboard aggregates."""

from __future__ import annotations

import pytest

from modules.orders.constants import OrderStatus
from modules.orders.dtos import DeliveryCountDTO
from modules.orders.reports import DashboardService
from tests.factories import make_order

pytestmark = pytest.mark.unit


@pytest.fixture()
def dashboard(order_repository):
    return DashboardService(order_repository)


class TestSummary:
    def test_empty_store_reports_zeros(self, dashboard):
        summary = dashboard.summary()

        assert summary.total == 0
        assert summary.by_status == {"PENDING": 0, "PRINTED": 0}
        assert summary.by_delivery == []

    def test_counts(self, dashboard, order_repository):
        printed = make_order(order_repository, delivery_value="Residencial Parque Verde")
        make_order(order_repository, delivery_value="Residencial Parque Verde")
        make_order(order_repository, delivery_kind="OTHER", delivery_value="Rua A, 1")
        order_repository.set_status(printed.id, OrderStatus.PRINTED)

        summary = dashboard.summary()

        assert summary.total == 3
        assert summary.by_status == {"PENDING": 2, "PRINTED": 1}
        assert summary.by_delivery == [
            DeliveryCountDTO(
                delivery_kind="LOCATION",
                delivery_value="Residencial Parque Verde",
                total=2,
            ),
            DeliveryCountDTO(delivery_kind="OTHER", delivery_value="Rua A, 1", total=1),
        ]
