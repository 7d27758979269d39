"""Unit tests for OrderDjangoRepository (the order store)."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from modules.orders.constants import OrderStatus
from modules.orders.exceptions import AlreadyPrinted, InvalidOrderStatus, OrderNotFound
from modules.orders.models import Order, OrderLine
from tests.factories import make_order

pytestmark = pytest.mark.unit


class TestCreate:
    def test_computes_total_from_lines(self, order_repository):
        order = make_order(
            order_repository,
            lines=[
                {"product_name": "Water 20L", "quantity": 2, "unit_price": Decimal("8.50")},
                {"product_name": "Gas Canister", "quantity": 1, "unit_price": Decimal("95.00")},
            ],
        )

        order.refresh_from_db()
        assert order.total == Decimal("112.00")
        assert order.status == OrderStatus.PENDING
        assert order.printed_at is None
        assert order.lines.count() == 2

    def test_line_subtotal_is_not_recomputed(self, order_repository):
        order = make_order(order_repository)
        line = order.lines.get()

        line.unit_price = Decimal("99.99")
        line.save()

        line.refresh_from_db()
        assert line.subtotal == Decimal("8.50")


class TestReads:
    def test_get_by_id_prefetches_lines(self, order_repository, django_assert_num_queries):
        order = make_order(order_repository)

        with django_assert_num_queries(2):
            loaded = order_repository.get_by_id(order.id)
            assert len(loaded.lines.all()) == 1

    def test_get_by_id_missing(self, order_repository):
        assert order_repository.get_by_id(424242) is None
        assert order_repository.get_by_id("abc") is None

    def test_list_by_status_newest_first(self, order_repository):
        older = make_order(order_repository)
        newer = make_order(order_repository)
        assert [o.id for o in order_repository.list_by_status(OrderStatus.PENDING)] == [
            newer.id,
            older.id,
        ]
        assert order_repository.list_by_status(OrderStatus.PRINTED) == []


class TestSetStatus:
    def test_pending_to_printed(self, order_repository):
        order = make_order(order_repository)

        updated = order_repository.set_status(order.id, OrderStatus.PRINTED)

        assert updated.status == OrderStatus.PRINTED
        assert updated.printed_at is not None

    def test_printed_twice(self, order_repository):
        order = make_order(order_repository)
        order_repository.set_status(order.id, OrderStatus.PRINTED)
        printed_at = Order.objects.get(id=order.id).printed_at

        with pytest.raises(AlreadyPrinted):
            order_repository.set_status(order.id, OrderStatus.PRINTED)

        assert Order.objects.get(id=order.id).printed_at == printed_at

    def test_never_goes_back_to_pending(self, order_repository):
        order = make_order(order_repository)
        order_repository.set_status(order.id, OrderStatus.PRINTED)

        with pytest.raises(InvalidOrderStatus):
            order_repository.set_status(order.id, OrderStatus.PENDING)

        assert Order.objects.get(id=order.id).status == OrderStatus.PRINTED

    def test_missing_order(self, order_repository):
        with pytest.raises(OrderNotFound):
            order_repository.set_status(424242, OrderStatus.PRINTED)


class TestDeletes:
    def test_delete_all_cascades_lines(self, order_repository):
        make_order(order_repository)
        make_order(order_repository)

        assert order_repository.delete_all() == 2
        assert Order.objects.count() == 0
        assert OrderLine.objects.count() == 0

    def test_delete_all_on_empty_store(self, order_repository):
        assert order_repository.delete_all() == 0

    def test_delete_before(self, order_repository):
        old = make_order(order_repository)
        recent = make_order(order_repository)
        Order.objects.filter(id=old.id).update(created_at=timezone.now() - timedelta(days=3))

        assert order_repository.delete_before(timezone.now() - timedelta(days=1)) == 1
        assert list(Order.objects.values_list("id", flat=True)) == [recent.id]

    def test_delete_created_on(self, order_repository):
        yesterday = make_order(order_repository)
        today = make_order(order_repository)
        Order.objects.filter(id=yesterday.id).update(
            created_at=timezone.now() - timedelta(days=1)
        )

        assert order_repository.delete_created_on(timezone.localdate()) == 1
        assert list(Order.objects.values_list("id", flat=True)) == [yesterday.id]
        assert not Order.objects.filter(id=today.id).exists()

    def test_delete_one(self, order_repository):
        order = make_order(order_repository)
        assert order_repository.delete(order.id) is True
        assert order_repository.delete(order.id) is False


class TestAggregates:
    def test_count_by_status(self, order_repository):
        first = make_order(order_repository)
        make_order(order_repository)
        order_repository.set_status(first.id, OrderStatus.PRINTED)

        assert order_repository.count_by_status() == {
            OrderStatus.PENDING: 1,
            OrderStatus.PRINTED: 1,
        }

    def test_count_by_delivery_most_frequent_first(self, order_repository):
        make_order(order_repository, delivery_value="Residencial Parque Verde")
        make_order(order_repository, delivery_value="Residencial Bela Vista")
        make_order(order_repository, delivery_value="Residencial Parque Verde")
        make_order(
            order_repository,
            delivery_kind="OTHER",
            delivery_value="Rua das Palmeiras, 100",
        )

        rows = order_repository.count_by_delivery()

        assert rows[0] == {
            "delivery_kind": "LOCATION",
            "delivery_value": "Residencial Parque Verde",
            "total": 2,
        }
        assert [row["delivery_value"] for row in rows[1:]] == [
            "Residencial Bela Vista",
            "Rua das Palmeiras, 100",
        ]
