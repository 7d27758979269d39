"""Unit tests for the inventory ledger (stock reservation)."""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.db import transaction
from django.db.transaction import TransactionManagementError

from modules.products.exceptions import OutOfStock, ProductNotFound
from modules.products.ledger import InventoryLedger
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def ledger():
    return InventoryLedger(ProductDjangoRepository())


@pytest.fixture()
def product():
    return Product.objects.create(name="Água 20L", price=Decimal("8.50"), stock=10)


class TestReserve:
    def test_decrements_stock(self, ledger, product):
        with transaction.atomic():
            ledger.reserve(product.id, 4)

        product.refresh_from_db()
        assert product.stock == 6

    def test_reserving_exact_stock_leaves_zero(self, ledger, product):
        with transaction.atomic():
            ledger.reserve(product.id, 10)

        product.refresh_from_db()
        assert product.stock == 0

    def test_out_of_stock_carries_details_and_changes_nothing(self, ledger, product):
        with pytest.raises(OutOfStock) as exc_info:
            with transaction.atomic():
                ledger.reserve(product.id, 11)

        assert exc_info.value.product_id == product.id
        assert exc_info.value.requested == 11
        assert exc_info.value.available == 10
        product.refresh_from_db()
        assert product.stock == 10

    def test_unknown_product(self, ledger):
        with pytest.raises(ProductNotFound) as exc_info:
            with transaction.atomic():
                ledger.reserve(999999, 1)
        assert exc_info.value.product_id == 999999

    def test_rejects_non_positive_quantity(self, ledger, product):
        with pytest.raises(ValueError):
            with transaction.atomic():
                ledger.reserve(product.id, 0)

    def test_rolled_back_with_the_enclosing_unit(self, ledger, product):
        with pytest.raises(RuntimeError):
            with transaction.atomic():
                ledger.reserve(product.id, 3)
                raise RuntimeError("abort")

        product.refresh_from_db()
        assert product.stock == 10


@pytest.mark.django_db(transaction=True)
class TestReserveOutsideTransaction:
    def test_requires_an_atomic_block(self, product):
        ledger = InventoryLedger(ProductDjangoRepository())
        with pytest.raises(TransactionManagementError):
            ledger.reserve(product.id, 1)

        product.refresh_from_db()
        assert product.stock == 10
