from decimal import Decimal

import pytest

from modules.products.models import Product

pytestmark = pytest.mark.unit


class TestBaseModel:
    def test_timestamps_set_on_create(self):
        product = Product.objects.create(name="Gelo", price=Decimal("12.00"), stock=1)
        assert product.created_at is not None
        assert product.updated_at is not None

    def test_update_fields_refreshes_updated_at(self):
        product = Product.objects.create(name="Gelo", price=Decimal("12.00"), stock=1)
        before = product.updated_at

        product.stock = 2
        product.save(update_fields=["stock"])

        product.refresh_from_db()
        assert product.stock == 2
        assert product.updated_at >= before
