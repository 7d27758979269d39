from io import StringIO

import pytest
from django.core.management import call_command

from modules.orders.models import Order
from modules.products.models import Product

pytestmark = pytest.mark.integration


class TestSeedData:
    def test_seeds_catalog_and_orders(self):
        out = StringIO()
        call_command("seed_data", orders=4, stdout=out)

        assert Product.objects.count() == 5
        assert 1 <= Order.objects.count() <= 4
        assert "Seed completed" in out.getvalue()

    def test_is_idempotent_for_the_catalog(self):
        call_command("seed_data", orders=0, stdout=StringIO())
        call_command("seed_data", orders=0, stdout=StringIO())
        assert Product.objects.count() == 5
