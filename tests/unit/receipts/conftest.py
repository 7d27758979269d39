from datetime import datetime, timezone as dt_timezone
from decimal import Decimal

import pytest

from modules.orders.models import Order
from tests.factories import make_order

# 12:04:05 in America/Sao_Paulo
CREATED_AT = datetime(2026, 3, 10, 15, 4, 5, tzinfo=dt_timezone.utc)


@pytest.fixture()
def receipt_order(order_repository):
    """Water 20L x2 + Gas Canister x1, cash with change, a note."""
    order = make_order(
        order_repository,
        lines=[
            {"product_name": "Water 20L", "quantity": 2, "unit_price": Decimal("8.50")},
            {"product_name": "Gas Canister", "quantity": 1, "unit_price": Decimal("95.00")},
        ],
        payment_method="CASH",
        change_due=Decimal("150"),
        note="  Deixar na portaria  ",
    )
    Order.objects.filter(id=order.id).update(created_at=CREATED_AT)
    return order_repository.get_by_id(order.id)


@pytest.fixture()
def pix_order(order_repository):
    order = make_order(order_repository, unit_qualifier="", note="")
    return order_repository.get_by_id(order.id)
