from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.ledger import InventoryLedger
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@pytest.fixture()
def water():
    return Product.objects.create(name="Water 20L", price=Decimal("8.50"), stock=5)


@pytest.fixture()
def gas():
    return Product.objects.create(name="Gas Canister", price=Decimal("95.00"), stock=2)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------


@pytest.fixture()
def order_repository():
    return OrderDjangoRepository()


@pytest.fixture()
def order_service(order_repository):
    return OrderService(
        order_repository=order_repository,
        ledger=InventoryLedger(ProductDjangoRepository()),
    )
