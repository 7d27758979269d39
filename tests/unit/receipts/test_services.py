"""Unit tests for ReceiptService."""

from __future__ import annotations

import pytest

from modules.orders.exceptions import OrderNotFound
from modules.receipts.escpos import CUT
from modules.receipts.exceptions import UnknownReceiptFormat
from modules.receipts.services import ReceiptFormat, ReceiptService

pytestmark = pytest.mark.unit


@pytest.fixture()
def service(order_repository):
    return ReceiptService(order_repository)


class TestRender:
    def test_escpos(self, service, receipt_order):
        payload = service.render(receipt_order.id, ReceiptFormat.ESCPOS)
        assert isinstance(payload, bytes)
        assert payload.endswith(CUT)

    def test_html(self, service, receipt_order):
        payload = service.render(receipt_order.id, ReceiptFormat.HTML)
        assert isinstance(payload, str)
        assert f"PEDIDO: #{receipt_order.id}" in payload

    def test_rendering_is_read_only(self, service, receipt_order):
        service.render(receipt_order.id, ReceiptFormat.ESCPOS)
        receipt_order.refresh_from_db()
        assert receipt_order.status == "PENDING"

    def test_unknown_format(self, service, receipt_order):
        with pytest.raises(UnknownReceiptFormat):
            service.render(receipt_order.id, "pdf")

    def test_missing_order(self, service):
        with pytest.raises(OrderNotFound):
            service.render(424242, ReceiptFormat.HTML)
