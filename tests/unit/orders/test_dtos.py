"""Unit tests for the order submission DTOs.

``SubmitOrderDTO.from_payload`` is the validation gate: every error it
raises happens before anything is written.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.orders.dtos import (
    CashPayment,
    LocationDelivery,
    OtherDelivery,
    OtherPayment,
    SubmitOrderDTO,
)
from modules.orders.exceptions import (
    EmptyCart,
    InvalidDelivery,
    InvalidPayment,
    OrderValidationError,
)

pytestmark = pytest.mark.unit

LINE = {"product_id": 1, "name": "Water 20L", "price": "8.50", "quantity": 2}


def _payload(**overrides):
    payload = {
        "items": [LINE],
        "delivery": {"kind": "LOCATION", "name": "Residencial Bela Vista"},
        "unit": " Casa 12 ",
        "payment": {"method": "CASH", "change_due": "50.00"},
        "note": "",
    }
    payload.update(overrides)
    return payload


class TestValidPayloads:
    def test_location_and_cash_with_change(self):
        dto = SubmitOrderDTO.from_payload(_payload())

        assert isinstance(dto.delivery, LocationDelivery)
        assert dto.delivery.value == "Residencial Bela Vista"
        assert isinstance(dto.payment, CashPayment)
        assert dto.payment.change_due == Decimal("50.00")
        assert dto.unit == "Casa 12"
        assert dto.items[0].price == Decimal("8.50")

    def test_other_address(self):
        dto = SubmitOrderDTO.from_payload(
            _payload(delivery={"kind": "OTHER", "address": "Rua das Palmeiras, 100"})
        )
        assert isinstance(dto.delivery, OtherDelivery)
        assert dto.delivery.value == "Rua das Palmeiras, 100"

    @pytest.mark.parametrize("method", ["CARD", "PIX"])
    def test_non_cash_payment_has_no_change(self, method):
        dto = SubmitOrderDTO.from_payload(_payload(payment={"method": method}))
        assert isinstance(dto.payment, OtherPayment)
        assert dto.payment.change_due is None

    @pytest.mark.parametrize("method", ["CARD", "PIX"])
    def test_non_cash_accepts_null_change(self, method):
        dto = SubmitOrderDTO.from_payload(
            _payload(payment={"method": method, "change_due": None})
        )
        assert dto.payment.method == method
        assert dto.payment.change_due is None

    def test_cash_without_change(self):
        dto = SubmitOrderDTO.from_payload(_payload(payment={"method": "CASH"}))
        assert dto.payment.change_due is None


class TestCart:
    def test_empty_cart(self):
        with pytest.raises(EmptyCart):
            SubmitOrderDTO.from_payload(_payload(items=[]))

    def test_missing_cart(self):
        payload = _payload()
        del payload["items"]
        with pytest.raises(EmptyCart):
            SubmitOrderDTO.from_payload(payload)

    def test_null_cart(self):
        with pytest.raises(EmptyCart):
            SubmitOrderDTO.from_payload(_payload(items=None))

    def test_zero_quantity_is_a_validation_error(self):
        with pytest.raises(OrderValidationError) as exc_info:
            SubmitOrderDTO.from_payload(_payload(items=[{**LINE, "quantity": 0}]))
        assert not isinstance(exc_info.value, EmptyCart)
        assert "items.0.quantity" in str(exc_info.value)

    def test_negative_price(self):
        with pytest.raises(OrderValidationError):
            SubmitOrderDTO.from_payload(_payload(items=[{**LINE, "price": "-1.00"}]))


class TestDelivery:
    @pytest.mark.parametrize(
        "delivery",
        [
            {"kind": "LOCATION", "name": "   "},
            {"kind": "OTHER", "address": ""},
            {"kind": "OTHER"},
            {"kind": "MOON", "name": "Tranquility"},
            {"kind": "LOCATION", "name": "A", "address": "B"},
        ],
    )
    def test_invalid_delivery(self, delivery):
        with pytest.raises(InvalidDelivery):
            SubmitOrderDTO.from_payload(_payload(delivery=delivery))

    def test_missing_delivery(self):
        payload = _payload()
        del payload["delivery"]
        with pytest.raises(InvalidDelivery):
            SubmitOrderDTO.from_payload(payload)


class TestPayment:
    @pytest.mark.parametrize(
        "payment",
        [
            {"method": "BITCOIN"},
            {"method": "PIX", "change_due": "10.00"},
            {"method": "CARD", "change_due": "10.00"},
            {"method": "CASH", "change_due": "0"},
            {},
        ],
    )
    def test_invalid_payment(self, payment):
        with pytest.raises(InvalidPayment):
            SubmitOrderDTO.from_payload(_payload(payment=payment))

    def test_validation_errors_share_a_base(self):
        assert issubclass(EmptyCart, OrderValidationError)
        assert issubclass(InvalidDelivery, OrderValidationError)
        assert issubclass(InvalidPayment, OrderValidationError)
