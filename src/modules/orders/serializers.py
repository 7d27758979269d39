"""Order DRF serializers for API output.

Submission payloads are validated by ``SubmitOrderDTO.from_payload``
(pydantic tagged unions), so only read serializers live here.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order, OrderLine


class OrderLineSerializer(serializers.ModelSerializer):
    """Read serializer for order lines (name/price snapshots)."""

    class Meta:
        model = OrderLine
        fields = [
            "id",
            "product_id",
            "product_name",
            "quantity",
            "unit_price",
            "subtotal",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested lines."""

    lines = OrderLineSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "delivery_kind",
            "delivery_value",
            "unit_qualifier",
            "payment_method",
            "change_due",
            "note",
            "total",
            "status",
            "printed_at",
            "created_at",
            "updated_at",
            "lines",
        ]
        read_only_fields = fields
