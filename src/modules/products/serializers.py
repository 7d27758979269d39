"""Product DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer for the catalog."""

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "price",
            "stock",
            "image_ref",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class UpsertProductSerializer(serializers.Serializer):
    """Validates the admin product form (multipart, optional image)."""

    name = serializers.CharField(max_length=255)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    stock = serializers.IntegerField(min_value=0)
    image = serializers.FileField(required=False, allow_null=True)
