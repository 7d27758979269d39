"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: methods return ``None``
or ``False`` instead of raising; the Service Layer (or the inventory
ledger) decides how to translate a missing entity.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """List products (newest first) with optional Django ORM look-ups.

        Examples of valid filters::

            {"stock__gt": 0}
            {"name__icontains": "galão"}
        """
        queryset = Product.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.full_clean()
        entity.save()
        logger.info("product.saved", product_id=entity.id, stock=entity.stock)
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Hard-delete a product by ID.

        Returns ``True`` if a row was removed, ``False`` otherwise.
        Order lines are snapshots and are not affected.
        """
        deleted, _ = Product.objects.filter(id=id).delete()
        if deleted:
            logger.info("product.deleted", product_id=id)
        return bool(deleted)

    # ------------------------------------------------------------------
    # Stock primitives
    # ------------------------------------------------------------------

    def decrement_stock(self, id: int, quantity: int) -> bool:
        """Conditional ``UPDATE``; the row lock is held until commit."""
        updated = Product.objects.filter(id=id, stock__gte=quantity).update(
            stock=F("stock") - quantity,
            updated_at=timezone.now(),
        )
        return updated == 1

    def get_stock(self, id: int) -> Optional[int]:
        return Product.objects.filter(id=id).values_list("stock", flat=True).first()
