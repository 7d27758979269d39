"""Product model with stock control.

Business rules implemented:
- Price cannot be negative (promotional items may be free).
- Stock cannot be negative: enforced by ``PositiveIntegerField`` and a
  database check constraint, so a racing decrement fails loudly instead
  of overselling.
- Deletion is a hard delete.  Order lines keep a name/price snapshot,
  so historical orders are unaffected.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Product(BaseModel):
    """Catalog item (water jug, gas canister, convenience goods).

    ``image_ref`` is an opaque reference returned by the file storage
    (e.g. ``/uploads/1718000000000-galao.png``); the core never reads
    the image bytes.
    """

    name = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    stock = models.PositiveIntegerField(default=0)
    image_ref = models.CharField(max_length=500, blank=True, default="")

    class Meta:
        db_table = "products"
        ordering = ["-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.price is not None and self.price < 0:
            raise ValidationError({"price": "Price cannot be negative."})
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": "Stock cannot be negative."})

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product.created",
                product_id=self.id,
                name=self.name,
                stock=self.stock,
            )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"#{self.id} - {self.name}"
