"""Order and OrderLine models.

Business rules implemented:
- Status is a closed two-state machine (PENDING -> PRINTED); the
  transition itself is enforced by the repository's compare-and-set.
- ``total`` is computed server side from the line subtotals and never
  recomputed afterwards.
- ``change_due`` only exists for cash payments (database constraint).
- OrderLine snapshots product name and unit price at creation time; it
  holds no foreign key to ``Product`` (``product_id`` is informational)
  so catalog edits and deletions never alter history.
- OrderLine subtotal is ``quantity * unit_price`` (calculated on insert).
- Deleting an order cascades to its lines.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import (
    VALID_TRANSITIONS,
    DeliveryKind,
    OrderStatus,
    PaymentMethod,
)


class Order(BaseModel):
    """Order aggregate root.

    The delivery descriptor is stored as ``delivery_kind`` +
    ``delivery_value``: either a named community (``LOCATION``) or a
    free-text address (``OTHER``).  Exactly one of them is authoritative.
    """

    delivery_kind: models.CharField = models.CharField(
        max_length=20,
        choices=DeliveryKind.choices,
    )
    delivery_value: models.CharField = models.CharField(max_length=255)
    unit_qualifier: models.CharField = models.CharField(
        max_length=100, blank=True, default=""
    )
    payment_method: models.CharField = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
    )
    change_due: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        default=None,
    )
    note: models.TextField = models.TextField(blank=True, default="")
    total: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    printed_at: models.DateTimeField = models.DateTimeField(
        null=True, blank=True, default=None
    )

    class Meta:
        db_table = "orders"
        ordering = ["-id"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
            models.Index(
                fields=["delivery_kind", "delivery_value"],
                name="orders_delivery_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(change_due__isnull=True)
                | models.Q(payment_method=PaymentMethod.CASH),
                name="orders_change_due_cash_only",
            ),
            models.CheckConstraint(
                condition=models.Q(total__gte=0),
                name="orders_total_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # State Machine helpers
    # ------------------------------------------------------------------

    def can_transition_to(self, new_status: str) -> bool:
        """Check whether transitioning to *new_status* is valid."""
        allowed = VALID_TRANSITIONS.get(self.status, set())
        return new_status in allowed

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"#{self.id} ({self.status})"


class OrderLine(models.Model):
    """Line item owned by exactly one Order.

    ``product_name`` and ``unit_price`` are **snapshots** taken at commit
    time.  ``subtotal`` is computed once, when the line is first saved.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="lines",
    )
    product_id: models.BigIntegerField = models.BigIntegerField(null=True, blank=True)
    product_name: models.CharField = models.CharField(max_length=255)
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )
    unit_price: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
    )
    subtotal: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        editable=False,
    )

    class Meta:
        db_table = "order_lines"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_lines_quantity_positive",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.quantity is not None and self.quantity < 1:
            raise ValidationError({"quantity": "Quantity must be at least 1."})

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args: Any, **kwargs: Any) -> None:
        if self._state.adding:
            self.subtotal = self.quantity * self.unit_price
        super().save(*args, **kwargs)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.quantity}x {self.product_name} (R$ {self.subtotal})"
