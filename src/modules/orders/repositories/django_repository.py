"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
Write operations are wrapped in ``transaction.atomic()`` so the Order
aggregate (Order + OrderLines) is persisted atomically; when called from
a service that already opened a unit of work they become savepoints.

Status changes are a single conditional ``UPDATE`` (compare-and-set on
the current status), so two concurrent print actions cannot both win.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

import structlog
from django.db import transaction
from django.db.models import Count, QuerySet
from django.utils import timezone

from modules.orders.constants import VALID_TRANSITIONS, OrderStatus
from modules.orders.exceptions import AlreadyPrinted, InvalidOrderStatus, OrderNotFound
from modules.orders.models import Order, OrderLine
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its lines atomically.

        ``data`` keys:
        - ``delivery_kind``, ``delivery_value``, ``payment_method`` (required)
        - ``unit_qualifier``, ``change_due``, ``note`` (optional)
        - ``lines`` (required): list of dicts with ``product_name``,
          ``quantity``, ``unit_price`` and optionally ``product_id``
        """
        order = Order(
            delivery_kind=data["delivery_kind"],
            delivery_value=data["delivery_value"],
            unit_qualifier=data.get("unit_qualifier", ""),
            payment_method=data["payment_method"],
            change_due=data.get("change_due"),
            note=data.get("note", ""),
            status=OrderStatus.PENDING,
        )
        order.save()

        total = Decimal("0.00")
        lines = data["lines"]
        for line_data in lines:
            line = OrderLine(
                order=order,
                product_id=line_data.get("product_id"),
                product_name=line_data["product_name"],
                quantity=line_data["quantity"],
                unit_price=line_data["unit_price"],
            )
            line.save()
            total += line.subtotal

        order.total = total
        order.save(update_fields=["total", "updated_at"])

        logger.info("order.persisted", order_id=order.id, line_count=len(lines))
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _queryset(self) -> QuerySet:
        return Order.objects.prefetch_related("lines")

    def get_by_id(self, id: int) -> Optional[Order]:
        """Retrieve an order with its lines prefetched.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._queryset().filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def get_for_update(self, id: int) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE).

        Must be called inside ``transaction.atomic()``.
        """
        try:
            return self._queryset().select_for_update().filter(id=id).first()
        except (TypeError, ValueError):
            return None

    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders with optional filters and prefetched lines.

        Supported filter keys: any ``Order`` look-up, e.g. ``status`` or
        ``created_at__date``.
        """
        queryset = self._queryset()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    def list_by_status(self, status: str) -> List[Order]:
        return self.list({"status": status})

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    @transaction.atomic
    def save(self, entity: Order) -> Order:
        """Persist (create or update) an order header."""
        entity.save()
        logger.info("order.saved", order_id=entity.id)
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Hard-delete one order (lines cascade)."""
        return self._delete(Order.objects.filter(id=id)) > 0

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @transaction.atomic
    def set_status(self, id: int, new_status: str) -> Order:
        """Move an order to ``new_status`` if its current status allows it.

        Raises:
            OrderNotFound: order does not exist.
            AlreadyPrinted: order is already PRINTED.
            InvalidOrderStatus: any other illegal transition.
        """
        sources = [
            current
            for current, targets in VALID_TRANSITIONS.items()
            if new_status in targets
        ]
        now = timezone.now()
        changes: Dict[str, Any] = {"status": new_status, "updated_at": now}
        if new_status == OrderStatus.PRINTED:
            changes["printed_at"] = now

        updated = Order.objects.filter(id=id, status__in=sources).update(**changes)
        if updated:
            logger.info("order.status_updated", order_id=id, new_status=new_status)
            return self.get_by_id(id)

        current = Order.objects.filter(id=id).values_list("status", flat=True).first()
        if current is None:
            raise OrderNotFound(id)
        if current == OrderStatus.PRINTED and new_status == OrderStatus.PRINTED:
            raise AlreadyPrinted(id)
        logger.warning(
            "order.invalid_transition",
            order_id=id,
            current_status=current,
            new_status=new_status,
        )
        raise InvalidOrderStatus(f"Cannot transition from {current} to {new_status}.")

    # ------------------------------------------------------------------
    # History clearing
    # ------------------------------------------------------------------

    @transaction.atomic
    def delete_all(self) -> int:
        return self._delete(Order.objects.all())

    @transaction.atomic
    def delete_before(self, timestamp: datetime) -> int:
        return self._delete(Order.objects.filter(created_at__lt=timestamp))

    @transaction.atomic
    def delete_created_on(self, day: date) -> int:
        """``__date`` is evaluated in the current time zone (TIME_ZONE)."""
        return self._delete(Order.objects.filter(created_at__date=day))

    def _delete(self, queryset: QuerySet) -> int:
        _, per_model = queryset.delete()
        orders = per_model.get(Order._meta.label, 0)
        lines = per_model.get(OrderLine._meta.label, 0)
        if orders:
            logger.info("order.deleted", order_count=orders, line_count=lines)
        return orders

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def count_by_status(self) -> Dict[str, int]:
        rows = (
            Order.objects.order_by()
            .values("status")
            .annotate(total=Count("id"))
        )
        return {row["status"]: row["total"] for row in rows}

    def count_by_delivery(self) -> List[Dict[str, Any]]:
        rows = (
            Order.objects.order_by()
            .values("delivery_kind", "delivery_value")
            .annotate(total=Count("id"))
            .order_by("-total", "delivery_value")
        )
        return list(rows)
