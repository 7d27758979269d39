"""Order service layer (Use Cases).

Orchestrates order submission and the order queries.  Submission is a
single atomic unit of work; the service defines its boundary.

Business rules enforced:
- Cart, delivery and payment are validated before any write
  (``SubmitOrderDTO.from_payload``).
- Stock is reserved through the inventory ledger with a conditional
  decrement; reservations run in ascending product id order to avoid
  deadlocks between overlapping carts.
- Any failure (stock or database) rolls back every reservation and
  every row of the submission.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, List

import structlog
from django.db import DatabaseError, transaction

from modules.orders.constants import OrderStatus
from modules.orders.exceptions import EmptyCart, OrderNotFound
from shared.domain.exceptions import StorageError

if TYPE_CHECKING:
    from modules.orders.dtos import SubmitOrderDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.ledger import InventoryLedger

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for Order use-cases.

    Receives the order repository and the inventory ledger via
    constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        ledger: InventoryLedger,
    ) -> None:
        self._order_repo = order_repository
        self._ledger = ledger

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def submit_order(self, dto: SubmitOrderDTO) -> Order:
        """Turn a validated cart into a PENDING order, reserving stock.

        Steps:
        1. Reserve stock for every product (sorted by id), a single
           conditional decrement per product, serialized on the row.
        2. Persist the order header and lines; the total is the exact
           Decimal sum of the line subtotals.
        3. Commit.  Any exception rolls the whole unit back.

        Raises:
            EmptyCart: the DTO carries no lines.
            ProductNotFound: a product does not exist.
            OutOfStock: not enough stock for a product.
            StorageError: the database failed; nothing was persisted.
        """
        log = logger.bind(
            item_count=len(dto.items),
            payment_method=dto.payment.method,
            delivery_kind=dto.delivery.kind,
        )
        log.info("order.submission_started")

        try:
            order = self._submit(dto)
        except DatabaseError as exc:
            log.error("order.storage_failed", error=str(exc))
            raise StorageError("Could not persist the order; nothing was saved.") from exc

        log.info("order.created", order_id=order.id, total=str(order.total))
        return order

    @transaction.atomic
    def _submit(self, dto: SubmitOrderDTO) -> Order:
        if not dto.items:
            raise EmptyCart("Cart must have at least one item.")

        requested: Counter[int] = Counter()
        for line in dto.items:
            requested[line.product_id] += line.quantity

        for product_id in sorted(requested):
            self._ledger.reserve(product_id, requested[product_id])

        return self._order_repo.create(
            {
                "delivery_kind": dto.delivery.kind,
                "delivery_value": dto.delivery.value,
                "unit_qualifier": dto.unit,
                "payment_method": dto.payment.method,
                "change_due": dto.payment.change_due,
                "note": dto.note,
                "lines": [
                    {
                        "product_id": line.product_id,
                        "product_name": line.name,
                        "quantity": line.quantity,
                        "unit_price": line.price,
                    }
                    for line in dto.items
                ],
            }
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: int) -> Order:
        """Retrieve a single order with its lines.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(order_id)
        return order

    def list_orders(self, status: str = OrderStatus.PENDING) -> List[Order]:
        """Return the orders in ``status`` (newest first) with lines."""
        return self._order_repo.list_by_status(status)
