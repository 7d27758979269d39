"""Order lifecycle use cases: printing and history clearing.

Status only moves forward (PENDING -> PRINTED).  Printing writes the
ESC/POS receipt to the printer sink and marks the order in the same
unit of work, so a printer failure leaves the order PENDING.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import DatabaseError, transaction
from django.utils import timezone

from modules.orders.constants import HistoryScope, OrderStatus
from modules.orders.exceptions import AlreadyPrinted, OrderNotFound
from modules.receipts.services import ReceiptFormat, render_receipt
from shared.domain.exceptions import StorageError

if TYPE_CHECKING:
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.receipts.printers import IPrinter

logger = structlog.get_logger(__name__)


class OrderLifecycleService:
    """Moves orders through their (short) life."""

    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    def mark_printed(self, order_id: int) -> Order:
        """PENDING -> PRINTED.

        Raises:
            OrderNotFound: the order does not exist.
            AlreadyPrinted: the order was printed before; nothing changes.
            StorageError: the database failed.
        """
        try:
            order = self._order_repo.set_status(order_id, OrderStatus.PRINTED)
        except DatabaseError as exc:
            logger.error("order.mark_printed_storage_failed", order_id=order_id, error=str(exc))
            raise StorageError("Could not update the order status.") from exc
        logger.info("order.marked_printed", order_id=order_id)
        return order

    def print_order(self, order_id: int, printer: IPrinter) -> Order:
        """Send the ESC/POS receipt to ``printer`` and mark the order PRINTED.

        Raises:
            OrderNotFound: the order does not exist.
            AlreadyPrinted: the order was printed before; nothing is sent.
            PrinterError: the printer rejected the job; the order stays PENDING.
            StorageError: the database failed.
        """
        try:
            return self._print(order_id, printer)
        except DatabaseError as exc:
            logger.error("order.print_storage_failed", order_id=order_id, error=str(exc))
            raise StorageError("Could not update the order status.") from exc

    @transaction.atomic
    def _print(self, order_id: int, printer: IPrinter) -> Order:
        order = self._order_repo.get_for_update(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        if not order.can_transition_to(OrderStatus.PRINTED):
            raise AlreadyPrinted(order_id)

        printer.write(render_receipt(order, ReceiptFormat.ESCPOS))
        order = self._order_repo.set_status(order_id, OrderStatus.PRINTED)
        logger.info("order.printed", order_id=order_id)
        return order

    def clear_history(self, scope: str = HistoryScope.ALL) -> int:
        """Delete orders (and their lines); stock is never restored.

        ``TODAY`` removes the orders created on the current local date.
        Returns the number of orders deleted.

        Raises:
            ValueError: unknown ``scope``.
            StorageError: the database failed; nothing was deleted.
        """
        if scope not in HistoryScope.values:
            raise ValueError(f"Unknown history scope '{scope}'.")
        try:
            if scope == HistoryScope.TODAY:
                deleted = self._order_repo.delete_created_on(timezone.localdate())
            else:
                deleted = self._order_repo.delete_all()
        except DatabaseError as exc:
            logger.error("order.history_storage_failed", scope=str(scope), error=str(exc))
            raise StorageError("Could not clear the order history.") from exc
        logger.info("order.history_cleared", scope=str(scope), deleted=deleted)
        return deleted
