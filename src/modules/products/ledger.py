"""Inventory ledger: the stock reservation step of order submission.

``reserve`` is deliberately *not* a transaction of its own.  It must be
called inside the caller's ``transaction.atomic()`` block so that the
stock decrement commits or rolls back together with the order rows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import transaction
from django.db.transaction import TransactionManagementError

from modules.products.exceptions import OutOfStock, ProductNotFound

if TYPE_CHECKING:
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class InventoryLedger:
    """Owns product stock counts during order commits."""

    def __init__(self, product_repository: IProductRepository) -> None:
        self._product_repo = product_repository

    def reserve(self, product_id: int, quantity: int) -> None:
        """Decrement stock by ``quantity`` iff it stays ``>= 0``.

        Raises:
            TransactionManagementError: called outside an atomic block.
            ValueError: ``quantity`` is not positive.
            ProductNotFound: the product does not exist.
            OutOfStock: not enough stock; nothing was changed.
        """
        if not transaction.get_connection().in_atomic_block:
            raise TransactionManagementError(
                "Stock reservation must run inside transaction.atomic()."
            )
        if quantity < 1:
            raise ValueError("Reserved quantity must be at least 1.")

        log = logger.bind(product_id=product_id, quantity=quantity)

        if self._product_repo.decrement_stock(product_id, quantity):
            log.info("inventory.reserved")
            return

        available = self._product_repo.get_stock(product_id)
        if available is None:
            log.warning("inventory.product_not_found")
            raise ProductNotFound(product_id)

        log.warning("inventory.out_of_stock", available=available)
        raise OutOfStock(product_id, quantity, available)
