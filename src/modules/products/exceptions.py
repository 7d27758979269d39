"""Product and inventory domain exceptions.

Raised by the Service Layer (and the inventory ledger) when business
rules are violated.  The API layer (Views) catches these and translates
them into appropriate HTTP responses.
"""

from __future__ import annotations


class ProductNotFound(Exception):
    """The requested product does not exist."""

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found.")


class OutOfStock(Exception):
    """Reserving the requested quantity would drive stock below zero."""

    def __init__(self, product_id: int, requested: int, available: int) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Product {product_id}: requested {requested}, available {available}."
        )
