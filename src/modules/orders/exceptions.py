"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.  Stock failures (``OutOfStock``,
``ProductNotFound``) come from ``modules.products.exceptions``.
"""

from __future__ import annotations


class OrderValidationError(Exception):
    """The submitted cart, delivery or payment data is malformed.

    Always raised before any write happens.
    """


class EmptyCart(OrderValidationError):
    """The cart has no lines."""


class InvalidDelivery(OrderValidationError):
    """Neither a community nor a free-text address was supplied."""


class InvalidPayment(OrderValidationError):
    """Unknown payment method, or change requested for a non-cash payment."""


class OrderNotFound(Exception):
    """The requested order does not exist."""

    def __init__(self, order_id: int) -> None:
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found.")


class InvalidOrderStatus(Exception):
    """An invalid status transition was attempted."""


class AlreadyPrinted(InvalidOrderStatus):
    """The order was already printed; nothing was changed."""

    def __init__(self, order_id: int) -> None:
        self.order_id = order_id
        super().__init__(f"Order {order_id} was already printed.")
