"""Receipt rendering service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Union

import structlog
from django.db import models

from modules.orders.exceptions import OrderNotFound
from modules.receipts.document import render_document
from modules.receipts.escpos import encode_escpos
from modules.receipts.exceptions import UnknownReceiptFormat
from modules.receipts.fields import assemble_receipt

if TYPE_CHECKING:
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class ReceiptFormat(models.TextChoices):
    ESCPOS = "escpos", "ESC/POS"
    HTML = "html", "HTML"


def render_receipt(order: Order, fmt: str) -> Union[bytes, str]:
    """Render ``order`` in the requested variant.

    Both variants are produced from the same assembled ``Receipt``.
    """
    if fmt not in ReceiptFormat.values:
        raise UnknownReceiptFormat(
            f"Unknown receipt format '{fmt}'. Use one of: {', '.join(ReceiptFormat.values)}."
        )
    receipt = assemble_receipt(order)
    if fmt == ReceiptFormat.ESCPOS:
        return encode_escpos(receipt)
    return render_document(receipt)


class ReceiptService:
    """Loads an order and renders its receipt.  Read-only."""

    def __init__(self, order_repository: IOrderRepository) -> None:
        self._order_repo = order_repository

    def render(self, order_id: int, fmt: str) -> Union[bytes, str]:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)
        payload = render_receipt(order, fmt)
        logger.info("receipt.rendered", order_id=order_id, format=fmt, size=len(payload))
        return payload
