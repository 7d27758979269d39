"""Receipt field assembly.

``assemble_receipt`` is the single place where an order is turned into
printable content.  Both encoders (``escpos`` and ``document``) consume
the resulting ``Receipt`` and only decide how to encode it, so the two
variants cannot drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Tuple

from django.conf import settings
from django.utils import timezone

from modules.orders.constants import DeliveryKind, PaymentMethod

if TYPE_CHECKING:
    from modules.orders.models import Order

ORDER_LABEL = "PEDIDO"
TIMESTAMP_LABEL = "DATA/HORA"
LOCATION_LABEL = "CONDOMINIO"
OTHER_ADDRESS_LABEL = "ENTREGA"
UNIT_LABEL = "CASA/APTO"
PAYMENT_LABEL = "PAGAMENTO"
CHANGE_LABEL = "TROCO PARA"
NOTE_TITLE = "OBSERVACOES:"
ITEMS_TITLE = "ITENS DO PEDIDO"
TOTAL_LABEL = "TOTAL"
FOOTER = "OBRIGADO PELA PREFERENCIA!"
CURRENCY = "R$"

TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"


def format_money(value: Decimal) -> str:
    """Two decimal places, always (``8.5`` -> ``"8.50"``)."""
    return f"{Decimal(value).quantize(Decimal('0.01'))}"


@dataclass(frozen=True)
class ReceiptItem:
    quantity: int
    name: str
    subtotal: str


@dataclass(frozen=True)
class Receipt:
    """Everything a receipt shows, in print order, already formatted."""

    store_name: str
    tagline: str
    fields: Tuple[Tuple[str, str], ...]
    note: str
    items: Tuple[ReceiptItem, ...]
    total: str

    @property
    def has_change_due(self) -> bool:
        return any(label == CHANGE_LABEL for label, _ in self.fields)


def assemble_receipt(
    order: Order,
    store_name: Optional[str] = None,
    tagline: Optional[str] = None,
) -> Receipt:
    """Build the receipt content for ``order`` (lines must be loaded).

    The change line is present only for cash payments that carry a
    change amount; the note block only when the note is not blank.
    """
    if order.delivery_kind == DeliveryKind.LOCATION:
        delivery = (LOCATION_LABEL, order.delivery_value)
    else:
        delivery = (OTHER_ADDRESS_LABEL, order.delivery_value or "Outro local")

    fields = [
        (ORDER_LABEL, f"#{order.id}"),
        (TIMESTAMP_LABEL, timezone.localtime(order.created_at).strftime(TIMESTAMP_FORMAT)),
        delivery,
        (UNIT_LABEL, order.unit_qualifier or "-"),
        (PAYMENT_LABEL, str(PaymentMethod(order.payment_method).label)),
    ]
    if order.payment_method == PaymentMethod.CASH and order.change_due is not None:
        fields.append((CHANGE_LABEL, f"{CURRENCY} {format_money(order.change_due)}"))

    items = tuple(
        ReceiptItem(
            quantity=line.quantity,
            name=line.product_name,
            subtotal=format_money(line.subtotal),
        )
        for line in order.lines.all()
    )

    return Receipt(
        store_name=store_name if store_name is not None else settings.RECEIPT_STORE_NAME,
        tagline=tagline if tagline is not None else settings.RECEIPT_TAGLINE,
        fields=tuple(fields),
        note=(order.note or "").strip(),
        items=items,
        total=format_money(order.total),
    )
