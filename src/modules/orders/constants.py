"""Order domain constants.

Defines status choices, the (single) valid status transition, and the
enumerations used by the delivery and payment tagged unions.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "PENDING", "Pendente"
    PRINTED = "PRINTED", "Impresso"


VALID_TRANSITIONS: dict[str, set[str]] = {
    OrderStatus.PENDING: {OrderStatus.PRINTED},
    OrderStatus.PRINTED: set(),
}


class DeliveryKind(models.TextChoices):
    LOCATION = "LOCATION", "Condomínio"
    OTHER = "OTHER", "Outro local"


class PaymentMethod(models.TextChoices):
    CASH = "CASH", "Dinheiro"
    CARD = "CARD", "Cartão"
    PIX = "PIX", "Pix"


class HistoryScope(models.TextChoices):
    ALL = "ALL", "Todo o histórico"
    TODAY = "TODAY", "Pedidos de hoje"
