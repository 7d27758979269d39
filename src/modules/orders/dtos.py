"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer and the Service layer.
DTOs are immutable (``frozen=True``).

- ``CartLineDTO``: one client-supplied cart line.
- ``LocationDelivery`` / ``OtherDelivery``: delivery tagged union.
- ``CashPayment`` / ``OtherPayment``: payment tagged union.
- ``SubmitOrderDTO``: the whole submission; ``from_payload`` turns
  pydantic errors into the typed ``OrderValidationError`` family.
- ``DeliveryCountDTO`` / ``DashboardSummaryDTO``: dashboard output.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from modules.orders.exceptions import (
    EmptyCart,
    InvalidDelivery,
    InvalidPayment,
    OrderValidationError,
)

# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CartLineDTO(BaseModel):
    """Immutable DTO for a single cart line.

    ``name`` and ``price`` become the order line snapshot.
    """

    model_config = ConfigDict(frozen=True)

    product_id: int
    name: str
    price: Decimal
    quantity: int

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Product name must not be empty.")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_be_money(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Price cannot be negative.")
        if v.as_tuple().exponent < -2:
            raise ValueError("Price must have at most two decimal places.")
        return v

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class LocationDelivery(BaseModel):
    """Delivery to one of the served communities."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["LOCATION"] = "LOCATION"
    name: str

    @property
    def value(self) -> str:
        return self.name

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Community name must not be blank.")
        return v.strip()


class OtherDelivery(BaseModel):
    """Delivery to a free-text address outside the served communities."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["OTHER"] = "OTHER"
    address: str

    @property
    def value(self) -> str:
        return self.address

    @field_validator("address")
    @classmethod
    def address_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Address must not be blank.")
        return v.strip()


DeliveryInfo = Annotated[
    Union[LocationDelivery, OtherDelivery], Field(discriminator="kind")
]


class CashPayment(BaseModel):
    """Cash on delivery; ``change_due`` is the note the customer pays with."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: Literal["CASH"] = "CASH"
    change_due: Optional[Decimal] = None

    @field_validator("change_due")
    @classmethod
    def change_must_be_positive(cls, v: Optional[Decimal]) -> Optional[Decimal]:
        if v is not None and v <= 0:
            raise ValueError("Change amount must be greater than zero.")
        if v is not None and v.as_tuple().exponent < -2:
            raise ValueError("Change amount must have at most two decimal places.")
        return v


class OtherPayment(BaseModel):
    """Card or Pix: recorded only, never charged here.

    ``change_due`` may be sent as ``null``; any amount is rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: Literal["CARD", "PIX"]
    change_due: None = None


PaymentInfo = Annotated[Union[CashPayment, OtherPayment], Field(discriminator="method")]


class SubmitOrderDTO(BaseModel):
    """Immutable DTO for order submissions.

    Validates:
    - ``items`` must contain at least one line.
    - ``delivery`` is a community or a free-text address, never blank.
    - ``payment`` method is known; change only for cash.
    """

    model_config = ConfigDict(frozen=True)

    items: List[CartLineDTO] = Field(min_length=1)
    delivery: DeliveryInfo
    unit: str = ""
    payment: PaymentInfo
    note: str = ""

    @field_validator("unit", "note")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> SubmitOrderDTO:
        """Validate a raw payload, raising the typed validation errors.

        Raises:
            EmptyCart: ``items`` missing, null or empty.
            InvalidDelivery: delivery descriptor missing or blank.
            InvalidPayment: unknown method or change for non-cash.
            OrderValidationError: any other malformed field.
        """
        try:
            return cls.model_validate(data)
        except PydanticValidationError as exc:
            raise _translate_validation_error(exc) from exc


def _translate_validation_error(exc: PydanticValidationError) -> OrderValidationError:
    errors = exc.errors()
    by_field = {str(error["loc"][0]) for error in errors if error["loc"]}

    for error in errors:
        loc = error["loc"]
        if loc == ("items",) and error["type"] in {"missing", "too_short", "list_type"}:
            return EmptyCart("Cart must have at least one item.")
    if "delivery" in by_field:
        return InvalidDelivery("Provide a community or a delivery address.")
    if "payment" in by_field:
        return InvalidPayment(
            "Unknown payment method, or change requested for a non-cash payment."
        )

    first = errors[0]
    field = ".".join(str(part) for part in first["loc"])
    return OrderValidationError(f"{field}: {first['msg']}")


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class DeliveryCountDTO(BaseModel):
    """Number of orders for one delivery descriptor."""

    model_config = ConfigDict(frozen=True)

    delivery_kind: str
    delivery_value: str
    total: int


class DashboardSummaryDTO(BaseModel):
    """Immutable DTO for the staff dashboard."""

    model_config = ConfigDict(frozen=True)

    total: int
    by_status: Dict[str, int]
    by_delivery: List[DeliveryCountDTO]
