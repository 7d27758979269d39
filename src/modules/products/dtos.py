"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``UpsertProductDTO``: input for creating (no ``id``) or replacing
  (with ``id``) a catalog item.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class UpsertProductDTO(BaseModel):
    """Immutable DTO for the admin product form.

    Validates:
    - ``name`` is a non-empty string.
    - ``price`` is a non-negative Decimal with at most two places.
    - ``stock`` is non-negative.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None
    name: str
    price: Decimal
    stock: int = 0

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Name must not be empty.")
        return v.strip()

    @field_validator("price")
    @classmethod
    def price_must_be_non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Price cannot be negative.")
        if v.as_tuple().exponent < -2:
            raise ValueError("Price must have at most two decimal places.")
        return v

    @field_validator("stock")
    @classmethod
    def stock_must_be_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Stock cannot be negative.")
        return v
