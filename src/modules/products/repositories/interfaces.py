"""Product repository interface.

Extends ``IRepository[Product]`` with the stock primitives used by the
inventory ledger during order submission.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def decrement_stock(self, id: int, quantity: int) -> bool:
        """Atomically subtract ``quantity`` if stock stays non-negative.

        Returns ``True`` when the row was updated, ``False`` when the
        product is missing or holds less than ``quantity``.  Must be a
        single compare-and-decrement statement, never read-then-write.
        """

    @abstractmethod
    def get_stock(self, id: int) -> Optional[int]:
        """Return the current stock, or ``None`` if the product is missing."""
