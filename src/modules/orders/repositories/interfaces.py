"""Order repository interface.

Extends ``IRepository[Order]`` with the methods required by the Order
aggregate: atomic creation with lines, compare-and-set status changes,
bulk history clearing and the dashboard aggregates.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderLine children.  Mutations must
    be atomic.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its lines atomically.

        ``data`` must include the header fields and ``lines`` (list of
        dicts with ``product_name``, ``quantity``, ``unit_price``).
        """

    @abstractmethod
    def get_for_update(self, id: int) -> Optional[Order]:
        """Retrieve an order holding a row-level lock until commit."""

    @abstractmethod
    def list_by_status(self, status: str) -> List[Order]:
        """Orders in ``status`` with their lines, newest first."""

    @abstractmethod
    def set_status(self, id: int, new_status: str) -> Order:
        """Compare-and-set transition validated against the state machine."""

    @abstractmethod
    def delete_all(self) -> int:
        """Delete every order (lines cascade); return the order count."""

    @abstractmethod
    def delete_before(self, timestamp: datetime) -> int:
        """Delete orders created strictly before ``timestamp``."""

    @abstractmethod
    def delete_created_on(self, day: date) -> int:
        """Delete orders whose local creation date is ``day``."""

    @abstractmethod
    def count_by_status(self) -> Dict[str, int]:
        """Order count per status (statuses without orders omitted)."""

    @abstractmethod
    def count_by_delivery(self) -> List[Dict[str, Any]]:
        """Order count per delivery descriptor, most frequent first."""
