"""Generic repository interface.

``IRepository[T]`` is the base contract every module's repository
interface extends.  Services receive these abstractions through their
constructors and never touch the ORM directly, which is what lets the
tests swap in failing or recording implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base repository contract over integer-keyed entities."""

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Return the entity, or ``None`` when missing or ``id`` is malformed."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[T]:
        """Entities matching ORM-style look-ups, in the model's default order."""

    @abstractmethod
    def save(self, entity: T) -> T:
        """Persist (create or update) an entity."""

    @abstractmethod
    def delete(self, id: int) -> bool:
        """Hard-delete by id; ``True`` if a row was removed."""
