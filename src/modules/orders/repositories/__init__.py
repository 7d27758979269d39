"""Order store: the interface the services depend on and its ORM backing."""

from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.repositories.interfaces import IOrderRepository

__all__ = ["IOrderRepository", "OrderDjangoRepository"]
