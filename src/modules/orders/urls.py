"""Order URL configuration.

Routes (under ``/api/v1/``):

- ``orders/`` GET (``?status=``), POST
- ``orders/{id}/`` GET
- ``orders/{id}/receipt/`` GET (``?variant=html|escpos``)
- ``orders/{id}/print/``, ``orders/{id}/mark-printed/`` POST
- ``orders/dashboard/`` GET
- ``orders/history/`` DELETE (``?scope=all|today``)
"""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.orders.views import OrderViewSet

router = DefaultRouter(trailing_slash=True)
router.register("orders", OrderViewSet, basename="order")

urlpatterns = router.urls
