"""Catalog URL configuration.

``products/`` GET (filters: ``name``, ``min_price``, ``max_price``,
``in_stock``) and POST; ``products/{id}/`` GET, PUT and DELETE.
"""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.products.views import ProductViewSet

router = DefaultRouter(trailing_slash=True)
router.register("products", ProductViewSet, basename="product")

urlpatterns = router.urls
