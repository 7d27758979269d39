"""Product service layer (Use Cases).

Orchestrates catalog management for the Product aggregate, delegating
persistence to the injected ``IProductRepository`` and image bytes to a
Django storage backend.

Business rules enforced here:
- Price and stock cannot be negative (validated by DTO and model).
- Updating a product without a new image keeps the previous reference.
- Deleting a product never touches historical orders.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.core.files.storage import Storage, default_storage
from django.db import transaction
from django.utils import timezone
from django.utils.text import get_valid_filename

from modules.products.exceptions import ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from django.core.files import File

    from modules.products.dtos import UpsertProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(
        self,
        repository: IProductRepository,
        storage: Optional[Storage] = None,
    ) -> None:
        self._repo = repository
        self._storage = storage or default_storage

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def upsert_product(
        self, dto: UpsertProductDTO, image: Optional[File] = None
    ) -> Product:
        """Create a product (``dto.id`` is ``None``) or replace its fields.

        Raises:
            ProductNotFound: ``dto.id`` was given but does not exist.
        """
        if dto.id is None:
            product = Product()
        else:
            product = self._repo.get_by_id(dto.id)
            if not product:
                raise ProductNotFound(dto.id)

        product.name = dto.name
        product.price = dto.price
        product.stock = dto.stock
        if image is not None:
            product.image_ref = self._store_image(image)

        product = self._repo.save(product)
        logger.info(
            "product.upserted",
            product_id=product.id,
            created=dto.id is None,
            image_ref=product.image_ref,
        )
        return product

    @transaction.atomic
    def delete_product(self, id: int) -> None:
        """Hard-delete a product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.delete(id):
            raise ProductNotFound(id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """Return the catalog, newest first, optionally filtered."""
        return self._repo.list(filters)

    def get_product(self, id: int) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(id)
        return product

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _store_image(self, image: File) -> str:
        """Save the upload as ``<epoch-ms>-<name>`` and return its URL."""
        stamp = int(timezone.now().timestamp() * 1000)
        filename = get_valid_filename(image.name or "imagem")
        saved_name = self._storage.save(f"{stamp}-{filename}", image)
        return self._storage.url(saved_name)
