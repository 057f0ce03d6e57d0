"""
Product Service
Catalog reads for the storefront and product management for the back-office

Author: Dreamy Delights
Date: 2025-06-16
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from bakery.core.errors import NotFoundError
from bakery.domain.product import Product, ProductCreate, ProductUpdate
from bakery.repositories.product_repository import ProductRepository
from bakery.services.storage_service import (
    ImageStorage,
    build_image_path,
    get_image_storage,
    validate_image,
)

logger = logging.getLogger(__name__)


@dataclass
class ImageUpload:
    """An uploaded image file read into memory"""
    data: bytes
    filename: Optional[str]
    content_type: Optional[str]


class ProductService:
    """
    Product operations

    Public reads only ever return active products. Image storage is resolved
    lazily so catalog reads work without storage settings.
    """

    def __init__(
        self,
        repo: Optional[ProductRepository] = None,
        storage_factory: Callable[[], ImageStorage] = get_image_storage
    ):
        self.repo = repo or ProductRepository()
        self._storage_factory = storage_factory

    # ------------------------------------------------------------------
    # Storefront
    # ------------------------------------------------------------------

    def list_public(self, page: int = 1, limit: int = 10, category: Optional[str] = None) -> Tuple[List[Product], int]:
        offset = (page - 1) * limit
        return self.repo.find_all(category=category, active=True, limit=limit, offset=offset)

    def list_featured(self, limit: int = 6) -> List[Product]:
        return self.repo.find_featured(limit=limit)

    def get_public(self, product_id: int) -> Product:
        product = self.repo.find_by_id(product_id)
        if product is None or not product.active:
            raise NotFoundError("Product not found")
        return product

    # ------------------------------------------------------------------
    # Back-office
    # ------------------------------------------------------------------

    def list_all(self, limit: int = 100, offset: int = 0, category: Optional[str] = None,
                 search: Optional[str] = None) -> Tuple[List[Product], int]:
        return self.repo.find_all(category=category, search=search, limit=limit, offset=offset)

    def _store_image(self, image: ImageUpload) -> Tuple[str, str]:
        validate_image(image.content_type, len(image.data))
        storage = self._storage_factory()
        path = build_image_path(image.filename, image.content_type)
        url = storage.upload(path, image.data, image.content_type)
        logger.info(f"Uploaded product image {path} ({len(image.data)} bytes)")
        return url, path

    def _discard_image(self, path: Optional[str]) -> None:
        if not path:
            return
        try:
            self._storage_factory().delete(path)
            logger.info(f"Deleted product image {path}")
        except Exception as e:
            # Row is already updated or deleted; leave the object behind
            logger.warning(f"Could not delete product image {path}: {e}")

    def create(self, request: ProductCreate, created_by: str, image: Optional[ImageUpload] = None) -> Product:
        data = request.model_dump()

        if image is not None:
            data['image_url'], data['image_path'] = self._store_image(image)

        product = self.repo.create(data, created_by=created_by)
        logger.info(f"Product {product.id} '{product.name}' created by {created_by}")
        return product

    def update(self, product_id: int, request: ProductUpdate, updated_by: str,
               image: Optional[ImageUpload] = None) -> Product:
        """
        Raises:
            NotFoundError: unknown product
        """
        existing = self.repo.find_by_id(product_id)
        if existing is None:
            raise NotFoundError("Product not found")

        changes = request.changes()
        if image is not None:
            changes['image_url'], changes['image_path'] = self._store_image(image)
        elif 'image_url' in changes and changes['image_url'] != existing.image_url:
            # Pointing at an external URL detaches any uploaded image
            changes['image_path'] = None

        product = self.repo.update(product_id, changes, updated_by=updated_by)
        if product is None:
            raise NotFoundError("Product not found")

        if existing.image_path and existing.image_path != product.image_path:
            self._discard_image(existing.image_path)

        logger.info(f"Product {product_id} updated by {updated_by}: {sorted(changes.keys())}")
        return product

    def delete(self, product_id: int, deleted_by: str) -> None:
        existing = self.repo.find_by_id(product_id)
        if existing is None or not self.repo.delete(product_id):
            raise NotFoundError("Product not found")

        self._discard_image(existing.image_path)
        logger.info(f"Product {product_id} deleted by {deleted_by}")

    def toggle_featured(self, product_id: int, updated_by: str) -> Product:
        product = self.repo.toggle_featured(product_id, updated_by=updated_by)
        if product is None:
            raise NotFoundError("Product not found")
        return product
