import random
import time

from fastapi import HTTPException, status

from storefront.core.storage import KeyValueStorage
from storefront.models.product import Product
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import PLACEHOLDER_IMAGE, ProductCreate

ALL_CATEGORIES = "All"


class ProductService:
    """
    Business logic for the catalog store.

    Responsibilities:
      - category filtering for the product grid
      - id assignment for admin-created products
      - admin-only operations (enforced at router via require_admin)
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    # ----- Helpers -----

    @staticmethod
    def _next_id(existing: list[Product]) -> int:
        """
        Time-derived id (milliseconds), bumped past the largest existing
        id so two products created in the same millisecond stay unique.
        """
        candidate = int(time.time() * 1000)
        highest = max((p.id for p in existing), default=0)
        return max(candidate, highest + 1)

    # ----- Products -----

    def list_products(
        self,
        storage: KeyValueStorage,
        category: str | None = None,
    ) -> list[Product]:
        products = self.repo.list_all(storage)
        if category is None or category == ALL_CATEGORIES:
            return products
        return [p for p in products if p.category == category]

    def list_categories(self, storage: KeyValueStorage) -> list[str]:
        """'All' followed by every distinct category, sorted."""
        categories = {p.category for p in self.repo.list_all(storage)}
        return [ALL_CATEGORIES, *sorted(categories)]

    def get_product(self, storage: KeyValueStorage, product_id: int) -> Product:
        product = self.repo.get_by_id(storage, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def related_products(
        self,
        storage: KeyValueStorage,
        product_id: int,
        limit: int = 4,
    ) -> list[Product]:
        """Other products from the same category (product detail view)."""
        product = self.get_product(storage, product_id)
        related = [
            p
            for p in self.repo.list_all(storage)
            if p.category == product.category and p.id != product.id
        ]
        return related[:limit]

    def create_product(
        self,
        storage: KeyValueStorage,
        payload: ProductCreate,
    ) -> Product:
        existing = self.repo.list_all(storage)
        image = payload.image or f"{PLACEHOLDER_IMAGE}?random={random.randint(0, 999)}"

        product = Product(
            id=self._next_id(existing),
            name=payload.name,
            price=payload.price,
            category=payload.category,
            image=image,
        )
        return self.repo.create(storage, product)

    def delete_product(self, storage: KeyValueStorage, product_id: int) -> None:
        """
        Remove a product from the catalog.

        Carts and past orders keep their own snapshots.
        """
        if not self.repo.delete(storage, product_id):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
