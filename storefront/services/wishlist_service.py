from storefront.core.storage import KeyValueStorage
from storefront.models.product import Product
from storefront.repositories.wishlist_repo import WishlistRepository
from storefront.services.product_service import ProductService


class WishlistService:
    """Persisted wishlist of catalog products."""

    def __init__(self, repo: WishlistRepository, product_service: ProductService):
        self.repo = repo
        self.product_service = product_service

    def toggle(self, storage: KeyValueStorage, product_id: int) -> list[int]:
        """
        Add the product if absent, remove it if present.

        404 if the product is not in the catalog.
        """
        self.product_service.get_product(storage, product_id)
        ids = self.repo.list_ids(storage)
        if product_id in ids:
            ids.remove(product_id)
        else:
            ids.append(product_id)
        self.repo.save_ids(storage, ids)
        return ids

    def list_ids(self, storage: KeyValueStorage) -> list[int]:
        return self.repo.list_ids(storage)

    def list_products(self, storage: KeyValueStorage) -> list[Product]:
        """Wished products still in the catalog, in wish order."""
        catalog = {p.id: p for p in self.product_service.list_products(storage)}
        return [catalog[i] for i in self.repo.list_ids(storage) if i in catalog]
