import logging

from pydantic import ValidationError

from storefront.core.storage import (
    PRODUCTS,
    KeyValueStorage,
    dump_json,
    load_json,
    storage_key,
)
from storefront.models.product import SEED_PRODUCTS, Product

logger = logging.getLogger(__name__)


class ProductRepository:
    """
    Data access layer for the catalog store.

    - Whole product list under one key.
    - No FastAPI, no business logic.
    """

    @property
    def key(self) -> str:
        return storage_key(PRODUCTS)

    def list_all(self, storage: KeyValueStorage) -> list[Product]:
        """
        Return the persisted catalog, or the seed list if nothing
        has been persisted yet.
        """
        products: list[Product] = []
        for row in self._rows(storage):
            product = self._parse(row)
            if product is not None:
                products.append(product)
        return products

    def get_by_id(self, storage: KeyValueStorage, product_id: int) -> Product | None:
        for product in self.list_all(storage):
            if product.id == product_id:
                return product
        return None

    def save_all(self, storage: KeyValueStorage, products: list[Product]) -> None:
        dump_json(storage, self.key, [p.model_dump(mode="json") for p in products])

    def seed_if_empty(self, storage: KeyValueStorage) -> bool:
        """
        Persist the seed catalog once.

        Returns:
            True if the seed was written, False if a catalog already existed.
        """
        if storage.get(self.key) is not None:
            return False
        self.save_all(storage, SEED_PRODUCTS)
        return True

    def create(self, storage: KeyValueStorage, product: Product) -> Product:
        rows = self._rows(storage)
        rows.append(product.model_dump(mode="json"))
        dump_json(storage, self.key, rows)
        return product

    def delete(self, storage: KeyValueStorage, product_id: int) -> bool:
        """Drop the matching product; rows that fail validation are kept."""
        rows = self._rows(storage)
        remaining = []
        for row in rows:
            product = self._parse(row)
            if product is None or product.id != product_id:
                remaining.append(row)
        if len(remaining) == len(rows):
            return False
        dump_json(storage, self.key, remaining)
        return True

    def _rows(self, storage: KeyValueStorage) -> list:
        raw = load_json(storage, self.key)
        if not isinstance(raw, list):
            return [p.model_dump(mode="json") for p in SEED_PRODUCTS]
        return raw

    @staticmethod
    def _parse(row) -> Product | None:
        try:
            return Product.model_validate(row)
        except ValidationError:
            logger.warning("Skipping malformed product record: %r", row)
            return None
