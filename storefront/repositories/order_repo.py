import logging

from pydantic import ValidationError

from storefront.core.storage import (
    ORDERS,
    KeyValueStorage,
    dump_json,
    load_json,
    storage_key,
)
from storefront.models.order import Order, OrderStatus

logger = logging.getLogger(__name__)


class OrderRepository:
    """
    Data access layer for the order store.

    NOTE:
      - The list is kept most-recent-first.
      - Orders are never deleted; only `status` is ever rewritten.
      - Each write is read-modify-write of the whole list.
    """

    @property
    def key(self) -> str:
        return storage_key(ORDERS)

    def list_all(self, storage: KeyValueStorage) -> list[Order]:
        orders: list[Order] = []
        for row in self._rows(storage):
            order = self._parse(row)
            if order is not None:
                orders.append(order)
        return orders

    def get_by_id(self, storage: KeyValueStorage, order_id: str) -> Order | None:
        for order in self.list_all(storage):
            if order.id == order_id:
                return order
        return None

    def append(self, storage: KeyValueStorage, order: Order) -> Order:
        """Prepend `order` so the newest order comes first."""
        rows = self._rows(storage)
        dump_json(storage, self.key, [order.model_dump(mode="json"), *rows])
        return order

    def update_status(
        self,
        storage: KeyValueStorage,
        order_id: str,
        new_status: OrderStatus,
    ) -> Order | None:
        """
        Replace the status of the matching order.

        Returns the updated order, or None (nothing written) if no
        order has this id. Rows that fail validation are written back
        untouched.
        """
        rows = self._rows(storage)
        for index, row in enumerate(rows):
            order = self._parse(row)
            if order is not None and order.id == order_id:
                order.status = new_status
                rows[index] = order.model_dump(mode="json")
                dump_json(storage, self.key, rows)
                return order
        return None

    def _rows(self, storage: KeyValueStorage) -> list:
        raw = load_json(storage, self.key)
        return raw if isinstance(raw, list) else []

    @staticmethod
    def _parse(row) -> Order | None:
        try:
            return Order.model_validate(row)
        except ValidationError:
            logger.warning("Skipping malformed order record: %r", row)
            return None
