from collections import defaultdict

from storefront.core.storage import KeyValueStorage
from storefront.models.order import Order
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.user_repo import UserRepository


class StatsRepository:
    """
    Read-only aggregates for the admin dashboard.

    Cancelled orders are excluded from revenue and product totals.
    """

    def __init__(self, order_repo: OrderRepository, user_repo: UserRepository):
        self.order_repo = order_repo
        self.user_repo = user_repo

    def count_customers(self, storage: KeyValueStorage) -> int:
        return sum(1 for u in self.user_repo.list(storage) if u.role == "customer")

    def count_orders(self, storage: KeyValueStorage) -> int:
        return len(self.order_repo.list_all(storage))

    def total_revenue(self, storage: KeyValueStorage) -> float:
        return round(
            sum(o.total for o in self._billable_orders(storage)),
            2,
        )

    def top_products(
        self,
        storage: KeyValueStorage,
        limit: int = 5,
    ) -> list[tuple]:
        """
        Top products by quantity sold.

        Returns rows of (product_id, name, total_quantity, total_revenue),
        largest quantity first.
        """
        quantities: dict[int, int] = defaultdict(int)
        revenues: dict[int, float] = defaultdict(float)
        names: dict[int, str] = {}

        for order in self._billable_orders(storage):
            for item in order.items:
                quantities[item.id] += item.quantity
                revenues[item.id] += item.line_total
                names.setdefault(item.id, item.name)

        ranked = sorted(quantities, key=lambda pid: quantities[pid], reverse=True)
        return [
            (pid, names[pid], quantities[pid], round(revenues[pid], 2))
            for pid in ranked[:limit]
        ]

    def latest_orders(
        self,
        storage: KeyValueStorage,
        limit: int = 5,
    ) -> list[Order]:
        """
        Latest N orders (any status). The store is already newest first.
        """
        return self.order_repo.list_all(storage)[:limit]

    def _billable_orders(self, storage: KeyValueStorage) -> list[Order]:
        return [o for o in self.order_repo.list_all(storage) if o.status != "Cancelled"]
