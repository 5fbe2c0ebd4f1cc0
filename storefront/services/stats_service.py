from storefront.core.storage import KeyValueStorage
from storefront.repositories.stats_repo import StatsRepository
from storefront.schemas.stats import (
    AdminDashboardStats,
    LatestOrderSummary,
    TopProduct,
)


class StatsService:
    """
    Orchestrates aggregated admin dashboard statistics.
    """

    def __init__(self, repo: StatsRepository):
        self.repo = repo

    def get_admin_dashboard_stats(
        self,
        storage: KeyValueStorage,
        top_n_products: int = 5,
        latest_n_orders: int = 5,
    ) -> AdminDashboardStats:
        top_products = [
            TopProduct(
                product_id=product_id,
                name=name,
                total_quantity=total_quantity,
                total_revenue=product_revenue,
            )
            for product_id, name, total_quantity, product_revenue in self.repo.top_products(
                storage, limit=top_n_products
            )
        ]

        latest_orders = [
            LatestOrderSummary(
                id=o.id,
                date=o.date,
                user_email=o.user_email,
                total=o.total,
                status=o.status,
            )
            for o in self.repo.latest_orders(storage, limit=latest_n_orders)
        ]

        return AdminDashboardStats(
            total_customers=self.repo.count_customers(storage),
            total_orders=self.repo.count_orders(storage),
            total_revenue=self.repo.total_revenue(storage),
            top_products=top_products,
            latest_orders=latest_orders,
        )
