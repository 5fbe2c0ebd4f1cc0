from fastapi import APIRouter, Depends

from storefront.core.auth import require_admin
from storefront.core.storage import KeyValueStorage
from storefront.database import get_storage
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.stats_repo import StatsRepository
from storefront.repositories.user_repo import UserRepository
from storefront.schemas.stats import AdminDashboardStats
from storefront.services.stats_service import StatsService

router = APIRouter(prefix="/admin/stats", tags=["Admin Stats"])

repo = StatsRepository(OrderRepository(), UserRepository())
service = StatsService(repo)


@router.get(
    "",
    response_model=AdminDashboardStats,
    dependencies=[Depends(require_admin)],
)
def get_admin_dashboard_stats(
    top: int = 5,
    latest: int = 5,
    storage: KeyValueStorage = Depends(get_storage),
):
    """
    Aggregated statistics for the admin dashboard.

    Query params (optional):
      - top: number of best-selling products (default 5)
      - latest: number of most recent orders (default 5)

    Only accessible while the session role is 'admin'.
    """
    return service.get_admin_dashboard_stats(
        storage=storage,
        top_n_products=top,
        latest_n_orders=latest,
    )
