from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel

from storefront.models.order import OrderStatus


class TopProduct(SQLModel):
    """
    Aggregated stats for top-selling products.
    """
    model_config = ConfigDict(extra="forbid")

    product_id: int
    name: str
    total_quantity: int
    total_revenue: float


class LatestOrderSummary(SQLModel):
    """
    Lightweight info for last N orders.
    """
    model_config = ConfigDict(extra="forbid")

    id: str
    date: datetime
    user_email: str | None
    total: float
    status: OrderStatus


class AdminDashboardStats(SQLModel):
    """
    Full payload for admin dashboard.
    """
    model_config = ConfigDict(extra="forbid")

    total_customers: int
    total_orders: int
    total_revenue: float
    top_products: list[TopProduct]
    latest_orders: list[LatestOrderSummary]
