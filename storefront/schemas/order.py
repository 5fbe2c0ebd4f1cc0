from datetime import datetime

from pydantic import ConfigDict
from sqlmodel import SQLModel

from storefront.models.order import OrderStatus
from storefront.schemas.cart import CartItemRead


class OrderRead(SQLModel):
    """
    Order as shown by the history and admin views.

    - subtotal: sum of item lines (derived for display, the stored total
      is never recomputed)
    - show_shipping: False for legacy orders written without shipping data
    """

    id: str
    date: datetime
    user_email: str | None
    items: list[CartItemRead]
    subtotal: float
    shipping_method: str | None
    shipping_cost: float
    show_shipping: bool
    total: float
    status: OrderStatus
    receipt_summary: str | None


class OrderStatusUpdate(SQLModel):
    """
    Admin payload to change order status.
    """

    model_config = ConfigDict(extra="forbid")

    status: OrderStatus
