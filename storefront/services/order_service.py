from fastapi import HTTPException, status

from storefront.core.storage import KeyValueStorage
from storefront.models.order import Order
from storefront.models.user import SessionUser
from storefront.repositories.order_repo import OrderRepository
from storefront.schemas.cart import CartItemRead
from storefront.schemas.order import OrderRead, OrderStatusUpdate


class OrderService:
    """
    Business logic for the order store.

    Responsibilities:
      - order history for the current session
      - admin listing and status changes

    Orders are created only by the checkout wizard. Any status can be
    set from any status; there is no audit trail.
    """

    def __init__(self, order_repo: OrderRepository):
        self.order_repo = order_repo

    # -------- History view --------

    def list_history(
        self,
        storage: KeyValueStorage,
        session: SessionUser | None,
    ) -> list[OrderRead]:
        """
        Orders of the current session, newest first.

        Without a session the whole store is returned: the store belongs
        to a single client, as in the browser-local original.
        """
        orders = self.order_repo.list_all(storage)
        if session is not None:
            email = session.email.lower()
            orders = [o for o in orders if (o.user_email or "").lower() == email]
        return [self.to_read(o) for o in orders]

    def get_order(self, storage: KeyValueStorage, order_id: str) -> OrderRead:
        order = self.order_repo.get_by_id(storage, order_id)
        if not order:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )
        return self.to_read(order)

    # -------- Admin operations --------

    def list_all_orders(self, storage: KeyValueStorage) -> list[OrderRead]:
        return [self.to_read(o) for o in self.order_repo.list_all(storage)]

    def update_status(
        self,
        storage: KeyValueStorage,
        order_id: str,
        payload: OrderStatusUpdate,
    ) -> OrderRead:
        """
        Replace the status of one order (admin only).

        Items and total are left untouched.

        Raises:
            HTTPException(404): unknown id (the store is not written).
        """
        order = self.order_repo.update_status(storage, order_id, payload.status)
        if order is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Order not found",
            )
        return self.to_read(order)

    # -------- Helper DTO builder --------

    @staticmethod
    def to_read(order: Order) -> OrderRead:
        return OrderRead(
            id=order.id,
            date=order.date,
            user_email=order.user_email,
            items=[
                CartItemRead(**item.model_dump(), line_total=item.line_total)
                for item in order.items
            ],
            subtotal=order.subtotal,
            shipping_method=order.shipping_method,
            shipping_cost=order.shipping_cost,
            show_shipping=order.shipping_method is not None,
            total=order.total,
            status=order.status,
            receipt_summary=order.receipt_summary,
        )
