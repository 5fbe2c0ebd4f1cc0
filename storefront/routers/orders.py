from fastapi import APIRouter, Depends

from storefront.core.auth import get_current_session, require_admin
from storefront.core.storage import KeyValueStorage
from storefront.database import get_storage
from storefront.models.user import SessionUser
from storefront.repositories.order_repo import OrderRepository
from storefront.schemas.order import OrderRead, OrderStatusUpdate
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

order_repo = OrderRepository()
service = OrderService(order_repo)


# -------- History view --------


@router.get("/history", response_model=list[OrderRead])
def list_order_history(
    storage: KeyValueStorage = Depends(get_storage),
    session: SessionUser | None = Depends(get_current_session),
):
    """
    Orders of the logged-in customer, newest first.

    Without a session, every order recorded by this storefront.
    """
    return service.list_history(storage, session)


# -------- Admin endpoints --------


@router.get(
    "",
    response_model=list[OrderRead],
    dependencies=[Depends(require_admin)],
)
def list_all_orders(storage: KeyValueStorage = Depends(get_storage)):
    """
    List all orders (admin only).
    """
    return service.list_all_orders(storage)


@router.get(
    "/{order_id}",
    response_model=OrderRead,
    dependencies=[Depends(require_admin)],
)
def get_order_admin(
    order_id: str,
    storage: KeyValueStorage = Depends(get_storage),
):
    """
    Get any order (admin only).
    """
    return service.get_order(storage, order_id)


@router.patch(
    "/{order_id}/status",
    response_model=OrderRead,
    dependencies=[Depends(require_admin)],
)
def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    storage: KeyValueStorage = Depends(get_storage),
):
    """
    Set order status (admin only).

    Any of Pending, Verified, Shipped, Cancelled can be set from any
    status. Items and total never change.
    """
    return service.update_status(storage, order_id, payload)
