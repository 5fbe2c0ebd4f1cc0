from fastapi import APIRouter, Depends

from storefront.core.state import get_cart
from storefront.core.storage import KeyValueStorage
from storefront.database import get_storage
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import CartItemCreate, CartItemUpdate, CartSummary
from storefront.services.cart_service import CartService, CartState
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/cart", tags=["Cart"])

product_service = ProductService(ProductRepository())
service = CartService(product_service)


@router.get("", response_model=CartSummary)
def get_cart_summary(cart: CartState = Depends(get_cart)):
    """
    Current cart with line totals and grand total.
    """
    return service.get_cart_summary(cart)


@router.post("", response_model=CartSummary)
def add_to_cart(
    payload: CartItemCreate,
    storage: KeyValueStorage = Depends(get_storage),
    cart: CartState = Depends(get_cart),
):
    """
    Add one unit of a product and open the cart panel.
    """
    return service.add_to_cart(storage, cart, payload.product_id)


@router.patch("/{product_id}", response_model=CartSummary)
def update_cart_item(
    product_id: int,
    payload: CartItemUpdate,
    cart: CartState = Depends(get_cart),
):
    """
    Replace the quantity of a cart row.

    Quantities <= 0 are ignored; use DELETE to remove a row.
    """
    return service.update_quantity(cart, product_id, payload.quantity)


@router.delete("/{product_id}", response_model=CartSummary)
def remove_cart_item(
    product_id: int,
    cart: CartState = Depends(get_cart),
):
    """
    Remove a product row from the cart (no-op if absent).
    """
    return service.remove_item(cart, product_id)


@router.delete("", response_model=CartSummary)
def clear_cart(cart: CartState = Depends(get_cart)):
    """
    Clear the entire cart.
    """
    return service.clear_cart(cart)


@router.post("/open", response_model=CartSummary)
def open_cart_panel(cart: CartState = Depends(get_cart)):
    cart.open_panel()
    return service.get_cart_summary(cart)


@router.post("/close", response_model=CartSummary)
def close_cart_panel(cart: CartState = Depends(get_cart)):
    cart.close_panel()
    return service.get_cart_summary(cart)
