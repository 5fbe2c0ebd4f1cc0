from fastapi import APIRouter, Depends

from storefront.core.storage import KeyValueStorage
from storefront.database import get_storage
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.wishlist_repo import WishlistRepository
from storefront.schemas.product import ProductRead
from storefront.services.product_service import ProductService
from storefront.services.wishlist_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])

service = WishlistService(WishlistRepository(), ProductService(ProductRepository()))


@router.get("", response_model=list[ProductRead])
def list_wishlist(storage: KeyValueStorage = Depends(get_storage)):
    """
    Wished products, in the order they were added.
    """
    return service.list_products(storage)


@router.get("/ids", response_model=list[int])
def list_wishlist_ids(storage: KeyValueStorage = Depends(get_storage)):
    return service.list_ids(storage)


@router.post("/{product_id}", response_model=list[int])
def toggle_wishlist(
    product_id: int,
    storage: KeyValueStorage = Depends(get_storage),
):
    """
    Add the product to the wishlist, or remove it if already there.

    Returns the resulting id list.
    """
    return service.toggle(storage, product_id)
