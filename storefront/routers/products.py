from fastapi import APIRouter, Depends, Query, status

from storefront.core.auth import require_admin
from storefront.core.storage import KeyValueStorage
from storefront.database import get_storage
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import ProductCreate, ProductRead
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


# -------- Public endpoints --------


@router.get("", response_model=list[ProductRead])
def list_products(
    category: str | None = None,
    storage: KeyValueStorage = Depends(get_storage),
):
    """
    List catalog products.

    - `category` filters on an exact category label; "All" or omitted
      returns everything.
    """
    return service.list_products(storage, category=category)


@router.get("/categories", response_model=list[str])
def list_categories(storage: KeyValueStorage = Depends(get_storage)):
    """
    Category filter values: "All" first, then sorted labels.
    """
    return service.list_categories(storage)


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: int,
    storage: KeyValueStorage = Depends(get_storage),
):
    """
    Get a single product by id.
    """
    return service.get_product(storage, product_id)


@router.get("/{product_id}/related", response_model=list[ProductRead])
def list_related_products(
    product_id: int,
    limit: int = Query(4, ge=0),
    storage: KeyValueStorage = Depends(get_storage),
):
    """
    Other products from the same category.
    """
    return service.related_products(storage, product_id, limit=limit)


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product(
    payload: ProductCreate,
    storage: KeyValueStorage = Depends(get_storage),
):
    """
    Add a product to the catalog (admin only).
    """
    return service.create_product(storage, payload)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_product(
    product_id: int,
    storage: KeyValueStorage = Depends(get_storage),
):
    """
    Remove a product from the catalog (admin only).
    """
    service.delete_product(storage, product_id)
    return None
