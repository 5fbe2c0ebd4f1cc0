from storefront.core.storage import KeyValueStorage
from storefront.models.cart import CartItem
from storefront.models.product import Product
from storefront.schemas.cart import CartItemRead, CartSummary
from storefront.services.product_service import ProductService


class CartState:
    """
    In-memory cart of the browsing session (never persisted).

    Invariants:
      - at most one row per product id
      - every row has quantity >= 1

    All operations are total: unknown ids are ignored.
    """

    def __init__(self):
        self.items: list[CartItem] = []
        self.is_open = False

    def _find(self, product_id: int) -> CartItem | None:
        for item in self.items:
            if item.id == product_id:
                return item
        return None

    def add(self, product: Product) -> CartItem:
        """Add one unit (new row with quantity 1) and open the cart panel."""
        item = self._find(product.id)
        if item:
            item.quantity += 1
        else:
            item = CartItem(**product.model_dump(), quantity=1)
            self.items.append(item)
        self.is_open = True
        return item

    def remove(self, product_id: int) -> None:
        self.items = [item for item in self.items if item.id != product_id]

    def update_quantity(self, product_id: int, quantity: int) -> None:
        """
        Replace the quantity of a row.

        quantity <= 0 is ignored; it never removes the row.
        """
        if quantity <= 0:
            return
        item = self._find(product_id)
        if item:
            item.quantity = quantity

    def clear(self) -> None:
        self.items = []

    def total(self) -> float:
        return sum(item.line_total for item in self.items)

    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    def snapshot(self) -> list[CartItem]:
        """Deep copy of the rows, for storing inside an order."""
        return [item.model_copy() for item in self.items]

    def open_panel(self) -> None:
        self.is_open = True

    def close_panel(self) -> None:
        self.is_open = False


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - resolve product ids through the catalog before adding
      - compute line totals and cart totals for the client
    """

    def __init__(self, product_service: ProductService):
        self.product_service = product_service

    def get_cart_summary(self, cart: CartState) -> CartSummary:
        """
        Return full cart summary:
          - list of CartItemRead (with line_total)
          - total_quantity
          - total_price
        """
        item_reads = [
            CartItemRead(**item.model_dump(), line_total=item.line_total)
            for item in cart.items
        ]
        return CartSummary(
            items=item_reads,
            total_quantity=cart.total_quantity(),
            total_price=cart.total(),
            is_open=cart.is_open,
        )

    def add_to_cart(
        self,
        storage: KeyValueStorage,
        cart: CartState,
        product_id: int,
    ) -> CartSummary:
        """
        Add one unit of a catalog product.

        404 if the product is not in the catalog.
        """
        product = self.product_service.get_product(storage, product_id)
        cart.add(product)
        return self.get_cart_summary(cart)

    def update_quantity(
        self,
        cart: CartState,
        product_id: int,
        quantity: int,
    ) -> CartSummary:
        cart.update_quantity(product_id, quantity)
        return self.get_cart_summary(cart)

    def remove_item(self, cart: CartState, product_id: int) -> CartSummary:
        cart.remove(product_id)
        return self.get_cart_summary(cart)

    def clear_cart(self, cart: CartState) -> CartSummary:
        cart.clear()
        return self.get_cart_summary(cart)
