from sqlmodel import Field

from storefront.models.product import Product


class CartItem(Product):
    """
    Cart row: a product snapshot plus quantity.
    The cart never holds two rows for the same product id.
    """

    quantity: int = Field(
        default=1,
        ge=1,
        description="Must be >= 1",
    )

    @property
    def line_total(self) -> float:
        return self.price * self.quantity
