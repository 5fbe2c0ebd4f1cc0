from pydantic import ConfigDict
from sqlmodel import SQLModel


class CartItemCreate(SQLModel):
    """
    Payload for adding one unit of a product to the cart.
    """

    model_config = ConfigDict(extra="forbid")

    product_id: int


class CartItemUpdate(SQLModel):
    """
    Payload for replacing the quantity of a cart row.

    A quantity <= 0 is accepted and ignored (the row is kept unchanged);
    removing a row is an explicit DELETE.
    """

    model_config = ConfigDict(extra="forbid")

    quantity: int


class CartItemRead(SQLModel):
    """
    Read model for a single cart row, including line_total.
    """

    id: int
    name: str
    price: float
    category: str
    image: str
    quantity: int
    line_total: float


class CartSummary(SQLModel):
    """
    Full cart response model with totals and the panel flag.
    """

    items: list[CartItemRead]
    total_quantity: int
    total_price: float
    is_open: bool
