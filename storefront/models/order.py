from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import model_validator
from sqlmodel import SQLModel, Field

from storefront.models.cart import CartItem

# Verified: receipt accepted at checkout
# Pending | Shipped | Cancelled: set by admin
OrderStatus = Literal["Pending", "Verified", "Shipped", "Cancelled"]

# Older records were written with camelCase keys
_LEGACY_KEYS: dict[str, str] = {
    "userEmail": "user_email",
    "receiptSummary": "receipt_summary",
    "shippingMethod": "shipping_method",
    "shippingCost": "shipping_cost",
}


class Order(SQLModel):
    """
    Completed checkout.

    Persisted as one element of the JSON order list
    (key '<prefix>_orders', most recent first).

    Immutable after creation except `status`:
      - items is a snapshot of the cart at submission
      - total = sum(price * quantity) + shipping_cost, computed once
    """

    id: str = Field(
        description="Time-derived id (milliseconds since epoch)",
    )

    date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    user_email: str | None = Field(
        default=None,
        description="Session email, or guest email given at checkout",
    )

    items: list[CartItem] = Field(default_factory=list)

    total: float = Field(
        ge=0,
        description="Final amount including shipping",
    )

    status: OrderStatus = "Pending"

    receipt_summary: str | None = None

    # Missing on legacy records: cost 0 and no shipping line shown
    shipping_method: str | None = None
    shipping_cost: float = 0.0

    @model_validator(mode="before")
    @classmethod
    def accept_legacy_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for legacy, current in _LEGACY_KEYS.items():
            if legacy in data and current not in data:
                data[current] = data.pop(legacy)
        if data.get("shipping_cost") is None:
            data.pop("shipping_cost", None)
        return data

    @property
    def subtotal(self) -> float:
        return sum(item.line_total for item in self.items)
