from enum import Enum

from pydantic import ConfigDict
from sqlmodel import SQLModel, Field


class CheckoutStep(str, Enum):
    SHIPPING = "shipping"
    PAYMENT = "payment"
    REVIEW = "review"


class PaymentStatus(str, Enum):
    IDLE = "IDLE"
    ANALYZING = "ANALYZING"
    SUCCESS = "SUCCESS"
    ERROR = "ERROR"


class ShippingOption(SQLModel):
    """
    Fixed shipping choice shown on the first wizard step.
    """

    id: str
    name: str
    price: float
    min_days: int
    max_days: int

    @property
    def duration(self) -> str:
        return f"{self.min_days}-{self.max_days} business days"


class ShippingSelection(SQLModel):
    model_config = ConfigDict(extra="forbid")

    shipping_option_id: str


class ReceiptAnalysisResult(SQLModel):
    """
    Verdict returned by a receipt verifier.
    """

    is_valid: bool
    summary: str
    detected_amount: str | None = None


class ReceiptRead(SQLModel):
    filename: str
    content_type: str | None
    size: int


class ShippingOptionRead(SQLModel):
    id: str
    name: str
    price: float
    duration: str


class CheckoutRead(SQLModel):
    """
    Snapshot of the checkout wizard for the client.

    `receipt_accept` / `receipt_max_bytes` are upload hints only;
    the service does not enforce them.
    """

    step: CheckoutStep
    status: PaymentStatus
    shipping_options: list[ShippingOptionRead]
    shipping_option_id: str
    subtotal: float
    shipping_cost: float
    final_total: float
    phone_number: str | None
    guest_email: str | None
    receipt: ReceiptRead | None
    error_message: str | None
    receipt_summary: str | None
    order_id: str | None
    can_submit: bool
    receipt_accept: str = "image/*"
    receipt_max_bytes: int = Field(default=5 * 1024 * 1024)
