import asyncio
import base64
import logging
import time
from datetime import datetime, timezone

from fastapi import HTTPException, status

from storefront.core.storage import KeyValueStorage
from storefront.models.order import Order
from storefront.models.user import SessionUser
from storefront.repositories.order_repo import OrderRepository
from storefront.schemas.checkout import (
    CheckoutRead,
    CheckoutStep,
    PaymentStatus,
    ReceiptRead,
    ShippingOption,
    ShippingOptionRead,
)
from storefront.services.cart_service import CartState
from storefront.services.notification_service import OrderNotifier
from storefront.services.receipt_service import ReceiptVerifier

logger = logging.getLogger(__name__)

SHIPPING_OPTIONS: list[ShippingOption] = [
    ShippingOption(id="standard", name="Standard Shipping", price=5.99, min_days=5, max_days=7),
    ShippingOption(id="express", name="Express Shipping", price=14.99, min_days=1, max_days=2),
]

STEP_ORDER = [CheckoutStep.SHIPPING, CheckoutStep.PAYMENT, CheckoutStep.REVIEW]

MISSING_PAYMENT_DETAILS = "Please enter your phone number and upload the receipt to continue."
MISSING_SUBMIT_DETAILS = "Please provide both phone number and receipt."
INVALID_RECEIPT = "The uploaded image does not appear to be a valid receipt."
VERIFICATION_FAILED = "An error occurred during verification. Please try again."


class ReceiptFile:
    def __init__(self, filename: str, content: bytes, content_type: str | None = None):
        self.filename = filename
        self.content = content
        self.content_type = content_type

    def encode(self) -> str:
        """Base64 payload handed to the receipt verifier."""
        return base64.b64encode(self.content).decode("ascii")


class CheckoutWizard:
    """
    Three-step checkout: shipping -> payment -> review -> submit.

    State machine:
      - step moves one position per next()/back(), driven by the client
      - status is IDLE until the first submit, ANALYZING while the
        receipt verifier runs, then SUCCESS or ERROR

    Rules:
      - only one submission in flight; every mutation is rejected (409)
        while status is ANALYZING
      - an order is written only after the verifier accepts the receipt
      - verifier exceptions and timeouts become a retryable ERROR
      - the confirmation notifier is fire-and-forget
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        verifier: ReceiptVerifier,
        notifier: OrderNotifier,
        verification_timeout: float | None = 30.0,
    ):
        self.order_repo = order_repo
        self.verifier = verifier
        self.notifier = notifier
        self.verification_timeout = verification_timeout
        self._notifications: set[asyncio.Task] = set()
        self.reset()

    def reset(self) -> None:
        """Fresh wizard, as when the checkout modal is opened again."""
        self._ensure_idle()
        self.step = CheckoutStep.SHIPPING
        self.status = PaymentStatus.IDLE
        self.shipping_option_id = SHIPPING_OPTIONS[0].id
        self.phone_number: str | None = None
        self.guest_email: str | None = None
        self.receipt: ReceiptFile | None = None
        self.error_message: str | None = None
        self.receipt_summary: str | None = None
        self.order: Order | None = None

    # -------- Helpers --------

    @property
    def shipping_option(self) -> ShippingOption:
        for option in SHIPPING_OPTIONS:
            if option.id == self.shipping_option_id:
                return option
        return SHIPPING_OPTIONS[0]

    def final_total(self, subtotal: float) -> float:
        return round(subtotal + self.shipping_option.price, 2)

    def _ensure_idle(self) -> None:
        if getattr(self, "status", None) == PaymentStatus.ANALYZING:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Receipt verification is already in progress",
            )

    def _reject(self, message: str) -> HTTPException:
        self.error_message = message
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
        )

    def _has_payment_details(self) -> bool:
        return bool(self.phone_number) and self.receipt is not None

    def _new_order_id(self, storage: KeyValueStorage) -> str:
        candidate = int(time.time() * 1000)
        taken = {o.id for o in self.order_repo.list_all(storage)}
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    # -------- Steps --------

    def select_shipping(self, option_id: str) -> None:
        self._ensure_idle()
        if option_id not in {o.id for o in SHIPPING_OPTIONS}:
            raise self._reject(f"Unknown shipping option: {option_id}")
        self.shipping_option_id = option_id

    def set_payment_details(
        self,
        phone_number: str | None,
        guest_email: str | None = None,
        receipt: ReceiptFile | None = None,
    ) -> None:
        """
        Store payment-step inputs.

        A missing receipt keeps the previously uploaded one.
        """
        self._ensure_idle()
        self.phone_number = (phone_number or "").strip() or None
        self.guest_email = (guest_email or "").strip() or None
        if receipt is not None:
            self.receipt = receipt
        self.error_message = None

    def next(self) -> None:
        self._ensure_idle()
        self.error_message = None
        if self.step == CheckoutStep.PAYMENT and not self._has_payment_details():
            raise self._reject(MISSING_PAYMENT_DETAILS)
        position = STEP_ORDER.index(self.step)
        self.step = STEP_ORDER[min(position + 1, len(STEP_ORDER) - 1)]

    def back(self) -> None:
        self._ensure_idle()
        self.error_message = None
        position = STEP_ORDER.index(self.step)
        self.step = STEP_ORDER[max(position - 1, 0)]

    # -------- Submission --------

    async def submit(
        self,
        storage: KeyValueStorage,
        cart: CartState,
        session: SessionUser | None,
    ) -> Order | None:
        """
        Verify the receipt and, if accepted, record the order.

        Steps:
          1. Validate step, inputs and cart.
          2. Encode the receipt and await the verifier (bounded by
             verification_timeout).
          3. Rejected receipt => status ERROR, stay on review.
          4. Accepted => build Verified order from the cart as it was
             when the submit started, prepend it to the order store,
             schedule confirmation, clear cart, status SUCCESS.

        Returns the new order, or None when verification did not succeed.
        """
        self._ensure_idle()

        if self.status == PaymentStatus.SUCCESS:
            raise self._reject("This order has already been submitted.")
        if self.step != CheckoutStep.REVIEW:
            raise self._reject("Complete the shipping and payment steps first.")
        if not self._has_payment_details():
            raise self._reject(MISSING_SUBMIT_DETAILS)
        if not cart.items:
            raise self._reject("Cart is empty")

        items = cart.snapshot()
        total = self.final_total(cart.total())
        shipping = self.shipping_option

        self.status = PaymentStatus.ANALYZING
        self.error_message = None

        try:
            encoded = self.receipt.encode()
            analysis = await asyncio.wait_for(
                self.verifier.verify(encoded),
                timeout=self.verification_timeout,
            )
        except asyncio.CancelledError:
            # Client went away; leave the wizard retryable.
            self.status = PaymentStatus.ERROR
            self.error_message = VERIFICATION_FAILED
            raise
        except Exception:
            logger.exception("Receipt verification failed")
            self.status = PaymentStatus.ERROR
            self.error_message = VERIFICATION_FAILED
            return None

        self.receipt_summary = analysis.summary

        if not analysis.is_valid:
            self.status = PaymentStatus.ERROR
            self.error_message = INVALID_RECEIPT
            return None

        user_email = session.email if session else self.guest_email

        order = Order(
            id=self._new_order_id(storage),
            date=datetime.now(timezone.utc),
            user_email=user_email,
            items=items,
            total=total,
            status="Verified",
            receipt_summary=analysis.summary,
            shipping_method=shipping.name,
            shipping_cost=shipping.price,
        )

        try:
            self.order_repo.append(storage, order)
        except Exception:
            self.status = PaymentStatus.ERROR
            self.error_message = VERIFICATION_FAILED
            raise
        self._notify(order)

        cart.clear()
        self.order = order
        self.status = PaymentStatus.SUCCESS
        logger.info("Order %s verified (total %.2f)", order.id, order.total)
        return order

    def _notify(self, order: Order) -> None:
        task = asyncio.create_task(self.notifier.send_confirmation(order))
        self._notifications.add(task)
        task.add_done_callback(self._notification_done)

    def _notification_done(self, task: asyncio.Task) -> None:
        self._notifications.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning("Order confirmation could not be sent: %s", exc)

    async def drain_notifications(self) -> None:
        """Wait for pending confirmations (shutdown, tests)."""
        if self._notifications:
            await asyncio.gather(*self._notifications, return_exceptions=True)

    # -------- Read model --------

    def to_read(self, cart: CartState) -> CheckoutRead:
        subtotal = cart.total()
        receipt = None
        if self.receipt is not None:
            receipt = ReceiptRead(
                filename=self.receipt.filename,
                content_type=self.receipt.content_type,
                size=len(self.receipt.content),
            )

        return CheckoutRead(
            step=self.step,
            status=self.status,
            shipping_options=[
                ShippingOptionRead(
                    id=o.id,
                    name=o.name,
                    price=o.price,
                    duration=o.duration,
                )
                for o in SHIPPING_OPTIONS
            ],
            shipping_option_id=self.shipping_option_id,
            subtotal=subtotal,
            shipping_cost=self.shipping_option.price,
            final_total=self.final_total(subtotal),
            phone_number=self.phone_number,
            guest_email=self.guest_email,
            receipt=receipt,
            error_message=self.error_message,
            receipt_summary=self.receipt_summary,
            order_id=self.order.id if self.order else None,
            can_submit=(
                self.step == CheckoutStep.REVIEW
                and self.status not in (PaymentStatus.ANALYZING, PaymentStatus.SUCCESS)
            ),
        )
