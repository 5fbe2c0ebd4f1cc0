"""
Process-wide UI state.

The storefront serves a single client: one cart and one checkout wizard
live for the lifetime of the process. Each holder is a cached FastAPI
dependency, so tests can swap it through `app.dependency_overrides`.
"""

from functools import lru_cache

from storefront.core.config import get_settings
from storefront.repositories.order_repo import OrderRepository
from storefront.services.cart_service import CartState
from storefront.services.checkout_service import CheckoutWizard
from storefront.services.notification_service import (
    LoggingNotifier,
    OrderNotifier,
    SmtpNotifier,
)
from storefront.services.receipt_service import ReceiptVerifier, SimulatedReceiptVerifier


@lru_cache
def get_cart() -> CartState:
    return CartState()


@lru_cache
def get_receipt_verifier() -> ReceiptVerifier:
    return SimulatedReceiptVerifier(get_settings().VERIFICATION_DELAY_SECONDS)


@lru_cache
def get_order_notifier() -> OrderNotifier:
    if get_settings().NOTIFIER_BACKEND == "smtp":
        return SmtpNotifier()
    return LoggingNotifier()


@lru_cache
def get_checkout_wizard() -> CheckoutWizard:
    return CheckoutWizard(
        order_repo=OrderRepository(),
        verifier=get_receipt_verifier(),
        notifier=get_order_notifier(),
        verification_timeout=get_settings().VERIFICATION_TIMEOUT_SECONDS,
    )
