"""
Order confirmation collaborator.

Called once per verified order, fire-and-forget: the checkout wizard
does not wait for it, never retries it, and only logs its failures.
"""

import asyncio
import logging
from typing import Protocol

from storefront.core.email_client import send_email
from storefront.models.order import Order

logger = logging.getLogger(__name__)

STORE_NAME = "Ge'ez Shirts"


class OrderNotifier(Protocol):
    async def send_confirmation(self, order: Order) -> None: ...


def render_confirmation(order: Order) -> tuple[str, str]:
    """
    Build (subject, text body) of the confirmation email.
    """
    subject = f"Order #{order.id} Confirmed!"

    lines = [
        "Dear Customer,",
        "",
        f"Thank you for shopping with {STORE_NAME}!",
        "Your payment receipt has been verified and your order is being processed.",
        "",
        "--- ORDER DETAILS ---",
        f"Order ID: {order.id}",
        f"Date: {order.date:%Y-%m-%d %H:%M} UTC",
        "",
        "--- ITEMS ---",
    ]
    for item in order.items:
        lines.append(f"{item.quantity}x {item.name:<30} ${item.line_total:.2f}")

    if order.shipping_method:
        lines += [
            "",
            "--- SHIPPING ---",
            f"Method: {order.shipping_method}",
            f"Cost:   ${order.shipping_cost:.2f}",
        ]

    lines += [
        "",
        "---------------------",
        f"TOTAL:  ${order.total:.2f}",
        "---------------------",
        "",
        "We will notify you when your items have shipped.",
        "",
        "Best regards,",
        f"The {STORE_NAME} Team",
    ]
    return subject, "\n".join(lines)


class LoggingNotifier:
    """
    Writes the confirmation email to the log instead of sending it.
    """

    def __init__(self, delay_seconds: float = 0.0):
        self.delay_seconds = delay_seconds

    async def send_confirmation(self, order: Order) -> None:
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        subject, body = render_confirmation(order)
        logger.info(
            "EMAIL CONFIRMATION SENT\nTo: %s\nSubject: %s\n\n%s",
            order.user_email or "guest",
            subject,
            body,
        )


class SmtpNotifier:
    """
    Sends the confirmation through the SMTP email client.

    Orders without an email (guest checkout without address) are skipped.
    """

    async def send_confirmation(self, order: Order) -> None:
        if not order.user_email:
            logger.info("Order %s has no email; confirmation skipped", order.id)
            return
        subject, body = render_confirmation(order)
        # smtplib is blocking
        await asyncio.to_thread(send_email, order.user_email, subject, body)
