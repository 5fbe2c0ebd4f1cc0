import logging

import pytest
from fastapi import HTTPException

from storefront.models.cart import CartItem
from storefront.models.order import Order
from storefront.models.product import Product
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.order import OrderStatusUpdate
from storefront.schemas.product import ProductCreate
from storefront.services.notification_service import LoggingNotifier, SmtpNotifier, render_confirmation
from storefront.services.order_service import OrderService
from storefront.services.product_service import ProductService
from storefront.services.receipt_service import SimulatedReceiptVerifier


@pytest.fixture
def order():
    return Order(
        id="1717000000000",
        user_email="abebe@example.com",
        items=[
            CartItem(id=1, name="Plain White Shirt", price=29.0, category="Shirts", image="x", quantity=2),
        ],
        total=63.99,
        status="Verified",
        shipping_method="Standard Shipping",
        shipping_cost=5.99,
    )


def test_next_id_never_collides():
    existing = [Product(id=10**15, name="Future", price=1, category="X", image="x")]
    assert ProductService._next_id(existing) == 10**15 + 1
    assert ProductService._next_id([]) > 1_600_000_000_000


def test_create_product_defaults(storage):
    service = ProductService(ProductRepository())

    product = service.create_product(storage, ProductCreate(name="  Netela Wrap ", price=0))

    assert product.name == "Netela Wrap"
    assert product.category == "Shirts"
    assert product.price == 0
    assert service.get_product(storage, product.id) == product


def test_delete_unknown_product_is_404(storage):
    with pytest.raises(HTTPException) as exc:
        ProductService(ProductRepository()).delete_product(storage, 12345)
    assert exc.value.status_code == 404


def test_order_read_hides_shipping_for_legacy_orders(order):
    legacy = order.model_copy(update={"shipping_method": None, "shipping_cost": 0.0})

    read = OrderService.to_read(legacy)

    assert read.show_shipping is False
    assert read.subtotal == pytest.approx(58.0)
    assert read.items[0].line_total == pytest.approx(58.0)


def test_status_update_is_last_write_wins(storage, order):
    repo = OrderRepository()
    repo.append(storage, order)
    service = OrderService(repo)

    service.update_status(storage, order.id, OrderStatusUpdate(status="Shipped"))
    service.update_status(storage, order.id, OrderStatusUpdate(status="Cancelled"))

    (stored,) = repo.list_all(storage)
    assert stored.status == "Cancelled"
    assert stored.total == order.total
    assert stored.items == order.items


def test_confirmation_text_lists_items_and_shipping(order):
    subject, body = render_confirmation(order)

    assert subject == "Order #1717000000000 Confirmed!"
    assert "2x Plain White Shirt" in body
    assert "$58.00" in body
    assert "Method: Standard Shipping" in body
    assert "TOTAL:  $63.99" in body


def test_confirmation_text_without_shipping(order):
    _, body = render_confirmation(order.model_copy(update={"shipping_method": None}))
    assert "SHIPPING" not in body


async def test_logging_notifier_writes_email(order, caplog):
    with caplog.at_level(logging.INFO, logger="storefront.services.notification_service"):
        await LoggingNotifier().send_confirmation(order)
    assert "abebe@example.com" in caplog.text


async def test_smtp_notifier_skips_orders_without_email(order, monkeypatch):
    sent = []
    monkeypatch.setattr(
        "storefront.services.notification_service.send_email",
        lambda *args: sent.append(args),
    )
    notifier = SmtpNotifier()

    await notifier.send_confirmation(order.model_copy(update={"user_email": None}))
    assert sent == []

    await notifier.send_confirmation(order)
    assert sent[0][0] == "abebe@example.com"


async def test_simulated_verifier_always_accepts():
    result = await SimulatedReceiptVerifier(delay_seconds=0).verify("anything")
    assert result.is_valid is True
    assert result.summary
