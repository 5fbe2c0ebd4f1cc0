import asyncio

import pytest
from fastapi.testclient import TestClient

from storefront.core.state import get_cart, get_checkout_wizard
from storefront.core.storage import InMemoryStorage
from storefront.database import get_storage
from storefront.main import app
from storefront.models.order import Order
from storefront.models.product import Product
from storefront.repositories.order_repo import OrderRepository
from storefront.schemas.checkout import ReceiptAnalysisResult
from storefront.services.cart_service import CartState
from storefront.services.checkout_service import CheckoutWizard, ReceiptFile


class StubVerifier:
    """Returns a fixed verdict, or raises `error`."""

    def __init__(self, is_valid: bool = True, summary: str = "Bank transfer of $34.99", error=None):
        self.result = ReceiptAnalysisResult(is_valid=is_valid, summary=summary)
        self.error = error
        self.calls: list[str] = []

    async def verify(self, encoded_image: str) -> ReceiptAnalysisResult:
        self.calls.append(encoded_image)
        if self.error is not None:
            raise self.error
        return self.result


class HangingVerifier:
    async def verify(self, encoded_image: str) -> ReceiptAnalysisResult:
        await asyncio.Event().wait()


class RecordingNotifier:
    def __init__(self, error=None):
        self.sent: list[Order] = []
        self.error = error

    async def send_confirmation(self, order: Order) -> None:
        self.sent.append(order)
        if self.error is not None:
            raise self.error


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def cart():
    return CartState()


@pytest.fixture
def verifier():
    return StubVerifier()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def wizard(verifier, notifier):
    return CheckoutWizard(
        order_repo=OrderRepository(),
        verifier=verifier,
        notifier=notifier,
        verification_timeout=1.0,
    )


@pytest.fixture
def shirt():
    return Product(id=1, name="Plain White Shirt", price=29.00, category="Shirts", image="img-1")


@pytest.fixture
def jacket():
    return Product(id=3, name="Brown Bomber Jacket", price=89.00, category="Jackets", image="img-3")


@pytest.fixture
def receipt():
    return ReceiptFile(filename="receipt.png", content=b"\x89PNG fake", content_type="image/png")


@pytest.fixture
def client(storage, cart, wizard):
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_cart] = lambda: cart
    app.dependency_overrides[get_checkout_wizard] = lambda: wizard
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login_admin(client):
    def _login():
        resp = client.post(
            "/api/v1/auth/login",
            json={"email": "admin@geezshirts.com", "password": "admin123"},
        )
        assert resp.status_code == 200
        return resp.json()

    return _login
