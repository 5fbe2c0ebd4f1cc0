import random

import pytest

from storefront.models.product import SEED_PRODUCTS
from storefront.services.cart_service import CartState


def _assert_invariants(cart: CartState):
    ids = [item.id for item in cart.items]
    assert len(ids) == len(set(ids))
    assert all(item.quantity >= 1 for item in cart.items)
    assert cart.total() == pytest.approx(sum(i.price * i.quantity for i in cart.items))


def test_empty_cart_total_is_zero(cart):
    assert cart.total() == 0
    assert f"{cart.total():.2f}" == "0.00"
    assert cart.total_quantity() == 0


def test_duplicate_add_accumulates_quantity(cart, shirt):
    cart.add(shirt)
    cart.add(shirt)

    assert len(cart.items) == 1
    assert cart.items[0].quantity == 2
    assert cart.total() == pytest.approx(58.00)


def test_add_opens_panel(cart, shirt):
    assert cart.is_open is False
    cart.add(shirt)
    assert cart.is_open is True
    cart.close_panel()
    assert cart.is_open is False


def test_remove_deletes_row_unconditionally(cart, shirt, jacket):
    cart.add(shirt)
    cart.add(shirt)
    cart.add(jacket)

    cart.remove(shirt.id)
    assert [item.id for item in cart.items] == [jacket.id]

    cart.remove(999)
    assert len(cart.items) == 1


def test_update_quantity_replaces_value(cart, jacket):
    cart.add(jacket)
    cart.update_quantity(jacket.id, 4)

    assert cart.items[0].quantity == 4
    assert cart.total() == pytest.approx(356.00)


@pytest.mark.parametrize("quantity", [0, -1, -10])
def test_non_positive_quantity_update_is_ignored(cart, shirt, quantity):
    cart.add(shirt)
    cart.update_quantity(shirt.id, 3)

    cart.update_quantity(shirt.id, quantity)

    assert len(cart.items) == 1
    assert cart.items[0].quantity == 3


def test_update_unknown_product_is_noop(cart, shirt):
    cart.add(shirt)
    cart.update_quantity(42, 5)
    assert cart.items[0].quantity == 1


def test_cart_rows_are_snapshots(cart, shirt):
    cart.add(shirt)
    shirt.price = 1.0
    assert cart.items[0].price == 29.00


def test_random_operation_sequences_keep_invariants(cart):
    rng = random.Random(1234)
    for _ in range(500):
        product = rng.choice(SEED_PRODUCTS)
        op = rng.choice(["add", "add", "remove", "update"])
        if op == "add":
            cart.add(product)
        elif op == "remove":
            cart.remove(product.id)
        else:
            cart.update_quantity(product.id, rng.randint(-3, 6))
        _assert_invariants(cart)
