import pytest

from models.enums import OrderStatus
from models.errors import OrderNotFoundError


@pytest.fixture
def order(orders, customer):
    return orders.create_order("s1", customer, subtotal=20.0, shipping=4.99, tax=1.6, total=26.59)


def test_create_order_copies_customer(order, customer):
    assert order.id == 1
    assert order.customer_name == customer.customer_name
    assert order.status == OrderStatus.PENDING
    assert order.total == 26.59


def test_order_items(orders, order):
    orders.create_order_item(order.id, book_id=3, quantity=2, price_at_purchase=10.0)
    orders.create_order_item(order.id, book_id=4, quantity=1, price_at_purchase=5.0)
    assert [i.book_id for i in orders.get_order_items(order.id)] == [3, 4]


def test_order_item_for_unknown_order(orders):
    with pytest.raises(OrderNotFoundError):
        orders.create_order_item(42, book_id=1, quantity=1, price_at_purchase=1.0)


def test_lookup(orders, order, customer):
    orders.create_order("s2", customer, subtotal=1, shipping=4.99, tax=0.08, total=6.07)
    assert orders.get_order(order.id) == order
    assert orders.get_order(99) is None
    assert orders.get_orders_by_session("s1") == [order]


def test_update_status(orders, order):
    updated = orders.update_status(order.id, OrderStatus.SHIPPED)
    assert updated.status == OrderStatus.SHIPPED
    assert orders.get_order(order.id).status == OrderStatus.SHIPPED
    with pytest.raises(OrderNotFoundError):
        orders.update_status(99, OrderStatus.PAID)
