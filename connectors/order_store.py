"""
Module: connectors.order_store

In-memory order management: orders and their line items.
"""

import logging
from itertools import count

from models.enums import OrderStatus
from models.errors import OrderNotFoundError
from models.order import CustomerInfo, Order, OrderItem

logger = logging.getLogger(__name__)


class OrderStore:
    """
    Orders and order items keyed by auto-incrementing ids.
    """

    def __init__(self):
        self._orders: dict[int, Order] = {}
        self._items: dict[int, OrderItem] = {}
        self._order_ids = count(1)
        self._item_ids = count(1)

    def create_order(
        self,
        session_id: str,
        customer: CustomerInfo,
        subtotal: float,
        shipping: float,
        tax: float,
        total: float,
    ) -> Order:
        order = Order(
            id=next(self._order_ids),
            session_id=session_id,
            subtotal=subtotal,
            shipping=shipping,
            tax=tax,
            total=total,
            **customer.model_dump(),
        )
        self._orders[order.id] = order
        logger.info(f"Created order {order.id} for session {session_id}: ${total:.2f}")
        return order

    def create_order_item(
        self, order_id: int, book_id: int, quantity: int, price_at_purchase: float
    ) -> OrderItem:
        if order_id not in self._orders:
            raise OrderNotFoundError(order_id)
        item = OrderItem(
            id=next(self._item_ids),
            order_id=order_id,
            book_id=book_id,
            quantity=quantity,
            price_at_purchase=price_at_purchase,
        )
        self._items[item.id] = item
        return item

    def get_order(self, order_id: int) -> Order | None:
        return self._orders.get(order_id)

    def get_orders_by_session(self, session_id: str) -> list[Order]:
        return [o for o in self._orders.values() if o.session_id == session_id]

    def get_order_items(self, order_id: int) -> list[OrderItem]:
        return [i for i in self._items.values() if i.order_id == order_id]

    def update_status(self, order_id: int, status: OrderStatus) -> Order:
        order = self._orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        updated = order.model_copy(update={"status": status})
        self._orders[order_id] = updated
        logger.info(f"Order {order_id} status {order.status.value} -> {status.value}")
        return updated
