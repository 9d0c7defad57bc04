"""
Module: connectors.cart_store

In-memory shopping carts keyed by session id.
"""

import logging
from itertools import count

from models.errors import CartItemNotFoundError
from models.order import CartItem

logger = logging.getLogger(__name__)


class CartStore:
    """
    Cart items for all sessions. Adding a book already in the cart merges the
    quantities into the existing line.
    """

    def __init__(self):
        self._items: dict[int, CartItem] = {}
        self._ids = count(1)

    def get_items(self, session_id: str) -> list[CartItem]:
        return [i for i in self._items.values() if i.session_id == session_id]

    def get_item(self, item_id: int) -> CartItem | None:
        return self._items.get(item_id)

    def add_item(self, session_id: str, book_id: int, quantity: int = 1) -> CartItem:
        for item in self.get_items(session_id):
            if item.book_id == book_id:
                return self.update_quantity(item.id, item.quantity + quantity)
        item = CartItem(
            id=next(self._ids), session_id=session_id, book_id=book_id, quantity=quantity
        )
        self._items[item.id] = item
        logger.debug(f"Cart {session_id}: added book {book_id} x{quantity}")
        return item

    def update_quantity(self, item_id: int, quantity: int) -> CartItem | None:
        """Set a line's quantity. A quantity <= 0 removes the line and returns None."""
        item = self._items.get(item_id)
        if item is None:
            raise CartItemNotFoundError(item_id)
        if quantity <= 0:
            self.remove_item(item_id)
            return None
        updated = item.model_copy(update={"quantity": quantity})
        self._items[item_id] = updated
        return updated

    def remove_item(self, item_id: int) -> bool:
        return self._items.pop(item_id, None) is not None

    def clear(self, session_id: str) -> int:
        """Remove every line of a session's cart. Returns the number removed."""
        ids = [i.id for i in self.get_items(session_id)]
        for item_id in ids:
            del self._items[item_id]
        return len(ids)
