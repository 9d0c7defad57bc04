"""
Checkout: turns cart lines into an order, decrements stock and appends one
sale record per order item.
"""

import logging
import threading

from config.config import CheckoutConfig
from connectors.cart_store import CartStore
from connectors.catalog_store import CatalogStore
from connectors.order_store import OrderStore
from connectors.sales_ledger import SalesLedger
from models.book import Book
from models.errors import EmptyCartError, InsufficientStockError
from models.order import (
    CartItem,
    CartLine,
    CartSummary,
    CustomerInfo,
    OrderLine,
    OrderReceipt,
)

logger = logging.getLogger(__name__)


class CheckoutService:
    """
    Cart summaries and order placement for the storefront.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        carts: CartStore,
        orders: OrderStore,
        ledger: SalesLedger,
        config: CheckoutConfig | None = None,
    ):
        self.catalog = catalog
        self.carts = carts
        self.orders = orders
        self.ledger = ledger
        self.config = config or CheckoutConfig()
        # Serializes the stock check with the order writes
        self._order_lock = threading.Lock()

    def totals(self, subtotal: float, has_items: bool) -> tuple[float, float, float, float]:
        """Return (subtotal, shipping, tax, total), each rounded to cents."""
        shipping = self.config.shipping_fee if has_items else 0.0
        tax = subtotal * self.config.tax_rate
        total = subtotal + shipping + tax
        return round(subtotal, 2), round(shipping, 2), round(tax, 2), round(total, 2)

    def _available_items(self, session_id: str) -> list[tuple[CartItem, Book]]:
        """Cart items joined with their books; lines for deleted books are skipped."""
        available = []
        for item in self.carts.get_items(session_id):
            book = self.catalog.get_book(item.book_id)
            if book is None:
                logger.warning(
                    f"Skipping cart item {item.id}: book {item.book_id} no longer exists"
                )
                continue
            available.append((item, book))
        return available

    def cart_summary(self, session_id: str) -> CartSummary:
        lines = []
        for item, book in self._available_items(session_id):
            lines.append(
                CartLine(
                    id=item.id,
                    quantity=item.quantity,
                    book=book,
                    line_total=round(book.price * item.quantity, 2),
                )
            )
        subtotal = sum(line.book.price * line.quantity for line in lines)
        subtotal, shipping, tax, total = self.totals(subtotal, bool(lines))
        return CartSummary(
            session_id=session_id,
            items=lines,
            subtotal=subtotal,
            shipping=shipping,
            tax=tax,
            total=total,
        )

    def add_to_cart(self, session_id: str, book_id: int, quantity: int = 1):
        self.catalog.require_book(book_id)
        return self.carts.add_item(session_id, book_id, quantity)

    def checkout(self, session_id: str, customer: CustomerInfo) -> OrderReceipt:
        """
        Place an order for everything in the session's cart and clear the cart.

        Lines whose book was deleted are skipped, as in the cart summary.

        Raises:
            EmptyCartError: if the cart has no orderable items.
            InsufficientStockError: if any line exceeds stock; nothing is changed.
        """
        items = self._available_items(session_id)
        if not items:
            raise EmptyCartError(session_id)
        lines = [OrderLine(book_id=item.book_id, quantity=item.quantity) for item, _ in items]
        receipt = self.place_order(session_id, customer, lines)
        self.carts.clear(session_id)
        return receipt

    def place_order(
        self, session_id: str, customer: CustomerInfo, lines: list[OrderLine]
    ) -> OrderReceipt:
        """
        Create an order from explicit lines.

        All lines are checked against stock and stock is decremented before
        any order row is written, under one lock, so a failed order leaves the
        catalog, orders and ledger untouched.
        """
        if not lines:
            raise EmptyCartError(session_id)

        # Merge duplicate lines for the same book before checking stock
        quantities: dict[int, int] = {}
        for line in lines:
            quantities[line.book_id] = quantities.get(line.book_id, 0) + line.quantity

        with self._order_lock:
            books = {}
            for book_id, quantity in quantities.items():
                book = self.catalog.require_book(book_id)
                if quantity > book.stock_quantity:
                    raise InsufficientStockError(book_id, quantity, book.stock_quantity)
                books[book_id] = book

            for book_id, quantity in quantities.items():
                self.catalog.decrement_stock(book_id, quantity)

            subtotal = sum(books[b].price * q for b, q in quantities.items())
            subtotal, shipping, tax, total = self.totals(subtotal, True)
            order = self.orders.create_order(
                session_id, customer, subtotal=subtotal, shipping=shipping, tax=tax, total=total
            )

            order_items = []
            for book_id, quantity in quantities.items():
                price = books[book_id].price
                order_items.append(
                    self.orders.create_order_item(order.id, book_id, quantity, price)
                )
                self.ledger.record_sale(
                    book_id,
                    quantity,
                    price * quantity,
                    date=order.created_at,
                    order_id=order.id,
                )

        logger.info(
            f"Order {order.id} placed: {len(order_items)} items, total ${order.total:.2f}"
        )
        return OrderReceipt(order=order, items=order_items)

    def get_receipt(self, order_id: int) -> OrderReceipt | None:
        order = self.orders.get_order(order_id)
        if order is None:
            return None
        return OrderReceipt(order=order, items=self.orders.get_order_items(order_id))
