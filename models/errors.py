"""
Domain exceptions raised by the stores and the pricing/checkout agents.
"""


class BookstoreError(Exception):
    """Base class for storefront errors."""


class BookNotFoundError(BookstoreError, LookupError):
    """Raised when a referenced book id is not in the catalog."""

    def __init__(self, book_id: int):
        self.book_id = book_id
        super().__init__(f"Book {book_id} not found")


class CartItemNotFoundError(BookstoreError, LookupError):
    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Cart item {item_id} not found")


class OrderNotFoundError(BookstoreError, LookupError):
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order {order_id} not found")


class PricingValidationError(BookstoreError, ValueError):
    """Raised for malformed numeric pricing input (e.g. a negative price)."""


class InsufficientStockError(BookstoreError):
    """Raised when an order asks for more copies than are in stock."""

    def __init__(self, book_id: int, requested: int, available: int):
        self.book_id = book_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for book {book_id}: requested {requested}, available {available}"
        )


class EmptyCartError(BookstoreError):
    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(f"Cart for session '{session_id}' is empty")
