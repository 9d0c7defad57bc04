"""
Cart and order data models for the storefront checkout flow.
"""

from datetime import datetime

from pydantic import EmailStr, Field

from .base import StoreModel
from .book import Book
from .enums import OrderStatus


class CartItem(StoreModel):
    id: int
    session_id: str
    book_id: int
    quantity: int = Field(gt=0)
    created_at: datetime = Field(default_factory=datetime.now)


class CartItemCreate(StoreModel):
    book_id: int
    quantity: int = Field(default=1, gt=0)


class CartItemQuantity(StoreModel):
    quantity: int  # <= 0 removes the line


class CartLine(StoreModel):
    """A cart item joined with its book."""

    id: int
    quantity: int
    book: Book
    line_total: float


class CartSummary(StoreModel):
    session_id: str
    items: list[CartLine] = Field(default_factory=list)
    subtotal: float = 0.0
    shipping: float = 0.0
    tax: float = 0.0
    total: float = 0.0


class CustomerInfo(StoreModel):
    customer_name: str = Field(min_length=1)
    email: EmailStr
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip: str = Field(min_length=1)
    country: str = Field(min_length=1)


class OrderLine(StoreModel):
    """Requested line for a direct order (no cart involved)."""

    book_id: int
    quantity: int = Field(gt=0)


class Order(CustomerInfo):
    id: int
    session_id: str
    subtotal: float
    shipping: float
    tax: float
    total: float
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = Field(default_factory=datetime.now)


class OrderItem(StoreModel):
    id: int
    order_id: int
    book_id: int
    quantity: int = Field(gt=0)
    price_at_purchase: float = Field(gt=0)
    created_at: datetime = Field(default_factory=datetime.now)


class CheckoutRequest(StoreModel):
    customer: CustomerInfo


class DirectOrderRequest(StoreModel):
    customer: CustomerInfo
    items: list[OrderLine] = Field(min_length=1)


class OrderReceipt(StoreModel):
    order: Order
    items: list[OrderItem]
