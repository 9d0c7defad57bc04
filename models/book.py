"""
Catalog data models: Book, its create/update payloads and the filter set used
by the storefront browse page.
"""

from datetime import date, datetime

from pydantic import Field, model_validator

from .base import StoreModel
from .enums import AvailabilityStatus, Genre


def derive_availability(
    stock_quantity: int,
    low_stock_threshold: int,
    current: AvailabilityStatus | None = None,
) -> AvailabilityStatus:
    """Availability from stock level. An explicit pre-order status is kept."""
    if current == AvailabilityStatus.PRE_ORDER:
        return current
    if stock_quantity <= 0:
        return AvailabilityStatus.OUT_OF_STOCK
    if stock_quantity <= low_stock_threshold:
        return AvailabilityStatus.LOW_STOCK
    return AvailabilityStatus.IN_STOCK


class BookBase(StoreModel):
    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    description: str = ""
    price: float = Field(gt=0)
    original_price: float | None = Field(default=None, gt=0)  # List price when discounted
    genre: Genre
    format: str = "Paperback"
    cover_image: str | None = None
    rating: float = Field(default=0.0, ge=0, le=5)
    review_count: int = Field(default=0, ge=0)
    stock_quantity: int = Field(default=0, ge=0)
    availability: AvailabilityStatus | None = None
    is_featured: bool = False
    is_new_release: bool = False
    is_bestseller: bool = False
    published_date: date | None = None

    @model_validator(mode="after")
    def _check_original_price(self):
        if self.original_price is not None and self.original_price < self.price:
            raise ValueError("original_price must be >= price")
        return self


class BookCreate(BookBase):
    """Payload for adding a book to the catalog."""


class Book(BookBase):
    """A catalog entry as held by the CatalogStore."""

    id: int
    availability: AvailabilityStatus = AvailabilityStatus.IN_STOCK
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_discounted(self) -> bool:
        return self.original_price is not None and self.original_price > self.price


class BookUpdate(StoreModel):
    """Partial update; only fields that were set are applied."""

    title: str | None = Field(default=None, min_length=1)
    author: str | None = Field(default=None, min_length=1)
    description: str | None = None
    price: float | None = Field(default=None, gt=0)
    original_price: float | None = Field(default=None, gt=0)
    genre: Genre | None = None
    format: str | None = None
    cover_image: str | None = None
    rating: float | None = Field(default=None, ge=0, le=5)
    review_count: int | None = Field(default=None, ge=0)
    stock_quantity: int | None = Field(default=None, ge=0)
    availability: AvailabilityStatus | None = None
    is_featured: bool | None = None
    is_new_release: bool | None = None
    is_bestseller: bool | None = None
    published_date: date | None = None


class BookFilters(StoreModel):
    """
    Filter predicates for browsing the catalog. Unset fields do not constrain;
    empty genre/availability sets match everything.
    """

    search: str | None = None
    author: str | None = None
    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    genres: set[Genre] = Field(default_factory=set)
    availability: set[AvailabilityStatus] = Field(default_factory=set)
    min_rating: float | None = Field(default=None, ge=0, le=5)
    featured: bool | None = None
    new_release: bool | None = None
    best_seller: bool | None = None

    def matches(self, book: Book) -> bool:
        if self.search:
            needle = self.search.lower()
            if needle not in book.title.lower() and needle not in book.author.lower():
                return False
        if self.author and self.author.lower() not in book.author.lower():
            return False
        if self.min_price is not None and book.price < self.min_price:
            return False
        if self.max_price is not None and book.price > self.max_price:
            return False
        if self.genres and book.genre not in self.genres:
            return False
        if self.availability and book.availability not in self.availability:
            return False
        if self.min_rating is not None and book.rating < self.min_rating:
            return False
        if self.featured is not None and book.is_featured != self.featured:
            return False
        if self.new_release is not None and book.is_new_release != self.new_release:
            return False
        if self.best_seller is not None and book.is_bestseller != self.best_seller:
            return False
        return True
