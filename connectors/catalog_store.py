"""
Module: connectors.catalog_store

In-memory book catalog keyed by auto-incrementing integer ids.
"""

import logging
from itertools import count
from typing import Any

from models.book import Book, BookCreate, BookFilters, BookUpdate, derive_availability
from models.enums import Genre
from models.errors import BookNotFoundError, InsufficientStockError

logger = logging.getLogger(__name__)


class CatalogStore:
    """
    Catalog of books. Writes to the same id are not serialized; last write wins.
    """

    def __init__(self, low_stock_threshold: int = 10):
        self.low_stock_threshold = low_stock_threshold
        self._books: dict[int, Book] = {}
        self._ids = count(1)

    def __len__(self) -> int:
        return len(self._books)

    def get_book(self, book_id: int) -> Book | None:
        return self._books.get(book_id)

    def require_book(self, book_id: int) -> Book:
        """Like get_book, but raises BookNotFoundError."""
        book = self._books.get(book_id)
        if book is None:
            raise BookNotFoundError(book_id)
        return book

    def list_books(self) -> list[Book]:
        return list(self._books.values())

    def get_books_by_genre(self, genre: Genre | str) -> list[Book]:
        genre = Genre(genre)
        return [b for b in self._books.values() if b.genre == genre]

    def get_featured(self) -> list[Book]:
        return [b for b in self._books.values() if b.is_featured]

    def get_new_releases(self) -> list[Book]:
        return [b for b in self._books.values() if b.is_new_release]

    def get_bestsellers(self) -> list[Book]:
        return [b for b in self._books.values() if b.is_bestseller]

    def filter_books(self, filters: BookFilters) -> list[Book]:
        return [b for b in self._books.values() if filters.matches(b)]

    def create_book(self, data: BookCreate) -> Book:
        book_id = next(self._ids)
        fields = data.model_dump()
        fields["availability"] = derive_availability(
            data.stock_quantity, self.low_stock_threshold, data.availability
        )
        book = Book(id=book_id, **fields)
        self._books[book_id] = book
        logger.info(f"Created book {book_id}: '{book.title}'")
        return book

    def update_book(self, book_id: int, changes: BookUpdate | dict[str, Any]) -> Book | None:
        """
        Apply a partial update. Returns None if the book does not exist.

        A price raised above the list price clears ``original_price``; a stock
        change re-derives availability unless the book is on pre-order.
        """
        book = self._books.get(book_id)
        if book is None:
            return None
        if isinstance(changes, dict):
            changes = BookUpdate.model_validate(changes)
        updates = changes.model_dump(exclude_unset=True)

        merged = book.model_dump()
        merged.update(updates)
        if (
            "price" in updates
            and "original_price" not in updates
            and merged["original_price"] is not None
            and merged["price"] > merged["original_price"]
        ):
            merged["original_price"] = None
        if "availability" not in updates or updates["availability"] is None:
            merged["availability"] = derive_availability(
                merged["stock_quantity"], self.low_stock_threshold, book.availability
            )

        updated = Book.model_validate(merged)
        self._books[book_id] = updated
        logger.debug(f"Updated book {book_id}: {sorted(updates)}")
        return updated

    def delete_book(self, book_id: int) -> bool:
        return self._books.pop(book_id, None) is not None

    def decrement_stock(self, book_id: int, quantity: int) -> Book:
        book = self.require_book(book_id)
        if quantity > book.stock_quantity:
            raise InsufficientStockError(book_id, quantity, book.stock_quantity)
        updated = self.update_book(book_id, {"stock_quantity": book.stock_quantity - quantity})
        assert updated is not None
        return updated

    def genre_average_price(self, genre: Genre | str, exclude_id: int | None = None) -> float | None:
        """Mean price of the genre's books, optionally excluding one book."""
        prices = [
            b.price for b in self.get_books_by_genre(genre) if b.id != exclude_id
        ]
        if not prices:
            return None
        return sum(prices) / len(prices)
