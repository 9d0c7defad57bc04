"""
Module: connectors.sample_data

Seeds the in-memory stores with the storefront's sample catalog, category
data and a reproducible sales history.
"""

import logging
from datetime import datetime, timedelta

import numpy as np

from connectors.analytics_store import AnalyticsStore
from connectors.catalog_store import CatalogStore
from connectors.sales_ledger import SalesLedger
from models.book import BookCreate
from models.enums import AvailabilityStatus, Genre

logger = logging.getLogger(__name__)

SAMPLE_BOOKS: list[dict] = [
    {
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "description": "A classic novel about the American Dream set in the 1920s",
        "price": 17.99,
        "genre": Genre.FICTION,
        "format": "Hardcover",
        "stock_quantity": 45,
        "rating": 4.5,
        "review_count": 86,
        "is_featured": True,
    },
    {
        "title": "1984",
        "author": "George Orwell",
        "description": "A dystopian novel about totalitarianism and surveillance",
        "price": 14.99,
        "original_price": 24.99,
        "genre": Genre.FICTION,
        "stock_quantity": 78,
        "rating": 5.0,
        "review_count": 209,
        "is_bestseller": True,
        "is_featured": True,
    },
    {
        "title": "To Kill a Mockingbird",
        "author": "Harper Lee",
        "description": "A classic novel about racial injustice in the American South",
        "price": 15.99,
        "genre": Genre.FICTION,
        "stock_quantity": 56,
        "rating": 4.0,
        "review_count": 64,
        "is_featured": True,
    },
    {
        "title": "Atomic Habits",
        "author": "James Clear",
        "description": "A guide to building good habits and breaking bad ones",
        "price": 22.99,
        "genre": Genre.NON_FICTION,
        "format": "Hardcover",
        "stock_quantity": 34,
        "rating": 3.5,
        "review_count": 42,
        "is_new_release": True,
        "is_featured": True,
    },
    {
        "title": "The Psychology of Money",
        "author": "Morgan Housel",
        "description": "Timeless lessons on wealth, greed, and happiness",
        "price": 18.99,
        "genre": Genre.NON_FICTION,
        "format": "Hardcover",
        "stock_quantity": 42,
        "rating": 4.0,
        "review_count": 78,
        "is_featured": True,
    },
    {
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "description": "A classic romance novel about manners and misunderstandings",
        "price": 12.99,
        "genre": Genre.FICTION,
        "stock_quantity": 67,
        "rating": 4.5,
        "review_count": 112,
        "is_featured": True,
    },
    {
        "title": "The Hobbit",
        "author": "J.R.R. Tolkien",
        "description": "A fantasy novel about the adventures of Bilbo Baggins",
        "price": 19.99,
        "genre": Genre.SCIFI,
        "format": "Hardcover",
        "stock_quantity": 28,
        "rating": 4.0,
        "review_count": 54,
        "is_featured": True,
    },
    {
        "title": "Sapiens",
        "author": "Yuval Noah Harari",
        "description": "A brief history of humankind from the stone age to the 21st century",
        "price": 16.99,
        "original_price": 26.99,
        "genre": Genre.NON_FICTION,
        "stock_quantity": 53,
        "rating": 5.0,
        "review_count": 97,
        "is_bestseller": True,
        "is_featured": True,
    },
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "description": "Politics, religion and ecology on the desert planet Arrakis",
        "price": 24.99,
        "genre": Genre.SCIFI,
        "stock_quantity": 8,
        "rating": 4.7,
        "review_count": 143,
        "is_bestseller": True,
    },
    {
        "title": "The Hound of the Baskervilles",
        "author": "Arthur Conan Doyle",
        "description": "Sherlock Holmes investigates a legendary curse on Dartmoor",
        "price": 9.99,
        "genre": Genre.MYSTERY,
        "stock_quantity": 95,
        "rating": 3.9,
        "review_count": 38,
    },
    {
        "title": "Steve Jobs",
        "author": "Walter Isaacson",
        "description": "The authorized biography of the Apple co-founder",
        "price": 21.99,
        "genre": Genre.BIOGRAPHY,
        "format": "Hardcover",
        "stock_quantity": 0,
        "rating": 4.3,
        "review_count": 71,
    },
    {
        "title": "The Midnight Library",
        "author": "Matt Haig",
        "description": "Between life and death there is a library of lives you could have lived",
        "price": 26.99,
        "genre": Genre.FICTION,
        "format": "Hardcover",
        "stock_quantity": 0,
        "rating": 4.2,
        "review_count": 12,
        "is_new_release": True,
        "availability": AvailabilityStatus.PRE_ORDER,
    },
]

SAMPLE_CATEGORY_DATA: list[tuple[str, int, float]] = [
    ("Fiction", 1250, 0.68),
    ("Non-Fiction", 980, 0.82),
    ("Children's", 320, 0.45),
    ("Science Fiction", 560, 0.23),
    ("Mystery & Thriller", 890, 0.76),
]


def load_sample_data(
    catalog: CatalogStore,
    ledger: SalesLedger,
    analytics: AnalyticsStore,
    rng: np.random.Generator,
    days: int = 14,
    now: datetime | None = None,
) -> None:
    """
    Populate empty stores. Daily sales per book are Poisson draws whose mean
    scales with rating and a per-book drift, so some titles trend up and
    others down.
    """
    now = now or datetime.now()
    for fields in SAMPLE_BOOKS:
        catalog.create_book(BookCreate(**fields))

    for category, total_sales, stock_level in SAMPLE_CATEGORY_DATA:
        analytics.add_category_data(category, total_sales, stock_level)

    sale_count = 0
    for book in catalog.list_books():
        if book.availability == AvailabilityStatus.PRE_ORDER:
            continue
        base_rate = 0.5 + book.rating / 2
        drift = float(rng.uniform(-0.08, 0.08))
        for day in range(days):
            rate = max(0.1, base_rate * (1 + drift * (day - days / 2)))
            quantity = int(rng.poisson(rate))
            if quantity <= 0:
                continue
            sale_date = now - timedelta(days=days - 1 - day)
            ledger.record_sale(book.id, quantity, book.price * quantity, date=sale_date)
            sale_count += 1

    logger.info(
        f"Loaded sample data: {len(catalog)} books, {sale_count} sale records, "
        f"{len(SAMPLE_CATEGORY_DATA)} categories"
    )
