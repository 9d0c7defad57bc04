from datetime import datetime

import numpy as np

from connectors.analytics_store import AnalyticsStore
from connectors.catalog_store import CatalogStore
from connectors.sales_ledger import SalesLedger
from connectors.sample_data import SAMPLE_BOOKS, SAMPLE_CATEGORY_DATA, load_sample_data
from models.enums import AvailabilityStatus


def test_load_sample_data(catalog, ledger, analytics_store, rng):
    now = datetime(2026, 4, 14, 12)
    load_sample_data(catalog, ledger, analytics_store, rng, days=14, now=now)

    assert len(catalog) == len(SAMPLE_BOOKS)
    assert len(analytics_store.get_category_data()) == len(SAMPLE_CATEGORY_DATA)
    assert len(ledger) > 0
    dates = [r.date for r in ledger.get_sales()]
    assert min(dates).date() >= datetime(2026, 4, 1).date()
    assert max(dates) <= now


def test_pre_order_books_have_no_sales(catalog, ledger, analytics_store, rng):
    load_sample_data(catalog, ledger, analytics_store, rng)
    pre_orders = [
        b.id for b in catalog.list_books() if b.availability == AvailabilityStatus.PRE_ORDER
    ]
    assert pre_orders
    sold = ledger.units_sold_by_book()
    assert all(book_id not in sold for book_id in pre_orders)


def test_discounted_sample_books_keep_list_price(catalog, ledger, analytics_store, rng):
    load_sample_data(catalog, ledger, analytics_store, rng)
    discounted = [b for b in catalog.list_books() if b.is_discounted]
    assert discounted
    assert all(b.original_price > b.price for b in discounted)


def test_same_seed_same_history(catalog, ledger, analytics_store):
    now = datetime(2026, 4, 14, 12)
    load_sample_data(catalog, ledger, analytics_store, np.random.default_rng(9), now=now)
    other_ledger = SalesLedger()
    load_sample_data(
        CatalogStore(), other_ledger, AnalyticsStore(), np.random.default_rng(9), now=now
    )

    assert [(r.book_id, r.quantity, r.date) for r in ledger.get_sales()] == [
        (r.book_id, r.quantity, r.date) for r in other_ledger.get_sales()
    ]
