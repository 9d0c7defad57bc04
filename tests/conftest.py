import sys
from pathlib import Path

import numpy as np
import pytest

# Ensure project root is on sys.path to allow `import agents`, `import models`, etc.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from connectors.analytics_store import AnalyticsStore  # noqa: E402
from connectors.cart_store import CartStore  # noqa: E402
from connectors.catalog_store import CatalogStore  # noqa: E402
from connectors.order_store import OrderStore  # noqa: E402
from connectors.sales_ledger import SalesLedger  # noqa: E402
from models.book import BookCreate  # noqa: E402
from models.enums import Genre  # noqa: E402
from models.order import CustomerInfo  # noqa: E402


def make_book(**overrides) -> BookCreate:
    fields = {
        "title": "Test Book",
        "author": "Test Author",
        "price": 20.0,
        "genre": Genre.FICTION,
        "stock_quantity": 50,
        "rating": 4.0,
    }
    fields.update(overrides)
    return BookCreate(**fields)


@pytest.fixture
def catalog() -> CatalogStore:
    return CatalogStore(low_stock_threshold=10)


@pytest.fixture
def ledger() -> SalesLedger:
    return SalesLedger()


@pytest.fixture
def analytics_store() -> AnalyticsStore:
    return AnalyticsStore()


@pytest.fixture
def carts() -> CartStore:
    return CartStore()


@pytest.fixture
def orders() -> OrderStore:
    return OrderStore()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def customer() -> CustomerInfo:
    return CustomerInfo(
        customer_name="Ada Reader",
        email="ada@example.com",
        address="1 Library Lane",
        city="Springfield",
        state="IL",
        zip="62701",
        country="US",
    )


@pytest.fixture
def book_data():
    """Factory for BookCreate payloads with sensible defaults."""
    return make_book
