"""
FastAPI application for the bookstore storefront and its admin pricing tools.

State is held in memory and seeded with sample data on creation.
Run with: uvicorn demos.storefront_api:app --reload
"""

import numpy as np
from fastapi import APIRouter, FastAPI, Header, HTTPException, Query, Response
from fastapi.middleware.cors import CORSMiddleware

from agents.analytics import (
    category_demand_forecasts,
    category_distribution,
    category_forecasts,
    sales_chart,
)
from agents.bulk_pricing import BulkPriceUpdater
from agents.checkout import CheckoutService
from agents.pricing import PricingAgent
from config.config import AppSettings
from connectors.analytics_store import AnalyticsStore
from connectors.cart_store import CartStore
from connectors.catalog_store import CatalogStore
from connectors.order_store import OrderStore
from connectors.sales_ledger import SalesLedger
from connectors.sample_data import load_sample_data
from models.analytics import (
    CategoryDistribution,
    CategoryForecast,
    DemandForecast,
    SalesReport,
)
from models.book import Book, BookCreate, BookFilters, BookUpdate
from models.enums import AvailabilityStatus, Genre
from models.errors import (
    BookNotFoundError,
    CartItemNotFoundError,
    EmptyCartError,
    InsufficientStockError,
)
from models.order import (
    CartItem,
    CartItemCreate,
    CartItemQuantity,
    CartSummary,
    CheckoutRequest,
    DirectOrderRequest,
    OrderReceipt,
)
from models.pricing import (
    BulkAnalysisResult,
    BulkPriceUpdateResult,
    DemandScore,
    PriceSuggestion,
    PriceUpdateRequest,
    PricingAnalytics,
)
from utils.logger import get_logger

DEFAULT_SESSION = "anonymous"


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Build the app with fresh in-memory stores."""
    settings = settings or AppSettings.from_env()
    logger = get_logger("storefront-api", settings.log_level)
    rng = np.random.default_rng(settings.pricing.seed)

    catalog = CatalogStore(low_stock_threshold=settings.inventory.low_stock_threshold)
    ledger = SalesLedger()
    analytics = AnalyticsStore()
    carts = CartStore()
    orders = OrderStore()
    if settings.load_sample_data:
        load_sample_data(catalog, ledger, analytics, rng)

    pricing_agent = PricingAgent(catalog, ledger, analytics, settings.pricing, rng=rng)
    price_updater = BulkPriceUpdater(catalog)
    checkout = CheckoutService(catalog, carts, orders, ledger, settings.checkout)

    app = FastAPI(
        title="Bookstore Storefront API",
        description="Catalog, cart, checkout and rule-based pricing suggestions",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Restrict in production
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.catalog = catalog
    app.state.ledger = ledger
    app.state.analytics = analytics
    app.state.carts = carts
    app.state.orders = orders
    app.state.pricing_agent = pricing_agent

    router = APIRouter(prefix="/api")

    # --- Catalog ---

    @router.get("/books", response_model=list[Book])
    async def list_books():
        return catalog.list_books()

    @router.get("/books/filter", response_model=list[Book])
    async def filter_books(
        search: str | None = None,
        author: str | None = None,
        min_price: float | None = Query(default=None, alias="minPrice", ge=0),
        max_price: float | None = Query(default=None, alias="maxPrice", ge=0),
        genres: str | None = None,
        availability: str | None = None,
        min_rating: float | None = Query(default=None, alias="minRating", ge=0, le=5),
        featured: bool | None = None,
        new_release: bool | None = Query(default=None, alias="newRelease"),
        best_seller: bool | None = Query(default=None, alias="bestSeller"),
    ):
        try:
            filters = BookFilters(
                search=search,
                author=author,
                min_price=min_price,
                max_price=max_price,
                genres={Genre(g) for g in _split_csv(genres)},
                availability={AvailabilityStatus(a) for a in _split_csv(availability)},
                min_rating=min_rating,
                featured=featured,
                new_release=new_release,
                best_seller=best_seller,
            )
        except ValueError as e:
            raise HTTPException(400, f"Invalid filter: {e}")
        return catalog.filter_books(filters)

    @router.get("/books/featured", response_model=list[Book])
    async def featured_books():
        return catalog.get_featured()

    @router.get("/books/new-releases", response_model=list[Book])
    async def new_releases():
        return catalog.get_new_releases()

    @router.get("/books/bestsellers", response_model=list[Book])
    async def bestsellers():
        return catalog.get_bestsellers()

    @router.get("/books/genre/{genre}", response_model=list[Book])
    async def books_by_genre(genre: Genre):
        return catalog.get_books_by_genre(genre)

    @router.post("/books/analyze-prices", response_model=BulkAnalysisResult)
    async def analyze_all_prices():
        return pricing_agent.analyze_all()

    @router.post("/books/update-prices", response_model=BulkPriceUpdateResult)
    async def update_prices(request: PriceUpdateRequest):
        return price_updater.apply(request.price_updates)

    @router.get("/books/{book_id}", response_model=Book)
    async def get_book(book_id: int):
        book = catalog.get_book(book_id)
        if book is None:
            raise HTTPException(404, "Book not found")
        return book

    @router.post("/books", response_model=Book, status_code=201)
    async def create_book(data: BookCreate):
        return catalog.create_book(data)

    @router.put("/books/{book_id}", response_model=Book)
    async def update_book(book_id: int, changes: BookUpdate):
        try:
            book = catalog.update_book(book_id, changes)
        except ValueError as e:
            raise HTTPException(400, f"Invalid book data: {e}")
        if book is None:
            raise HTTPException(404, "Book not found")
        return book

    @router.delete("/books/{book_id}", status_code=204)
    async def delete_book(book_id: int):
        if not catalog.delete_book(book_id):
            raise HTTPException(404, "Book not found")
        return Response(status_code=204)

    # --- Pricing ---

    @router.post("/books/{book_id}/analyze-price", response_model=PriceSuggestion)
    async def analyze_price(book_id: int):
        try:
            return pricing_agent.analyze_book(book_id)
        except BookNotFoundError:
            raise HTTPException(404, "Book not found")
        except ValueError as e:
            logger.warning(f"Could not generate a suggestion for book {book_id}: {e}")
            raise HTTPException(400, f"Could not generate a suggestion for book {book_id}")

    @router.get("/books/{book_id}/demand-score", response_model=DemandScore)
    async def demand_score(book_id: int):
        try:
            return DemandScore(book_id=book_id, demand_score=pricing_agent.demand_score(book_id))
        except BookNotFoundError:
            raise HTTPException(404, "Book not found")

    @router.get("/analytics", response_model=list[PricingAnalytics])
    async def get_analytics():
        return analytics.list_all()

    @router.get("/analytics/book/{book_id}", response_model=PricingAnalytics)
    async def get_book_analytics(book_id: int):
        entry = analytics.get_for_book(book_id)
        if entry is None:
            raise HTTPException(404, "Analytics not found for this book")
        return entry

    # --- Sales & categories ---

    @router.get("/sales", response_model=SalesReport)
    async def get_sales():
        records = ledger.get_sales()
        return SalesReport(sales=records, chart_data=sales_chart(records))

    @router.get("/category-distribution", response_model=CategoryDistribution)
    async def get_category_distribution():
        return category_distribution(catalog.list_books(), ledger.get_sales())

    @router.get("/category-forecasts", response_model=list[CategoryForecast])
    async def get_category_forecasts():
        return category_forecasts(analytics.get_category_data(), settings.analytics)

    @router.get("/demand-forecast", response_model=list[DemandForecast])
    async def get_demand_forecast():
        return category_demand_forecasts(
            analytics.get_category_data(), rng, settings.analytics
        )

    # --- Cart & orders ---

    def _session_item(item_id: int, session_id: str) -> CartItem:
        item = carts.get_item(item_id)
        if item is None or item.session_id != session_id:
            raise HTTPException(404, "Cart item not found")
        return item

    @router.get("/cart", response_model=CartSummary)
    async def get_cart(x_session_id: str = Header(default=DEFAULT_SESSION)):
        return checkout.cart_summary(x_session_id)

    @router.post("/cart", response_model=CartItem, status_code=201)
    async def add_to_cart(data: CartItemCreate, x_session_id: str = Header(default=DEFAULT_SESSION)):
        try:
            return checkout.add_to_cart(x_session_id, data.book_id, data.quantity)
        except BookNotFoundError:
            raise HTTPException(404, "Book not found")

    @router.put("/cart/{item_id}", response_model=CartSummary)
    async def update_cart_item(
        item_id: int,
        data: CartItemQuantity,
        x_session_id: str = Header(default=DEFAULT_SESSION),
    ):
        _session_item(item_id, x_session_id)
        try:
            carts.update_quantity(item_id, data.quantity)
        except CartItemNotFoundError:
            raise HTTPException(404, "Cart item not found")
        return checkout.cart_summary(x_session_id)

    @router.delete("/cart/{item_id}", status_code=204)
    async def remove_cart_item(item_id: int, x_session_id: str = Header(default=DEFAULT_SESSION)):
        _session_item(item_id, x_session_id)
        carts.remove_item(item_id)
        return Response(status_code=204)

    @router.delete("/cart", status_code=204)
    async def clear_cart(x_session_id: str = Header(default=DEFAULT_SESSION)):
        carts.clear(x_session_id)
        return Response(status_code=204)

    @router.post("/checkout", response_model=OrderReceipt, status_code=201)
    async def checkout_cart(request: CheckoutRequest, x_session_id: str = Header(default=DEFAULT_SESSION)):
        try:
            return checkout.checkout(x_session_id, request.customer)
        except EmptyCartError:
            raise HTTPException(400, "Cart is empty")
        except BookNotFoundError as e:
            raise HTTPException(404, str(e))
        except InsufficientStockError as e:
            raise HTTPException(409, str(e))

    @router.post("/orders", response_model=OrderReceipt, status_code=201)
    async def create_order(request: DirectOrderRequest, x_session_id: str = Header(default=DEFAULT_SESSION)):
        try:
            return checkout.place_order(x_session_id, request.customer, request.items)
        except BookNotFoundError as e:
            raise HTTPException(404, str(e))
        except InsufficientStockError as e:
            raise HTTPException(409, str(e))

    @router.get("/orders/{order_id}", response_model=OrderReceipt)
    async def get_order(order_id: int):
        receipt = checkout.get_receipt(order_id)
        if receipt is None:
            raise HTTPException(404, "Order not found")
        return receipt

    app.include_router(router)
    logger.info(f"Storefront API ready with {len(catalog)} books")
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
