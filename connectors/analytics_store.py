"""
Module: connectors.analytics_store

Caches the latest pricing suggestion per book and holds category-level
stock/sales data for the admin dashboard.
"""

import logging
from itertools import count

from models.analytics import CategoryData
from models.pricing import PriceSuggestion, PricingAnalytics

logger = logging.getLogger(__name__)


class AnalyticsStore:
    """
    One PricingAnalytics entry per book; saving a new suggestion replaces the
    previous one. No suggestion history is kept.
    """

    def __init__(self):
        self._by_book: dict[int, PricingAnalytics] = {}
        self._category_data: dict[int, CategoryData] = {}
        self._ids = count(1)
        self._category_ids = count(1)

    def save_suggestion(
        self, suggestion: PriceSuggestion, potential_impact: float = 0.0
    ) -> PricingAnalytics:
        entry = PricingAnalytics(
            id=next(self._ids),
            book_id=suggestion.book_id,
            current_price=suggestion.current_price,
            recommended_price=suggestion.suggested_price,
            potential_impact=potential_impact,
            confidence=suggestion.confidence if suggestion.confidence is not None else 0.0,
            suggestion=suggestion,
        )
        if suggestion.book_id in self._by_book:
            logger.debug(f"Replacing cached suggestion for book {suggestion.book_id}")
        self._by_book[suggestion.book_id] = entry
        return entry

    def get_for_book(self, book_id: int) -> PricingAnalytics | None:
        return self._by_book.get(book_id)

    def list_all(self) -> list[PricingAnalytics]:
        return sorted(self._by_book.values(), key=lambda a: a.book_id)

    def add_category_data(self, category: str, total_sales: int, stock_level: float) -> CategoryData:
        data = CategoryData(
            id=next(self._category_ids),
            category=category,
            total_sales=total_sales,
            stock_level=stock_level,
        )
        self._category_data[data.id] = data
        return data

    def update_category_data(self, data_id: int, **changes) -> CategoryData | None:
        data = self._category_data.get(data_id)
        if data is None:
            return None
        updated = CategoryData.model_validate({**data.model_dump(), **changes})
        self._category_data[data_id] = updated
        return updated

    def get_category_data(self) -> list[CategoryData]:
        return list(self._category_data.values())
