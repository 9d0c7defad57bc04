"""
Applies a batch of accepted price suggestions back to the catalog.
"""

import logging

from connectors.catalog_store import CatalogStore
from models.errors import BookstoreError
from models.pricing import (
    AppliedPriceUpdate,
    BulkPriceUpdateResult,
    PriceSuggestion,
    PriceUpdate,
)

logger = logging.getLogger(__name__)


def percent_change(old_price: float, new_price: float) -> float:
    return round((new_price - old_price) / old_price * 100, 1)


def select_for_update(
    suggestions: list[PriceSuggestion], min_percent_change: float = 5.0
) -> list[PriceUpdate]:
    """
    Pick the suggestions worth applying: those moving the price by at least
    ``min_percent_change`` percent in either direction, largest move first.
    """
    selected = [s for s in suggestions if abs(s.percent_change) >= min_percent_change]
    selected.sort(key=lambda s: abs(s.suggested_price - s.current_price), reverse=True)
    return [
        PriceUpdate(book_id=s.book_id, old_price=s.current_price, new_price=s.suggested_price)
        for s in selected
    ]


class BulkPriceUpdater:
    """
    Writes new prices one book at a time. There is no atomicity across the
    batch: unknown ids are skipped and a failure on one book does not stop the
    others.
    """

    def __init__(self, catalog: CatalogStore):
        self.catalog = catalog

    def apply(self, updates: list[PriceUpdate]) -> BulkPriceUpdateResult:
        # Deduplicate by book id, last entry wins, first-seen order kept
        deduped: dict[int, PriceUpdate] = {}
        for update in updates:
            deduped[update.book_id] = update

        result = BulkPriceUpdateResult()
        for book_id, update in deduped.items():
            book = self.catalog.get_book(book_id)
            if book is None:
                logger.warning(f"Skipping price update for unknown book {book_id}")
                result.skipped.append(book_id)
                continue

            old_price = update.old_price if update.old_price is not None else book.price
            try:
                updated = self.catalog.update_book(book_id, {"price": update.new_price})
            except (BookstoreError, ValueError) as e:
                logger.error(f"Failed to update price for book {book_id}: {e}")
                result.skipped.append(book_id)
                continue
            if updated is None:
                # Deleted between lookup and write
                result.skipped.append(book_id)
                continue

            applied = AppliedPriceUpdate(
                id=book_id,
                title=updated.title,
                old_price=old_price,
                new_price=updated.price,
                percent_change=percent_change(old_price, updated.price),
            )
            result.updated.append(applied)
            logger.info(
                f"Updated price for book {book_id}: ${old_price:.2f} -> "
                f"${updated.price:.2f} ({applied.percent_change:+.1f}%)"
            )

        result.count = len(result.updated)
        return result
