"""
Module: connectors.sales_ledger

Append-only in-memory ledger of sale records, the demand signal for pricing.
"""

import logging
from datetime import datetime
from itertools import count

from models.sales import SaleRecord, SalesHistory

logger = logging.getLogger(__name__)


class SalesLedger:
    """
    Sale records keyed by id. Records are immutable and never removed.
    """

    def __init__(self):
        self._records: dict[int, SaleRecord] = {}
        self._ids = count(1)

    def __len__(self) -> int:
        return len(self._records)

    def record_sale(
        self,
        book_id: int,
        quantity: int,
        total_amount: float,
        date: datetime | None = None,
        order_id: int | None = None,
    ) -> SaleRecord:
        record = SaleRecord(
            id=next(self._ids),
            book_id=book_id,
            quantity=quantity,
            total_amount=round(total_amount, 2),
            date=date or datetime.now(),
            order_id=order_id,
        )
        self._records[record.id] = record
        logger.debug(f"Recorded sale {record.id}: book {book_id} x{quantity}")
        return record

    def get_sales(self) -> list[SaleRecord]:
        """All records, ordered by date."""
        return sorted(self._records.values(), key=lambda r: (r.date, r.id))

    def get_sales_for_book(self, book_id: int) -> list[SaleRecord]:
        """Records for one book, oldest first."""
        return [r for r in self.get_sales() if r.book_id == book_id]

    def get_history(self, book_id: int, max_points: int | None = None) -> SalesHistory:
        return SalesHistory.from_records(
            book_id, self.get_sales_for_book(book_id), max_points=max_points
        )

    def units_sold_by_book(self) -> dict[int, int]:
        totals: dict[int, int] = {}
        for record in self._records.values():
            totals[record.book_id] = totals.get(record.book_id, 0) + record.quantity
        return totals
