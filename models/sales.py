"""
Sales ledger data models.
Includes the immutable SaleRecord and the SalesHistory series the pricing
engine consumes.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from pydantic import ConfigDict, Field

from .base import StoreModel


class SaleRecord(StoreModel):
    """One order item's sale, appended once at checkout and never modified."""

    model_config = ConfigDict(frozen=True)

    id: int
    book_id: int
    quantity: int = Field(gt=0)
    total_amount: float = Field(ge=0)
    date: datetime = Field(default_factory=datetime.now)
    order_id: int | None = None


@dataclass
class SalesHistory:
    """
    Per-day sold quantities for one book, oldest first.
    """

    book_id: int
    dates: list[date] = field(default_factory=list)
    daily_quantities: list[int] = field(default_factory=list)

    def total_units(self) -> int:
        return sum(self.daily_quantities)

    def average_daily_sales(self) -> float:
        if not self.daily_quantities:
            return 0.0
        return float(sum(self.daily_quantities)) / len(self.daily_quantities)

    @classmethod
    def from_records(
        cls, book_id: int, records: list[SaleRecord], max_points: int | None = None
    ) -> "SalesHistory":
        """Group records by calendar date and sum quantities per day."""
        per_day: dict[date, int] = {}
        for record in records:
            if record.book_id != book_id:
                continue
            day = record.date.date()
            per_day[day] = per_day.get(day, 0) + record.quantity
        days = sorted(per_day)
        if max_points is not None:
            days = days[-max_points:] if max_points > 0 else []
        return cls(
            book_id=book_id,
            dates=days,
            daily_quantities=[per_day[d] for d in days],
        )
