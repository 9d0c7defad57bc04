"""
Pricing-related data models.
Includes the PricingInputs dataclass consumed by the recommendation engine,
the PriceSuggestion it produces, the cached PricingAnalytics entry and the
bulk price update payloads.
"""

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import AliasChoices, Field

from .base import StoreModel
from .enums import CompetitivePosition, DemandTrend


@dataclass
class PricingInputs:
    """
    Snapshot of one book's attributes as seen by the pricing engine.
    """

    book_id: int
    price: float
    stock_quantity: int
    rating: float
    sales_history: list[int] = field(default_factory=list)  # Most recent last


class PriceSuggestion(StoreModel):
    book_id: int
    current_price: float
    suggested_price: float
    percent_change: float
    demand_trend: DemandTrend
    market_average: float | None = None
    competitive_position: CompetitivePosition | None = None
    elasticity_factor: float | None = None
    confidence: float | None = None
    demand_score: float | None = None


class PricingAnalytics(StoreModel):
    """Latest suggestion cached for a book; replaced on every analysis."""

    id: int
    book_id: int
    current_price: float
    recommended_price: float
    potential_impact: float
    confidence: float
    suggestion: PriceSuggestion | None = None
    created_at: datetime = Field(default_factory=datetime.now)


class AnalysisError(StoreModel):
    book_id: int
    message: str


class BulkAnalysisResult(StoreModel):
    price_analysis: list[PriceSuggestion] = Field(default_factory=list)
    errors: list[AnalysisError] = Field(default_factory=list)


class PriceUpdate(StoreModel):
    """One requested price change. ``id`` is accepted as an alias of book_id."""

    book_id: int = Field(validation_alias=AliasChoices("bookId", "id", "book_id"))
    old_price: float | None = Field(default=None, gt=0)
    new_price: float = Field(gt=0)


class PriceUpdateRequest(StoreModel):
    price_updates: list[PriceUpdate]


class AppliedPriceUpdate(StoreModel):
    id: int
    title: str
    old_price: float
    new_price: float
    percent_change: float


class BulkPriceUpdateResult(StoreModel):
    updated: list[AppliedPriceUpdate] = Field(default_factory=list)
    count: int = 0
    skipped: list[int] = Field(default_factory=list)


class DemandScore(StoreModel):
    book_id: int
    demand_score: float = Field(ge=0, le=10)
