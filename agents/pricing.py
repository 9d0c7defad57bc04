"""
PricingAgent and the rule-based price/demand recommendation engine behind the
admin dashboard's "AI" price suggestions.

The engine itself is a set of pure functions over ``PricingInputs``. The only
randomness (confidence jitter and, optionally, a simulated market average)
comes from a ``numpy.random.Generator`` passed in by the caller.
"""

import logging
import math

import numpy as np

from config.config import PricingEngineConfig
from connectors.analytics_store import AnalyticsStore
from connectors.catalog_store import CatalogStore
from connectors.sales_ledger import SalesLedger
from models.book import Book
from models.enums import CompetitivePosition, DemandTrend
from models.errors import BookstoreError, PricingValidationError
from models.pricing import (
    AnalysisError,
    BulkAnalysisResult,
    PriceSuggestion,
    PricingInputs,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = PricingEngineConfig()


def validate_inputs(inputs: PricingInputs, market_average: float | None = None) -> None:
    """Reject malformed numeric input before any computation."""
    if not math.isfinite(inputs.price) or inputs.price <= 0:
        raise PricingValidationError(f"price must be positive, got {inputs.price}")
    if inputs.stock_quantity < 0:
        raise PricingValidationError(
            f"stock_quantity must be non-negative, got {inputs.stock_quantity}"
        )
    if not 0 <= inputs.rating <= 5:
        raise PricingValidationError(f"rating must be within 0-5, got {inputs.rating}")
    if any(q < 0 for q in inputs.sales_history):
        raise PricingValidationError("sales_history must not contain negative quantities")
    if market_average is not None and (
        not math.isfinite(market_average) or market_average <= 0
    ):
        raise PricingValidationError(
            f"market_average must be positive, got {market_average}"
        )


def detect_trend(
    sales_history: list[int], config: PricingEngineConfig = DEFAULT_CONFIG
) -> tuple[DemandTrend, float]:
    """
    Classify recent sales velocity.

    The last ``trend_window`` points are split into an earlier and a later half
    and the percent change between the halves' means is compared against
    ``trend_threshold_percent``. Empty history counts as flat zero sales.

    Returns:
        (trend, change_percent)
    """
    history = list(sales_history) or [0] * config.trend_window
    recent = history[-config.trend_window :]
    if len(recent) < 2:
        return DemandTrend.STABLE, 0.0

    half = len(recent) // 2
    first, second = recent[:half], recent[half:]
    first_avg = sum(first) / len(first)
    second_avg = sum(second) / len(second)

    if first_avg > 0:
        change_percent = (second_avg - first_avg) / first_avg * 100
    else:
        change_percent = 100.0 if second_avg > 0 else 0.0

    if change_percent > config.trend_threshold_percent:
        return DemandTrend.RISING, change_percent
    if change_percent < -config.trend_threshold_percent:
        return DemandTrend.FALLING, change_percent
    return DemandTrend.STABLE, change_percent


def elasticity_factor(
    trend: DemandTrend, config: PricingEngineConfig = DEFAULT_CONFIG
) -> float:
    # Rising demand is less elastic (room to raise), falling demand must compete
    if trend == DemandTrend.RISING:
        return config.rising_elasticity
    if trend == DemandTrend.FALLING:
        return config.falling_elasticity
    return 1.0


def competitive_position(
    price: float, market_average: float, config: PricingEngineConfig = DEFAULT_CONFIG
) -> CompetitivePosition:
    ratio = price / market_average
    if ratio > config.premium_ratio:
        return CompetitivePosition.PREMIUM
    if ratio < config.discount_ratio:
        return CompetitivePosition.DISCOUNT
    return CompetitivePosition.AVERAGE


def trend_multiplier(
    trend: DemandTrend, config: PricingEngineConfig = DEFAULT_CONFIG
) -> float:
    if trend == DemandTrend.RISING:
        return config.rising_trend_multiplier
    if trend == DemandTrend.FALLING:
        return config.falling_trend_multiplier
    return 1.0


def base_multiplier(
    inputs: PricingInputs,
    trend: DemandTrend,
    config: PricingEngineConfig = DEFAULT_CONFIG,
) -> float:
    """Stock, rating and trend nudges, each centered at 1.0, combined multiplicatively."""
    stock_factor = 1 - min(inputs.stock_quantity, config.stock_cap) / config.stock_cap
    stock_nudge = 1 + (stock_factor - 0.5) * config.stock_weight
    rating_nudge = 1 + (inputs.rating / 5 - 0.5) * config.rating_weight
    return stock_nudge * rating_nudge * trend_multiplier(trend, config)


def _cents_ceil(value: float) -> float:
    return math.ceil(value * 100 - 1e-9) / 100


def _cents_floor(value: float) -> float:
    return math.floor(value * 100 + 1e-9) / 100


def predict_optimal_price(
    inputs: PricingInputs,
    market_average: float | None = None,
    config: PricingEngineConfig = DEFAULT_CONFIG,
) -> PriceSuggestion:
    """
    Suggest a price for one book from its price, stock, rating and recent
    sales, optionally blended against the genre's market average.

    Without a market average the suggestion is ``price * base_multiplier``.
    With one, the adjusted price is blended with a market target whose weight
    depends on the competitive position: premium books never drop below the
    market average and discount books never rise above it.

    Raises:
        PricingValidationError: on non-positive price or market average,
            negative stock or sales, or a rating outside 0-5.
    """
    validate_inputs(inputs, market_average)
    trend, change_percent = detect_trend(inputs.sales_history, config)
    elasticity = elasticity_factor(trend, config)
    own_price = inputs.price * base_multiplier(inputs, trend, config)

    position: CompetitivePosition | None = None
    if market_average is None:
        suggested = round(own_price, 2)
    else:
        position = competitive_position(inputs.price, market_average, config)
        ratio = inputs.price / market_average
        if position == CompetitivePosition.PREMIUM:
            target = market_average * min(ratio, config.premium_target_cap) * elasticity
            blend = config.premium_blend
        elif position == CompetitivePosition.DISCOUNT:
            target = market_average * max(ratio, config.discount_target_floor) * elasticity
            blend = config.discount_blend
        else:
            target = market_average * elasticity
            blend = config.average_blend
        suggested = round(own_price * blend + target * (1 - blend), 2)

        if position == CompetitivePosition.PREMIUM:
            suggested = max(suggested, _cents_ceil(market_average))
        elif position == CompetitivePosition.DISCOUNT:
            suggested = min(suggested, _cents_floor(market_average))

    suggested = max(suggested, 0.01)
    percent_change = (suggested - inputs.price) / inputs.price * 100
    logger.debug(
        f"Book {inputs.book_id}: trend={trend.value} ({change_percent:.1f}%), "
        f"position={position.value if position else 'n/a'}, "
        f"{inputs.price:.2f} -> {suggested:.2f}"
    )
    return PriceSuggestion(
        book_id=inputs.book_id,
        current_price=inputs.price,
        suggested_price=suggested,
        percent_change=round(percent_change, 1),
        demand_trend=trend,
        market_average=round(market_average, 2) if market_average is not None else None,
        competitive_position=position,
        elasticity_factor=elasticity,
    )


def calculate_demand_score(
    inputs: PricingInputs, config: PricingEngineConfig = DEFAULT_CONFIG
) -> float:
    """
    Composite 0-10 urgency score: 50% recent sales, 30% rating, 20% stock
    scarcity. Inputs are clamped into range, so this never raises.
    """
    recent = [max(0, q) for q in inputs.sales_history[-config.demand_score_window :]]
    rating = min(max(inputs.rating, 0.0), 5.0)
    stock = max(inputs.stock_quantity, 0)

    sales_score = min(10.0, sum(recent) / config.demand_score_window)
    rating_score = rating / 5 * 10
    stock_score = 10 - min(10.0, stock / 10)
    score = sales_score * 0.5 + rating_score * 0.3 + stock_score * 0.2
    return round(min(max(score, 0.0), 10.0), 1)


def estimate_confidence(rating: float, rng: np.random.Generator, jitter: float) -> float:
    """Rating-based confidence with a small random jitter, clamped to [0, 1]."""
    if rating > 4.0:
        base = 0.75 + (rating - 4) * 0.1
    else:
        base = 0.6 + (rating - 3) * 0.1
    if jitter > 0:
        base += float(rng.uniform(-jitter, jitter))
    return round(min(max(base, 0.0), 1.0), 2)


class PricingAgent:
    """
    Runs the recommendation engine against the catalog and sales ledger and
    caches each result in the analytics store, keyed by book id.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        ledger: SalesLedger,
        analytics: AnalyticsStore,
        config: PricingEngineConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.catalog = catalog
        self.ledger = ledger
        self.analytics = analytics
        self.config = config or PricingEngineConfig()
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)

    def build_inputs(self, book: Book) -> PricingInputs:
        history = self.ledger.get_history(book.id, max_points=self.config.history_points)
        return PricingInputs(
            book_id=book.id,
            price=book.price,
            stock_quantity=book.stock_quantity,
            rating=book.rating,
            sales_history=history.daily_quantities,
        )

    def market_average_for(self, book: Book) -> float | None:
        """Mean price of the other books in the same genre."""
        average = self.catalog.genre_average_price(book.genre, exclude_id=book.id)
        if average is None and self.config.simulate_market_average:
            spread = self.config.market_simulation_spread
            average = book.price * float(self.rng.uniform(1 - spread, 1 + spread))
            logger.debug(f"Simulated market average {average:.2f} for book {book.id}")
        return average

    def demand_score(self, book_id: int) -> float:
        book = self.catalog.require_book(book_id)
        return calculate_demand_score(self.build_inputs(book), self.config)

    def analyze_book(self, book_id: int) -> PriceSuggestion:
        """
        Compute, cache and return the suggestion for one book.

        Raises:
            BookNotFoundError: if the book is not in the catalog.
        """
        book = self.catalog.require_book(book_id)
        inputs = self.build_inputs(book)
        suggestion = predict_optimal_price(
            inputs, self.market_average_for(book), self.config
        )
        suggestion = suggestion.model_copy(
            update={
                "confidence": estimate_confidence(
                    book.rating, self.rng, self.config.confidence_jitter
                ),
                "demand_score": calculate_demand_score(inputs, self.config),
            }
        )
        units = sum(inputs.sales_history)
        impact = round((suggestion.suggested_price - suggestion.current_price) * units, 2)
        self.analytics.save_suggestion(suggestion, potential_impact=impact)
        logger.info(
            f"Price suggestion for book {book_id} '{book.title}': "
            f"${suggestion.current_price:.2f} -> ${suggestion.suggested_price:.2f} "
            f"({suggestion.percent_change:+.1f}%, {suggestion.demand_trend.value})"
        )
        return suggestion

    def analyze_all(self) -> BulkAnalysisResult:
        """Analyze every book; per-book failures are reported, not raised."""
        result = BulkAnalysisResult()
        for book in self.catalog.list_books():
            try:
                result.price_analysis.append(self.analyze_book(book.id))
            except (BookstoreError, ValueError) as e:
                logger.warning(f"Could not generate a suggestion for book {book.id}: {e}")
                result.errors.append(
                    AnalysisError(
                        book_id=book.id,
                        message=f"Could not generate a suggestion for book {book.id}",
                    )
                )
        logger.info(
            f"Analyzed {len(result.price_analysis)} books ({len(result.errors)} failed)"
        )
        return result
