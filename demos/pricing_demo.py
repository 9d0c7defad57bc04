"""
Demonstration of the rule-based pricing suggestions on the sample catalog.

Analyzes every book, prints the suggestions, then applies the ones that move
the price by at least the given threshold.
Run with: python -m demos.pricing_demo
"""

import numpy as np

from agents.bulk_pricing import BulkPriceUpdater, select_for_update
from agents.pricing import PricingAgent
from config.config import AppSettings
from connectors.analytics_store import AnalyticsStore
from connectors.catalog_store import CatalogStore
from connectors.sales_ledger import SalesLedger
from connectors.sample_data import load_sample_data
from utils.logger import get_logger

logger = get_logger("demos.pricing_demo")


def demonstrate_pricing(
    settings: AppSettings | None = None,
    min_percent_change: float = 5.0,
    apply: bool = True,
) -> dict:
    """
    Run a full analyze-then-apply cycle against freshly seeded stores.
    Returns a dictionary with the analysis and the applied updates.
    """
    settings = settings or AppSettings.from_env()
    rng = np.random.default_rng(settings.pricing.seed)
    catalog = CatalogStore(low_stock_threshold=settings.inventory.low_stock_threshold)
    ledger = SalesLedger()
    analytics = AnalyticsStore()
    load_sample_data(catalog, ledger, analytics, rng)

    agent = PricingAgent(catalog, ledger, analytics, settings.pricing, rng=rng)
    logger.info("--- Analyzing catalog prices ---")
    analysis = agent.analyze_all()

    print(f"{'Book':<32} {'Current':>8} {'Suggested':>10} {'Change':>8}  Trend    Position")
    for suggestion in analysis.price_analysis:
        book = catalog.require_book(suggestion.book_id)
        position = suggestion.competitive_position.value if suggestion.competitive_position else "-"
        print(
            f"{book.title[:32]:<32} {suggestion.current_price:>8.2f} "
            f"{suggestion.suggested_price:>10.2f} {suggestion.percent_change:>+7.1f}%  "
            f"{suggestion.demand_trend.value:<8} {position}"
        )
    for error in analysis.errors:
        print(f"! {error.message}")

    updates = select_for_update(analysis.price_analysis, min_percent_change)
    applied = None
    if apply and updates:
        applied = BulkPriceUpdater(catalog).apply(updates)
        logger.info(f"Applied {applied.count} price updates (threshold {min_percent_change}%)")
    else:
        logger.info(f"{len(updates)} suggestions at or above {min_percent_change}% (not applied)")

    return {"analysis": analysis, "selected": updates, "applied": applied}


if __name__ == "__main__":
    demonstrate_pricing()
