"""
Storefront analytics for the admin dashboard: sales over time, genre
distribution, category restock recommendations and demand forecasts.
"""

import logging

import numpy as np
import pandas as pd

from config.config import AnalyticsConfig
from models.analytics import (
    CategoryData,
    CategoryDistribution,
    CategoryForecast,
    CategorySales,
    DemandForecast,
    SalesChartPoint,
)
from models.book import Book
from models.sales import SaleRecord

logger = logging.getLogger(__name__)


def sales_chart(records: list[SaleRecord]) -> list[SalesChartPoint]:
    """Total quantity and amount per calendar date, oldest first."""
    if not records:
        return []
    df = pd.DataFrame(
        {
            "date": [r.date.date().isoformat() for r in records],
            "quantity": [r.quantity for r in records],
            "amount": [r.total_amount for r in records],
        }
    )
    grouped = (
        df.groupby("date", as_index=False)
        .agg(total_quantity=("quantity", "sum"), total_amount=("amount", "sum"))
        .sort_values("date")
    )
    return [
        SalesChartPoint(
            date=row.date,
            total_quantity=int(row.total_quantity),
            total_amount=round(float(row.total_amount), 2),
        )
        for row in grouped.itertuples(index=False)
    ]


def category_distribution(books: list[Book], records: list[SaleRecord]) -> CategoryDistribution:
    """Per-genre book count and units sold, ranked by sales and by inventory."""
    if not books:
        return CategoryDistribution()
    books_df = pd.DataFrame(
        {"book_id": [b.id for b in books], "genre": [b.genre.value for b in books]}
    )
    if records:
        sales_df = (
            pd.DataFrame(
                {"book_id": [r.book_id for r in records], "quantity": [r.quantity for r in records]}
            )
            .groupby("book_id", as_index=False)["quantity"]
            .sum()
        )
    else:
        sales_df = pd.DataFrame({"book_id": pd.Series(dtype=int), "quantity": pd.Series(dtype=int)})

    merged = books_df.merge(sales_df, on="book_id", how="left").fillna({"quantity": 0})
    per_genre = merged.groupby("genre", as_index=False).agg(
        book_count=("book_id", "count"), total_sales=("quantity", "sum")
    )
    entries = [
        CategorySales(
            genre=row.genre, book_count=int(row.book_count), total_sales=int(row.total_sales)
        )
        for row in per_genre.itertuples(index=False)
    ]
    return CategoryDistribution(
        by_sales=sorted(entries, key=lambda e: e.total_sales, reverse=True),
        by_inventory=sorted(entries, key=lambda e: e.book_count, reverse=True),
    )


def genre_share(books: list[Book]) -> dict[str, int]:
    """Percent of the catalog in each genre, rounded to whole percent."""
    if not books:
        return {}
    counts = pd.Series([b.genre.value for b in books]).value_counts()
    return {genre: int(round(n / len(books) * 100)) for genre, n in counts.items()}


def restock_recommendation(stock_level: float, projected_growth: float) -> str:
    if stock_level < 0.3:
        return "Immediate restock needed"
    if stock_level < 0.5:
        return "Urgent restock recommended" if projected_growth > 5 else "Consider restocking"
    return "Stock levels optimal"


def category_forecasts(
    category_data: list[CategoryData], config: AnalyticsConfig | None = None
) -> list[CategoryForecast]:
    config = config or AnalyticsConfig()
    forecasts = []
    for data in category_data:
        growth = config.category_growth.get(data.category, config.default_growth)
        forecasts.append(
            CategoryForecast(
                category=data.category,
                projected_growth=growth,
                stock_level=data.stock_level,
                recommendation=restock_recommendation(data.stock_level, growth),
            )
        )
    return forecasts


def demand_forecast(
    label: str,
    base_sales: float,
    growth_rate: float,
    rng: np.random.Generator,
    periods: int = 12,
    jitter: float = 0.05,
    band: float = 0.15,
) -> DemandForecast:
    """
    Compound-growth forecast with per-period random variation drawn from
    ``rng`` and a symmetric confidence band.
    """
    steps = np.arange(periods)
    trend = base_sales * np.power(1 + growth_rate, steps)
    noise = rng.uniform(-jitter, jitter, size=periods) if jitter > 0 else np.zeros(periods)
    forecast = np.rint(trend * (1 + noise)).astype(int)
    return DemandForecast(
        label=label,
        forecast=forecast.tolist(),
        upper_bound=np.rint(forecast * (1 + band)).astype(int).tolist(),
        lower_bound=np.rint(forecast * (1 - band)).astype(int).tolist(),
    )


def category_demand_forecasts(
    category_data: list[CategoryData],
    rng: np.random.Generator,
    config: AnalyticsConfig | None = None,
) -> list[DemandForecast]:
    """One monthly forecast series per category, starting from its monthly sales rate."""
    config = config or AnalyticsConfig()
    series = []
    for data in category_data:
        base = data.total_sales / config.sales_history_months
        growth = config.monthly_growth.get(data.category, config.default_monthly_growth)
        series.append(
            demand_forecast(
                data.category,
                base,
                growth,
                rng,
                periods=config.forecast_periods,
                jitter=config.forecast_jitter,
                band=config.forecast_band,
            )
        )
    logger.debug(f"Generated {len(series)} category demand forecasts")
    return series
