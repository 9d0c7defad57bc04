from datetime import datetime

import numpy as np
import pytest

from agents.analytics import (
    category_demand_forecasts,
    category_distribution,
    category_forecasts,
    demand_forecast,
    genre_share,
    restock_recommendation,
    sales_chart,
)
from config.config import AnalyticsConfig
from models.enums import Genre


def test_sales_chart_groups_by_day(ledger):
    ledger.record_sale(1, 2, 20.0, date=datetime(2026, 5, 2, 9))
    ledger.record_sale(2, 1, 15.5, date=datetime(2026, 5, 1, 18))
    ledger.record_sale(1, 3, 30.0, date=datetime(2026, 5, 2, 17))

    points = sales_chart(ledger.get_sales())

    assert [p.date for p in points] == ["2026-05-01", "2026-05-02"]
    assert points[1].total_quantity == 5
    assert points[1].total_amount == 50.0


def test_sales_chart_empty():
    assert sales_chart([]) == []


def test_category_distribution(catalog, ledger, book_data):
    fiction_a = catalog.create_book(book_data(genre=Genre.FICTION))
    catalog.create_book(book_data(genre=Genre.FICTION))
    mystery = catalog.create_book(book_data(genre=Genre.MYSTERY))
    ledger.record_sale(fiction_a.id, 2, 40.0)
    ledger.record_sale(mystery.id, 7, 140.0)

    distribution = category_distribution(catalog.list_books(), ledger.get_sales())

    assert [(c.genre, c.total_sales) for c in distribution.by_sales] == [
        ("mystery", 7),
        ("fiction", 2),
    ]
    assert distribution.by_inventory[0].genre == "fiction"
    assert distribution.by_inventory[0].book_count == 2


def test_category_distribution_without_sales(catalog, book_data):
    catalog.create_book(book_data(genre=Genre.CHILDREN))
    distribution = category_distribution(catalog.list_books(), [])
    assert distribution.by_sales[0].total_sales == 0


def test_genre_share(catalog, book_data):
    for genre in (Genre.FICTION, Genre.FICTION, Genre.FICTION, Genre.BIOGRAPHY):
        catalog.create_book(book_data(genre=genre))
    assert genre_share(catalog.list_books()) == {"fiction": 75, "biography": 25}


@pytest.mark.parametrize(
    "stock_level, growth, expected",
    [
        (0.23, -2.0, "Immediate restock needed"),
        (0.45, 8.0, "Urgent restock recommended"),
        (0.45, 3.0, "Consider restocking"),
        (0.68, 12.0, "Stock levels optimal"),
    ],
)
def test_restock_recommendation(stock_level, growth, expected):
    assert restock_recommendation(stock_level, growth) == expected


def test_category_forecasts_use_configured_growth(analytics_store):
    analytics_store.add_category_data("Fiction", 1250, 0.68)
    analytics_store.add_category_data("Poetry", 40, 0.1)

    forecasts = category_forecasts(analytics_store.get_category_data(), AnalyticsConfig())

    assert forecasts[0].projected_growth == 12.0
    assert forecasts[1].projected_growth == 5.0
    assert forecasts[1].recommendation == "Immediate restock needed"


def test_demand_forecast_without_jitter_is_compound_growth(rng):
    forecast = demand_forecast("Fiction", 100, 0.1, rng, periods=3, jitter=0.0, band=0.1)
    assert forecast.forecast == [100, 110, 121]
    assert forecast.upper_bound == [110, 121, 133]
    assert forecast.lower_bound == [90, 99, 109]


def test_demand_forecast_bounds_bracket_forecast(rng):
    forecast = demand_forecast("Fiction", 200, 0.03, rng)
    assert len(forecast.forecast) == 12
    for low, mid, high in zip(forecast.lower_bound, forecast.forecast, forecast.upper_bound):
        assert low <= mid <= high


def test_category_demand_forecasts_reproducible(analytics_store):
    analytics_store.add_category_data("Fiction", 1200, 0.68)
    analytics_store.add_category_data("Science Fiction", 600, 0.23)
    data = analytics_store.get_category_data()

    first = category_demand_forecasts(data, np.random.default_rng(5))
    second = category_demand_forecasts(data, np.random.default_rng(5))

    assert first == second
    assert [f.label for f in first] == ["Fiction", "Science Fiction"]
    # 1200 units over six months starts near 200 per month
    assert 190 <= first[0].forecast[0] <= 210
