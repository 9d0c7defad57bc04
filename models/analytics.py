"""
Storefront analytics models: sales chart points, category distribution and
category-level demand forecasts.
"""

from datetime import datetime

from pydantic import Field

from .base import StoreModel
from .sales import SaleRecord


class CategoryData(StoreModel):
    id: int
    category: str
    total_sales: int = Field(ge=0)
    stock_level: float = Field(ge=0, le=1)  # Fraction of target stock on hand
    created_at: datetime = Field(default_factory=datetime.now)


class SalesChartPoint(StoreModel):
    date: str  # ISO date
    total_quantity: int
    total_amount: float


class CategorySales(StoreModel):
    genre: str
    book_count: int
    total_sales: int


class CategoryDistribution(StoreModel):
    by_sales: list[CategorySales] = Field(default_factory=list)
    by_inventory: list[CategorySales] = Field(default_factory=list)


class CategoryForecast(StoreModel):
    category: str
    projected_growth: float
    stock_level: float
    recommendation: str


class DemandForecast(StoreModel):
    label: str
    forecast: list[int]
    upper_bound: list[int]
    lower_bound: list[int]


class SalesReport(StoreModel):
    sales: list[SaleRecord] = Field(default_factory=list)
    chart_data: list[SalesChartPoint] = Field(default_factory=list)
