"""
Configuration classes for the bookstore storefront.
Defines the pricing engine constants, inventory, checkout and analytics
settings in a type-safe, extensible way.
"""

import logging
import os
from dataclasses import dataclass, field

from utils.env import load_project_dotenv


@dataclass
class PricingEngineConfig:
    # Trend detection
    trend_window: int = 3
    trend_threshold_percent: float = 10.0
    # Elasticity per trend
    rising_elasticity: float = 1.15
    falling_elasticity: float = 0.85
    # Competitive position ratio bounds
    premium_ratio: float = 1.1
    discount_ratio: float = 0.9
    # Base multiplier weights (each nudge is centered at 1.0)
    stock_cap: int = 100
    stock_weight: float = 0.2  # +/-10%
    rating_weight: float = 0.3  # +/-15%
    rising_trend_multiplier: float = 1.08
    falling_trend_multiplier: float = 0.93
    # Market blending: share of the book's own adjusted price
    premium_blend: float = 0.7
    discount_blend: float = 0.5
    average_blend: float = 0.6
    premium_target_cap: float = 1.3
    discount_target_floor: float = 0.75
    # Demand score
    demand_score_window: int = 5
    # Analysis
    history_points: int = 10
    confidence_jitter: float = 0.05
    simulate_market_average: bool = False
    market_simulation_spread: float = 0.15
    seed: int | None = 42


@dataclass
class InventoryConfig:
    low_stock_threshold: int = 10


@dataclass
class CheckoutConfig:
    shipping_fee: float = 4.99
    tax_rate: float = 0.08


@dataclass
class AnalyticsConfig:
    forecast_periods: int = 12
    forecast_jitter: float = 0.05  # +/-5% noise per period
    forecast_band: float = 0.15  # +/-15% confidence band
    category_growth: dict[str, float] = field(
        default_factory=lambda: {
            "Fiction": 12.0,
            "Non-Fiction": 8.0,
            "Children's": 3.0,
            "Science Fiction": -2.0,
        }
    )
    default_growth: float = 5.0
    # Monthly compound growth used for the demand forecast series
    monthly_growth: dict[str, float] = field(
        default_factory=lambda: {
            "Fiction": 0.03,
            "Non-Fiction": 0.02,
            "Children's": 0.01,
            "Science Fiction": -0.005,
            "Mystery & Thriller": 0.015,
        }
    )
    default_monthly_growth: float = 0.01
    sales_history_months: int = 6  # Period covered by CategoryData.total_sales


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class AppSettings:
    pricing: PricingEngineConfig = field(default_factory=PricingEngineConfig)
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    checkout: CheckoutConfig = field(default_factory=CheckoutConfig)
    analytics: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    log_level: int = logging.INFO
    load_sample_data: bool = True

    @classmethod
    def from_env(cls) -> "AppSettings":
        """
        Build settings from ``BOOKSTORE_*`` environment variables, loading the
        project-level ``.env`` first. Unset variables keep their defaults.
        """
        load_project_dotenv()
        settings = cls()
        seed = os.getenv("BOOKSTORE_SEED")
        if seed is not None:
            settings.pricing.seed = int(seed) if seed.strip() else None
        settings.pricing.simulate_market_average = _env_bool(
            "BOOKSTORE_SIMULATE_MARKET_AVERAGE", settings.pricing.simulate_market_average
        )
        settings.load_sample_data = _env_bool(
            "BOOKSTORE_LOAD_SAMPLE_DATA", settings.load_sample_data
        )
        level = os.getenv("BOOKSTORE_LOG_LEVEL")
        if level:
            settings.log_level = logging.getLevelName(level.upper())
            if not isinstance(settings.log_level, int):
                raise ValueError(f"Unknown log level: {level}")
        return settings


# Example usage:
# settings = AppSettings.from_env()
# engine_config = settings.pricing
