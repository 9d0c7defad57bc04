"""
Centralized Enum definitions for the project.
"""

from enum import Enum


class Genre(str, Enum):
    """Fixed set of catalog genres"""

    FICTION = "fiction"
    NON_FICTION = "non-fiction"
    MYSTERY = "mystery"
    SCIFI = "scifi"  # Sci-Fi & Fantasy
    BIOGRAPHY = "biography"
    CHILDREN = "children"


class AvailabilityStatus(str, Enum):
    """Availability of a book on the storefront"""

    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"
    PRE_ORDER = "pre-order"  # Set explicitly, never derived from stock


class DemandTrend(str, Enum):
    """Coarse classification of recent sales velocity"""

    RISING = "rising"
    STABLE = "stable"
    FALLING = "falling"


class CompetitivePosition(str, Enum):
    """Price position of a book relative to its genre's average price"""

    PREMIUM = "premium"
    AVERAGE = "average"
    DISCOUNT = "discount"


class OrderStatus(str, Enum):
    """Possible states of a storefront order"""

    PENDING = "pending"
    PAID = "paid"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
