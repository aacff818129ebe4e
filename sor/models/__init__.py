"""Market data models."""

from sor.models.market import (
    Asset,
    BookLevels,
    MarketSpec,
    PriceLevel,
    Snapshot,
    TradedPair,
)

__all__ = [
    "Asset",
    "BookLevels",
    "MarketSpec",
    "PriceLevel",
    "Snapshot",
    "TradedPair",
]
