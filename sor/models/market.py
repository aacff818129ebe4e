"""Market data structures: assets, pairs, trading rules and book snapshots.

Assets, pairs and market specs are immutable configuration loaded once per
process. Snapshots arrive from the exchange and are validated with pydantic;
they accept the exchange's compact `[price, volume, orders]` level encoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


@dataclass(frozen=True)
class Asset:
    """A tradable token.

    Attributes:
        symbol: Exchange-wide token identifier (e.g. "STRK")
        decimals: Number of fractional digits of one whole unit
    """

    symbol: str
    decimals: int

    def __post_init__(self) -> None:
        if self.decimals < 0:
            raise ValueError(f"decimals must be non-negative, got {self.decimals}")


@dataclass(frozen=True)
class TradedPair:
    """A market orientation: base priced in quote."""

    base: str
    quote: str

    def __post_init__(self) -> None:
        if self.base == self.quote:
            raise ValueError(f"base and quote must differ, got {self.base}")

    def other(self, asset: str) -> str:
        """Return the counter asset of `asset` within this pair."""
        if asset == self.base:
            return self.quote
        if asset == self.quote:
            return self.base
        raise ValueError(f"{asset} is not part of {self}")

    def __str__(self) -> str:
        return f"{self.base}/{self.quote}"


@dataclass(frozen=True)
class MarketSpec:
    """Quantization rules of one market.

    All quantities are raw base-asset units.

    Attributes:
        pair: Canonical orientation of the market
        min_qty: Smallest base quantity the exchange will match
        qty_increment: Base quantity step; matchable amounts are multiples of it
        price_increment: Price tick in raw quote units
    """

    pair: TradedPair
    min_qty: int
    qty_increment: int
    price_increment: int = 1

    def __post_init__(self) -> None:
        if self.min_qty < 0:
            raise ValueError(f"min_qty must be non-negative, got {self.min_qty}")
        if self.qty_increment <= 0:
            raise ValueError(f"qty_increment must be positive, got {self.qty_increment}")
        if self.price_increment <= 0:
            raise ValueError(f"price_increment must be positive, got {self.price_increment}")


class PriceLevel(BaseModel):
    """One aggregated level of an order book side.

    `price` is raw quote units per whole base unit; `volume` is raw base units.
    """

    model_config = ConfigDict(frozen=True)

    price: int = Field(gt=0)
    volume: int = Field(ge=0)
    orders: int = Field(default=1, ge=0)

    @model_validator(mode="before")
    @classmethod
    def _from_triple(cls, data: Any) -> Any:
        """Accept the exchange's `[price, volume, orders]` encoding."""
        if isinstance(data, list | tuple):
            if len(data) not in (2, 3):
                raise ValueError(f"price level needs 2 or 3 items, got {len(data)}")
            fields = ("price", "volume", "orders")
            return dict(zip(fields, data, strict=False))
        return data


class BookLevels(BaseModel):
    """Both sides of a book, best level first."""

    model_config = ConfigDict(frozen=True)

    bids: tuple[PriceLevel, ...] = ()
    asks: tuple[PriceLevel, ...] = ()

    @model_validator(mode="after")
    def _check_ordering(self) -> BookLevels:
        bid_prices = [level.price for level in self.bids]
        ask_prices = [level.price for level in self.asks]
        if bid_prices != sorted(bid_prices, reverse=True):
            raise ValueError("bids must be sorted by descending price")
        if ask_prices != sorted(ask_prices):
            raise ValueError("asks must be sorted by ascending price")
        return self


class Snapshot(BaseModel):
    """Point-in-time depth of one market.

    A Settlement is only meaningful against the snapshot it was computed
    from; refreshing is the caller's job.
    """

    model_config = ConfigDict(frozen=True)

    levels: BookLevels = Field(default_factory=BookLevels)
    msg_id: int | None = None
    time: int | None = None

    @property
    def bids(self) -> tuple[PriceLevel, ...]:
        return self.levels.bids

    @property
    def asks(self) -> tuple[PriceLevel, ...]:
        return self.levels.asks

    @property
    def best_bid(self) -> int | None:
        return self.levels.bids[0].price if self.levels.bids else None

    @property
    def best_ask(self) -> int | None:
        return self.levels.asks[0].price if self.levels.asks else None


__all__ = ["Asset", "BookLevels", "MarketSpec", "PriceLevel", "Snapshot", "TradedPair"]
