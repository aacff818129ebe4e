"""Factory functions for creating test objects.

Usage:
    from tests.helpers import make_snapshot, make_market

    snapshot = make_snapshot(bids=[(PRICE_100, 10 * ONE_STRK)])
"""

from collections.abc import Iterable, Sequence

from sor.config import AssetConfig, ExchangeConfig, MarketConfig
from sor.constants import DEFAULT_TOKEN_ORDERING
from sor.liquidity import DirectPath
from sor.models.market import BookLevels, MarketSpec, PriceLevel, Snapshot, TradedPair
from sor.routing.graph import GraphEdge
from tests.helpers.constants import (
    AETH,
    AUSDC,
    AUSDT,
    MIN_QTY_18,
    ONE_AETH,
    ONE_AUSDC,
    ONE_STRK,
    QTY_STEP_18,
    STRK,
    TOKEN_DECIMALS,
)


def make_levels(levels: Iterable[tuple[int, int]]) -> tuple[PriceLevel, ...]:
    """Build price levels from (price, volume) pairs in raw units."""
    return tuple(PriceLevel(price=price, volume=volume) for price, volume in levels)


def make_snapshot(
    bids: Sequence[tuple[int, int]] = (),
    asks: Sequence[tuple[int, int]] = (),
    msg_id: int | None = None,
) -> Snapshot:
    """Create a snapshot from (price, volume) pairs, best level first."""
    return Snapshot(
        levels=BookLevels(bids=make_levels(bids), asks=make_levels(asks)),
        msg_id=msg_id,
    )


def make_market(
    base: str = STRK,
    quote: str = AUSDC,
    min_qty: int = MIN_QTY_18,
    qty_increment: int = QTY_STEP_18,
    price_increment: int = 1,
) -> MarketSpec:
    """Create market rules; defaults describe STRK/AUSDC."""
    return MarketSpec(
        pair=TradedPair(base=base, quote=quote),
        min_qty=min_qty,
        qty_increment=qty_increment,
        price_increment=price_increment,
    )


def make_direct_path(
    snapshot: Snapshot | None,
    market: MarketSpec | None = None,
    is_sell: bool = True,
) -> DirectPath:
    """Wrap one book in a direct path with the test decimals."""
    market = market or make_market()
    return DirectPath(
        snapshot,
        market,
        is_sell,
        TOKEN_DECIMALS[market.pair.base],
        TOKEN_DECIMALS[market.pair.quote],
    )


def make_edge(snapshot: Snapshot, market: MarketSpec, is_sell: bool) -> GraphEdge:
    return GraphEdge(snapshot=snapshot, is_sell_side=is_sell, market=market)


def strk_book(depth: int = 10) -> Snapshot:
    """STRK/AUSDC book: bids at 100 and 99, asks at 101 and 102."""
    return make_snapshot(
        bids=[(100 * ONE_AUSDC, depth * ONE_STRK), (99 * ONE_AUSDC, 2 * depth * ONE_STRK)],
        asks=[(101 * ONE_AUSDC, depth * ONE_STRK), (102 * ONE_AUSDC, 2 * depth * ONE_STRK)],
    )


def aeth_book() -> Snapshot:
    """AETH/AUSDC book around 2000 AUSDC."""
    return make_snapshot(
        bids=[(1990 * ONE_AUSDC, 10 * ONE_AETH)],
        asks=[(2000 * ONE_AUSDC, 10 * ONE_AETH)],
    )


def stable_book() -> Snapshot:
    """AUSDC/AUSDT book at parity."""
    return make_snapshot(
        bids=[(ONE_AUSDC, 100_000 * ONE_AUSDC)],
        asks=[(ONE_AUSDC, 100_000 * ONE_AUSDC)],
    )


def make_exchange_config(max_hops: int = 3) -> ExchangeConfig:
    """Four-asset exchange: STRK/AUSDC, AETH/AUSDC and AUSDC/AUSDT."""
    return ExchangeConfig(
        assets=tuple(
            AssetConfig(symbol=symbol, decimals=decimals)
            for symbol, decimals in TOKEN_DECIMALS.items()
        ),
        token_ordering=DEFAULT_TOKEN_ORDERING,
        markets=(
            MarketConfig(base=STRK, quote=AUSDC, min_qty=MIN_QTY_18, qty_increment=QTY_STEP_18),
            MarketConfig(base=AETH, quote=AUSDC, min_qty=MIN_QTY_18, qty_increment=QTY_STEP_18),
            MarketConfig(base=AUSDC, quote=AUSDT, min_qty=10 * ONE_AUSDC, qty_increment=1_000),
        ),
        max_hops=max_hops,
    )
