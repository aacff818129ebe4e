"""Liquidity graph of order-book snapshots.

Each listed market contributes two directed edges sharing the same snapshot:
base -> quote sells the base into the bids, quote -> base buys the base from
the asks. Routes minimize the number of books traversed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from sor.models.market import MarketSpec, Snapshot
from sor.routing.pathfinding import BestValueFinder

logger = structlog.get_logger()


@dataclass(frozen=True)
class GraphEdge:
    """One traversable direction of a market.

    Attributes:
        snapshot: Latest depth of the market
        is_sell_side: True when traversing base -> quote (hitting bids)
        market: Market rules and canonical pair
    """

    snapshot: Snapshot
    is_sell_side: bool
    market: MarketSpec

    @property
    def spend_asset(self) -> str:
        pair = self.market.pair
        return pair.base if self.is_sell_side else pair.quote

    @property
    def receive_asset(self) -> str:
        return self.market.pair.other(self.spend_asset)


class FewestHops:
    """Cost model preferring shorter edge lists.

    The empty list doubles as the "nothing found yet" value, so any
    non-empty path beats it.
    """

    def zero(self) -> tuple[GraphEdge, ...]:
        return ()

    def combine(self, acc: tuple[GraphEdge, ...], edge: GraphEdge) -> tuple[GraphEdge, ...]:
        return (*acc, edge)

    def better_than(self, a: tuple[GraphEdge, ...], b: tuple[GraphEdge, ...]) -> bool:
        return len(b) == 0 or len(a) < len(b)


class LiquidityGraph:
    """Process-wide routing graph owned by one engine."""

    def __init__(self, assets: Iterable[str], max_hops: int) -> None:
        self._finder: BestValueFinder[GraphEdge, tuple[GraphEdge, ...]] = BestValueFinder(
            assets, FewestHops(), max_hops
        )

    @property
    def max_hops(self) -> int:
        return self._finder.max_hops

    def update_snapshot(self, market: MarketSpec, snapshot: Snapshot | None) -> bool:
        """Store a fresh snapshot (or remove the market with None).

        Returns:
            False if the market's base and quote are the same asset
        """
        base, quote = market.pair.base, market.pair.quote
        if base == quote:
            return False
        if snapshot is None:
            self._finder.update_edge(base, quote, None, None)
            logger.debug("graph_market_removed", market=str(market.pair))
            return True
        self._finder.update_edge(
            base,
            quote,
            GraphEdge(snapshot=snapshot, is_sell_side=True, market=market),
            GraphEdge(snapshot=snapshot, is_sell_side=False, market=market),
        )
        return True

    def edge(self, spend: str, receive: str) -> GraphEdge | None:
        return self._finder.edge(spend, receive)

    def find_route(
        self,
        source: str,
        target: str,
        exclude: Iterable[str] | None = None,
        include_only: Iterable[str] | None = None,
    ) -> list[GraphEdge] | None:
        """Fewest-hops route from source to target.

        Returns:
            Edges in traversal order, or None if no route exists
        """
        found = self._finder.find_path((), source, (target,), exclude, include_only)
        if found is None or not found.value:
            return None
        return list(found.value)


__all__ = ["FewestHops", "GraphEdge", "LiquidityGraph"]
