"""Multi-book liquidity path with damped aggregate capacity.

A route's capacity is not the capacity of its first book: every later book
can only pass on what it can absorb. For spend liquidity, each adjacent pair
of hops contributes the ratio of what hop i can absorb to what hop i-1 can
deliver; for receive liquidity, the ratio of what hop i-1 can deliver to
what hop i needs. Ratios are capped at 1.0 and multiplied in 1e18 fixed
point. Any empty hop collapses the factor to zero.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from functools import cached_property

from sor.liquidity.base import LiquidityPath
from sor.liquidity.direct import DirectPath
from sor.markets.pairs import DEFAULT_PAIR_RESOLVER, PairResolver
from sor.math.fixed_point import ONE_18, capped_ratio, mul_down
from sor.models.market import MarketSpec, Snapshot
from sor.routing.graph import GraphEdge


class MultiHopPath(LiquidityPath):
    """A swap routed through several markets.

    Args:
        hops: Graph edges in traversal order
        decimals_of: Asset symbol to decimals lookup
        pairs: Orients the overall swap between the first spend asset and
            the last receive asset
    """

    def __init__(
        self,
        hops: Sequence[GraphEdge],
        decimals_of: Callable[[str], int],
        pairs: PairResolver = DEFAULT_PAIR_RESOLVER,
    ) -> None:
        self._hops = tuple(hops)
        self._decimals_of = decimals_of
        self.pair = None
        if self._hops:
            self.pair = pairs.canonical_pair(
                self._hops[0].spend_asset, self._hops[-1].receive_asset
            )

    def hop_count(self) -> int:
        return len(self._hops)

    def snapshot(self, index: int) -> Snapshot | None:
        return self._hops[index].snapshot

    def market(self, index: int) -> MarketSpec:
        return self._hops[index].market

    def is_sell_side(self, index: int) -> bool:
        return self._hops[index].is_sell_side

    def spend_decimals(self, index: int) -> int:
        return self._decimals_of(self.spend_asset(index))

    def receive_decimals(self, index: int) -> int:
        return self._decimals_of(self.receive_asset(index))

    @cached_property
    def spend_factor(self) -> int:
        """Damping applied to the first hop's spend liquidity (1e18 scale)."""
        factor = ONE_18
        for i in range(1, self.hop_count()):
            upstream = self.hop_receive_liquidity(i - 1)
            if upstream == 0:
                return 0
            factor = mul_down(factor, capped_ratio(self.hop_spend_liquidity(i), upstream))
        return factor

    @cached_property
    def receive_factor(self) -> int:
        """Damping applied to the last hop's receive liquidity (1e18 scale)."""
        factor = ONE_18
        for i in range(self.hop_count() - 1, 0, -1):
            downstream = self.hop_spend_liquidity(i)
            if downstream == 0:
                return 0
            factor = mul_down(factor, capped_ratio(self.hop_receive_liquidity(i - 1), downstream))
        return factor

    def spendable_liquidity(self) -> int:
        if self.is_empty():
            return 0
        return mul_down(self.hop_spend_liquidity(0), self.spend_factor)

    def receivable_liquidity(self) -> int:
        if self.is_empty():
            return 0
        return mul_down(self.hop_receive_liquidity(self.hop_count() - 1), self.receive_factor)

    def slice(self, index: int) -> DirectPath:
        edge = self._hops[index]
        pair = edge.market.pair
        return DirectPath(
            edge.snapshot,
            edge.market,
            edge.is_sell_side,
            self._decimals_of(pair.base),
            self._decimals_of(pair.quote),
        )

    def __repr__(self) -> str:
        if self.is_empty():
            return "MultiHopPath()"
        route = " -> ".join([self.spend_asset(0), *(e.receive_asset for e in self._hops)])
        return f"MultiHopPath({route})"


__all__ = ["MultiHopPath"]
