"""Single-book liquidity path."""

from __future__ import annotations

from sor.liquidity.base import LiquidityPath
from sor.models.market import MarketSpec, Snapshot


class DirectPath(LiquidityPath):
    """A swap served by one market.

    Args:
        snapshot: Depth of the market, None if it could not be fetched
        market: Market rules; its pair is the path's pair
        is_sell: True when paying with the market's base asset
        base_decimals: Decimals of the market's base asset
        quote_decimals: Decimals of the market's quote asset
    """

    def __init__(
        self,
        snapshot: Snapshot | None,
        market: MarketSpec,
        is_sell: bool,
        base_decimals: int,
        quote_decimals: int,
    ) -> None:
        self.pair = market.pair
        self._snapshot = snapshot
        self._market = market
        self._is_sell = is_sell
        self._spend_decimals = base_decimals if is_sell else quote_decimals
        self._receive_decimals = quote_decimals if is_sell else base_decimals

    def _check_index(self, index: int) -> None:
        if index != 0:
            raise IndexError(f"direct path has a single hop, got index {index}")

    def hop_count(self) -> int:
        return 1

    def is_empty(self) -> bool:
        return self._snapshot is None

    def snapshot(self, index: int) -> Snapshot | None:
        self._check_index(index)
        return self._snapshot

    def market(self, index: int) -> MarketSpec:
        self._check_index(index)
        return self._market

    def is_sell_side(self, index: int) -> bool:
        self._check_index(index)
        return self._is_sell

    def spend_decimals(self, index: int) -> int:
        self._check_index(index)
        return self._spend_decimals

    def receive_decimals(self, index: int) -> int:
        self._check_index(index)
        return self._receive_decimals

    def spendable_liquidity(self) -> int:
        return self.hop_spend_liquidity(0)

    def receivable_liquidity(self) -> int:
        return self.hop_receive_liquidity(0)

    def is_enough_liquidity(self, spend_amount: int, receive_amount: int) -> bool:
        if self._snapshot is None:
            return False
        side = self._snapshot.bids if self._is_sell else self._snapshot.asks
        if not side:
            return False
        return super().is_enough_liquidity(spend_amount, receive_amount)

    def slice(self, index: int) -> DirectPath:
        self._check_index(index)
        return self

    def __repr__(self) -> str:
        direction = "sell" if self._is_sell else "buy"
        return f"DirectPath({self.pair}, {direction})"


__all__ = ["DirectPath"]
