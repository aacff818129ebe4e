"""Common interface of direct and multi-hop liquidity paths."""

from __future__ import annotations

from abc import ABC, abstractmethod

from sor.book.matching import total_base_volume, total_quote_volume
from sor.models.market import MarketSpec, Snapshot, TradedPair


class LiquidityPath(ABC):
    """Read-only view of the books a swap traverses.

    Hop indices run from 0 (the book receiving the caller's pay asset) to
    hop_count() - 1 (the book producing the receive asset).
    """

    pair: TradedPair

    @abstractmethod
    def hop_count(self) -> int: ...

    @abstractmethod
    def snapshot(self, index: int) -> Snapshot | None: ...

    @abstractmethod
    def market(self, index: int) -> MarketSpec: ...

    @abstractmethod
    def is_sell_side(self, index: int) -> bool:
        """True if hop `index` sells its market's base asset."""
        ...

    @abstractmethod
    def spend_decimals(self, index: int) -> int: ...

    @abstractmethod
    def receive_decimals(self, index: int) -> int: ...

    @abstractmethod
    def spendable_liquidity(self) -> int:
        """Pay-asset amount the whole path can absorb, in raw units."""
        ...

    @abstractmethod
    def receivable_liquidity(self) -> int:
        """Receive-asset amount the whole path can deliver, in raw units."""
        ...

    @abstractmethod
    def slice(self, index: int) -> LiquidityPath:
        """Single-hop view of hop `index`."""
        ...

    def is_empty(self) -> bool:
        return self.hop_count() == 0

    def is_direct(self) -> bool:
        return self.hop_count() == 1

    def spend_asset(self, index: int) -> str:
        pair = self.market(index).pair
        return pair.base if self.is_sell_side(index) else pair.quote

    def receive_asset(self, index: int) -> str:
        return self.market(index).pair.other(self.spend_asset(index))

    def base_scale(self, index: int) -> int:
        """Raw units per whole base asset of hop `index`'s market."""
        if self.is_sell_side(index):
            return 10 ** self.spend_decimals(index)
        return 10 ** self.receive_decimals(index)

    def hop_spend_liquidity(self, index: int) -> int:
        """Undamped pay-side depth of one hop.

        Selling consumes bid base volume; buying spends the quote value of
        the asks.
        """
        snapshot = self.snapshot(index)
        if snapshot is None:
            return 0
        if self.is_sell_side(index):
            return total_base_volume(snapshot.bids)
        return total_quote_volume(snapshot.asks, self.base_scale(index))

    def hop_receive_liquidity(self, index: int) -> int:
        """Undamped receive-side depth of one hop."""
        snapshot = self.snapshot(index)
        if snapshot is None:
            return 0
        if self.is_sell_side(index):
            return total_quote_volume(snapshot.bids, self.base_scale(index))
        return total_base_volume(snapshot.asks)

    def is_enough_liquidity(self, spend_amount: int, receive_amount: int) -> bool:
        """True if the path can absorb `spend_amount` and deliver `receive_amount`."""
        if self.is_empty():
            return False
        return (
            self.spendable_liquidity() >= spend_amount
            and self.receivable_liquidity() >= receive_amount
        )


__all__ = ["LiquidityPath"]
