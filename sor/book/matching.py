"""Order-book matching primitive.

Walks one side of a depth ladder to answer the four questions settlement
estimation needs: how much quote a base quantity yields (or costs), and how
much base is needed for (or bought with) a quote quantity. Every answer
respects the market's minimum quantity and quantity increment and reports
the part of the request that could not be matched, so callers can feed it
back into the requested amount.

Prices are raw quote units per whole base unit. A level of volume `v` at
price `p` is worth `v * p // base_scale` quote. Proceeds are floored per
level and costs are ceiled per level, so rounding always favors the book.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from sor.math.fixed_point import ceil_div
from sor.models.market import MarketSpec, PriceLevel


@dataclass(frozen=True)
class MatchResult:
    """Outcome of walking a ladder.

    Attributes:
        amount: Quote proceeds / quote cost, or base quantity, depending on
            the question asked
        num_trades: Number of price levels touched
        worst_price: Price of the last level touched (0 when nothing matched)
        remainder: Part of the request that was not matched, in the units
            of the request
    """

    amount: int
    num_trades: int
    worst_price: int
    remainder: int

    @classmethod
    def unmatched(cls, requested: int) -> MatchResult:
        return cls(amount=0, num_trades=0, worst_price=0, remainder=requested)


class Matcher(Protocol):
    """Contract of the matching primitive used by the estimator."""

    def out_quote_for_in_base(
        self, bids: Sequence[PriceLevel], base_qty: int, base_scale: int, spec: MarketSpec
    ) -> MatchResult:
        """Quote received for selling `base_qty` into bids."""
        ...

    def in_base_for_out_quote(
        self, bids: Sequence[PriceLevel], quote_qty: int, base_scale: int, spec: MarketSpec
    ) -> MatchResult:
        """Base that must be sold into bids to receive `quote_qty`."""
        ...

    def out_base_for_in_quote(
        self, asks: Sequence[PriceLevel], quote_qty: int, base_scale: int, spec: MarketSpec
    ) -> MatchResult:
        """Base bought from asks when paying `quote_qty`."""
        ...

    def in_quote_for_out_base(
        self, asks: Sequence[PriceLevel], base_qty: int, base_scale: int, spec: MarketSpec
    ) -> MatchResult:
        """Quote paid to buy `base_qty` from asks."""
        ...


def matchable_amount(qty: int, min_qty: int, qty_increment: int) -> int:
    """Clamp a base quantity to what the exchange will match.

    Returns 0 when the quantity is below the market minimum, otherwise the
    quantity rounded down to the increment (0 again if rounding drops it
    below the minimum).
    """
    if qty <= 0 or qty < min_qty:
        return 0
    aligned = qty - qty % qty_increment
    return aligned if aligned >= min_qty else 0


def total_base_volume(levels: Sequence[PriceLevel]) -> int:
    return sum(level.volume for level in levels)


def total_quote_volume(levels: Sequence[PriceLevel], base_scale: int) -> int:
    """Quote value of every level, floored per level."""
    return sum(level.volume * level.price // base_scale for level in levels)


def _walk_base(
    levels: Sequence[PriceLevel], base_qty: int, base_scale: int, *, round_up: bool
) -> tuple[int, int, int, int]:
    """Consume `base_qty` from levels.

    Returns:
        (quote value, levels touched, worst price, base consumed)
    """
    remaining = base_qty
    quote = 0
    trades = 0
    worst = 0
    for level in levels:
        if remaining == 0:
            break
        if level.volume == 0:
            continue
        take = min(remaining, level.volume)
        value = take * level.price
        quote += ceil_div(value, base_scale) if round_up else value // base_scale
        trades += 1
        worst = level.price
        remaining -= take
    return quote, trades, worst, base_qty - remaining


class LadderMatcher:
    """Level-by-level matcher over aggregated price levels."""

    def _base_side(
        self,
        levels: Sequence[PriceLevel],
        base_qty: int,
        base_scale: int,
        spec: MarketSpec,
        round_up: bool,
    ) -> MatchResult:
        qty = matchable_amount(base_qty, spec.min_qty, spec.qty_increment)
        if qty == 0:
            return MatchResult.unmatched(base_qty)

        quote, trades, worst, consumed = _walk_base(levels, qty, base_scale, round_up=round_up)
        if consumed < qty:
            # Book ran out mid-request; only an aligned quantity can rest
            aligned = matchable_amount(consumed, spec.min_qty, spec.qty_increment)
            if aligned == 0:
                return MatchResult.unmatched(base_qty)
            if aligned != consumed:
                quote, trades, worst, consumed = _walk_base(
                    levels, aligned, base_scale, round_up=round_up
                )
        return MatchResult(
            amount=quote, num_trades=trades, worst_price=worst, remainder=base_qty - consumed
        )

    def out_quote_for_in_base(
        self, bids: Sequence[PriceLevel], base_qty: int, base_scale: int, spec: MarketSpec
    ) -> MatchResult:
        return self._base_side(bids, base_qty, base_scale, spec, round_up=False)

    def in_quote_for_out_base(
        self, asks: Sequence[PriceLevel], base_qty: int, base_scale: int, spec: MarketSpec
    ) -> MatchResult:
        return self._base_side(asks, base_qty, base_scale, spec, round_up=True)

    def in_base_for_out_quote(
        self, bids: Sequence[PriceLevel], quote_qty: int, base_scale: int, spec: MarketSpec
    ) -> MatchResult:
        if quote_qty <= 0:
            return MatchResult.unmatched(quote_qty)

        remaining = quote_qty
        base = 0
        for level in bids:
            if remaining <= 0:
                break
            if level.volume == 0:
                continue
            take = min(ceil_div(remaining * base_scale, level.price), level.volume)
            base += take
            remaining -= take * level.price // base_scale

        increment = spec.qty_increment
        aligned = ceil_div(base, increment) * increment
        if aligned > total_base_volume(bids):
            aligned = base - base % increment
        if aligned == 0 or aligned < spec.min_qty:
            return MatchResult.unmatched(quote_qty)

        proceeds, trades, worst, _ = _walk_base(bids, aligned, base_scale, round_up=False)
        return MatchResult(
            amount=aligned,
            num_trades=trades,
            worst_price=worst,
            remainder=quote_qty - min(quote_qty, proceeds),
        )

    def out_base_for_in_quote(
        self, asks: Sequence[PriceLevel], quote_qty: int, base_scale: int, spec: MarketSpec
    ) -> MatchResult:
        if quote_qty <= 0:
            return MatchResult.unmatched(quote_qty)

        remaining = quote_qty
        base = 0
        for level in asks:
            if remaining <= 0:
                break
            take = min(remaining * base_scale // level.price, level.volume)
            if take == 0:
                if level.volume == 0:
                    continue
                break
            base += take
            remaining -= ceil_div(take * level.price, base_scale)

        aligned = matchable_amount(base, spec.min_qty, spec.qty_increment)
        if aligned == 0:
            return MatchResult.unmatched(quote_qty)

        cost, trades, worst, _ = _walk_base(asks, aligned, base_scale, round_up=True)
        return MatchResult(
            amount=aligned, num_trades=trades, worst_price=worst, remainder=quote_qty - cost
        )


DEFAULT_MATCHER = LadderMatcher()


__all__ = [
    "DEFAULT_MATCHER",
    "LadderMatcher",
    "MatchResult",
    "Matcher",
    "matchable_amount",
    "total_base_volume",
    "total_quote_volume",
]
