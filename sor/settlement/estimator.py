"""Single-hop settlement estimation.

Converts a request against one order book into a Settlement. The case is
selected by whether the taker pays with the market's base or quote asset and
by which amount is anchored:

    pay base,  anchor pay      sell exact base for whatever quote
    pay base,  anchor receive  sell whatever base for exact quote
    pay quote, anchor pay      buy whatever base for exact quote
    pay quote, anchor receive  buy exact base for whatever quote

Fees use the parts-per-million scale and slippage the bips scale. The
protection price is the worst level touched and is never slippage-adjusted.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from sor.book.matching import DEFAULT_MATCHER, Matcher, matchable_amount
from sor.constants import EXACT_QUOTE_BUY_HAIRCUT_BIPS, EXACT_QUOTE_RECEIVE_HAIRCUT_BIPS
from sor.liquidity.base import LiquidityPath
from sor.math.fixed_point import BIPS, add_bips, apply_fee, clamp_bips, sub_bips
from sor.models.market import MarketSpec, Snapshot
from sor.settlement.amounts import (
    clean_base_amount,
    min_qty_in_quote,
    rate_string,
    wrap_to_slippage_base,
)
from sor.settlement.model import (
    AnchorField,
    CalcCommand,
    NoSettlementReason,
    NoViableSettlement,
    OrderSide,
    Quantity,
    Settlement,
    SettlementResult,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class _Hop:
    path: LiquidityPath
    snapshot: Snapshot
    market: MarketSpec
    base_scale: int
    pay_asset: str
    receive_asset: str
    pay_decimals: int
    receive_decimals: int
    fee_pbips: int
    slippage_bips: int
    matcher: Matcher


def _reject(hop: _Hop | None, reason: NoSettlementReason, detail: str | None = None) -> NoViableSettlement:
    logger.debug(
        "settlement_not_viable",
        reason=reason.value,
        market=str(hop.market.pair) if hop is not None else None,
        detail=detail,
    )
    return NoViableSettlement.because(reason, detail)


def _sell_impact(protection_price: int, best_bid: int) -> int:
    return BIPS - BIPS * protection_price // best_bid


def _buy_impact(protection_price: int, best_ask: int) -> int:
    return -(BIPS - BIPS * protection_price // best_ask)


def _sell_exact_base(hop: _Hop, amount: int) -> SettlementResult:
    base_qty = clean_base_amount(amount, hop.market)
    match = hop.matcher.out_quote_for_in_base(
        hop.snapshot.bids, base_qty, hop.base_scale, hop.market
    )
    sold = base_qty - match.remainder
    if sold <= 0:
        return _reject(hop, NoSettlementReason.BELOW_MIN_QTY, "no matchable base in bids")

    receive = match.amount
    receive_post_fee = apply_fee(receive, hop.fee_pbips)
    if receive_post_fee == 0:
        return _reject(hop, NoSettlementReason.ZERO_RECEIVE)

    guaranteed = apply_fee(sub_bips(receive, hop.slippage_bips), hop.fee_pbips)
    return Settlement(
        command=CalcCommand.SELL_SPECIFIC_BASE_FOR_WHATEVER_QUOTE,
        pay_asset=hop.pay_asset,
        receive_asset=hop.receive_asset,
        num_trades=match.num_trades,
        amount_in=sold,
        amount_out=receive,
        rate=rate_string(sold, receive_post_fee, hop.pay_decimals, hop.receive_decimals),
        protection_price=match.worst_price,
        receive_post_fee=receive_post_fee,
        min_receive_amount=guaranteed,
        spend_slippaged=sold,
        receive_slippaged=guaranteed,
        price_impact_bips=_sell_impact(match.worst_price, hop.snapshot.bids[0].price),
        side=OrderSide.SELL,
        quantity=Quantity(base_asset=hop.base_scale, base_qty=sold, quote_qty=0),
        context=hop.path,
    )


def _sell_exact_quote(hop: _Hop, amount: int) -> SettlementResult:
    estimate = hop.matcher.in_base_for_out_quote(
        hop.snapshot.bids, amount, hop.base_scale, hop.market
    )
    achievable = amount - estimate.remainder
    if estimate.amount == 0 or achievable <= 0:
        return _reject(hop, NoSettlementReason.BELOW_MIN_QTY, "no matchable base for quote")

    # One increment of slack absorbs per-level rounding, then re-derive the
    # exact proceeds for the base actually sold.
    spend = estimate.amount + hop.market.qty_increment
    fill = hop.matcher.out_quote_for_in_base(hop.snapshot.bids, spend, hop.base_scale, hop.market)
    spend -= fill.remainder
    receive = fill.amount

    best_bid = hop.snapshot.best_bid
    if best_bid is None:
        return _reject(hop, NoSettlementReason.NO_BEST_PRICE)
    if receive < min_qty_in_quote(hop.market.min_qty, best_bid, hop.base_scale):
        return _reject(hop, NoSettlementReason.BELOW_BOOK_MINIMUM)

    receive_post_fee = apply_fee(receive, hop.fee_pbips)
    if receive_post_fee == 0:
        return _reject(hop, NoSettlementReason.ZERO_RECEIVE)

    base_slippaged = wrap_to_slippage_base(spend, hop.slippage_bips, hop.market, spend_side=True)
    haircut = achievable * (BIPS - EXACT_QUOTE_RECEIVE_HAIRCUT_BIPS) // BIPS
    return Settlement(
        command=CalcCommand.SELL_WHATEVER_BASE_FOR_SPECIFIC_QUOTE,
        pay_asset=hop.pay_asset,
        receive_asset=hop.receive_asset,
        num_trades=fill.num_trades,
        amount_in=spend,
        amount_out=receive,
        rate=rate_string(spend, receive_post_fee, hop.pay_decimals, hop.receive_decimals),
        protection_price=fill.worst_price,
        receive_post_fee=receive_post_fee,
        min_receive_amount=apply_fee(haircut, hop.fee_pbips),
        spend_slippaged=base_slippaged,
        receive_slippaged=receive_post_fee,
        price_impact_bips=_sell_impact(fill.worst_price, best_bid),
        side=OrderSide.SELL,
        quantity=Quantity(base_asset=hop.base_scale, base_qty=base_slippaged, quote_qty=receive),
        context=hop.path,
    )


def _buy_exact_quote(hop: _Hop, amount: int) -> SettlementResult:
    match = hop.matcher.out_base_for_in_quote(
        hop.snapshot.asks, amount, hop.base_scale, hop.market
    )
    receive = matchable_amount(
        match.amount * (BIPS - EXACT_QUOTE_BUY_HAIRCUT_BIPS) // BIPS,
        hop.market.min_qty,
        hop.market.qty_increment,
    )
    paid = amount - match.remainder

    best_ask = hop.snapshot.best_ask
    if best_ask is None:
        return _reject(hop, NoSettlementReason.NO_BEST_PRICE)
    if paid < min_qty_in_quote(hop.market.min_qty, best_ask, hop.base_scale):
        return _reject(hop, NoSettlementReason.BELOW_BOOK_MINIMUM)
    if receive == 0:
        return _reject(hop, NoSettlementReason.BELOW_MIN_QTY, "no matchable base in asks")

    receive_post_fee = apply_fee(receive, hop.fee_pbips)
    if receive_post_fee == 0:
        return _reject(hop, NoSettlementReason.ZERO_RECEIVE)

    guaranteed = apply_fee(
        wrap_to_slippage_base(receive, hop.slippage_bips, hop.market, spend_side=False),
        hop.fee_pbips,
    )
    return Settlement(
        command=CalcCommand.BUY_WHATEVER_BASE_FOR_SPECIFIC_QUOTE,
        pay_asset=hop.pay_asset,
        receive_asset=hop.receive_asset,
        num_trades=match.num_trades,
        amount_in=paid,
        amount_out=receive,
        rate=rate_string(paid, receive_post_fee, hop.pay_decimals, hop.receive_decimals),
        protection_price=match.worst_price,
        receive_post_fee=receive_post_fee,
        min_receive_amount=guaranteed,
        spend_slippaged=paid,
        receive_slippaged=guaranteed,
        price_impact_bips=_buy_impact(match.worst_price, best_ask),
        side=OrderSide.BUY,
        quantity=Quantity(base_asset=hop.base_scale, base_qty=0, quote_qty=paid),
        context=hop.path,
    )


def _buy_exact_base(hop: _Hop, amount: int) -> SettlementResult:
    market = hop.market
    base_qty = matchable_amount(clean_base_amount(amount, market), market.min_qty, market.qty_increment)
    match = hop.matcher.in_quote_for_out_base(hop.snapshot.asks, base_qty, hop.base_scale, market)
    bought = base_qty - match.remainder
    if bought <= 0:
        return _reject(hop, NoSettlementReason.BELOW_MIN_QTY, "no matchable base in asks")

    receive_post_fee = apply_fee(bought, hop.fee_pbips)
    if receive_post_fee == 0:
        return _reject(hop, NoSettlementReason.ZERO_RECEIVE)

    spend = match.amount
    spend_slippaged = add_bips(spend, hop.slippage_bips)
    return Settlement(
        command=CalcCommand.BUY_SPECIFIC_BASE_FOR_WHATEVER_QUOTE,
        pay_asset=hop.pay_asset,
        receive_asset=hop.receive_asset,
        num_trades=match.num_trades,
        amount_in=spend,
        amount_out=bought,
        rate=rate_string(spend, receive_post_fee, hop.pay_decimals, hop.receive_decimals),
        protection_price=match.worst_price,
        receive_post_fee=receive_post_fee,
        min_receive_amount=receive_post_fee,
        spend_slippaged=spend_slippaged,
        receive_slippaged=receive_post_fee,
        price_impact_bips=_buy_impact(match.worst_price, hop.snapshot.asks[0].price),
        side=OrderSide.BUY,
        quantity=Quantity(base_asset=hop.base_scale, base_qty=bought, quote_qty=spend_slippaged),
        context=hop.path,
    )


def estimate_single_hop(
    path: LiquidityPath,
    amount: int,
    anchor: AnchorField,
    fee_pbips: int,
    slippage_bips: int,
    matcher: Matcher = DEFAULT_MATCHER,
) -> SettlementResult:
    """Estimate a swap against the first book of `path`.

    Args:
        path: Path whose hop 0 is estimated (normally a direct path)
        amount: Anchored amount in raw units of the anchored asset
        anchor: Whether `amount` is the pay or the receive amount
        fee_pbips: Total fee in parts per million
        slippage_bips: Slippage tolerance, clamped to [0, 10_000]
        matcher: Matching primitive

    Returns:
        A Settlement, or NoViableSettlement when nothing tradable remains
    """
    if path.is_empty() or path.snapshot(0) is None:
        return _reject(None, NoSettlementReason.MISSING_SNAPSHOT)
    if amount <= 0:
        return _reject(None, NoSettlementReason.BELOW_MIN_QTY, "non-positive amount")

    market = path.market(0)
    hop = _Hop(
        path=path,
        snapshot=path.snapshot(0),
        market=market,
        base_scale=path.base_scale(0),
        pay_asset=path.spend_asset(0),
        receive_asset=path.receive_asset(0),
        pay_decimals=path.spend_decimals(0),
        receive_decimals=path.receive_decimals(0),
        fee_pbips=fee_pbips,
        slippage_bips=clamp_bips(slippage_bips),
        matcher=matcher,
    )

    if hop.pay_asset == market.pair.base:
        if anchor is AnchorField.PAY:
            return _sell_exact_base(hop, amount)
        return _sell_exact_quote(hop, amount)
    if anchor is AnchorField.PAY:
        return _buy_exact_quote(hop, amount)
    return _buy_exact_base(hop, amount)


__all__ = ["estimate_single_hop"]
