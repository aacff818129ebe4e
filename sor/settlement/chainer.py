"""Multi-hop settlement estimation.

Drives the single-hop estimator across a path in the direction implied by
the anchor and folds the per-hop settlements into one aggregate. The fee is
charged once, on the final hop; slippage applies to every hop.
"""

from __future__ import annotations

import structlog

from sor.book.matching import DEFAULT_MATCHER, Matcher
from sor.liquidity.base import LiquidityPath
from sor.math.fixed_point import compose_bips
from sor.settlement.amounts import rate_string
from sor.settlement.estimator import estimate_single_hop
from sor.settlement.model import (
    AnchorField,
    NoSettlementReason,
    NoViableSettlement,
    Settlement,
    SettlementResult,
)

logger = structlog.get_logger()


def estimate(
    path: LiquidityPath,
    amount: int,
    anchor: AnchorField,
    fee_pbips: int,
    slippage_bips: int,
    matcher: Matcher = DEFAULT_MATCHER,
) -> SettlementResult:
    """Estimate a swap over a direct or multi-hop path.

    With a pay anchor, hops are estimated left to right and each hop's
    amount_out is the next hop's pay amount. With a receive anchor, hops are
    estimated right to left and each hop's amount_in is the previous hop's
    receive amount.

    Args:
        path: Liquidity path, 1..N hops
        amount: Anchored amount in raw units
        anchor: Which side `amount` fixes
        fee_pbips: Total fee in parts per million, charged on the last hop
        slippage_bips: Slippage tolerance applied to every hop
        matcher: Matching primitive

    Returns:
        The aggregate Settlement, or the first NoViableSettlement hit
    """
    hop_count = path.hop_count()
    if hop_count == 0:
        return NoViableSettlement.because(NoSettlementReason.EMPTY_PATH)
    if hop_count == 1:
        return estimate_single_hop(path, amount, anchor, fee_pbips, slippage_bips, matcher)

    if anchor is AnchorField.PAY:
        order = range(hop_count)
    else:
        order = range(hop_count - 1, -1, -1)

    settlements: list[Settlement] = []
    current = amount
    for index in order:
        fee = fee_pbips if index == hop_count - 1 else 0
        result = estimate_single_hop(
            path.slice(index), current, anchor, fee, slippage_bips, matcher
        )
        if not isinstance(result, Settlement):
            logger.debug(
                "multihop_chain_broken",
                hop=index,
                hops=hop_count,
                reason=result.reason.value,
            )
            return result
        settlements.append(result)
        current = result.amount_out if anchor is AnchorField.PAY else result.amount_in

    if anchor is AnchorField.RECEIVE:
        settlements.reverse()

    return _aggregate(path, settlements)


def _aggregate(path: LiquidityPath, settlements: list[Settlement]) -> Settlement:
    first = settlements[0]
    last = settlements[-1]
    return Settlement(
        command=first.command,
        pay_asset=first.pay_asset,
        receive_asset=last.receive_asset,
        num_trades=sum(s.num_trades for s in settlements),
        amount_in=first.amount_in,
        amount_out=last.amount_out,
        rate=rate_string(
            first.amount_in,
            last.amount_out,
            path.spend_decimals(0),
            path.receive_decimals(path.hop_count() - 1),
        ),
        # Protection price, side and quantity only make sense per book
        protection_price=0,
        receive_post_fee=last.receive_post_fee,
        min_receive_amount=last.min_receive_amount,
        spend_slippaged=first.spend_slippaged,
        receive_slippaged=last.receive_slippaged,
        price_impact_bips=compose_bips(s.price_impact_bips for s in settlements),
        side=None,
        quantity=None,
        context=path,
        sub_settlements=tuple(settlements),
    )


__all__ = ["estimate"]
