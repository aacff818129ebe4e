"""Adjustments applied to an estimate before an order is built from it."""

from __future__ import annotations

from dataclasses import replace

from sor.config import DEFAULT_ESTIMATOR_CONFIG, EstimatorConfig
from sor.settlement.model import OrderSide, Settlement, SettlementResult


def banded_protection_price(
    settlement: Settlement,
    price_tick: int,
    config: EstimatorConfig = DEFAULT_ESTIMATOR_CONFIG,
) -> int:
    """Widen the protection price so the order survives book movement.

    Buys may execute above the estimated worst price and sells below it; the
    result is floored to the market's price tick. A multi-hop aggregate has
    no protection price of its own, so its first hop is used.

    Args:
        settlement: Viable settlement
        price_tick: Price increment of the first hop's market, raw units
        config: Band percentages

    Returns:
        Banded protection price in raw quote units

    Raises:
        ValueError: If price_tick is not positive
    """
    if price_tick <= 0:
        raise ValueError(f"price_tick must be positive, got {price_tick}")
    first = settlement.sub_settlements[0] if settlement.sub_settlements else settlement
    if first.side is OrderSide.BUY:
        banded = first.protection_price * config.protection_buy_pct // 100
    else:
        banded = first.protection_price * config.protection_sell_pct // 100
    return banded // price_tick * price_tick


def deduct_gas(settlement: SettlementResult, gas_per_swap: int, gas_asset: str) -> SettlementResult:
    """Charge gas against the received amount when gas is paid in it.

    Every traded level is a swap, so the charge is gas_per_swap times
    num_trades. Guaranteed amounts saturate at zero. Settlements whose
    receive asset differs from the gas asset, and sentinels, are returned
    unchanged.
    """
    if not isinstance(settlement, Settlement) or settlement.receive_asset != gas_asset:
        return settlement
    total_gas = gas_per_swap * settlement.num_trades
    return replace(
        settlement,
        min_receive_amount=max(settlement.min_receive_amount - total_gas, 0),
        receive_slippaged=max(settlement.receive_slippaged - total_gas, 0),
    )


__all__ = ["banded_protection_price", "deduct_gas"]
