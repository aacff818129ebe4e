"""Amount helpers shared by the estimation cases."""

from __future__ import annotations

from sor.book.matching import matchable_amount
from sor.constants import RATE_DIGITS
from sor.math.fixed_point import BIPS, add_bips, sub_bips
from sor.models.market import MarketSpec
from sor.units import format_units


def clean_base_amount(amount: int, spec: MarketSpec) -> int:
    """Matchable base amount, bumped to the market minimum when below it."""
    matchable = matchable_amount(amount, spec.min_qty, spec.qty_increment)
    return matchable if matchable > 0 else spec.min_qty


def min_qty_in_quote(min_qty: int, price: int, base_scale: int) -> int:
    """Quote value of the market minimum at `price`."""
    return min_qty * price // base_scale


def wrap_to_slippage_base(
    expected: int,
    slippage_bips: int,
    spec: MarketSpec,
    spend_side: bool,
) -> int:
    """Slippage-adjust a base quantity and align it to the market rules.

    On the spend side the quantity grows by the tolerance and is floored to
    the increment. On the receive side it shrinks; if flooring pushed it
    further than the tolerance allows, one increment is added back.
    """
    if expected == 0:
        return 0
    adjusted = add_bips(expected, slippage_bips) if spend_side else sub_bips(expected, slippage_bips)
    actual = matchable_amount(adjusted, spec.min_qty, spec.qty_increment)
    if not spend_side and BIPS - BIPS * actual // expected > slippage_bips:
        return actual + spec.qty_increment
    return actual


def rate_string(pay: int, receive: int, pay_decimals: int, receive_decimals: int) -> str:
    """Pay units per one whole receive unit, truncated to RATE_DIGITS digits.

    Returns an empty string when nothing is received.
    """
    if receive == 0:
        return ""
    return format_units(10**receive_decimals * pay // receive, pay_decimals, RATE_DIGITS)


__all__ = ["clean_base_amount", "min_qty_in_quote", "rate_string", "wrap_to_slippage_base"]
