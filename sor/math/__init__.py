"""Mathematical utilities for the router.

This package provides integer fixed-point primitives:
- bips / pbips helpers for slippage, impact and fees
- ONE_18 ratios for liquidity damping across hops
"""

from sor.math.fixed_point import (
    BIPS,
    MAX_SLIPPAGE_BIPS,
    ONE_18,
    PBIPS,
    add_bips,
    apply_fee,
    capped_ratio,
    ceil_div,
    clamp_bips,
    compose_bips,
    mul_down,
    sub_bips,
)

__all__ = [
    "BIPS",
    "PBIPS",
    "ONE_18",
    "MAX_SLIPPAGE_BIPS",
    "add_bips",
    "apply_fee",
    "capped_ratio",
    "ceil_div",
    "clamp_bips",
    "compose_bips",
    "mul_down",
    "sub_bips",
]
