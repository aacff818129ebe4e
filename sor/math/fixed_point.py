"""Fixed-point integer arithmetic for settlement and liquidity math.

Three scales are in use and must not be mixed:

- Bips (1 / 10_000): slippage tolerance and price impact
- Pbips (1 / 1_000_000): exchange and router fees
- ONE_18 (1 / 10^18): liquidity damping ratios between hops

All helpers operate on Python ints and round toward negative infinity
(floor), which for the non-negative amounts handled here is truncation.
"""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    # Constants
    "BIPS",
    "PBIPS",
    "ONE_18",
    "MAX_SLIPPAGE_BIPS",
    # Functions
    "clamp_bips",
    "apply_fee",
    "add_bips",
    "sub_bips",
    "capped_ratio",
    "mul_down",
    "compose_bips",
    "ceil_div",
]

BIPS = 10_000
PBIPS = 1_000_000
ONE_18 = 10**18

# Slippage above 100% is meaningless
MAX_SLIPPAGE_BIPS = BIPS


def clamp_bips(value: int, upper: int = MAX_SLIPPAGE_BIPS) -> int:
    """Clamp a bips value to [0, upper]."""
    return max(0, min(value, upper))


def apply_fee(amount: int, fee_pbips: int) -> int:
    """Deduct a fee expressed in parts-per-million.

    Args:
        amount: Gross amount in raw units
        fee_pbips: Total fee in pbips (1_000 = 0.1%)

    Returns:
        amount * (1_000_000 - fee) // 1_000_000
    """
    return (PBIPS - fee_pbips) * amount // PBIPS


def add_bips(amount: int, bips: int) -> int:
    """Increase amount by `bips` basis points (floor on the increment)."""
    return amount + amount * bips // BIPS


def sub_bips(amount: int, bips: int) -> int:
    """Decrease amount by `bips` basis points (floor on the decrement)."""
    return amount - amount * bips // BIPS


def capped_ratio(numerator: int, denominator: int) -> int:
    """Ratio numerator / denominator in ONE_18 fixed point, capped at 1.0.

    Raises:
        ZeroDivisionError: If denominator is zero. Callers collapse the
            zero-liquidity case before asking for a ratio.
    """
    raw = numerator * ONE_18 // denominator
    return ONE_18 if raw > ONE_18 else raw


def mul_down(a: int, b: int) -> int:
    """Multiply two ONE_18 fixed-point values (or a raw amount by a factor)."""
    return a * b // ONE_18


def compose_bips(values: Iterable[int]) -> int:
    """Compose per-step bips multiplicatively.

    Computes BIPS * prod(1 + v_i / BIPS) - BIPS with integer steps, so that
    100 and 200 bips compose to 302, not 300.
    """
    acc = BIPS
    for value in values:
        acc = acc * (BIPS + value) // BIPS
    return acc - BIPS


def ceil_div(a: int, b: int) -> int:
    """Ceiling division for non-negative integers."""
    return -(-a // b)
