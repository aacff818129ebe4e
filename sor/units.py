"""Conversion between display decimals and integer base units.

Amounts inside the router are always raw integers scaled by the asset's
decimals. These helpers are used at the edges: parsing user input and
rendering rates.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_DOWN, Decimal

# 78 digits of precision covers any uint256 amount
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)


def to_base_units(value: str | int | Decimal, decimals: int) -> int:
    """Convert a display amount to raw base units, truncating extra digits.

    Args:
        value: Display amount, e.g. "1.5" or Decimal("0.25")
        decimals: Asset decimals (6 for a USDC-like asset)

    Returns:
        Integer amount in base units

    Raises:
        ValueError: If value is not a finite non-negative number
    """
    try:
        amount = Decimal(value)
    except decimal.InvalidOperation as err:
        raise ValueError(f"Not a decimal amount: {value!r}") from err
    if not amount.is_finite() or amount < 0:
        raise ValueError(f"Amount must be finite and non-negative: {value!r}")

    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        scaled = (amount * (Decimal(10) ** decimals)).quantize(Decimal(1), rounding=ROUND_DOWN)
    return int(scaled)


def format_units(amount: int, decimals: int, digits_after_dot: int | None = None) -> str:
    """Render raw base units as a display string.

    Trailing zeros of the fractional part are dropped, and the fraction is
    truncated (never rounded) to `digits_after_dot` digits.

    Examples:
        format_units(1_500_000, 6) == "1.5"
        format_units(123456789, 6, 2) == "123.45"
    """
    if digits_after_dot is None:
        digits_after_dot = decimals
    sign = "-" if amount < 0 else ""
    integer_part, fractional_part = divmod(abs(amount), 10**decimals)
    fractional = str(fractional_part).rjust(decimals, "0")[:digits_after_dot].rstrip("0")
    if fractional:
        return f"{sign}{integer_part}.{fractional}"
    return f"{sign}{integer_part}"


__all__ = ["DECIMAL_HIGH_PREC_CONTEXT", "format_units", "to_base_units"]
