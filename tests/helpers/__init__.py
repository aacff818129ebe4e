"""Test helpers module for shared test utilities.

- constants: Asset symbols, decimals and common amounts
- factories: Snapshot, market, path and config factory functions
"""

from tests.helpers.constants import (
    AETH,
    AUSDC,
    AUSDT,
    MIN_QTY_18,
    ONE_AETH,
    ONE_AUSDC,
    ONE_STRK,
    PRICE_100,
    QTY_STEP_18,
    STRK,
    TOKEN_DECIMALS,
)
from tests.helpers.factories import (
    aeth_book,
    make_direct_path,
    make_edge,
    make_exchange_config,
    make_levels,
    make_market,
    make_snapshot,
    stable_book,
    strk_book,
)

__all__ = [
    "AETH",
    "AUSDC",
    "AUSDT",
    "MIN_QTY_18",
    "ONE_AETH",
    "ONE_AUSDC",
    "ONE_STRK",
    "PRICE_100",
    "QTY_STEP_18",
    "STRK",
    "TOKEN_DECIMALS",
    "aeth_book",
    "make_direct_path",
    "make_edge",
    "make_exchange_config",
    "make_levels",
    "make_market",
    "make_snapshot",
    "stable_book",
    "strk_book",
]
