"""Exchange and estimation constants.

Centralizes the default token universe and the tuning knobs of settlement
estimation.
"""

# Maximum number of books a route may traverse
DEFAULT_MAX_HOPS = 3

# Depth requested per snapshot fetch
DEFAULT_SNAPSHOT_LEVELS = 10

# Default taker fee: 10 bips expressed in pbips (parts per million)
DEFAULT_FEE_PBIPS = 1_000

# Default slippage tolerance: 1%
DEFAULT_SLIPPAGE_BIPS = 100

# Protection price band applied before an order is built, in percent.
# Buys may execute up to 20% above the estimate, sells down to 20% below.
PROTECTION_BAND_BUY_PCT = 120
PROTECTION_BAND_SELL_PCT = 80

# Haircut on the exact-quote receive floor, absorbing per-level rounding
EXACT_QUOTE_RECEIVE_HAIRCUT_BIPS = 1

# Haircut on base received when buying with an exact quote amount
EXACT_QUOTE_BUY_HAIRCUT_BIPS = 4

# Digits rendered in settlement rate strings
RATE_DIGITS = 10

# Quote assets first, then base assets. Used to orient pairs that are not
# explicitly listed as markets.
DEFAULT_TOKEN_ORDERING = (
    "USDC",
    "USDT",
    "AUSDC",
    "AUSDT",
    "AETH",
    "STRK",
    "ABNB",
    "ATON",
    "AUNI",
    "AAAVE",
    "AENA",
)

DEFAULT_ASSET_DECIMALS = {
    "ETH": 18,
    "STRK": 18,
    "USDC": 6,
    "USDT": 6,
    "AETH": 18,
    "AUSDC": 6,
    "AUSDT": 6,
    "AUNI": 18,
    "ABNB": 18,
    "AENA": 18,
    "ATON": 9,
    "AAAVE": 18,
}

# (base, quote) markets listed on the exchange
DEFAULT_MARKETS = (
    ("AUSDC", "AUSDT"),
    ("AETH", "AUSDC"),
    ("STRK", "AUSDC"),
    ("ABNB", "AUSDC"),
    ("ATON", "AUSDC"),
    ("AUNI", "AUSDC"),
    ("AAAVE", "AUSDC"),
    ("AENA", "AUSDC"),
)
