"""Order-book matching."""

from sor.book.matching import (
    DEFAULT_MATCHER,
    LadderMatcher,
    Matcher,
    MatchResult,
    matchable_amount,
    total_base_volume,
    total_quote_volume,
)

__all__ = [
    "DEFAULT_MATCHER",
    "LadderMatcher",
    "MatchResult",
    "Matcher",
    "matchable_amount",
    "total_base_volume",
    "total_quote_volume",
]
