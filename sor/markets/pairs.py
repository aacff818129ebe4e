"""Canonical orientation of asset pairs.

A listed market dictates which asset is the base. Pairs that are not
listed (for instance a synthetic pair spanning a multi-hop route) are
oriented by the priority list: quote assets are ranked first, so the asset
ranked later becomes the base.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from sor.constants import DEFAULT_MARKETS, DEFAULT_TOKEN_ORDERING
from sor.models.market import TradedPair

logger = structlog.get_logger()


class PairResolver:
    """Resolve the canonical (base, quote) orientation of two assets."""

    def __init__(
        self,
        ordering: Sequence[str],
        listed_pairs: Iterable[TradedPair] = (),
    ) -> None:
        """Initialize the resolver.

        Args:
            ordering: Priority list, quote-like assets first
            listed_pairs: Markets whose orientation is authoritative
        """
        self._rank = {symbol: index for index, symbol in enumerate(ordering)}
        self._listed: dict[frozenset[str], TradedPair] = {
            frozenset((pair.base, pair.quote)): pair for pair in listed_pairs
        }

    def _rank_of(self, symbol: str) -> int:
        rank = self._rank.get(symbol)
        if rank is None:
            logger.warning("pair_ordering_unknown_asset", asset=symbol)
            return len(self._rank)
        return rank

    def canonical_pair(self, spend: str, receive: str) -> TradedPair:
        """Return the oriented pair for a swap between `spend` and `receive`.

        Raises:
            ValueError: If both assets are the same
        """
        listed = self._listed.get(frozenset((spend, receive)))
        if listed is not None:
            return listed

        spend_rank = self._rank_of(spend)
        receive_rank = self._rank_of(receive)
        if spend_rank > receive_rank:
            return TradedPair(base=spend, quote=receive)
        return TradedPair(base=receive, quote=spend)

    def is_listed(self, asset_a: str, asset_b: str) -> bool:
        return frozenset((asset_a, asset_b)) in self._listed


DEFAULT_PAIR_RESOLVER = PairResolver(
    DEFAULT_TOKEN_ORDERING,
    [TradedPair(base=base, quote=quote) for base, quote in DEFAULT_MARKETS],
)


__all__ = ["DEFAULT_PAIR_RESOLVER", "PairResolver"]
