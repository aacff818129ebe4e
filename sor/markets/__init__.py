"""Market metadata: pair orientation."""

from sor.markets.pairs import DEFAULT_PAIR_RESOLVER, PairResolver

__all__ = ["DEFAULT_PAIR_RESOLVER", "PairResolver"]
