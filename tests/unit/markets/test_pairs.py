"""Tests for canonical pair orientation."""

import pytest

from sor.markets import PairResolver
from sor.models.market import TradedPair

ORDERING = ("AUSDC", "AUSDT", "AETH", "STRK")


@pytest.fixture
def resolver() -> PairResolver:
    return PairResolver(ORDERING, [TradedPair(base="AUSDC", quote="AUSDT")])


class TestCanonicalPair:
    def test_listed_pair_orientation_wins(self, resolver):
        """AUSDT ranks later, but the listed market makes AUSDC the base."""
        expected = TradedPair(base="AUSDC", quote="AUSDT")
        assert resolver.canonical_pair("AUSDT", "AUSDC") == expected
        assert resolver.canonical_pair("AUSDC", "AUSDT") == expected

    def test_later_ranked_asset_is_base(self, resolver):
        expected = TradedPair(base="STRK", quote="AETH")
        assert resolver.canonical_pair("STRK", "AETH") == expected
        assert resolver.canonical_pair("AETH", "STRK") == expected

    def test_unknown_asset_ranks_last(self, resolver):
        assert resolver.canonical_pair("AUSDC", "DOGE") == TradedPair(base="DOGE", quote="AUSDC")

    def test_same_asset_rejected(self, resolver):
        with pytest.raises(ValueError):
            resolver.canonical_pair("STRK", "STRK")

    def test_is_listed(self, resolver):
        assert resolver.is_listed("AUSDT", "AUSDC")
        assert not resolver.is_listed("STRK", "AUSDC")
