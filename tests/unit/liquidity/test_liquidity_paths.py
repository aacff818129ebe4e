"""Tests for direct and multi-hop liquidity paths."""

import pytest

from sor.constants import DEFAULT_TOKEN_ORDERING
from sor.liquidity import DirectPath, MultiHopPath
from sor.markets import PairResolver
from sor.math import ONE_18
from sor.models.market import TradedPair
from tests.helpers import (
    AETH,
    AUSDC,
    ONE_AETH,
    ONE_AUSDC,
    ONE_STRK,
    STRK,
    TOKEN_DECIMALS,
    aeth_book,
    make_direct_path,
    make_edge,
    make_snapshot,
    strk_book,
)


def thin_aeth_book():
    """Two AETH asks worth 4_100 AUSDC in total."""
    return make_snapshot(asks=[(2_000 * ONE_AUSDC, ONE_AETH), (2_100 * ONE_AUSDC, ONE_AETH)])


@pytest.fixture
def strk_to_aeth(strk_market, aeth_market) -> MultiHopPath:
    return MultiHopPath(
        [
            make_edge(strk_book(), strk_market, is_sell=True),
            make_edge(thin_aeth_book(), aeth_market, is_sell=False),
        ],
        TOKEN_DECIMALS.__getitem__,
    )


class TestDirectPath:
    def test_sell_liquidity(self, strk_snapshot):
        path = make_direct_path(strk_snapshot, is_sell=True)
        assert path.spendable_liquidity() == 30 * ONE_STRK
        assert path.receivable_liquidity() == 2_980 * ONE_AUSDC

    def test_buy_liquidity(self, strk_snapshot):
        path = make_direct_path(strk_snapshot, is_sell=False)
        assert path.spendable_liquidity() == 3_050 * ONE_AUSDC
        assert path.receivable_liquidity() == 30 * ONE_STRK

    def test_assets_and_decimals(self, strk_snapshot):
        path = make_direct_path(strk_snapshot, is_sell=False)
        assert path.spend_asset(0) == AUSDC
        assert path.receive_asset(0) == STRK
        assert path.spend_decimals(0) == 6
        assert path.base_scale(0) == ONE_STRK
        assert path.pair == TradedPair(base=STRK, quote=AUSDC)

    def test_missing_snapshot_is_empty(self):
        path = make_direct_path(None)
        assert path.is_empty()
        assert path.spendable_liquidity() == 0
        assert not path.is_enough_liquidity(0, 0)

    def test_single_hop_indexing(self, strk_snapshot):
        path = make_direct_path(strk_snapshot)
        assert path.is_direct()
        assert path.slice(0) is path

    @pytest.mark.parametrize(
        "accessor", ["snapshot", "market", "is_sell_side", "spend_decimals", "slice"]
    )
    def test_out_of_range_hop_raises(self, strk_snapshot, accessor):
        path = make_direct_path(strk_snapshot)
        with pytest.raises(IndexError):
            getattr(path, accessor)(1)

    def test_enough_liquidity(self, strk_snapshot):
        path = make_direct_path(strk_snapshot, is_sell=True)
        assert path.is_enough_liquidity(30 * ONE_STRK, 2_980 * ONE_AUSDC)
        assert not path.is_enough_liquidity(31 * ONE_STRK, 0)

    def test_empty_side_is_not_enough(self):
        path = make_direct_path(make_snapshot(asks=[(ONE_AUSDC, ONE_STRK)]), is_sell=True)
        assert not path.is_enough_liquidity(0, 0)


class TestMultiHopPath:
    def test_default_pair(self, strk_to_aeth):
        assert strk_to_aeth.pair == TradedPair(base=STRK, quote=AETH)
        assert strk_to_aeth.hop_count() == 2
        assert not strk_to_aeth.is_direct()

    def test_hop_assets(self, strk_to_aeth):
        assert strk_to_aeth.spend_asset(0) == STRK
        assert strk_to_aeth.receive_asset(0) == AUSDC
        assert strk_to_aeth.spend_asset(1) == AUSDC
        assert strk_to_aeth.receive_asset(1) == AETH

    def test_spendable_limited_by_first_hop(self, strk_to_aeth):
        """The second book absorbs more than the first delivers."""
        assert strk_to_aeth.spend_factor == ONE_18
        assert strk_to_aeth.spendable_liquidity() == 30 * ONE_STRK

    def test_receivable_damped(self, strk_to_aeth):
        """Only 2_980 of the 4_100 AUSDC the AETH asks need can arrive."""
        factor = 2_980 * ONE_AUSDC * ONE_18 // (4_100 * ONE_AUSDC)
        assert strk_to_aeth.receive_factor == factor
        assert strk_to_aeth.receivable_liquidity() == 2 * ONE_AETH * factor // ONE_18

    def test_empty_hop_collapses_liquidity(self, strk_market, aeth_market):
        path = MultiHopPath(
            [
                make_edge(strk_book(), strk_market, is_sell=True),
                make_edge(make_snapshot(), aeth_market, is_sell=False),
            ],
            TOKEN_DECIMALS.__getitem__,
        )
        assert path.spendable_liquidity() == 0
        assert path.receivable_liquidity() == 0
        assert not path.is_enough_liquidity(1, 0)

    def test_slice(self, strk_to_aeth):
        hop = strk_to_aeth.slice(1)
        assert isinstance(hop, DirectPath)
        assert hop.pair == TradedPair(base=AETH, quote=AUSDC)
        assert not hop.is_sell_side(0)
        assert hop.receive_decimals(0) == 18

    def test_default_pair_is_canonical_in_reverse(self, strk_market, aeth_market):
        """AETH -> AUSDC -> STRK is still the STRK/AETH pair."""
        path = MultiHopPath(
            [
                make_edge(aeth_book(), aeth_market, is_sell=True),
                make_edge(strk_book(), strk_market, is_sell=False),
            ],
            TOKEN_DECIMALS.__getitem__,
        )
        assert path.pair == TradedPair(base=STRK, quote=AETH)

    def test_listed_market_orients_pair(self, strk_market, aeth_market):
        pairs = PairResolver(DEFAULT_TOKEN_ORDERING, [TradedPair(base=AETH, quote=STRK)])
        path = MultiHopPath(
            [
                make_edge(strk_book(), strk_market, is_sell=True),
                make_edge(thin_aeth_book(), aeth_market, is_sell=False),
            ],
            TOKEN_DECIMALS.__getitem__,
            pairs=pairs,
        )
        assert path.pair == TradedPair(base=AETH, quote=STRK)

    def test_empty_path(self):
        path = MultiHopPath([], TOKEN_DECIMALS.__getitem__)
        assert path.is_empty()
        assert path.spendable_liquidity() == 0
        assert repr(path) == "MultiHopPath()"

    def test_repr(self, strk_to_aeth):
        assert repr(strk_to_aeth) == "MultiHopPath(STRK -> AUSDC -> AETH)"
