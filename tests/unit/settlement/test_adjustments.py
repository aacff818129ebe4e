"""Tests for protection banding and gas deduction."""

import pytest

from sor.config import EstimatorConfig
from sor.liquidity import MultiHopPath
from sor.settlement import (
    AnchorField,
    NoSettlementReason,
    NoViableSettlement,
    banded_protection_price,
    deduct_gas,
    estimate,
)
from tests.helpers import (
    AETH,
    AUSDC,
    ONE_AETH,
    ONE_AUSDC,
    ONE_STRK,
    TOKEN_DECIMALS,
    make_direct_path,
    make_edge,
    make_snapshot,
    strk_book,
)


def sell(amount=5 * ONE_STRK):
    return estimate(make_direct_path(strk_book(), is_sell=True), amount, AnchorField.PAY, 1_000, 100)


def buy(amount=1_520 * ONE_AUSDC):
    return estimate(make_direct_path(strk_book(), is_sell=False), amount, AnchorField.PAY, 1_000, 100)


class TestBandedProtectionPrice:
    def test_sell_band(self):
        assert banded_protection_price(sell(15 * ONE_STRK), 100) == 79_200_000

    def test_buy_band(self):
        assert banded_protection_price(buy(), 1) == 122_400_000

    def test_floored_to_tick(self):
        assert banded_protection_price(buy(), ONE_AUSDC) == 122_000_000

    def test_custom_band(self):
        config = EstimatorConfig(protection_buy_pct=110)
        assert banded_protection_price(buy(), 1, config) == 112_200_000

    def test_multihop_uses_first_hop(self, strk_market, aeth_market):
        path = MultiHopPath(
            [
                make_edge(strk_book(), strk_market, is_sell=True),
                make_edge(make_snapshot(asks=[(2_000 * ONE_AUSDC, ONE_AETH)]), aeth_market, is_sell=False),
            ],
            TOKEN_DECIMALS.__getitem__,
        )
        result = estimate(path, 5 * ONE_STRK, AnchorField.PAY, 1_000, 100)
        assert result.receive_asset == AETH
        assert banded_protection_price(result, 1) == 80 * ONE_AUSDC

    def test_invalid_tick(self):
        with pytest.raises(ValueError):
            banded_protection_price(sell(), 0)


class TestDeductGas:
    def test_charged_per_trade(self):
        settlement = sell()
        charged = deduct_gas(settlement, ONE_AUSDC, AUSDC)
        assert charged.min_receive_amount == 493_505_000
        assert charged.receive_slippaged == 493_505_000
        assert charged.amount_out == settlement.amount_out

    def test_saturates_at_zero(self):
        charged = deduct_gas(sell(), 10**12, AUSDC)
        assert charged.min_receive_amount == 0
        assert charged.receive_slippaged == 0

    def test_other_receive_asset_untouched(self):
        settlement = buy()
        assert deduct_gas(settlement, ONE_AUSDC, AUSDC) is settlement

    def test_sentinel_untouched(self):
        sentinel = NoViableSettlement.because(NoSettlementReason.ZERO_RECEIVE)
        assert deduct_gas(sentinel, ONE_AUSDC, AUSDC) is sentinel
