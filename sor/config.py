"""Exchange and estimator configuration.

ExchangeConfig describes the token universe and market rules; it is
validated with pydantic so it can be loaded from a JSON file shipped with a
deployment. EstimatorConfig holds the per-request defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from sor.constants import (
    DEFAULT_ASSET_DECIMALS,
    DEFAULT_FEE_PBIPS,
    DEFAULT_MARKETS,
    DEFAULT_MAX_HOPS,
    DEFAULT_SLIPPAGE_BIPS,
    DEFAULT_SNAPSHOT_LEVELS,
    DEFAULT_TOKEN_ORDERING,
    PROTECTION_BAND_BUY_PCT,
    PROTECTION_BAND_SELL_PCT,
)
from sor.errors import MarketNotFoundError, UnknownAssetError
from sor.models.market import Asset, MarketSpec, TradedPair


class AssetConfig(BaseModel):
    """Token entry of the exchange configuration."""

    model_config = ConfigDict(frozen=True)

    symbol: str = Field(min_length=1)
    decimals: int = Field(ge=0, le=36)


class MarketConfig(BaseModel):
    """Market entry: canonical pair plus quantization rules (raw units)."""

    model_config = ConfigDict(frozen=True)

    base: str
    quote: str
    min_qty: int = Field(ge=0)
    qty_increment: int = Field(gt=0)
    price_increment: int = Field(default=1, gt=0)


class ExchangeConfig(BaseModel):
    """Static description of the exchange the router trades on.

    Attributes:
        assets: Every token the router may touch
        token_ordering: Priority list orienting pairs not listed in `markets`
        markets: Listed markets; their orientation is authoritative
        max_hops: Upper bound on books per route
        snapshot_levels: Depth requested from the snapshot source
    """

    model_config = ConfigDict(frozen=True)

    assets: tuple[AssetConfig, ...]
    token_ordering: tuple[str, ...] = ()
    markets: tuple[MarketConfig, ...] = ()
    max_hops: int = Field(default=DEFAULT_MAX_HOPS, ge=1)
    snapshot_levels: int = Field(default=DEFAULT_SNAPSHOT_LEVELS, ge=1)

    @model_validator(mode="after")
    def _check_references(self) -> ExchangeConfig:
        symbols = {asset.symbol for asset in self.assets}
        if len(symbols) != len(self.assets):
            raise ValueError("duplicate asset symbols")
        for market in self.markets:
            for symbol in (market.base, market.quote):
                if symbol not in symbols:
                    raise ValueError(f"market {market.base}/{market.quote} uses unknown {symbol}")
        return self

    @classmethod
    def from_json_file(cls, path: str | Path) -> ExchangeConfig:
        """Load and validate a configuration file."""
        with open(path) as f:
            data = json.load(f)
        return cls.model_validate(data)

    @classmethod
    def default(cls) -> ExchangeConfig:
        """Testnet token universe with conservative quantization rules."""
        assets = tuple(
            AssetConfig(symbol=symbol, decimals=decimals)
            for symbol, decimals in DEFAULT_ASSET_DECIMALS.items()
        )
        decimals = DEFAULT_ASSET_DECIMALS
        markets = tuple(
            MarketConfig(
                base=base,
                quote=quote,
                # 0.01 whole base units minimum, 0.001 step
                min_qty=10 ** decimals[base] // 100,
                qty_increment=max(10 ** decimals[base] // 1000, 1),
                price_increment=max(10 ** decimals[quote] // 10_000, 1),
            )
            for base, quote in DEFAULT_MARKETS
        )
        return cls(assets=assets, token_ordering=DEFAULT_TOKEN_ORDERING, markets=markets)

    @property
    def symbols(self) -> list[str]:
        return [a.symbol for a in self.assets]

    def asset(self, symbol: str) -> Asset:
        """Look up an asset by symbol.

        Raises:
            UnknownAssetError: If the symbol is not configured
        """
        for entry in self.assets:
            if entry.symbol == symbol:
                return Asset(symbol=entry.symbol, decimals=entry.decimals)
        raise UnknownAssetError(f"Unknown asset: {symbol}")

    def decimals(self, symbol: str) -> int:
        return self.asset(symbol).decimals

    def market(self, asset_a: str, asset_b: str) -> MarketSpec:
        """Find the market trading two assets, in either orientation.

        Raises:
            MarketNotFoundError: If no listed market trades the pair
        """
        wanted = {asset_a, asset_b}
        for entry in self.markets:
            if {entry.base, entry.quote} == wanted:
                return _to_spec(entry)
        raise MarketNotFoundError(f"No market for {asset_a}/{asset_b}")

    def market_specs(self) -> list[MarketSpec]:
        return [_to_spec(entry) for entry in self.markets]


def _to_spec(entry: MarketConfig) -> MarketSpec:
    return MarketSpec(
        pair=TradedPair(base=entry.base, quote=entry.quote),
        min_qty=entry.min_qty,
        qty_increment=entry.qty_increment,
        price_increment=entry.price_increment,
    )


@dataclass(frozen=True)
class EstimatorConfig:
    """Per-request defaults for settlement estimation.

    Attributes:
        fee_pbips: Total taker fee (exchange + router) in parts per million
        slippage_bips: Slippage tolerance in basis points
        protection_buy_pct: Band applied to buy protection prices (percent)
        protection_sell_pct: Band applied to sell protection prices (percent)
    """

    fee_pbips: int = DEFAULT_FEE_PBIPS
    slippage_bips: int = DEFAULT_SLIPPAGE_BIPS
    protection_buy_pct: int = PROTECTION_BAND_BUY_PCT
    protection_sell_pct: int = PROTECTION_BAND_SELL_PCT


DEFAULT_ESTIMATOR_CONFIG = EstimatorConfig()


__all__ = [
    "AssetConfig",
    "DEFAULT_ESTIMATOR_CONFIG",
    "EstimatorConfig",
    "ExchangeConfig",
    "MarketConfig",
]
