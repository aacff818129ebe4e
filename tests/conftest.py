"""Pytest configuration and fixtures."""

import pytest

from sor.config import ExchangeConfig
from sor.models.market import MarketSpec, Snapshot
from sor.service import InMemorySnapshotSource, SorEngine
from tests.helpers import (
    AETH,
    AUSDC,
    AUSDT,
    ONE_AUSDC,
    STRK,
    aeth_book,
    make_exchange_config,
    make_market,
    stable_book,
    strk_book,
)


@pytest.fixture
def strk_market() -> MarketSpec:
    """STRK/AUSDC market: 0.01 STRK minimum, 0.001 STRK step."""
    return make_market(STRK, AUSDC)


@pytest.fixture
def aeth_market() -> MarketSpec:
    return make_market(AETH, AUSDC)


@pytest.fixture
def stable_market() -> MarketSpec:
    return make_market(AUSDC, AUSDT, min_qty=10 * ONE_AUSDC, qty_increment=1_000)


@pytest.fixture
def strk_snapshot() -> Snapshot:
    return strk_book()


@pytest.fixture
def exchange_config() -> ExchangeConfig:
    return make_exchange_config()


@pytest.fixture
def snapshot_source() -> InMemorySnapshotSource:
    """Source holding a book for every market of the test exchange."""
    return InMemorySnapshotSource(
        {
            (STRK, AUSDC): strk_book(),
            (AETH, AUSDC): aeth_book(),
            (AUSDC, AUSDT): stable_book(),
        }
    )


@pytest.fixture
def engine(exchange_config: ExchangeConfig, snapshot_source: InMemorySnapshotSource) -> SorEngine:
    return SorEngine(exchange_config, snapshot_source)
