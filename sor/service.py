"""Engine facade: routing, snapshot refresh and estimation behind one object.

Route search and estimation are synchronous and never perform I/O. Fetching
snapshots is the only async step and goes through a SnapshotSource
collaborator; timeouts around it belong to the caller.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

import structlog

from sor.book.matching import DEFAULT_MATCHER, Matcher
from sor.config import DEFAULT_ESTIMATOR_CONFIG, EstimatorConfig, ExchangeConfig
from sor.errors import InvalidAmountError, RouteNotFoundError, SnapshotFetchError
from sor.liquidity import DirectPath, LiquidityPath, MultiHopPath
from sor.markets.pairs import PairResolver
from sor.models.market import BookLevels, MarketSpec, Snapshot
from sor.routing.graph import GraphEdge, LiquidityGraph
from sor.settlement.chainer import estimate
from sor.settlement.model import AnchorField, SettlementResult

logger = structlog.get_logger()


class SnapshotSource(Protocol):
    """Provider of order-book depth.

    Implementations return None when the market has no book and may raise
    SnapshotFetchError when the exchange cannot be reached.
    """

    async def get_snapshot(self, base: str, quote: str, levels: int) -> Snapshot | None: ...


class InMemorySnapshotSource:
    """SnapshotSource backed by a dict, for tests and offline replays."""

    def __init__(self, snapshots: dict[tuple[str, str], Snapshot] | None = None) -> None:
        self._snapshots: dict[tuple[str, str], Snapshot] = dict(snapshots or {})

    def set_snapshot(self, base: str, quote: str, snapshot: Snapshot) -> None:
        self._snapshots[(base, quote)] = snapshot

    async def get_snapshot(self, base: str, quote: str, levels: int) -> Snapshot | None:
        snapshot = self._snapshots.get((base, quote))
        if snapshot is None:
            return None
        return snapshot.model_copy(
            update={
                "levels": BookLevels(
                    bids=snapshot.bids[:levels],
                    asks=snapshot.asks[:levels],
                )
            }
        )


@dataclass(frozen=True)
class QuoteRequest:
    """A swap to quote.

    Attributes:
        pay_asset: Asset the taker spends
        receive_asset: Asset the taker receives
        amount: Anchored amount in raw units of the anchored asset
        anchor: Which side `amount` fixes
        fee_pbips: Fee override in parts per million
        slippage_bips: Slippage override in bips
    """

    pay_asset: str
    receive_asset: str
    amount: int
    anchor: AnchorField = AnchorField.PAY
    fee_pbips: int | None = None
    slippage_bips: int | None = None


class SorEngine:
    """Smart order router over one exchange.

    Owns the liquidity graph. The graph is not locked: the last snapshot
    written for a market wins, and estimates re-read whatever snapshot the
    path carries.
    """

    def __init__(
        self,
        config: ExchangeConfig,
        source: SnapshotSource,
        matcher: Matcher = DEFAULT_MATCHER,
        estimator_config: EstimatorConfig = DEFAULT_ESTIMATOR_CONFIG,
    ) -> None:
        self.config = config
        self.estimator_config = estimator_config
        self._source = source
        self._matcher = matcher
        self.pairs = PairResolver(
            config.token_ordering, [spec.pair for spec in config.market_specs()]
        )
        self.graph = LiquidityGraph(config.symbols, config.max_hops)

    def update_snapshot(self, base: str, quote: str, snapshot: Snapshot | None) -> bool:
        """Write (or with None, remove) the edges of one market.

        Returns:
            False if base and quote are the same asset

        Raises:
            MarketNotFoundError: If no market trades the two assets
        """
        if base == quote:
            return False
        return self.graph.update_snapshot(self.config.market(base, quote), snapshot)

    def find_route(
        self,
        source: str,
        target: str,
        exclude: Iterable[str] | None = None,
        include_only: Iterable[str] | None = None,
    ) -> list[GraphEdge] | None:
        """Fewest-hops route over the books currently in the graph."""
        return self.graph.find_route(source, target, exclude, include_only)

    async def _fetch(self, market: MarketSpec, levels: int) -> Snapshot | None:
        pair = market.pair
        try:
            snapshot = await self._source.get_snapshot(pair.base, pair.quote, levels)
        except SnapshotFetchError as e:
            logger.warning("snapshot_fetch_failed", market=str(pair), error=str(e))
            return None
        if snapshot is None:
            logger.warning("snapshot_missing", market=str(pair))
        return snapshot

    async def refresh_snapshots(self, levels: int | None = None) -> int:
        """Fetch every configured market once and update the graph.

        Markets whose fetch fails keep their previous edges.

        Returns:
            Number of markets refreshed
        """
        levels = levels or self.config.snapshot_levels
        markets = self.config.market_specs()
        refreshed = 0
        for market in markets:
            snapshot = await self._fetch(market, levels)
            if snapshot is None:
                continue
            self.graph.update_snapshot(market, snapshot)
            refreshed += 1
        logger.info("snapshots_refreshed", refreshed=refreshed, markets=len(markets))
        return refreshed

    async def resolve_path(
        self,
        pay_asset: str,
        receive_asset: str,
        levels: int | None = None,
        exclude: Iterable[str] | None = None,
        include_only: Iterable[str] | None = None,
    ) -> LiquidityPath:
        """Route a swap and wrap freshly fetched books in a liquidity path.

        If the graph has no route, every market is refreshed once and the
        search retried.

        Raises:
            UnknownAssetError: If either asset is not configured
            RouteNotFoundError: If no route exists after the refresh
        """
        self.config.asset(pay_asset)
        self.config.asset(receive_asset)
        if pay_asset == receive_asset:
            raise RouteNotFoundError(pay_asset, receive_asset)
        levels = levels or self.config.snapshot_levels

        route = self.find_route(pay_asset, receive_asset, exclude, include_only)
        if route is None:
            logger.info("route_missing_refreshing", pay=pay_asset, receive=receive_asset)
            await self.refresh_snapshots(levels)
            route = self.find_route(pay_asset, receive_asset, exclude, include_only)
        if route is None:
            raise RouteNotFoundError(pay_asset, receive_asset)

        fresh = await asyncio.gather(*(self._fetch(edge.market, levels) for edge in route))
        hops: list[GraphEdge] = []
        for edge, snapshot in zip(route, fresh, strict=True):
            if snapshot is None:
                hops.append(edge)
                continue
            self.graph.update_snapshot(edge.market, snapshot)
            hops.append(GraphEdge(snapshot=snapshot, is_sell_side=edge.is_sell_side, market=edge.market))

        logger.debug(
            "path_resolved",
            pay=pay_asset,
            receive=receive_asset,
            hops=[str(edge.market.pair) for edge in hops],
        )
        if len(hops) == 1:
            edge = hops[0]
            pair = edge.market.pair
            return DirectPath(
                edge.snapshot,
                edge.market,
                edge.is_sell_side,
                self.config.decimals(pair.base),
                self.config.decimals(pair.quote),
            )
        return MultiHopPath(hops, self.config.decimals, pairs=self.pairs)

    def estimate(
        self,
        path: LiquidityPath,
        amount: int,
        anchor: AnchorField,
        fee_pbips: int | None = None,
        slippage_bips: int | None = None,
    ) -> SettlementResult:
        """Estimate a swap over `path`, defaulting fee and slippage from config."""
        if fee_pbips is None:
            fee_pbips = self.estimator_config.fee_pbips
        if slippage_bips is None:
            slippage_bips = self.estimator_config.slippage_bips
        return estimate(path, amount, anchor, fee_pbips, slippage_bips, self._matcher)

    async def quote(self, request: QuoteRequest) -> SettlementResult:
        """Resolve a path for the request and estimate it.

        Raises:
            InvalidAmountError: If the amount is not positive
            UnknownAssetError: If either asset is not configured
            RouteNotFoundError: If the assets are not connected
        """
        if request.amount <= 0:
            raise InvalidAmountError(f"Amount must be positive, got {request.amount}")
        path = await self.resolve_path(request.pay_asset, request.receive_asset)
        return self.estimate(
            path, request.amount, request.anchor, request.fee_pbips, request.slippage_bips
        )


__all__ = ["InMemorySnapshotSource", "QuoteRequest", "SnapshotSource", "SorEngine"]
