"""API endpoints of the router."""

import asyncio
import os

import structlog
from fastapi import APIRouter, Depends, HTTPException

from sor.api.schemas import (
    HopView,
    QuoteRequestModel,
    RouteResponse,
    SettlementView,
    SnapshotAck,
)
from sor.config import ExchangeConfig
from sor.errors import (
    InvalidAmountError,
    MarketNotFoundError,
    RouteNotFoundError,
    UnknownAssetError,
)
from sor.models.market import Snapshot
from sor.service import InMemorySnapshotSource, QuoteRequest, SorEngine
from sor.settlement.model import AnchorField
from sor.units import to_base_units

logger = structlog.get_logger()

router = APIRouter()

# Path to an ExchangeConfig JSON file; the built-in testnet universe if unset
CONFIG_PATH = os.environ.get("SOR_CONFIG_PATH")

# Upper bound on snapshot fetching plus estimation for one quote
QUOTE_TIMEOUT_SECONDS = float(os.environ.get("SOR_QUOTE_TIMEOUT", "5.0"))


def _load_config() -> ExchangeConfig:
    if CONFIG_PATH:
        return ExchangeConfig.from_json_file(CONFIG_PATH)
    return ExchangeConfig.default()


snapshot_store = InMemorySnapshotSource()
engine = SorEngine(_load_config(), snapshot_store)


def get_engine() -> SorEngine:
    """Dependency provider for the engine instance.

    Override this in tests to inject an engine with its own books:
        app.dependency_overrides[get_engine] = lambda: test_engine
    """
    return engine


def get_snapshot_store() -> InMemorySnapshotSource:
    """Dependency provider for the store backing the default engine."""
    return snapshot_store


@router.get("/route/{pay_asset}/{receive_asset}")
async def route(
    pay_asset: str,
    receive_asset: str,
    engine_instance: SorEngine = Depends(get_engine),
) -> RouteResponse:
    """Fewest-hops route over the books currently known to the engine.

    Error Handling:
        - No route: 404
    """
    edges = engine_instance.find_route(pay_asset, receive_asset)
    if edges is None:
        raise HTTPException(status_code=404, detail=f"No route from {pay_asset} to {receive_asset}")
    return RouteResponse(
        pay_asset=pay_asset,
        receive_asset=receive_asset,
        hops=[
            HopView(
                base=edge.market.pair.base,
                quote=edge.market.pair.quote,
                is_sell_side=edge.is_sell_side,
            )
            for edge in edges
        ],
    )


@router.put("/snapshots/{base}/{quote}")
async def put_snapshot(
    base: str,
    quote: str,
    snapshot: Snapshot,
    engine_instance: SorEngine = Depends(get_engine),
    store: InMemorySnapshotSource = Depends(get_snapshot_store),
) -> SnapshotAck:
    """Publish a fresh book for a market.

    Error Handling:
        - Unknown market: 404
    """
    try:
        market = engine_instance.config.market(base, quote)
    except MarketNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    store.set_snapshot(market.pair.base, market.pair.quote, snapshot)
    updated = engine_instance.update_snapshot(market.pair.base, market.pair.quote, snapshot)
    logger.info(
        "snapshot_received",
        market=str(market.pair),
        bids=len(snapshot.bids),
        asks=len(snapshot.asks),
    )
    return SnapshotAck(market=str(market.pair), updated=updated)


@router.post("/quote", response_model_exclude_none=True)
async def quote(
    request: QuoteRequestModel,
    engine_instance: SorEngine = Depends(get_engine),
) -> SettlementView:
    """Route and estimate a swap.

    Error Handling:
        - Invalid request schema: 422 (pydantic)
        - Unknown asset or no route: 404
        - Zero amount: 400
        - Snapshot fetching exceeds SOR_QUOTE_TIMEOUT: 504
        - Unexpected exception: logged with traceback, 500
        - No viable settlement: 200 with viable=false
    """
    anchored = request.pay_asset if request.anchor is AnchorField.PAY else request.receive_asset
    try:
        amount = to_base_units(request.amount, engine_instance.config.decimals(anchored))
        result = await asyncio.wait_for(
            engine_instance.quote(
                QuoteRequest(
                    pay_asset=request.pay_asset,
                    receive_asset=request.receive_asset,
                    amount=amount,
                    anchor=request.anchor,
                    fee_pbips=request.fee_pbips,
                    slippage_bips=request.slippage_bips,
                )
            ),
            timeout=QUOTE_TIMEOUT_SECONDS,
        )
    except (UnknownAssetError, RouteNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except InvalidAmountError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except TimeoutError as e:
        logger.warning(
            "quote_timeout",
            pay=request.pay_asset,
            receive=request.receive_asset,
            timeout_seconds=QUOTE_TIMEOUT_SECONDS,
        )
        raise HTTPException(status_code=504, detail="Quote timed out") from e
    except Exception as e:
        logger.exception("quote_error", pay=request.pay_asset, receive=request.receive_asset)
        raise HTTPException(status_code=500, detail="Internal error") from e

    view = SettlementView.from_result(result)
    logger.info(
        "quote_returned",
        pay=request.pay_asset,
        receive=request.receive_asset,
        viable=view.viable,
        num_trades=view.num_trades,
    )
    return view


__all__ = ["get_engine", "get_snapshot_store", "router"]
