"""Request and response models of the quote API.

Raw integer amounts are serialized as decimal strings so clients in any
language can read uint256-sized values without precision loss.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field

from sor.settlement.model import (
    AnchorField,
    NoViableSettlement,
    Settlement,
    SettlementResult,
)


def _int_to_str(value: Any) -> Any:
    if isinstance(value, int):
        return str(value)
    return value


# Raw integer amount as decimal string
RawAmount = Annotated[str, BeforeValidator(_int_to_str), Field(pattern=r"^-?\d+$")]

# Display amount, e.g. "1.5"
DisplayAmount = Annotated[str, Field(pattern=r"^\d+(\.\d+)?$")]


class QuoteRequestModel(BaseModel):
    """Body of POST /quote."""

    pay_asset: str
    receive_asset: str
    amount: DisplayAmount = Field(description="Anchored amount in display units")
    anchor: AnchorField = AnchorField.PAY
    fee_pbips: int | None = Field(default=None, ge=0, le=1_000_000)
    slippage_bips: int | None = Field(default=None, ge=0, le=10_000)


class SettlementView(BaseModel):
    """Serialized settlement or no-settlement outcome."""

    viable: bool
    reason: str | None = None
    detail: str | None = None
    command: str | None = None
    side: str | None = None
    pay_asset: str | None = None
    receive_asset: str | None = None
    num_trades: int = 0
    amount_in: RawAmount = "0"
    amount_out: RawAmount = "0"
    rate: str = ""
    protection_price: RawAmount = "0"
    receive_post_fee: RawAmount = "0"
    min_receive_amount: RawAmount = "0"
    spend_slippaged: RawAmount = "0"
    receive_slippaged: RawAmount = "0"
    price_impact_bips: int = 0
    sub_settlements: list[SettlementView] | None = None

    @classmethod
    def from_result(cls, result: SettlementResult) -> SettlementView:
        if isinstance(result, NoViableSettlement):
            return cls(viable=False, reason=result.reason.value, detail=result.detail)
        return cls._from_settlement(result)

    @classmethod
    def _from_settlement(cls, settlement: Settlement) -> SettlementView:
        subs = None
        if settlement.sub_settlements:
            subs = [cls._from_settlement(s) for s in settlement.sub_settlements]
        return cls(
            viable=True,
            command=settlement.command.name,
            side=settlement.side.value if settlement.side is not None else None,
            pay_asset=settlement.pay_asset,
            receive_asset=settlement.receive_asset,
            num_trades=settlement.num_trades,
            amount_in=settlement.amount_in,
            amount_out=settlement.amount_out,
            rate=settlement.rate,
            protection_price=settlement.protection_price,
            receive_post_fee=settlement.receive_post_fee,
            min_receive_amount=settlement.min_receive_amount,
            spend_slippaged=settlement.spend_slippaged,
            receive_slippaged=settlement.receive_slippaged,
            price_impact_bips=settlement.price_impact_bips,
            sub_settlements=subs,
        )


class HopView(BaseModel):
    base: str
    quote: str
    is_sell_side: bool


class RouteResponse(BaseModel):
    """Body of GET /route/{pay}/{receive}."""

    pay_asset: str
    receive_asset: str
    hops: list[HopView]


class SnapshotAck(BaseModel):
    market: str
    updated: bool


__all__ = [
    "HopView",
    "QuoteRequestModel",
    "RawAmount",
    "RouteResponse",
    "SettlementView",
    "SnapshotAck",
]
