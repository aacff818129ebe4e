"""Settlement value objects.

A Settlement describes what matching a request against a path would do at
the time its snapshots were taken. An infeasible request produces a
NoViableSettlement instead: an explicit variant with no command, never a
zero-filled Settlement.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sor.liquidity.base import LiquidityPath


class AnchorField(Enum):
    """Which side of the swap the caller fixed."""

    PAY = "pay"
    RECEIVE = "receive"


class OrderSide(Enum):
    BUY = "buy"
    SELL = "sell"


class CalcCommand(IntEnum):
    """Estimation case, named from the taker's point of view."""

    SELL_WHATEVER_BASE_FOR_SPECIFIC_QUOTE = 1
    BUY_WHATEVER_BASE_FOR_SPECIFIC_QUOTE = 2
    BUY_SPECIFIC_BASE_FOR_WHATEVER_QUOTE = 3
    SELL_SPECIFIC_BASE_FOR_WHATEVER_QUOTE = 4


@dataclass(frozen=True)
class Quantity:
    """Order quantity as the exchange expects it.

    Attributes:
        base_asset: Raw units per whole base asset (10 ** base decimals)
        base_qty: Base amount in raw units, 0 when the quote side drives
        quote_qty: Quote amount in raw units, 0 when the base side drives
    """

    base_asset: int
    base_qty: int
    quote_qty: int


@dataclass(frozen=True)
class Settlement:
    """Estimated outcome of a swap.

    All amounts are raw integer units of the asset named in the field.

    Attributes:
        command: Estimation case of the (first) hop
        pay_asset: Asset the taker spends
        receive_asset: Asset the taker receives
        num_trades: Price levels consumed, summed over hops
        amount_in: Pay amount actually matched
        amount_out: Receive amount before fees and slippage
        rate: Pay units per one receive unit, display string
        protection_price: Worst price touched (0 for multi-hop aggregates)
        receive_post_fee: amount_out after fees
        min_receive_amount: Guaranteed receive after slippage and fees
        spend_slippaged: Maximum pay amount after slippage
        receive_slippaged: Receive amount after slippage and fees
        price_impact_bips: Signed impact relative to the top of book
        side: Order side (None for multi-hop aggregates)
        quantity: Order quantity (None for multi-hop aggregates)
        context: Path the estimate was computed against
        sub_settlements: Per-hop settlements, left to right
    """

    command: CalcCommand
    pay_asset: str
    receive_asset: str
    num_trades: int
    amount_in: int
    amount_out: int
    rate: str
    protection_price: int
    receive_post_fee: int
    min_receive_amount: int
    spend_slippaged: int
    receive_slippaged: int
    price_impact_bips: int
    side: OrderSide | None = None
    quantity: Quantity | None = None
    context: LiquidityPath | None = field(default=None, compare=False, repr=False)
    sub_settlements: tuple[Settlement, ...] = ()

    @property
    def is_viable(self) -> bool:
        return True

    @property
    def is_multihop(self) -> bool:
        return len(self.sub_settlements) > 1


class NoSettlementReason(Enum):
    """Why a request cannot be settled against the current books."""

    MISSING_SNAPSHOT = "missing_snapshot"
    EMPTY_PATH = "empty_path"
    BELOW_MIN_QTY = "below_min_qty"
    NO_BEST_PRICE = "no_best_price"
    BELOW_BOOK_MINIMUM = "below_book_minimum"
    ZERO_RECEIVE = "zero_receive"


@dataclass(frozen=True)
class NoViableSettlement:
    """Terminal sentinel: the request rounds to nothing tradable.

    Attributes:
        reason: Machine-readable cause
        detail: Optional human-readable detail
    """

    reason: NoSettlementReason
    detail: str | None = None

    @property
    def command(self) -> None:
        return None

    @property
    def is_viable(self) -> bool:
        return False

    @classmethod
    def because(cls, reason: NoSettlementReason, detail: str | None = None) -> NoViableSettlement:
        return cls(reason=reason, detail=detail)


SettlementResult = Settlement | NoViableSettlement


__all__ = [
    "AnchorField",
    "CalcCommand",
    "NoSettlementReason",
    "NoViableSettlement",
    "OrderSide",
    "Quantity",
    "Settlement",
    "SettlementResult",
]
