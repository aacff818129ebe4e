"""Settlement estimation."""

from sor.settlement.adjustments import banded_protection_price, deduct_gas
from sor.settlement.chainer import estimate
from sor.settlement.estimator import estimate_single_hop
from sor.settlement.model import (
    AnchorField,
    CalcCommand,
    NoSettlementReason,
    NoViableSettlement,
    OrderSide,
    Quantity,
    Settlement,
    SettlementResult,
)

__all__ = [
    "AnchorField",
    "CalcCommand",
    "NoSettlementReason",
    "NoViableSettlement",
    "OrderSide",
    "Quantity",
    "Settlement",
    "SettlementResult",
    "banded_protection_price",
    "deduct_gas",
    "estimate",
    "estimate_single_hop",
]
